"""
Centralized logging service for the Newsdesk application.
Provides structured logging with request context and easy integration.
"""

import json
import logging

from flask import request, has_request_context

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'

logger_root = logging.getLogger('newsdesk')


def configure_logging(level='INFO'):
    """Configure the root handler once and set the newsdesk level"""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    logger_root.setLevel(level.upper())


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        user_agent = request.headers.get('User-Agent', '')
        return ip_address, user_agent, request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None, exc_info=False):
        """
        Log a message under the ``newsdesk.<source>`` logger

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (auth, news, storage, etc.)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
            user_id (str): Optional user identifier
            exc_info (bool): Attach the active exception's traceback
        """
        ip_address, _user_agent, request_path = LoggingService._get_request_context()

        parts = [message]
        if request_path:
            parts.append(f"path={request_path} ip={ip_address}")
        if user_id:
            parts.append(f"user={user_id}")
        if details:
            if isinstance(details, dict):
                details = json.dumps(details, default=str, sort_keys=True)
            parts.append(f"details={details}")

        logging.getLogger(f'newsdesk.{source}').log(
            getattr(logging, level.upper()),
            ' | '.join(parts),
            exc_info=exc_info,
        )

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        """Log debug message"""
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        """Log info message"""
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        """Log warning message"""
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        """Log error message"""
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        """Log critical message"""
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log admin actions (login, create, delete, etc.)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_api_call(source, endpoint, method='GET', status_code=200, details=None):
        """Log API calls"""
        message = f"API {method} {endpoint} - Status: {status_code}"
        level = 'INFO' if 200 <= status_code < 400 else 'WARNING' if status_code < 500 else 'ERROR'
        LoggingService.log(level, source, message, details)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.log(
            'ERROR', source, f"Exception occurred: {type(error).__name__}", error_details,
            exc_info=(type(error), error, error.__traceback__),
        )

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events"""
        _ip_address, user_agent, _request_path = LoggingService._get_request_context()
        details = dict(details or {})
        if user_agent:
            details['user_agent'] = user_agent

        LoggingService.warning('security', message, details)


# Convenience instance for easy importing
logger = LoggingService()
