"""
Newsdesk Errors
===============

Exception taxonomy shared by every module, plus the app-wide handlers that
turn them into JSON responses.
"""

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from .logging_service import LoggingService


class NewsdeskError(Exception):
    """Base error carrying the HTTP status and a client-facing message"""
    status_code = 500
    message = 'Unexpected server error.'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self):
        return {'message': self.message}


class ValidationError(NewsdeskError):
    status_code = 400
    message = 'Invalid request.'


class InvalidDate(ValidationError):
    message = 'Invalid date.'


class InvalidIdentifier(ValidationError):
    message = 'Invalid news item ID.'


class AuthError(NewsdeskError):
    status_code = 401
    message = 'Invalid credentials.'


class Unauthorized(NewsdeskError):
    status_code = 401
    message = 'Login required.'


class NotFound(NewsdeskError):
    status_code = 404
    message = 'News item not found.'


class ConfigurationError(NewsdeskError):
    status_code = 500
    message = 'Admin account is not configured. Contact the site maintainer.'


class StorageError(NewsdeskError):
    status_code = 500
    message = 'Storage is currently unavailable.'


def register_error_handlers(app):
    """Attach JSON error handlers for NewsdeskError and /api HTTP errors"""

    @app.errorhandler(NewsdeskError)
    def handle_newsdesk_error(error):
        if isinstance(error, ConfigurationError):
            LoggingService.critical('config', error.message)
        elif isinstance(error, StorageError):
            # The original exception was already logged where it was caught
            LoggingService.log_api_call('storage', request.path, request.method, error.status_code)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if not request.path.startswith('/api/'):
            return error
        return jsonify({'message': error.description}), error.code
