"""
Newsdesk Core
=============

Core utilities and shared functionality for Newsdesk modules.
"""

from .config import Config
from .database import db, admin_sessions, news_items, storage_connection
from .errors import (
    NewsdeskError, ValidationError, InvalidDate, InvalidIdentifier,
    AuthError, Unauthorized, NotFound, ConfigurationError, StorageError,
)
from .logging_service import LoggingService, logger

__all__ = [
    'Config', 'db', 'admin_sessions', 'news_items', 'storage_connection', 'LoggingService', 'logger',
    'NewsdeskError', 'ValidationError', 'InvalidDate', 'InvalidIdentifier',
    'AuthError', 'Unauthorized', 'NotFound', 'ConfigurationError', 'StorageError',
]
