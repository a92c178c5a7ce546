"""
Newsdesk Auth Module
====================

Session authentication for the single site administrator.

Provides:
- Login/logout JSON endpoints and a session status endpoint
- Server-side admin sessions keyed by an opaque cookie token
- A request-scoped admin session snapshot on ``flask.g``
- The ``admin_required`` guard for mutating endpoints
- ``flask hash-password`` for producing ADMIN_PASSWORD_HASH values
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, cli_group=None)

from .gate import AuthGate, AdminSession, admin_required, get_auth_gate
from .store import SessionStore
from . import routes

__all__ = ['auth_bp', 'AuthGate', 'AdminSession', 'SessionStore', 'admin_required', 'get_auth_gate']
