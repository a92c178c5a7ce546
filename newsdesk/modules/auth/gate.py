"""
Auth Gate
=========

Verifies the configured admin credentials and owns the admin session.

Session state lives server-side in the admin_sessions table; Flask's signed
cookie only carries the opaque token. At the start of every request
``load_session`` looks the token up, enforces the inactivity window and
publishes an immutable ``AdminSession`` snapshot on ``flask.g``. Everything
downstream reads the snapshot, never the cookie.
"""

import hmac
import time
from dataclasses import dataclass
from functools import wraps

import bcrypt
from flask import current_app, g, session

from newsdesk.core.errors import AuthError, ConfigurationError, Unauthorized, ValidationError
from newsdesk.core.logging_service import LoggingService
from .store import SessionStore

SESSION_TOKEN_KEY = 'token'

# bcrypt only looks at the first 72 bytes; newer releases reject longer input
BCRYPT_MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class AdminSession:
    """Snapshot of an active admin session for the current request"""
    username: str
    authenticated_at: float

    def to_dict(self):
        return {'username': self.username}


def _same_text(given, expected):
    return hmac.compare_digest(given.encode('utf-8'), expected.encode('utf-8'))


class AuthGate:
    def __init__(self, config, store=None, clock=time.time):
        self.config = config
        self.store = store or SessionStore()
        self.clock = clock

    # ===== Credentials =====

    def verify_credentials(self, username, password):
        """
        Check a username/password pair against the configured admin.

        Raises ValidationError for missing input, AuthError for any mismatch
        (the same error whichever part was wrong) and ConfigurationError when
        no usable admin password is configured.
        """
        if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
            raise ValidationError('Username and password are required.')

        if not _same_text(username, self.config.admin_username):
            LoggingService.log_security_event('Admin login failed', {'reason': 'unknown username'})
            raise AuthError()

        if not self.config.admin_credentials_configured:
            raise ConfigurationError()

        if not self._password_matches(password):
            LoggingService.log_security_event('Admin login failed', {'reason': 'wrong password'})
            raise AuthError()

    def _password_matches(self, password):
        # A configured hash wins over the plaintext fallback
        if not self.config.admin_password_hash:
            return _same_text(password, self.config.admin_password)

        encoded = password.encode('utf-8')
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES or b'\x00' in encoded:
            return False
        try:
            return bcrypt.checkpw(encoded, self.config.admin_password_hash.encode('utf-8'))
        except ValueError as e:
            # Password input is already bounded, so this is the stored hash
            LoggingService.error('auth', 'ADMIN_PASSWORD_HASH is not a valid bcrypt hash')
            raise ConfigurationError() from e

    # ===== Session lifecycle =====

    def login(self, username, password):
        """Verify credentials and start a fresh admin session"""
        self.verify_credentials(username, password)

        now = self.clock()
        self.store.purge_idle(now - self.config.session_lifetime.total_seconds())

        previous = session.get(SESSION_TOKEN_KEY)
        if previous:
            self.store.delete(previous)
        session.clear()

        token = self.store.create(self.config.admin_username, now)
        session.permanent = True
        session[SESSION_TOKEN_KEY] = token

        g.admin_session = AdminSession(self.config.admin_username, now)
        return g.admin_session

    def load_session(self):
        """Publish the request's AdminSession (or None) on flask.g"""
        g.admin_session = None

        token = session.get(SESSION_TOKEN_KEY)
        if not token:
            return None

        record = self.store.get(token)
        if record is None:
            session.clear()
            return None

        now = self.clock()
        idle = now - record['last_seen']
        if idle > self.config.session_lifetime.total_seconds() or record['username'] != self.config.admin_username:
            self.store.delete(token)
            session.clear()
            LoggingService.info('auth', 'Admin session expired', {'idle_seconds': int(idle)})
            return None

        self.store.touch(token, now)
        g.admin_session = AdminSession(record['username'], record['authenticated_at'])
        return g.admin_session

    def current_session(self):
        return g.get('admin_session')

    def logout(self):
        """Destroy the session; calling it without one is fine"""
        admin = self.current_session()
        token = session.get(SESSION_TOKEN_KEY)
        if token:
            self.store.delete(token)
        session.clear()
        g.admin_session = None
        if admin is not None:
            LoggingService.log_user_action('auth', 'logout', user_id=admin.username)


def get_auth_gate():
    return current_app.extensions['newsdesk'].auth_gate


def admin_required(f):
    """Decorator to require an active admin session"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if g.get('admin_session') is None:
            raise Unauthorized()
        return f(*args, **kwargs)
    return decorated_function
