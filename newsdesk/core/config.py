import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple

from dotenv import load_dotenv

from .errors import ConfigurationError

DEV_SECRET_KEY = 'newsdesk-dev-secret'
SESSION_LIFETIME = timedelta(hours=1)
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _default_database_url():
    db_dir = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))
    return f"sqlite:///{os.path.join(db_dir, 'news.db')}"


def _as_bool(value):
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


def _as_int(name, value):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def normalize_database_url(url):
    """SQLAlchemy no longer accepts the postgres:// scheme hosting providers hand out"""
    if url.startswith('postgres://'):
        return 'postgresql://' + url[len('postgres://'):]
    return url


@dataclass(frozen=True)
class Config:
    """
    Configuration for a Newsdesk site.
    Built once at startup (usually via ``Config.from_env()``), validated,
    and handed to the components that need it.
    """
    database_url: str = 'sqlite://'
    database_ssl: bool = False
    pool_size: int = 5
    pool_timeout: int = 30

    secret_key: Optional[str] = None
    session_cookie_secure: bool = False
    session_lifetime: timedelta = SESSION_LIFETIME

    admin_username: str = 'admin'
    admin_password_hash: Optional[str] = None
    admin_password: Optional[str] = None

    port: int = 3000
    cors_origins: Tuple[str, ...] = ()
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, environ=None):
        """Read configuration from environment variables (and a .env file)"""
        if environ is None:
            load_dotenv()
            environ = os.environ

        ssl = _as_bool(environ.get('DATABASE_SSL', 'false')) or environ.get('PGSSLMODE') == 'require'
        origins = tuple(
            origin.strip() for origin in environ.get('CORS_ORIGINS', '').split(',') if origin.strip()
        )

        return cls(
            database_url=normalize_database_url(environ.get('DATABASE_URL') or _default_database_url()),
            database_ssl=ssl,
            pool_size=_as_int('DB_POOL_SIZE', environ.get('DB_POOL_SIZE', '5')),
            pool_timeout=_as_int('DB_POOL_TIMEOUT', environ.get('DB_POOL_TIMEOUT', '30')),
            secret_key=environ.get('SESSION_SECRET') or environ.get('FLASK_SECRET_KEY'),
            session_cookie_secure=_as_bool(environ.get('SESSION_COOKIE_SECURE', 'false')),
            admin_username=environ.get('ADMIN_USERNAME') or 'admin',
            admin_password_hash=environ.get('ADMIN_PASSWORD_HASH') or None,
            admin_password=environ.get('ADMIN_PASSWORD') or None,
            port=_as_int('PORT', environ.get('PORT', '3000')),
            cors_origins=origins,
            log_level=(environ.get('LOG_LEVEL') or 'INFO').upper(),
        ).validate()

    def validate(self):
        """Raise ConfigurationError for settings the app cannot start with"""
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"PORT must be between 1 and 65535, got {self.port}")
        if self.pool_size < 1:
            raise ConfigurationError(f"DB_POOL_SIZE must be positive, got {self.pool_size}")
        if self.pool_timeout < 1:
            raise ConfigurationError(f"DB_POOL_TIMEOUT must be positive, got {self.pool_timeout}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        if not self.admin_username:
            raise ConfigurationError("ADMIN_USERNAME must not be empty")
        return self

    @property
    def is_sqlite(self):
        return self.database_url.startswith('sqlite')

    @property
    def admin_credentials_configured(self):
        return bool(self.admin_password_hash or self.admin_password)

    def engine_options(self):
        """Engine/pool options for Flask-SQLAlchemy"""
        options = {'pool_pre_ping': True}
        if self.is_sqlite:
            return options

        options['pool_size'] = self.pool_size
        options['pool_timeout'] = self.pool_timeout
        if self.database_ssl:
            options['connect_args'] = {'sslmode': 'require'}
        return options

    def to_flask_config(self):
        """Flask/Flask-SQLAlchemy settings derived from this config"""
        return {
            'SECRET_KEY': self.secret_key or DEV_SECRET_KEY,
            'SQLALCHEMY_DATABASE_URI': self.database_url,
            'SQLALCHEMY_ENGINE_OPTIONS': self.engine_options(),
            'PERMANENT_SESSION_LIFETIME': self.session_lifetime,
            'SESSION_REFRESH_EACH_REQUEST': True,
            'SESSION_COOKIE_HTTPONLY': True,
            'SESSION_COOKIE_SAMESITE': 'Lax',
            'SESSION_COOKIE_SECURE': self.session_cookie_secure,
        }
