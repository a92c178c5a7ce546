import os
from contextlib import contextmanager

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError

from .errors import StorageError
from .logging_service import LoggingService

db = SQLAlchemy()

NEWS_ITEMS_TABLE = 'news_items'
ADMIN_SESSIONS_TABLE = 'admin_sessions'

news_items = db.Table(
    NEWS_ITEMS_TABLE,
    db.Column('id', db.Integer, primary_key=True, autoincrement=True),
    db.Column('category', db.Text, nullable=False, server_default='News'),
    db.Column('title', db.Text, nullable=False),
    db.Column('body', db.Text, nullable=False),
    db.Column('date', db.Date, nullable=False),
    db.Index('idx_news_items_date_id', 'date', 'id'),
    sqlite_autoincrement=True,
)

# Server-side admin sessions; the cookie only carries the token
admin_sessions = db.Table(
    ADMIN_SESSIONS_TABLE,
    db.Column('token', db.String(64), primary_key=True),
    db.Column('username', db.Text, nullable=False),
    db.Column('authenticated_at', db.Float, nullable=False),
    db.Column('last_seen', db.Float, nullable=False),
    db.Index('idx_admin_sessions_last_seen', 'last_seen'),
)


def _ensure_sqlite_dir(database_url):
    """Create the directory of a file-backed SQLite database if needed"""
    url = make_url(database_url)
    if url.get_backend_name() != 'sqlite' or not url.database or url.database == ':memory:':
        return
    db_dir = os.path.dirname(url.database)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)


def init_database(app, config):
    """Bind the engine to the app and create missing tables"""
    _ensure_sqlite_dir(config.database_url)
    db.init_app(app)

    with app.app_context():
        try:
            db.create_all()
        except SQLAlchemyError as e:
            LoggingService.log_error_with_traceback('storage', e, {'step': 'create_all'})
            raise StorageError() from e

    LoggingService.info('storage', f"{NEWS_ITEMS_TABLE} and {ADMIN_SESSIONS_TABLE} tables ready",
                        {'backend': make_url(config.database_url).get_backend_name()})


@contextmanager
def storage_connection(source):
    """
    Check out one pooled connection inside a transaction.

    The connection goes back to the pool whether the block succeeds or
    fails; SQLAlchemy errors are logged with traceback and re-raised as
    StorageError so callers never see driver details.
    """
    try:
        with db.engine.begin() as conn:
            yield conn
    except SQLAlchemyError as e:
        LoggingService.log_error_with_traceback(source, e)
        raise StorageError() from e


def check_database():
    """Run a trivial query; returns (ok, error message)"""
    try:
        with db.engine.connect() as conn:
            conn.execute(text('SELECT 1'))
        return True, None
    except SQLAlchemyError as e:
        LoggingService.warning('storage', 'Health check query failed', {'error': type(e).__name__})
        return False, type(e).__name__
