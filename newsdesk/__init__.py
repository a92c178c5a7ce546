"""
Newsdesk - A small Flask news site backend
==========================================

Public news listing and a single-admin panel for managing news items:
- News item CRUD backed by one relational table
- Session authentication for one configured administrator
- Health endpoint for uptime monitors

Usage:
    from newsdesk import create_app
    app = create_app()

    # or, on an existing app
    from newsdesk import Newsdesk, Config
    Newsdesk(app, Config.from_env())
"""

import time

from flask import Flask
from flask_cors import CORS

from .core.config import Config
from .core.database import init_database
from .core.errors import register_error_handlers
from .core.logging_service import LoggingService, configure_logging
from .modules.auth import auth_bp, AuthGate
from .modules.news import news_bp, NewsRepository
from .modules.ops import ops_health_bp

__version__ = '0.1.0'

BLUEPRINTS = {
    'auth': auth_bp,
    'news': news_bp,
    'ops': ops_health_bp,
}


class Newsdesk:
    """
    Flask extension that wires config, storage, auth and the news API onto an app.

    Components receive the validated Config through their constructors and
    are reachable from views via ``current_app.extensions['newsdesk']``.
    """

    def __init__(self, app=None, config=None):
        self.config = config
        self.auth_gate = None
        self.news_repository = None
        self.started_at = None
        self._registered_modules = []

        if app is not None:
            self.init_app(app, config)

    def init_app(self, app, config=None):
        config = (config or self.config or Config.from_env()).validate()
        self.config = config

        configure_logging(config.log_level)
        self._warn_about_config(config)

        app.config.update(config.to_flask_config())

        self.auth_gate = AuthGate(config)
        self.news_repository = NewsRepository()
        self.started_at = time.time()
        app.extensions['newsdesk'] = self

        init_database(app, config)
        register_error_handlers(app)

        if config.cors_origins:
            CORS(app, resources={r'/api/*': {'origins': list(config.cors_origins)}},
                 supports_credentials=True)

        for name, blueprint in BLUEPRINTS.items():
            app.register_blueprint(blueprint)
            self._registered_modules.append(name)

        LoggingService.info('app', 'Newsdesk initialised', {'modules': self._registered_modules})

    @staticmethod
    def _warn_about_config(config):
        if not config.secret_key:
            LoggingService.warning('config', 'SESSION_SECRET is not set, falling back to the development key')
        if not config.admin_credentials_configured:
            LoggingService.warning('config', 'Neither ADMIN_PASSWORD_HASH nor ADMIN_PASSWORD is set, admin login will fail')

    def get_registered_modules(self):
        return list(self._registered_modules)


def create_app(config=None, testing=False):
    """Application factory"""
    app = Flask(__name__)
    app.config['TESTING'] = testing
    Newsdesk(app, config)
    return app


__all__ = ['Newsdesk', 'Config', 'create_app']
