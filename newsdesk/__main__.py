"""
Run the Newsdesk development server.

    python -m newsdesk

Listens on PORT (default 3000). Production deployments should point a WSGI
server at ``newsdesk:create_app()`` instead.
"""

from . import create_app
from .core.logging_service import LoggingService


def main():
    app = create_app()
    port = app.extensions['newsdesk'].config.port
    LoggingService.info('app', f"Server listening on http://localhost:{port}")
    app.run(host='0.0.0.0', port=port)


if __name__ == '__main__':
    main()
