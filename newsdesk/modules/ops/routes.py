"""
Ops Routes
==========

Public health endpoint.
"""

import time

from flask import current_app, jsonify

from newsdesk.core.database import check_database
from . import ops_health_bp


def _get_uptime():
    """Seconds since the Newsdesk extension was initialised"""
    started_at = current_app.extensions['newsdesk'].started_at
    uptime_seconds = time.time() - started_at
    days = int(uptime_seconds // 86400)
    hours = int((uptime_seconds % 86400) // 3600)
    minutes = int((uptime_seconds % 3600) // 60)
    return {
        'seconds': round(uptime_seconds),
        'formatted': f'{days}d {hours}h {minutes}m',
    }


@ops_health_bp.route('', methods=['GET'])
def health():
    """Storage reachability and uptime; 503 when storage is down"""
    database_ok, error = check_database()

    checks = {
        'database': {'ok': database_ok},
        'uptime': _get_uptime(),
    }
    if error:
        checks['database']['error'] = error

    status = 'ok' if database_ok else 'critical'
    return jsonify({'status': status, 'checks': checks}), 200 if database_ok else 503
