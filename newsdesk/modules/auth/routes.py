"""
Auth Routes
===========

JSON login/logout/session endpoints for the admin panel.
"""

import bcrypt
import click
from flask import request, jsonify

from newsdesk.core.logging_service import LoggingService
from . import auth_bp
from .gate import BCRYPT_MAX_PASSWORD_BYTES, get_auth_gate


@auth_bp.before_app_request
def load_admin_session():
    """Populate the request-scoped admin session before any view runs"""
    get_auth_gate().load_session()


@auth_bp.route('/api/session', methods=['GET'])
def session_status():
    """Report whether the caller holds an admin session"""
    admin = get_auth_gate().current_session()
    return jsonify({
        'authenticated': admin is not None,
        'user': admin.to_dict() if admin else None,
    })


@auth_bp.route('/api/login', methods=['POST'])
def login():
    """Handle admin username/password sign-in"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form

    admin = get_auth_gate().login(data.get('username'), data.get('password'))
    LoggingService.log_user_action('auth', 'login', user_id=admin.username)

    return jsonify({'message': 'Login successful.'})


@auth_bp.route('/api/logout', methods=['POST'])
def logout():
    """Sign out the admin"""
    get_auth_gate().logout()
    return '', 204


@auth_bp.cli.command('hash-password')
@click.password_option(help='Admin password to hash.')
@click.option('--rounds', default=12, show_default=True, help='bcrypt cost factor.')
def hash_password_command(password, rounds):
    """Print a bcrypt hash for ADMIN_PASSWORD_HASH."""
    if len(password.encode('utf-8')) > BCRYPT_MAX_PASSWORD_BYTES:
        raise click.BadParameter(
            f'must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes', param_hint='--password'
        )
    hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=rounds))
    click.echo(hashed.decode('utf-8'))
