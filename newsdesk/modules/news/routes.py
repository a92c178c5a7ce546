"""
News Routes
===========

JSON API over the news repository. Reads are public, writes need an
admin session.
"""

from flask import current_app, g, jsonify, request

from newsdesk.core.logging_service import LoggingService
from newsdesk.modules.auth import admin_required
from . import news_bp


def get_news_repository():
    return current_app.extensions['newsdesk'].news_repository


def _payload():
    return request.get_json(silent=True)


@news_bp.route('', methods=['GET'])
def list_news():
    """Get all news items, newest first"""
    items = get_news_repository().list()
    return jsonify([item.to_dict() for item in items])


@news_bp.route('/<news_id>', methods=['GET'])
def get_news(news_id):
    """Get a single news item"""
    item = get_news_repository().get(news_id)
    return jsonify(item.to_dict())


@news_bp.route('', methods=['POST'])
@admin_required
def create_news():
    """Create a news item"""
    item = get_news_repository().create(_payload())
    LoggingService.log_user_action('news', f'created news item {item.id}',
                                   user_id=g.admin_session.username)
    return jsonify(item.to_dict()), 201


@news_bp.route('/<news_id>', methods=['PUT'])
@admin_required
def update_news(news_id):
    """Replace a news item's category, title, body and date"""
    item = get_news_repository().update(news_id, _payload())
    LoggingService.log_user_action('news', f'updated news item {item.id}',
                                   user_id=g.admin_session.username)
    return jsonify(item.to_dict())


@news_bp.route('/<news_id>', methods=['DELETE'])
@admin_required
def delete_news(news_id):
    """Delete a news item"""
    get_news_repository().delete(news_id)
    LoggingService.log_user_action('news', f'deleted news item {news_id}',
                                   user_id=g.admin_session.username)
    return '', 204
