"""
News Module
===========

Public news listing plus admin create/update/delete over the news_items table.

Provides:
- GET /api/news and GET /api/news/<id> for everyone
- POST, PUT and DELETE guarded by the admin session
"""

from flask import Blueprint

news_bp = Blueprint('news', __name__, url_prefix='/api/news')

from .models import NewsItem, NewsInput, validate_news_input, parse_identifier
from .repository import NewsRepository
from . import routes

__all__ = ['news_bp', 'NewsItem', 'NewsInput', 'NewsRepository',
           'validate_news_input', 'parse_identifier']
