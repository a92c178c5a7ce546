"""
News Repository
===============

Validated CRUD over the news_items table. Every operation runs a single
statement on one pooled connection (see ``storage_connection``).
"""

from sqlalchemy import delete, insert, select, update

from newsdesk.core.database import news_items, storage_connection
from newsdesk.core.errors import NotFound
from .models import NewsItem, parse_identifier, utc_today, validate_news_input


class NewsRepository:
    def __init__(self, today=utc_today):
        self._today = today

    def list(self):
        """All items, newest date first, then highest id first"""
        stmt = select(news_items).order_by(news_items.c.date.desc(), news_items.c.id.desc())
        with storage_connection('news') as conn:
            rows = conn.execute(stmt).mappings().all()
        return [NewsItem.from_row(row) for row in rows]

    def get(self, item_id):
        item_id = parse_identifier(item_id)
        stmt = select(news_items).where(news_items.c.id == item_id)
        with storage_connection('news') as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            raise NotFound()
        return NewsItem.from_row(row)

    def create(self, data):
        """Validate and insert a new item; storage assigns the id"""
        news_input = validate_news_input(data, today=self._today())

        stmt = insert(news_items).values(**news_input.to_values())
        with storage_connection('news') as conn:
            result = conn.execute(stmt)
            new_id = result.inserted_primary_key[0]

        return NewsItem(id=new_id, **news_input.to_values())

    def update(self, item_id, data):
        """Full replace of category/title/body/date for an existing id"""
        item_id = parse_identifier(item_id)
        news_input = validate_news_input(data, today=self._today())

        stmt = (
            update(news_items)
            .where(news_items.c.id == item_id)
            .values(**news_input.to_values())
        )
        with storage_connection('news') as conn:
            matched = conn.execute(stmt).rowcount

        if matched == 0:
            raise NotFound()
        return NewsItem(id=item_id, **news_input.to_values())

    def delete(self, item_id):
        item_id = parse_identifier(item_id)

        stmt = delete(news_items).where(news_items.c.id == item_id)
        with storage_connection('news') as conn:
            deleted = conn.execute(stmt).rowcount

        if deleted == 0:
            raise NotFound()
