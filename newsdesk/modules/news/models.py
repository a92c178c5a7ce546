"""
News Item Models
================

Wire/domain representation of a news item and the input validation that
runs before anything touches storage.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Mapping

from newsdesk.core.errors import InvalidDate, InvalidIdentifier, NotFound, ValidationError

DEFAULT_CATEGORY = 'News'

_IDENTIFIER_RE = re.compile(r'-?[0-9]+')

# Storage ids are signed 64-bit integers
MIN_IDENTIFIER = -2 ** 63
MAX_IDENTIFIER = 2 ** 63 - 1


def utc_today():
    return datetime.now(timezone.utc).date()


@dataclass(frozen=True)
class NewsItem:
    """A persisted news item"""
    id: int
    category: str
    title: str
    body: str
    date: date

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'NewsItem':
        item_date = row['date']
        if isinstance(item_date, datetime):
            item_date = item_date.date()
        elif isinstance(item_date, str):
            item_date = date.fromisoformat(item_date[:10])
        return cls(
            id=row['id'],
            category=row['category'],
            title=row['title'],
            body=row['body'],
            date=item_date,
        )

    def to_dict(self):
        return {
            'id': self.id,
            'category': self.category,
            'title': self.title,
            'body': self.body,
            'date': self.date.isoformat(),
        }


@dataclass(frozen=True)
class NewsInput:
    """Validated fields for a create or full-replace update"""
    category: str
    title: str
    body: str
    date: date

    def to_values(self):
        return {
            'category': self.category,
            'title': self.title,
            'body': self.body,
            'date': self.date,
        }


def parse_identifier(raw) -> int:
    """
    Parse a path identifier.

    Raises InvalidIdentifier if it isn't an integer, and NotFound if it lies
    outside the range any stored id can take.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str) and _IDENTIFIER_RE.fullmatch(raw):
        value = int(raw)
    else:
        raise InvalidIdentifier()

    if not MIN_IDENTIFIER <= value <= MAX_IDENTIFIER:
        raise NotFound()
    return value


def parse_date(value, today=None) -> date:
    """
    Parse a submitted date.

    Accepts ``YYYY-MM-DD`` or an ISO-8601 timestamp (its calendar date is
    kept). Missing or blank values mean today.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return today or utc_today()
    if not isinstance(value, str):
        raise InvalidDate()

    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        # Python < 3.11 does not accept a trailing Z
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        raise InvalidDate()
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date()


def _required_text(data, field, label):
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{label} is required.')
    return value.strip()


def validate_news_input(data, today=None) -> NewsInput:
    """Validate a create/update payload; identity fields in the body are ignored"""
    if not isinstance(data, Mapping):
        raise ValidationError('Request body must be a JSON object.')

    title = _required_text(data, 'title', 'Title')
    body = _required_text(data, 'body', 'Body')

    category = data.get('category')
    if category is not None and not isinstance(category, str):
        raise ValidationError('Category must be text.')
    category = (category or '').strip() or DEFAULT_CATEGORY

    return NewsInput(
        category=category,
        title=title,
        body=body,
        date=parse_date(data.get('date'), today=today),
    )
