"""Helpers for parsing front-matter dates."""

from __future__ import annotations

from datetime import UTC, date, datetime, tzinfo
from typing import Any

from dateutil import parser as date_parser


def _normalize(parsed: datetime, tz: tzinfo) -> datetime:
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed


def parse_post_date(value: Any, *, tz: tzinfo = UTC) -> datetime | None:
    """Parse a front-matter ``date`` value into an aware datetime.

    YAML already turns unquoted ISO dates into ``date``/``datetime`` objects,
    so both those and free-form strings are accepted. Naive values are taken
    to be in ``tz``. Returns ``None`` for anything that is not a date.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _normalize(value, tz)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=tz)
    if not isinstance(value, str):
        return None

    normalized = value.strip()
    if not normalized:
        return None

    try:
        return _normalize(date_parser.isoparse(normalized), tz)
    except (ValueError, OverflowError, TypeError):
        pass

    try:
        parsed = date_parser.parse(normalized)
    except (ValueError, OverflowError, TypeError):
        return None
    return _normalize(parsed, tz)
