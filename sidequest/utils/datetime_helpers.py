"""
Standardized Date/Time Handling Utilities

CRITICAL RULES:
- Quest timestamps (created_at, expires_at) are timezone-aware UTC
- Streak days are calendar dates in QUEST_TIMEZONE
- Never mix naive and aware datetimes
"""

import logging
import re
from datetime import datetime, date
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sidequest import config
from sidequest.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def get_quest_timezone(tz_name: Optional[str] = None) -> ZoneInfo:
    """
    Return the timezone used for calendar-day bookkeeping

    Raises:
        InvalidInputError: unknown timezone name
    """
    name = tz_name or config.QUEST_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidInputError(
            f"Unknown timezone '{name}'",
            field="tz_name",
            value=name,
            cause=e
        )


def now_utc() -> datetime:
    """
    Get current datetime in UTC (timezone-aware)

    Returns:
        Current datetime in UTC with timezone info
    """
    return datetime.now(ZoneInfo("UTC"))


def today_quest_timezone(tz_name: Optional[str] = None) -> date:
    """Today's calendar date in the quest timezone"""
    return datetime.now(get_quest_timezone(tz_name)).date()


def ensure_aware_utc(value: datetime, field: str = "timestamp") -> datetime:
    """
    Return value converted to UTC, rejecting naive datetimes

    Raises:
        InvalidInputError: value is not a datetime or has no tzinfo
    """
    if not isinstance(value, datetime):
        raise InvalidInputError(f"Expected a datetime, got {type(value).__name__}", field=field, value=value)
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidInputError("Datetime must be timezone-aware", field=field, value=value.isoformat())
    return value.astimezone(ZoneInfo("UTC"))


def to_calendar_date(value: DateLike, field: str = "date", tz_name: Optional[str] = None) -> date:
    """
    Normalize a date, aware datetime or ISO date string to a calendar date

    Datetimes are converted into the quest timezone before the date is taken,
    so two completions at 23:30 and 00:30 local time land on different days.

    Raises:
        InvalidInputError: naive datetime, malformed string, unsupported type or unknown tz_name
    """
    # An explicit zone is checked even when the value is already a date
    zone = get_quest_timezone(tz_name) if tz_name is not None else None

    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise InvalidInputError("Datetime must be timezone-aware", field=field, value=value.isoformat())
        return value.astimezone(zone or get_quest_timezone()).date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        # fromisoformat also takes compact and week forms on newer Pythons
        if not ISO_DATE_PATTERN.fullmatch(text):
            raise InvalidInputError(
                f"Malformed date '{value}', expected YYYY-MM-DD",
                field=field,
                value=value
            )
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise InvalidInputError(
                f"Malformed date '{value}', expected YYYY-MM-DD",
                field=field,
                value=value,
                cause=e
            )

    raise InvalidInputError(
        f"Unsupported date value of type {type(value).__name__}",
        field=field,
        value=repr(value)
    )
