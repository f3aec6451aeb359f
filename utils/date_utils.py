"""
Date and calendar utilities for the WinnerTrack system.

Tournament dates are stored as ISO ``YYYY-MM-DD`` text. Spreadsheet input may
use ``DD-MM-YYYY``, ``MM-DD-YYYY`` (read the same way as ``DD-MM-YYYY``) or
``YYYY-MM-DD`` with dashes or slashes.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

CADENCE_MIN_DAYS = 5
CADENCE_MAX_DAYS = 9

_DATE_SEPARATORS = re.compile(r'[-/]')
_ISO_DATE = re.compile(r'^\d{4}-\d{2}-\d{2}$')

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class DateState:
    """Position of a tournament date relative to a reference day."""
    date: str
    days_diff: int
    is_today: bool
    is_past: bool
    is_future: bool
    days_until: int
    days_ago: int


class DateUtils:
    """Utilities for normalizing and comparing tournament dates."""

    @staticmethod
    def normalize_date(date_str: str) -> str:
        """
        Rewrite a spreadsheet date to ISO form.

        Strings that are not three dash/slash separated numbers forming a valid
        calendar date are returned unchanged (stripped).
        """
        if date_str is None:
            return ""
        text = date_str.strip()
        parts = _DATE_SEPARATORS.split(text)
        if len(parts) != 3 or not all(part.isdigit() for part in parts):
            return text

        if len(parts[0]) == 4:
            year, month, day = parts
        elif len(parts[2]) == 4:
            day, month, year = parts
        else:
            return text

        try:
            return date(int(year), int(month), int(day)).isoformat()
        except ValueError:
            return text

    @staticmethod
    def parse_date(date_str: str) -> Optional[date]:
        """Parse a stored or raw tournament date, None if it is not a valid date."""
        if not date_str:
            return None
        normalized = DateUtils.normalize_date(date_str)
        if not _ISO_DATE.match(normalized):
            return None
        return date.fromisoformat(normalized)

    @staticmethod
    def sort_key(date_str: str) -> date:
        """Sort key that puts unparseable dates before every real one."""
        parsed = DateUtils.parse_date(date_str)
        return parsed if parsed is not None else date.min

    @staticmethod
    def to_day(value: DateLike) -> date:
        """Drop the time of day from a datetime."""
        if isinstance(value, datetime):
            return value.date()
        return value

    @staticmethod
    def classify(date_str: str, reference_now: DateLike) -> Optional[DateState]:
        """Classify a tournament date as past, today or future relative to ``reference_now``."""
        target = DateUtils.parse_date(date_str)
        if target is None:
            return None

        days_diff = (target - DateUtils.to_day(reference_now)).days
        return DateState(
            date=date_str,
            days_diff=days_diff,
            is_today=days_diff == 0,
            is_past=days_diff < 0,
            is_future=days_diff > 0,
            days_until=max(days_diff, 0),
            days_ago=max(-days_diff, 0),
        )

    @staticmethod
    def days_between(newer: str, older: str) -> Optional[int]:
        """Whole days from ``older`` to ``newer``, None if either is unparseable."""
        newer_date = DateUtils.parse_date(newer)
        older_date = DateUtils.parse_date(older)
        if newer_date is None or older_date is None:
            return None
        return (newer_date - older_date).days

    @staticmethod
    def is_weekly_cadence(newer: str, older: str) -> bool:
        """True if two tournament dates are one weekly step apart (5 to 9 days)."""
        gap = DateUtils.days_between(newer, older)
        if gap is None:
            return False
        return CADENCE_MIN_DAYS <= gap <= CADENCE_MAX_DAYS

    @staticmethod
    def days_since(date_str: str, now: datetime) -> Optional[int]:
        """Whole days elapsed from midnight of ``date_str`` until ``now``."""
        parsed = DateUtils.parse_date(date_str)
        if parsed is None:
            return None
        if not isinstance(now, datetime):
            now = datetime.combine(now, time())
        return (now - datetime.combine(parsed, time(), tzinfo=now.tzinfo)) // timedelta(days=1)
