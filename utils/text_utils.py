"""
Text processing utilities for the WinnerTrack system.
"""

import re
from typing import List

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


class TextUtils:
    """Utilities for splitting and normalizing spreadsheet text."""

    @staticmethod
    def title_case(text: str) -> str:
        """Capitalize every word, lowercase the rest and collapse runs of whitespace."""
        if not text:
            return ""
        return ' '.join(word[:1].upper() + word[1:].lower() for word in text.split())

    @staticmethod
    def normalize_name(name: str) -> str:
        """Normalize a player name to the form used as its identity."""
        if not name:
            return ""
        return TextUtils.title_case(name.strip())

    @staticmethod
    def split_list(text: str, separator: str = ',') -> List[str]:
        """Split a delimited cell into trimmed, non-empty items."""
        if not text or not text.strip():
            return []
        return [item.strip() for item in text.split(separator) if item.strip()]

    @staticmethod
    def parse_names(text: str) -> List[str]:
        """Split a comma separated list of names and normalize each one."""
        names = (TextUtils.normalize_name(item) for item in TextUtils.split_list(text))
        return [name for name in names if name]

    @staticmethod
    def parse_int(text: str, default: int = 0) -> int:
        """Read the leading integer of a cell ("3 tournaments" -> 3)."""
        if text is None:
            return default
        match = _LEADING_INT.match(text)
        if not match:
            return default
        return int(match.group(1))

    @staticmethod
    def plural(count: int, word: str) -> str:
        """Return ``"<count> <word>"`` with an "s" unless count is 1."""
        return f"{count} {word}{'' if count == 1 else 's'}"
