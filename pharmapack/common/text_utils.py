"""
Text Utilities

Positional primitives shared by the descriptor parsers: marker lookup,
bounded slicing and best-effort numeric parsing.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from .constants import LIST_SEPARATOR

# Returned by find_marker when the marker does not occur
NOT_FOUND = -1

_TWO_PLACES = Decimal("0.01")
# Prices are stored as DECIMAL(10,2): at most 8 integer digits
MAX_PRICE_INTEGER_DIGITS = 8

_DIGITS = re.compile(r"\d+")


def find_marker(text: str, marker: str, start: int = 0) -> int:
    """
    Find the next occurrence of a marker at or after a position.

    Args:
        text: Text to search
        marker: Marker to look for (one or more characters)
        start: Position to start searching from

    Returns:
        Index of the marker, or NOT_FOUND
    """
    if not text or not marker:
        return NOT_FOUND
    return text.find(marker, start)


def find_all_markers(text: str, marker: str) -> list[int]:
    """Return every position of a marker, left to right."""
    positions = []
    pos = find_marker(text, marker)
    while pos != NOT_FOUND:
        positions.append(pos)
        pos = find_marker(text, marker, pos + len(marker))
    return positions


def count_marker(text: Optional[str], marker: str) -> int:
    """Count non-overlapping occurrences of a marker."""
    if not text or not marker:
        return 0
    return text.count(marker)


def slice_bounded(text: str, start: int, end: Optional[int] = None) -> str:
    """
    Slice text and trim whitespace at both ends.

    Args:
        text: Source text
        start: Start index (inclusive, clamped at 0)
        end: End index (exclusive); None or NOT_FOUND means end of string

    Returns:
        Trimmed substring
    """
    if end is None or end == NOT_FOUND:
        end = len(text)
    return text[max(start, 0):end].strip()


def strip_grouping(text: str) -> str:
    """Remove thousands-grouping separators ("1,450.00" -> "1450.00")."""
    return text.replace(LIST_SEPARATOR, "")


def parse_money(text: Optional[str]) -> Optional[Decimal]:
    """
    Parse a monetary amount with two fractional digits.

    Grouping separators are stripped first. Malformed input, and amounts
    too large for a DECIMAL(10,2) column, yield None rather than an
    exception.

    Args:
        text: Amount text, e.g. "1,450.00"

    Returns:
        Decimal quantized to two places, or None

    Example:
        >>> parse_money("1,450.00")
        Decimal('1450.00')
    """
    if text is None:
        return None

    cleaned = strip_grouping(text).strip()
    if not cleaned:
        return None

    try:
        value = Decimal(cleaned)
        if not value.is_finite() or value.adjusted() >= MAX_PRICE_INTEGER_DIGITS:
            return None
        return value.quantize(_TWO_PLACES)
    except InvalidOperation:
        return None


def parse_count(text: Optional[str]) -> Optional[int]:
    """
    Parse a pack count such as the "100" of "100's pack".

    The whole token must be digits once grouping separators are removed,
    so "1,000" is 1000 and "10x" is None rather than 10.

    Returns:
        The integer, or None when the token is not a whole number
    """
    if not text:
        return None

    cleaned = strip_grouping(text).strip()
    if not _DIGITS.fullmatch(cleaned):
        return None
    return int(cleaned)


def clean_source_field(value: Optional[str]) -> Optional[str]:
    """
    Clean a raw field from the medicine source file.

    The source file encodes in-field commas as semicolons. Whitespace is
    trimmed and an empty value becomes None.
    """
    if value is None:
        return None

    cleaned = value.replace(";", LIST_SEPARATOR).strip()
    return cleaned or None
