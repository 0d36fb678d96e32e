"""
Match dataclasses for line extraction.

Each match records the extracted value together with the pattern that
produced it and the substring it came from, so the cleanup step can remove
exactly the text that was consumed.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class Match:
    """Base class for extraction matches."""
    value: Any
    pattern_name: str
    match_span: tuple[int, int]  # (start, end) character positions
    raw_text: str = ""  # Original matched text


@dataclass(frozen=True)
class AmountMatch(Match):
    """Amount pulled from a line; value is always positive."""
    value: Decimal


@dataclass(frozen=True)
class DateMatch(Match):
    """
    Date pulled from a line.

    is_default is True when no date expression was found and the value is
    the reference "today".
    """
    value: date
    is_default: bool = False

    @property
    def iso(self) -> str:
        return self.value.isoformat()


def create_amount_match(value: Decimal, pattern_name: str, match_span: tuple[int, int], raw_text: str) -> AmountMatch:
    return AmountMatch(
        value=value,
        pattern_name=pattern_name,
        match_span=match_span,
        raw_text=raw_text,
    )


def create_date_match(value: date, pattern_name: str, match_span: tuple[int, int], raw_text: str) -> DateMatch:
    return DateMatch(
        value=value,
        pattern_name=pattern_name,
        match_span=match_span,
        raw_text=raw_text,
    )


def default_date_match(today: date) -> DateMatch:
    """Fallback used when a line carries no recognizable date."""
    return DateMatch(
        value=today,
        pattern_name='default_today',
        match_span=(0, 0),
        raw_text='',
        is_default=True,
    )
