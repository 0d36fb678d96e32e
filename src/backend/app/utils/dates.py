"""
Date recognition for transaction lines.

Patterns are tried in order; each occurrence is turned into a real calendar
date and rejected if that fails, so "13/45/2025" can never leak through.
"""

import re
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Tuple

from .candidates import DateMatch, create_date_match, default_date_match
from .patterns import PatternSpec, first_match, strip_patterns

MONTH_NAMES = (
    r'(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?'
    r'|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)'
)

MONTH_ABBREVIATIONS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

# Two-digit years above this pivot belong to the 1900s
TWO_DIGIT_YEAR_PIVOT = 50

DATE_PATTERNS: Tuple[PatternSpec, ...] = (
    PatternSpec(
        name='relative_today',
        pattern=r'today',
        example='Lunch $12 today',
    ),
    PatternSpec(
        name='relative_yesterday',
        pattern=r'yesterday',
        example='Uber $18 yesterday',
    ),
    PatternSpec(
        name='numeric_us',
        pattern=r'(?<!\d)(\d{1,2})([/-])(\d{1,2})\2(\d{4}|\d{2})(?!\d)',
        example='11/08/2025',
        notes='MM/DD/YYYY, MM-DD-YYYY, MM/DD/YY',
    ),
    PatternSpec(
        name='numeric_iso',
        pattern=r'(?<!\d)(\d{4})([/-])(\d{1,2})\2(\d{1,2})(?!\d)',
        example='2025-11-08',
        notes='YYYY-MM-DD or YYYY/MM/DD',
    ),
    PatternSpec(
        name='month_day',
        pattern=r'\b(' + MONTH_NAMES + r')\b\.?\s+(\d{1,2})(?:st|nd|rd|th)?(?!\d)(?:,?\s+(\d{4})(?!\d))?',
        example='Nov 10, 2025',
        notes='Year is optional and defaults to the current year',
    ),
    PatternSpec(
        name='day_month',
        pattern=r'(?<![\d.,$])(\d{1,2})(?:st|nd|rd|th)?\s+(' + MONTH_NAMES + r')\b\.?(?:,?\s+(\d{4})(?!\d))?',
        example='10 November 2025',
        notes='Year is optional and defaults to the current year',
    ),
)


def expand_two_digit_year(year: int) -> int:
    """Expand a two-digit year: 76 -> 1976, 25 -> 2025."""
    if year >= 100:
        return year
    return 1900 + year if year > TWO_DIGIT_YEAR_PIVOT else 2000 + year


def safe_date(year: int, month: int, day: int) -> Optional[date]:
    """Build a calendar date, or None if the parts do not form one."""
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _month_number(name: str) -> Optional[int]:
    return MONTH_ABBREVIATIONS.get(name[:3].lower())


def _build_today(match: re.Match, today: date) -> Optional[date]:
    return today


def _build_yesterday(match: re.Match, today: date) -> Optional[date]:
    return today - timedelta(days=1)


def _build_numeric_us(match: re.Match, today: date) -> Optional[date]:
    month, day, year = int(match.group(1)), int(match.group(3)), match.group(4)
    return safe_date(expand_two_digit_year(int(year)), month, day)


def _build_numeric_iso(match: re.Match, today: date) -> Optional[date]:
    return safe_date(int(match.group(1)), int(match.group(3)), int(match.group(4)))


def _build_month_day(match: re.Match, today: date) -> Optional[date]:
    month = _month_number(match.group(1))
    if month is None:
        return None
    year = int(match.group(3)) if match.group(3) else today.year
    return safe_date(year, month, int(match.group(2)))


def _build_day_month(match: re.Match, today: date) -> Optional[date]:
    month = _month_number(match.group(2))
    if month is None:
        return None
    year = int(match.group(3)) if match.group(3) else today.year
    return safe_date(year, month, int(match.group(1)))


DATE_BUILDERS: Dict[str, Callable[[re.Match, date], Optional[date]]] = {
    'relative_today': _build_today,
    'relative_yesterday': _build_yesterday,
    'numeric_us': _build_numeric_us,
    'numeric_iso': _build_numeric_iso,
    'month_day': _build_month_day,
    'day_month': _build_day_month,
}


def find_date(text: str, today: date) -> DateMatch:
    """
    Find the first valid date expression in text.

    Args:
        text: A single transaction line
        today: Reference date for relative keywords and missing years

    Returns:
        DateMatch; falls back to today when nothing valid is found
    """
    def build(spec: PatternSpec, match: re.Match) -> Optional[DateMatch]:
        value = DATE_BUILDERS[spec.name](match, today)
        if value is None:
            return None
        return create_date_match(
            value=value,
            pattern_name=spec.name,
            match_span=match.span(),
            raw_text=match.group(0),
        )

    return first_match(DATE_PATTERNS, text, build) or default_date_match(today)


NUMERIC_DATE_PATTERNS = tuple(spec for spec in DATE_PATTERNS if spec.name in ('numeric_us', 'numeric_iso'))


def numeric_date_spans(text: str) -> List[Tuple[int, int]]:
    """Spans of every slash/dash date token, valid or not."""
    return [
        match.span()
        for spec in NUMERIC_DATE_PATTERNS
        for match in spec.compiled.finditer(text)
    ]


def strip_dates(text: str) -> str:
    """Remove anything that looks like a date expression."""
    return strip_patterns(DATE_PATTERNS, text)
