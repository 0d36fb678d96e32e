"""
Test suite for the date and money helpers used by the parser.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.utils.dates import expand_two_digit_year, find_date, numeric_date_spans, safe_date, strip_dates
from app.utils.money import parse_money, is_positive_amount
from datetime import date
from decimal import Decimal
import pytest

TODAY = date(2025, 11, 15)


class TestTwoDigitYears:

    @pytest.mark.parametrize("year,expected", [
        (25, 2025),
        (50, 2050),
        (51, 1951),
        (76, 1976),
        (0, 2000),
        (2024, 2024),
    ])
    def test_expansion(self, year, expected):
        assert expand_two_digit_year(year) == expected


class TestFindDate:

    def test_records_pattern_and_span(self):
        line = "Coffee $4 on 11/08/2025"
        match = find_date(line, TODAY)
        assert match.pattern_name == 'numeric_us'
        assert match.raw_text == '11/08/2025'
        assert line[match.match_span[0]:match.match_span[1]] == '11/08/2025'
        assert not match.is_default

    def test_default_is_flagged(self):
        match = find_date("Coffee $4", TODAY)
        assert match.is_default
        assert match.iso == '2025-11-15'

    def test_invalid_occurrence_falls_through_to_later_valid_one(self):
        """An impossible date is skipped; a later valid one on the line still counts."""
        match = find_date("13/45/2025 moved to 11/02/2025", TODAY)
        assert match.iso == '2025-11-02'

    def test_invalid_numeric_falls_through_to_month_name(self):
        match = find_date("02/30/2025 or Feb 3", TODAY)
        assert match.iso == '2025-02-03'
        assert match.pattern_name == 'month_day'

    def test_leap_day(self):
        assert find_date("02/29/2024", TODAY).iso == '2024-02-29'
        assert find_date("02/29/2025", TODAY).is_default

    def test_safe_date_rejects_impossible_dates(self):
        assert safe_date(2025, 13, 1) is None
        assert safe_date(2025, 4, 31) is None
        assert safe_date(2025, 4, 30) == date(2025, 4, 30)


class TestNumericDateSpans:

    def test_spans_include_invalid_dates(self):
        line = "13/45/2025 then 2025-11-08"
        assert numeric_date_spans(line) == [(0, 10), (16, 26)]

    def test_plain_numbers_have_no_span(self):
        assert numeric_date_spans("Uber -15 and 12-chipotle") == []


class TestStripDates:

    def test_removes_every_format(self):
        text = "a 11/08/2025 b 2025-11-08 c Nov 8 d 8 November e today f yesterday"
        assert strip_dates(text).split() == ['a', 'b', 'c', 'd', 'e', 'f']


class TestParseMoney:

    @pytest.mark.parametrize("raw,expected", [
        ("$1,234.56", Decimal('1234.56')),
        ("45.20", Decimal('45.20')),
        ("45 dollars", Decimal('45')),
        ("12 USD", Decimal('12')),
        ("1,200", Decimal('1200')),
    ])
    def test_valid_amounts(self, raw, expected):
        assert parse_money(raw) == expected

    def test_rejects_garbage(self):
        assert parse_money("") is None
        assert parse_money(None) is None
        assert parse_money("abc") is None

    def test_negative_rejected(self):
        assert parse_money("-3.00") is None

    def test_is_positive_amount(self):
        assert is_positive_amount(Decimal('0.01'))
        assert not is_positive_amount(Decimal('0'))
        assert not is_positive_amount(None)
