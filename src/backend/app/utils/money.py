"""
Money parsing utilities for free-text transaction lines.

Handles the US-style formats people type into the input box:
- Symbol prefixed: $1,234.56
- Currency word suffixed: 45 dollars, 12.50 USD
- Bare numbers: 1200, 1,200.5
"""

from decimal import Decimal, InvalidOperation
from typing import Optional
import re

CURRENCY_SYMBOL_PATTERN = re.compile(r'\$')
CURRENCY_WORD_PATTERN = re.compile(r'\b(?:dollars?|usd)\b', re.IGNORECASE)


def parse_money(amount_str: str) -> Optional[Decimal]:
    """
    Parse a money string into a Decimal.

    Args:
        amount_str: String containing amount (e.g., "$1,234.56", "45 dollars")

    Returns:
        Decimal amount or None if parsing fails

    Examples:
        >>> parse_money("$1,234.56")
        Decimal('1234.56')
        >>> parse_money("45 dollars")
        Decimal('45')
        >>> parse_money("-3.00") is None
        True
    """
    if not amount_str or not isinstance(amount_str, str):
        return None

    cleaned = CURRENCY_SYMBOL_PATTERN.sub('', amount_str)
    cleaned = CURRENCY_WORD_PATTERN.sub('', cleaned)

    # Remove commas (thousands separator) and spaces
    cleaned = cleaned.replace(',', '').replace(' ', '').strip()

    if not cleaned:
        return None

    try:
        result = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None

    if not result.is_finite():
        return None

    if result < 0:
        return None

    return result


def is_positive_amount(amount: Optional[Decimal]) -> bool:
    """True when amount is a finite, strictly positive Decimal."""
    return amount is not None and amount.is_finite() and amount > 0
