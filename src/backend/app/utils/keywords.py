"""
Keyword tables for category suggestion and income detection.

The tables are immutable and passed into the parser, so callers (and tests)
can substitute their own sets without touching module state.
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

UNCATEGORIZED = 'Uncategorized'

# Order matters: the first category with a hit wins.
DEFAULT_CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ('Food & Dining', (
        'restaurant', 'food', 'grocery', 'groceries', 'supermarket', 'cafe', 'coffee',
        'lunch', 'dinner', 'breakfast', 'brunch', 'starbucks', 'mcdonalds', 'chipotle',
        'pizza', 'sushi', 'burger', 'bakery', 'whole foods', 'trader joe', 'safeway',
        'kroger', 'doordash', 'grubhub', 'ubereats',
    )),
    ('Transportation', (
        'gas', 'fuel', 'uber', 'lyft', 'taxi', 'parking', 'metro', 'bus', 'train',
        'car', 'vehicle', 'shell', 'chevron', 'exxon', 'toll', 'subway fare',
    )),
    ('Housing', (
        'rent', 'mortgage', 'lease', 'property', 'landlord', 'hoa',
    )),
    ('Utilities', (
        'electric', 'water', 'internet', 'phone', 'utility', 'bill', 'power',
        'verizon', 'at&t', 't-mobile', 'comcast', 'xfinity', 'spectrum',
    )),
    ('Healthcare', (
        'doctor', 'hospital', 'pharmacy', 'medical', 'health', 'dental', 'clinic',
        'medicine', 'cvs', 'walgreens', 'prescription', 'copay',
    )),
    ('Entertainment', (
        'movie', 'cinema', 'concert', 'game', 'streaming', 'netflix', 'spotify', 'hulu',
        'disney+', 'entertainment', 'ticket', 'theater', 'theatre', 'stadium',
    )),
    ('Shopping', (
        'amazon', 'store', 'shop', 'purchase', 'buy', 'clothing', 'electronics',
        'best buy', 'walmart', 'target', 'costco', 'ikea', 'nike', 'zara', 'h&m',
    )),
    ('Education', (
        'course', 'book', 'education', 'tuition', 'class', 'school', 'learning',
        'udemy', 'coursera', 'university', 'college',
    )),
    ('Salary', (
        'salary', 'paycheck', 'income', 'wage', 'payroll', 'direct deposit',
    )),
    ('Freelance', (
        'freelance', 'consulting', 'project', 'client', 'invoice', 'contract', 'gig',
    )),
)

DEFAULT_INCOME_KEYWORDS: Tuple[str, ...] = (
    'salary', 'income', 'paycheck', 'freelance', 'consulting', 'paid',
    'payment received', 'deposit', 'revenue', 'bonus',
)

# "Paid $1200 for rent" / "paid to landlord" describe money going out;
# "got paid for my shift" does not.
OUTGOING_PAYMENT_PATTERN = re.compile(
    r'(?<!\bgot )(?<!\bget )(?<!\bgetting )(?<!\bwas )(?<!\bwere )(?<!\bbeen )(?<!\bbe )'
    r'\bpaid\b(?:\s+\S+)?\s+(?:for|to)\b',
    re.IGNORECASE,
)


@dataclass(frozen=True)
class KeywordConfig:
    """Keyword tables consumed by category suggestion and type classification."""
    category_keywords: Tuple[Tuple[str, Tuple[str, ...]], ...] = DEFAULT_CATEGORY_KEYWORDS
    income_keywords: Tuple[str, ...] = DEFAULT_INCOME_KEYWORDS
    outgoing_payment_keyword: Optional[str] = 'paid'
    outgoing_payment_pattern: Optional[re.Pattern] = field(default=OUTGOING_PAYMENT_PATTERN, compare=False)

    def categories(self) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        return iter(self.category_keywords)

    def category_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.category_keywords)


DEFAULT_KEYWORDS = KeywordConfig()
