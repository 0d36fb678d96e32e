"""
Keyword scoring for parsed transaction lines.

Category suggestion and income/expense classification both run against the
same combined text: the cleaned description plus the untouched original line.
Keywords that only appear in stripped date/amount text still count.
"""

from typing import List, Sequence, Tuple

from .keywords import DEFAULT_KEYWORDS, KeywordConfig, UNCATEGORIZED

__all__ = [
    'HIGH_CONFIDENCE', 'LOW_CONFIDENCE', 'HIGH_CONFIDENCE_THRESHOLD', 'REVIEW_THRESHOLD',
    'combined_text', 'suggest_category', 'classify_transaction_type', 'confidence_for_category',
    'compute_stats',
]

HIGH_CONFIDENCE = 0.85  # category keyword matched
LOW_CONFIDENCE = 0.3    # no keyword matched

# Stats buckets; values in [0.5, 0.7] belong to neither
HIGH_CONFIDENCE_THRESHOLD = 0.7
REVIEW_THRESHOLD = 0.5


def combined_text(description: str, original_text: str) -> str:
    return f"{description} {original_text}".lower()


def suggest_category(text: str, keywords: KeywordConfig = DEFAULT_KEYWORDS) -> str:
    """
    Return the first category whose keyword list has a substring hit.

    Args:
        text: Lowercased combined text
        keywords: Keyword tables; category order is the tie-break

    Returns:
        Category label or "Uncategorized"
    """
    for category, category_keywords in keywords.categories():
        if any(keyword in text for keyword in category_keywords):
            return category
    return UNCATEGORIZED


def classify_transaction_type(text: str, keywords: KeywordConfig = DEFAULT_KEYWORDS) -> str:
    """
    Classify as "income" when an income indicator is present, else "expense".

    The outgoing-payment keyword ("paid") is ignored when the text phrases it
    as a payment made, e.g. "paid $1200 for rent".
    """
    ignored = None
    if (
        keywords.outgoing_payment_keyword
        and keywords.outgoing_payment_pattern is not None
        and keywords.outgoing_payment_pattern.search(text)
    ):
        ignored = keywords.outgoing_payment_keyword

    for keyword in keywords.income_keywords:
        if keyword == ignored:
            continue
        if keyword in text:
            return 'income'
    return 'expense'


def confidence_for_category(category: str) -> float:
    return LOW_CONFIDENCE if category == UNCATEGORIZED else HIGH_CONFIDENCE


def compute_stats(confidences: Sequence[float], duplicate_groups: List[Tuple[int, int]]) -> dict:
    """Aggregate counts over one parsed batch."""
    return {
        'total_parsed': len(confidences),
        'high_confidence': sum(1 for c in confidences if c > HIGH_CONFIDENCE_THRESHOLD),
        'needs_review': sum(1 for c in confidences if c < REVIEW_THRESHOLD),
        'potential_duplicates': len(duplicate_groups),
    }
