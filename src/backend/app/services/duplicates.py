"""
Duplicate detection across one parsed batch.
"""

import logging
from decimal import Decimal
from typing import List, Sequence, Tuple

from app.models.transaction import ParsedTransaction

logger = logging.getLogger(__name__)

AMOUNT_TOLERANCE = Decimal('0.01')


def is_duplicate(first: ParsedTransaction, second: ParsedTransaction) -> bool:
    """Same amount (within a cent), same date, same merchant ignoring case."""
    return (
        abs(first.amount - second.amount) < AMOUNT_TOLERANCE
        and first.date == second.date
        and first.merchant.lower() == second.merchant.lower()
    )


def find_duplicate_groups(transactions: Sequence[ParsedTransaction]) -> List[Tuple[int, int]]:
    """
    Pairwise scan for likely duplicates.

    Every matching pair is reported as (i, j) with i < j; pairs are not merged,
    so three identical lines yield three pairs. Nothing is removed.
    """
    groups: List[Tuple[int, int]] = []
    for i in range(len(transactions)):
        for j in range(i + 1, len(transactions)):
            if is_duplicate(transactions[i], transactions[j]):
                groups.append((i, j))

    if groups:
        logger.debug("Found potential duplicates", extra={"pairs": len(groups)})

    return groups
