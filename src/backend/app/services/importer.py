"""
Import service that turns reviewed candidates into stored transactions.
Resolves suggested category names to the user's category ids before insert.
"""

import logging
from typing import Dict, List, Optional, Sequence

from supabase import Client

from app.models.transaction import CategoryRecord, ParsedTransaction, TransactionRecord
from app.utils.supabase import get_supabase_client

logger = logging.getLogger(__name__)

# Seeded for users who have no categories yet
DEFAULT_CATEGORIES = [
    # Expenses
    {'name': 'Groceries', 'color': '#10B981', 'icon': 'shopping-bag', 'budget_limit': 400, 'type': 'expense'},
    {'name': 'Rent', 'color': '#6366F1', 'icon': 'home', 'budget_limit': 1500, 'type': 'expense'},
    {'name': 'Utilities', 'color': '#F59E0B', 'icon': 'bolt', 'budget_limit': 250, 'type': 'expense'},
    {'name': 'Dining', 'color': '#EF4444', 'icon': 'utensils', 'budget_limit': 250, 'type': 'expense'},
    {'name': 'Transport', 'color': '#3B82F6', 'icon': 'car', 'budget_limit': 150, 'type': 'expense'},
    {'name': 'Health', 'color': '#14B8A6', 'icon': 'heart', 'budget_limit': 150, 'type': 'expense'},
    {'name': 'Entertainment', 'color': '#8B5CF6', 'icon': 'film', 'budget_limit': 120, 'type': 'expense'},
    {'name': 'Subscriptions', 'color': '#06B6D4', 'icon': 'badge-check', 'budget_limit': 60, 'type': 'expense'},
    {'name': 'Travel', 'color': '#0EA5E9', 'icon': 'airplane', 'budget_limit': 300, 'type': 'expense'},
    # Income
    {'name': 'Salary', 'color': '#16A34A', 'icon': 'banknotes', 'budget_limit': 0, 'type': 'income'},
    {'name': 'Investments', 'color': '#22C55E', 'icon': 'chart-bar', 'budget_limit': 0, 'type': 'income'},
    {'name': 'Freelance', 'color': '#84CC16', 'icon': 'briefcase', 'budget_limit': 0, 'type': 'income'},
]


class NoTransactionsToImport(ValueError):
    """Raised when an import is requested with an empty candidate list."""


class TransactionImporter:
    """Service for persisting parsed transactions for a user."""

    def __init__(self, supabase: Optional[Client] = None):
        """Initialize importer with an explicit client or the default one."""
        self.supabase = supabase or get_supabase_client()

    def _fetch_categories(self, user_id: str) -> List[dict]:
        response = self.supabase.table('categories').select('*').eq('user_id', user_id).execute()
        return response.data or []

    def seed_default_categories(self, user_id: str) -> None:
        """Insert the default category set for a user."""
        rows = [{**category, 'user_id': user_id} for category in DEFAULT_CATEGORIES]
        self.supabase.table('categories').insert(rows).execute()
        logger.info("Seeded default categories", extra={
            "user_id": user_id,
            "count": len(rows)
        })

    def load_categories(self, user_id: str) -> List[CategoryRecord]:
        """
        Load the user's categories, seeding defaults when there are none.

        Args:
            user_id: User UUID

        Returns:
            Validated category records

        Raises:
            pydantic.ValidationError: a stored row is missing a required field
        """
        rows = self._fetch_categories(user_id)
        if not rows:
            self.seed_default_categories(user_id)
            rows = self._fetch_categories(user_id)

        return [CategoryRecord.model_validate(row) for row in rows]

    @staticmethod
    def build_records(
        user_id: str,
        candidates: Sequence[ParsedTransaction],
        categories: Sequence[CategoryRecord]
    ) -> List[TransactionRecord]:
        """
        Map candidates to transaction rows.

        category_id is the id of the category whose name equals the suggested
        category, or None when the user has no such category.
        """
        category_ids: Dict[str, str] = {}
        for category in categories:
            category_ids.setdefault(category.name, category.id)

        return [
            TransactionRecord(
                user_id=user_id,
                amount=candidate.amount,
                date=candidate.date,
                category_id=category_ids.get(candidate.suggested_category),
                description=candidate.description,
                merchant=candidate.merchant,
                transaction_type=candidate.transaction_type,
                notes=f"Imported via Smart Input (confidence: {candidate.confidence})",
                is_recurring=False,
            )
            for candidate in candidates
        ]

    def import_transactions(self, user_id: str, candidates: Sequence[ParsedTransaction]) -> int:
        """
        Store reviewed candidates as transactions.

        Args:
            user_id: User UUID
            candidates: Parsed (and possibly user-edited) candidates

        Returns:
            Number of rows inserted

        Raises:
            NoTransactionsToImport: candidates is empty
        """
        if not candidates:
            raise NoTransactionsToImport("No transactions to import")

        categories = self.load_categories(user_id)
        records = self.build_records(user_id, candidates, categories)

        self.supabase.table('transactions').insert(
            [record.model_dump(mode='json') for record in records]
        ).execute()

        unresolved = sum(1 for record in records if record.category_id is None)
        logger.info("Imported transactions", extra={
            "user_id": user_id,
            "count": len(records),
            "uncategorized": unresolved
        })

        return len(records)
