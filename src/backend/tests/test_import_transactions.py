"""
Test suite for importing parsed transactions.

Tests cover:
- Suggested category names resolved to the user's category ids
- Default categories seeded when the user has none
- Import notes and recurring flag on stored rows
- Boundary validation of category rows
- Router error mapping (400 on empty import, 500 on store failure)
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.routers.transactions import router
from app.services.importer import DEFAULT_CATEGORIES, TransactionImporter
from app.models.transaction import CategoryRecord, ParsedTransaction
from fastapi.testclient import TestClient
from fastapi import FastAPI
from decimal import Decimal
from pydantic import ValidationError
import pytest
from unittest.mock import Mock, patch


# Create test app
app = FastAPI()
app.include_router(router)
client = TestClient(app)

USER_ID = "00000000-0000-0000-0000-000000000000"

CATEGORY_ROWS = [
    {'id': 'cat-utilities', 'name': 'Utilities', 'color': '#F59E0B', 'icon': 'bolt',
     'budget_limit': 250, 'type': 'expense', 'user_id': USER_ID},
    {'id': 'cat-salary', 'name': 'Salary', 'color': '#16A34A', 'icon': 'banknotes',
     'budget_limit': 0, 'type': 'income', 'user_id': USER_ID},
]


def candidate(**overrides):
    fields = {
        'amount': '89.99',
        'date': '2025-11-08',
        'description': 'Verizon bill',
        'merchant': 'Verizon bill',
        'suggested_category': 'Utilities',
        'transaction_type': 'expense',
        'confidence': 0.85,
        'original_text': 'Verizon bill $89.99 11/08/2025',
    }
    fields.update(overrides)
    return fields


def mock_client_with_categories(*category_responses):
    """Supabase mock whose category select returns each response in turn."""
    mock_client = Mock()
    select_execute = mock_client.table.return_value.select.return_value.eq.return_value.execute
    select_execute.side_effect = [Mock(data=rows) for rows in category_responses]
    mock_client.table.return_value.insert.return_value.execute.return_value = Mock(data=[])
    return mock_client


class TestBuildRecords:
    """Pure mapping from candidates to transaction rows."""

    def test_category_resolution(self):
        categories = [CategoryRecord.model_validate(row) for row in CATEGORY_ROWS]
        candidates = [
            ParsedTransaction(**candidate()),
            ParsedTransaction(**candidate(suggested_category='Housing', confidence=0.85)),
            ParsedTransaction(**candidate(suggested_category='Uncategorized', confidence=0.3)),
        ]

        records = TransactionImporter.build_records(USER_ID, candidates, categories)

        assert [r.category_id for r in records] == ['cat-utilities', None, None]
        assert records[0].notes == 'Imported via Smart Input (confidence: 0.85)'
        assert records[2].notes == 'Imported via Smart Input (confidence: 0.3)'
        assert all(r.is_recurring is False for r in records)
        assert all(r.user_id == USER_ID for r in records)

    def test_category_row_missing_field_fails_fast(self):
        row = {k: v for k, v in CATEGORY_ROWS[0].items() if k != 'color'}
        with pytest.raises(ValidationError):
            CategoryRecord.model_validate(row)


class TestImportEndpoint:

    @patch('app.routers.transactions.get_supabase_client')
    def test_import_inserts_rows(self, mock_supabase):
        mock_client = mock_client_with_categories(CATEGORY_ROWS)
        mock_supabase.return_value = mock_client

        response = client.post("/transactions/import", json={
            'user_id': USER_ID,
            'transactions': [candidate(), candidate(suggested_category='Housing')],
        })

        assert response.status_code == 200
        assert response.json() == {'success': True, 'imported': 2}

        mock_client.table.assert_any_call('transactions')
        rows = mock_client.table.return_value.insert.call_args[0][0]
        assert len(rows) == 2
        assert rows[0]['category_id'] == 'cat-utilities'
        assert rows[1]['category_id'] is None
        assert Decimal(rows[0]['amount']) == Decimal('89.99')
        assert rows[0]['date'] == '2025-11-08'
        assert rows[0]['transaction_type'] == 'expense'
        assert rows[0]['is_recurring'] is False

    @patch('app.routers.transactions.get_supabase_client')
    def test_seeds_default_categories_for_new_user(self, mock_supabase):
        mock_client = mock_client_with_categories([], CATEGORY_ROWS)
        mock_supabase.return_value = mock_client

        response = client.post("/transactions/import", json={
            'user_id': USER_ID,
            'transactions': [candidate()],
        })

        assert response.status_code == 200

        insert_calls = mock_client.table.return_value.insert.call_args_list
        assert len(insert_calls) == 2
        seeded = insert_calls[0][0][0]
        assert len(seeded) == len(DEFAULT_CATEGORIES)
        assert all(row['user_id'] == USER_ID for row in seeded)

    def test_empty_import_rejected(self):
        with patch('app.routers.transactions.get_supabase_client'):
            response = client.post("/transactions/import", json={
                'user_id': USER_ID,
                'transactions': [],
            })

        assert response.status_code == 400
        assert response.json()['detail'] == 'No transactions to import'

    def test_non_positive_amount_rejected_by_validation(self):
        response = client.post("/transactions/import", json={
            'user_id': USER_ID,
            'transactions': [candidate(amount='0')],
        })
        assert response.status_code == 422

    @patch('app.routers.transactions.get_supabase_client')
    def test_store_failure_is_500(self, mock_supabase):
        mock_client = mock_client_with_categories(CATEGORY_ROWS)
        mock_client.table.return_value.insert.return_value.execute.side_effect = Exception("connection reset")
        mock_supabase.return_value = mock_client

        response = client.post("/transactions/import", json={
            'user_id': USER_ID,
            'transactions': [candidate()],
        })

        assert response.status_code == 500
        assert 'connection reset' in response.json()['detail']


class TestCategoriesEndpoint:

    @patch('app.routers.transactions.get_supabase_client')
    def test_lists_categories(self, mock_supabase):
        mock_supabase.return_value = mock_client_with_categories(CATEGORY_ROWS)

        response = client.get(f"/transactions/categories?user_id={USER_ID}")

        assert response.status_code == 200
        names = [c['name'] for c in response.json()['categories']]
        assert names == ['Utilities', 'Salary']

    @patch('app.routers.transactions.get_supabase_client')
    def test_invalid_category_row_is_500(self, mock_supabase):
        bad_row = {k: v for k, v in CATEGORY_ROWS[0].items() if k != 'type'}
        mock_supabase.return_value = mock_client_with_categories([bad_row])

        response = client.get(f"/transactions/categories?user_id={USER_ID}")

        assert response.status_code == 500
