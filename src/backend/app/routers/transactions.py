"""
Transactions API router for importing reviewed candidates.
"""

from fastapi import APIRouter, HTTPException, Query
import logging

from app.models.transaction import (
    CategoryList,
    ImportTransactionsRequest,
    ImportTransactionsResponse,
)
from app.services.importer import NoTransactionsToImport, TransactionImporter
from app.utils.supabase import get_supabase_client

router = APIRouter(prefix="/transactions", tags=["transactions"])
logger = logging.getLogger(__name__)


@router.post("/import", response_model=ImportTransactionsResponse)
async def import_transactions(request: ImportTransactionsRequest):
    """
    Import parsed transactions for a user.

    This endpoint:
    1. Loads the user's categories (seeding defaults if there are none)
    2. Resolves each suggested category name to a category id
    3. Inserts the transactions with an import note carrying the confidence

    Args:
        request: User ID and the candidates to store

    Returns:
        Number of imported transactions
    """
    try:
        importer = TransactionImporter(get_supabase_client())
        imported = importer.import_transactions(request.user_id, request.transactions)

        return ImportTransactionsResponse(success=True, imported=imported)

    except NoTransactionsToImport as e:
        raise HTTPException(status_code=400, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.error("Error importing transactions", extra={
            "user_id": request.user_id,
            "error": str(e)
        })
        raise HTTPException(
            status_code=500,
            detail=f"Failed to import transactions: {str(e)}"
        )


@router.get("/categories", response_model=CategoryList)
async def list_categories(user_id: str = Query(..., description="User ID")):
    """
    List a user's categories, seeding the defaults on first use.

    Args:
        user_id: User ID

    Returns:
        Categories available for resolving suggested category names
    """
    try:
        importer = TransactionImporter(get_supabase_client())
        return CategoryList(categories=importer.load_categories(user_id))

    except Exception as e:
        logger.error("Error loading categories", extra={
            "user_id": user_id,
            "error": str(e)
        })
        raise HTTPException(
            status_code=500,
            detail=f"Failed to load categories: {str(e)}"
        )
