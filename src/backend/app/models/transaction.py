"""
Pydantic models for parsed transactions and the records they become.
"""

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from typing import Any, List, Literal, Optional, Tuple
from decimal import Decimal


TransactionType = Literal['income', 'expense']


class ParsedTransaction(BaseModel):
    """One candidate transaction parsed from a single line of input."""
    amount: Decimal = Field(gt=0)
    date: str  # Store as string (YYYY-MM-DD)
    description: str
    merchant: str
    suggested_category: str
    transaction_type: TransactionType
    confidence: float
    original_text: str

    @field_serializer('amount')
    def serialize_amount(self, amount: Decimal) -> float:
        return float(amount)


class ParseStats(BaseModel):
    """Aggregate counts over one parsed batch."""
    total_parsed: int
    high_confidence: int
    needs_review: int
    potential_duplicates: int


class ParseResult(BaseModel):
    """Everything produced by one parse call."""
    transactions: List[ParsedTransaction]
    stats: ParseStats
    duplicate_groups: List[Tuple[int, int]]


class ParseSpendingTextRequest(BaseModel):
    """
    Request body for the parse endpoint.

    text is left untyped so a missing or non-string value reaches the parser,
    which reports it with the PARSING_FAILED envelope instead of a 422.
    """
    text: Any = None


class ParseSpendingTextResponse(BaseModel):
    data: ParseResult


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail


class CategoryRecord(BaseModel):
    """Category row as stored in the categories table."""
    model_config = ConfigDict(extra='ignore')

    id: str
    name: str
    color: str
    budget_limit: Decimal
    type: TransactionType


class TransactionRecord(BaseModel):
    """Transaction row written to the transactions table."""
    user_id: str
    amount: Decimal = Field(gt=0)
    date: str
    category_id: Optional[str] = None
    description: str
    merchant: str
    transaction_type: TransactionType
    notes: Optional[str] = None
    is_recurring: bool = False

    @field_serializer('amount')
    def serialize_amount(self, amount: Decimal) -> str:
        # Supabase-py JSON encoder cannot serialize Decimal objects directly
        return str(amount)


class ImportTransactionsRequest(BaseModel):
    """Request model for importing reviewed candidates."""
    user_id: str
    transactions: List[ParsedTransaction]


class ImportTransactionsResponse(BaseModel):
    success: bool
    imported: int


class CategoryList(BaseModel):
    categories: List[CategoryRecord]
