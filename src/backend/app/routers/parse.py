"""
Parse API router for turning pasted or dictated text into transaction candidates.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from app.config import settings
from app.models.transaction import (
    ErrorDetail,
    ErrorResponse,
    ParseSpendingTextRequest,
    ParseSpendingTextResponse,
)
from app.services.parser import ParseInputError, SpendingTextParser

router = APIRouter(tags=["parse"])
logger = logging.getLogger(__name__)

PARSING_FAILED = "PARSING_FAILED"

parser = SpendingTextParser()


def _error_response(status_code: int, message: str) -> JSONResponse:
    """Build the error envelope returned for every parse failure."""
    body = ErrorResponse(error=ErrorDetail(code=PARSING_FAILED, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post(
    "/parse-spending-text",
    response_model=ParseSpendingTextResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def parse_spending_text(request: Optional[ParseSpendingTextRequest] = None):
    """
    Parse free-form spending text, one transaction per line.

    Lines without an amount are skipped. The response carries the candidates,
    aggregate stats and index pairs of likely duplicates.

    Args:
        request: Body with a "text" field

    Returns:
        {"data": {"transactions", "stats", "duplicate_groups"}}
    """
    text = request.text if request is not None else None

    if isinstance(text, str) and len(text) > settings.MAX_INPUT_CHARS:
        logger.warning("Rejected oversized parse input", extra={
            "length": len(text),
            "limit": settings.MAX_INPUT_CHARS
        })
        return _error_response(
            413,
            f"Text input exceeds {settings.MAX_INPUT_CHARS} characters"
        )

    try:
        result = parser.parse(text)
        return ParseSpendingTextResponse(data=result)

    except ParseInputError as e:
        logger.warning("Invalid parse input", extra={"error": str(e)})
        return _error_response(400, str(e))
    except Exception as e:
        logger.error("Text parsing error", exc_info=True)
        return _error_response(500, str(e))
