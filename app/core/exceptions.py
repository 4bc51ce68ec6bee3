"""
Application Exception Handling

Single AppException class for application errors raised inside the
services. Services convert them into product responses, so only request
validation errors are rendered by a FastAPI handler. Every error leaving
the API uses the product response shape: ``{"errors": [...], "products": []}``.
"""

from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception.

    Usage:
        raise AppException("Unknown field: colour", "UNKNOWN_FIELD")

    Error Codes:
        Query:
            - INVALID_FILTER
            - UNKNOWN_FIELD
            - INVALID_SORT
            - INVALID_PAGE

        Product:
            - PRODUCT_CODE_EXISTS

        External:
            - EXCHANGE_RATE_UNAVAILABLE
    """

    def __init__(self, message: str, code: str):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "UNKNOWN_FIELD")
        """
        self.message = message
        self.code = code
        super().__init__(self.message)


def error_body(errors: List[str]) -> Dict[str, Any]:
    """Build the failure body shared by every error response."""
    return {"errors": errors, "products": []}


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Convert request parsing errors to a 400 with readable messages.

    Example message: ``"body.priceEur: Input should be a valid number"``.
    """
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        errors.append(f"{location}: {error.get('msg', 'Invalid value')}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(errors)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def invalid_filter(reason: str) -> AppException:
    """Create invalid filter exception."""
    return AppException(
        f"Invalid filter: {reason}",
        "INVALID_FILTER"
    )


def unknown_field(field: str) -> AppException:
    """Create unknown field exception."""
    return AppException(
        f"Unknown product field: {field}",
        "UNKNOWN_FIELD"
    )


def invalid_sort(sort: str, reason: str) -> AppException:
    """Create invalid sort exception."""
    return AppException(
        f"Invalid sort '{sort}': {reason}",
        "INVALID_SORT"
    )


def invalid_page(reason: str) -> AppException:
    """Create invalid page request exception."""
    return AppException(
        f"Invalid page request: {reason}",
        "INVALID_PAGE"
    )


def product_code_exists(code: str) -> AppException:
    """Create product code conflict exception."""
    return AppException(
        f"Product with code {code} already exists.",
        "PRODUCT_CODE_EXISTS"
    )


def exchange_rate_unavailable(reason: str) -> AppException:
    """Create exchange rate unavailable exception."""
    return AppException(
        f"USD rate not available: {reason}",
        "EXCHANGE_RATE_UNAVAILABLE"
    )
