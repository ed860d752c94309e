# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every expected failure is an exception carrying its status code; the
# handlers below turn them into the JSON envelopes clients rely on:
#   400 {"errors": [...]}  - one entry per failed validation rule
#   404 {"error": "..."}   - referenced product does not exist
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

PRODUCT_NOT_FOUND_MESSAGE = "Producto no encontrado"
INVALID_JSON_MESSAGE = "El cuerpo de la petición no es un JSON válido"


class CatalogException(Exception):
    """
    Base exception for the products API.

    All custom exceptions inherit from this class and know how to render
    themselves as a response body.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.message}


# =============================================================================
# Product Exceptions
# =============================================================================

class ProductNotFoundError(CatalogException):
    """Raised when a product ID doesn't exist."""

    def __init__(self, product_id: int | str):
        super().__init__(message=PRODUCT_NOT_FOUND_MESSAGE, status_code=404)
        self.product_id = product_id


# =============================================================================
# Request Exceptions
# =============================================================================

class InputValidationError(CatalogException):
    """Raised when one or more validation rules fail for a request."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__(
            message=f"{len(errors)} validation error(s)",
            status_code=400,
        )
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        return {"errors": self.errors}


class InvalidJSONBodyError(CatalogException):
    """Raised when a JSON request body cannot be parsed."""

    def __init__(self, error: str):
        super().__init__(message=INVALID_JSON_MESSAGE, status_code=400)
        self.error = error


# =============================================================================
# Exception Handlers
# =============================================================================

async def catalog_exception_handler(
    request: Request,
    exc: CatalogException
) -> JSONResponse:
    """Convert CatalogException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
