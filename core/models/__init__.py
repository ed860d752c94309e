# =============================================================================
# core/models/ - Data Models
# =============================================================================
# This package contains the Product entity:
# - product.py: SQLAlchemy table model plus Pydantic API schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .product import (
    ErrorResponse,
    FieldError,
    MessageEnvelope,
    Product,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductRead,
    ProductSummary,
    ProductUpdate,
    ValidationErrorResponse,
)

__all__ = [
    "ErrorResponse",
    "FieldError",
    "MessageEnvelope",
    "Product",
    "ProductCreate",
    "ProductEnvelope",
    "ProductListEnvelope",
    "ProductRead",
    "ProductSummary",
    "ProductUpdate",
    "ValidationErrorResponse",
]
