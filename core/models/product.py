# =============================================================================
# core/models/product.py - Product Table and Schemas
# =============================================================================
# This module defines the Product entity in two forms:
# - Product: SQLAlchemy model mapped to the "products" table
# - ProductRead / ProductSummary: API representations (camelCase on the wire)
# - ProductCreate / ProductUpdate: request body shapes used for API docs
#
# Column names keep the camelCase used by the existing "products" table
# (isAvailable, createdAt, updatedAt); Python attributes are snake_case.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Boolean, DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from lib.database import Base


# =============================================================================
# ORM Model
# =============================================================================

class Product(Base):
    """A catalog product."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    is_available: Mapped[bool] = mapped_column(
        "isAvailable", Boolean, nullable=False, default=True
    )
    created_at: Mapped[datetime] = mapped_column(
        "createdAt", DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} price={self.price}>"


# =============================================================================
# API Schemas
# =============================================================================

class ProductSummary(BaseModel):
    """
    Product as returned by the list endpoint (no timestamps).

    Example:
        {"id": 1, "name": "Laptop", "price": 999.99, "isAvailable": true}
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int = Field(..., description="Product ID", examples=[1])
    name: str = Field(..., description="Product name", examples=["Laptop"])
    price: float = Field(..., description="Product price", examples=[999.99])
    is_available: bool = Field(
        ...,
        alias="isAvailable",
        description="Availability status of the product",
        examples=[True],
    )


class ProductRead(ProductSummary):
    """Product as returned by the single-item endpoints."""

    created_at: datetime | None = Field(
        default=None,
        alias="createdAt",
        description="When the product was created",
    )
    updated_at: datetime | None = Field(
        default=None,
        alias="updatedAt",
        description="When the product was last modified",
    )


class ProductCreate(BaseModel):
    """Request body for POST /api/products (documentation only)."""

    name: str = Field(..., description="Name of the product", examples=["Smartphone"])
    price: float = Field(..., description="Price of the product", examples=[499.99])


class ProductUpdate(ProductCreate):
    """Request body for PUT /api/products/{id} (documentation only)."""

    is_available: bool = Field(
        ...,
        alias="isAvailable",
        description="Availability status of the product",
        examples=[True],
    )


# =============================================================================
# Response Envelopes
# =============================================================================

class ProductEnvelope(BaseModel):
    """Single product wrapped in the data envelope."""
    data: ProductRead


class ProductListEnvelope(BaseModel):
    """Product list wrapped in the data envelope."""
    data: list[ProductSummary] = Field(default_factory=list)


class MessageEnvelope(BaseModel):
    """Plain message wrapped in the data envelope."""
    data: str = Field(..., examples=["Producto eliminado exitosamente"])


class ErrorResponse(BaseModel):
    """Single error message (e.g. not found)."""
    error: str = Field(..., examples=["Producto no encontrado"])


class FieldError(BaseModel):
    """One failed validation rule."""
    type: str = Field(default="field")
    msg: str = Field(..., examples=["El ID del producto no es válido"])
    path: str = Field(..., examples=["id"])
    location: str = Field(..., examples=["params"])
    value: Any = Field(default=None, examples=["invalid-id"])


class ValidationErrorResponse(BaseModel):
    """List of failed validation rules."""
    errors: list[FieldError]
