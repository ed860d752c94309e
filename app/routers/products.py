# =============================================================================
# app/routers/products.py - Product CRUD Endpoints
# =============================================================================
# Each route is bound to its validation rules through a dependency; the
# rules run (and may reject with 400) before the handler body executes.
# Handlers make one service call and wrap the result in {"data": ...}.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.dependencies import DbSession
from app.exceptions import ProductNotFoundError
from app.validation import (
    body,
    get_json_body,
    is_greater_than_zero,
    param,
    to_boolean,
    to_float,
    to_string,
    validate,
)
from core.models.product import (
    ErrorResponse,
    MessageEnvelope,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductRead,
    ProductSummary,
    ProductUpdate,
    ValidationErrorResponse,
)
from core.services.product_service import ProductService

router = APIRouter()

DELETED_MESSAGE = "Producto eliminado exitosamente"


# =============================================================================
# Validation Rules
# =============================================================================

def product_id_rule():
    return param("id").is_int().with_message("El ID del producto no es válido")


def product_body_rules():
    return [
        body("name")
            .not_empty().with_message("El nombre del producto es obligatorio"),
        body("price")
            .is_numeric().with_message("Valor no válido")
            .not_empty().with_message("El precio del producto es obligatorio")
            .custom(is_greater_than_zero).with_message("El precio del producto no es válido"),
    ]


validate_product_id = validate(product_id_rule())

validate_create = validate(*product_body_rules())

validate_update = validate(
    product_id_rule(),
    *product_body_rules(),
    body("isAvailable")
        .is_boolean().with_message("El estado de disponibilidad debe ser un valor booleano"),
)


# =============================================================================
# OpenAPI Helpers
# =============================================================================

ProductId = Annotated[
    str,
    Path(description="The ID of the product", examples=["1"]),
]

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Product not found"}}
INVALID = {400: {"model": ValidationErrorResponse, "description": "Invalid input data"}}


def _product_key(id: str) -> int:
    """Integer key for an id that passed the is_int rule."""
    try:
        return int(id)
    except ValueError:
        # Longer than the int conversion digit limit; no such row.
        raise ProductNotFoundError(id)


def _json_body(model) -> dict:
    """Document a request body the handler reads itself."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "",
    response_model=ProductListEnvelope,
    summary="Retrieve all products",
)
async def get_products(db: DbSession):
    """Retrieve a list of all products in the store, newest first."""
    products = ProductService.list_products(db)

    return ProductListEnvelope(
        data=[ProductSummary.model_validate(p) for p in products]
    )


@router.get(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Retrieve a product by ID",
    dependencies=[Depends(validate_product_id)],
    responses={**INVALID, **NOT_FOUND},
)
async def get_product_by_id(id: ProductId, db: DbSession):
    """Retrieve a specific product by its ID."""
    product = ProductService.get_product(db, _product_key(id))

    return ProductEnvelope(data=ProductRead.model_validate(product))


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    dependencies=[Depends(validate_create)],
    responses=INVALID,
    openapi_extra=_json_body(ProductCreate),
)
async def create_product(
    db: DbSession,
    payload: dict = Depends(get_json_body),
):
    """Create a new product with the provided details."""
    product = ProductService.create_product(
        db,
        name=to_string(payload["name"]),
        price=to_float(payload["price"]),
    )

    return ProductEnvelope(data=ProductRead.model_validate(product))


@router.put(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Update a product by ID",
    dependencies=[Depends(validate_update)],
    responses={**INVALID, **NOT_FOUND},
    openapi_extra=_json_body(ProductUpdate),
)
async def update_product(
    id: ProductId,
    db: DbSession,
    payload: dict = Depends(get_json_body),
):
    """Update the details of a specific product by its ID."""
    product = ProductService.update_product(
        db,
        _product_key(id),
        name=to_string(payload["name"]),
        price=to_float(payload["price"]),
        is_available=to_boolean(payload["isAvailable"]),
    )

    return ProductEnvelope(data=ProductRead.model_validate(product))


@router.patch(
    "/{id}",
    response_model=ProductEnvelope,
    summary="Update product availability by ID",
    dependencies=[Depends(validate_product_id)],
    responses={**INVALID, **NOT_FOUND},
)
async def update_availability(id: ProductId, db: DbSession):
    """Toggle the availability status of a specific product by its ID."""
    product = ProductService.toggle_availability(db, _product_key(id))

    return ProductEnvelope(data=ProductRead.model_validate(product))


@router.delete(
    "/{id}",
    response_model=MessageEnvelope,
    summary="Delete a product by ID",
    dependencies=[Depends(validate_product_id)],
    responses={**INVALID, **NOT_FOUND},
)
async def delete_product(id: ProductId, db: DbSession):
    """Delete a specific product by its ID and return a confirmation message."""
    ProductService.delete_product(db, _product_key(id))

    return MessageEnvelope(data=DELETED_MESSAGE)
