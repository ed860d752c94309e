# =============================================================================
# core/services/product_service.py - Product Business Logic
# =============================================================================
# Handles product CRUD operations against the database.
# Separates HTTP concerns from persistence: routes validate and shape
# responses, this service performs exactly one read and/or one write.
#
# No locking: concurrent updates to the same product are last-write-wins.
# =============================================================================

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, load_only

from core.models.product import Product
from app.exceptions import ProductNotFoundError

logger = logging.getLogger(__name__)

# Bounds of the Integer primary key column (32-bit signed).
MIN_PRODUCT_ID = -(2**31)
MAX_PRODUCT_ID = 2**31 - 1


class ProductService:
    """
    Service for product catalog operations.

    Provides a clean interface between API routes and database.
    Every method takes the request's SQLAlchemy session.
    """

    @staticmethod
    def list_products(db: Session) -> list[Product]:
        """
        Fetch all products, newest first.

        Only the public columns are loaded; timestamps stay out of the
        projection.

        Returns:
            List of products ordered by id descending (may be empty)
        """
        statement = (
            select(Product)
            .options(load_only(Product.id, Product.name, Product.price, Product.is_available))
            .order_by(Product.id.desc())
        )
        return list(db.scalars(statement).all())

    @staticmethod
    def get_product(db: Session, product_id: int) -> Product:
        """
        Get a product by primary key.

        Ids outside the key column's range cannot exist and are not
        sent to the database.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        if not MIN_PRODUCT_ID <= product_id <= MAX_PRODUCT_ID:
            raise ProductNotFoundError(product_id)

        product = db.get(Product, product_id)

        if product is None:
            raise ProductNotFoundError(product_id)

        return product

    @staticmethod
    def create_product(db: Session, name: str, price: float) -> Product:
        """
        Insert a new product.

        isAvailable is not accepted here; it takes the column default.

        Returns:
            The created product with its assigned id and timestamps
        """
        product = Product(name=name, price=price)

        db.add(product)
        db.commit()
        db.refresh(product)

        logger.info(f"Created product: {product.id}")
        return product

    @staticmethod
    def update_product(
        db: Session,
        product_id: int,
        name: str,
        price: float,
        is_available: bool,
    ) -> Product:
        """
        Replace every mutable field of a product.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        product = ProductService.get_product(db, product_id)

        product.name = name
        product.price = price
        product.is_available = is_available

        db.commit()
        db.refresh(product)

        logger.info(f"Updated product: {product_id}")
        return product

    @staticmethod
    def toggle_availability(db: Session, product_id: int) -> Product:
        """
        Flip a product's isAvailable flag.

        Read, negate, write. Two concurrent toggles can cancel out.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        product = ProductService.get_product(db, product_id)

        product.is_available = not product.is_available

        db.commit()
        db.refresh(product)

        logger.info(f"Toggled availability of product {product_id} to {product.is_available}")
        return product

    @staticmethod
    def delete_product(db: Session, product_id: int) -> None:
        """
        Permanently delete a product.

        Raises:
            ProductNotFoundError: If the product doesn't exist
        """
        product = ProductService.get_product(db, product_id)

        db.delete(product)
        db.commit()

        logger.info(f"Deleted product: {product_id}")
