# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the catalog's persistence-facing logic:
# - models/: SQLAlchemy table model and Pydantic schemas
# - services/: ProductService, one method per catalog operation
#
# Code in this package never touches FastAPI requests or responses.
# This keeps the logic testable and reusable.
# =============================================================================
