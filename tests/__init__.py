# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Products API:
# - test_validation.py: Rule chains, coercion and sanitizers
# - test_product_service.py: ProductService against SQLite
# - test_products_api.py: HTTP tests for /api/products
# - test_server.py: Startup connection, middleware, health and docs
#
# Run tests with: pytest
# =============================================================================
