# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Products API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.exceptions import CatalogException, catalog_exception_handler
from app.middleware import AllowedOriginMiddleware, RequestLoggingMiddleware
from app.routers import health, products
from lib.database import connect_db, engine

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: check the database connection; on success the schema sync
      runs in the background while the API starts serving
    - Shutdown: release pooled connections
    """
    logger.info(f"Starting Products API in {settings.ENVIRONMENT} mode")
    logger.info(f"Allowed CORS origin: {settings.frontend_origin or '(none)'}")

    await connect_db()

    yield

    logger.info("Shutting down Products API")
    engine.dispose()


# Create FastAPI application
app = FastAPI(
    title="REST API Products",
    description="API for managing products in a store.",
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Products",
            "description": "API Operations related to products",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
    swagger_ui_parameters={"defaultModelsExpandDepth": 1},
)


# =============================================================================
# Middleware
# =============================================================================
# Added innermost first: origin check -> CORS headers -> request logging.

app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(AllowedOriginMiddleware, allowed_origin=settings.frontend_origin)


# =============================================================================
# Exception Handlers
# =============================================================================

# Only expected failures are mapped; database errors raised mid-request are
# left to the framework's default 500.
app.add_exception_handler(CatalogException, catalog_exception_handler)


# =============================================================================
# Routers
# =============================================================================

# Product catalog endpoints
app.include_router(
    products.router,
    prefix="/api/products",
    tags=["Products"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)
