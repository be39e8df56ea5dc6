"""
Opsboard - Main FastAPI Application

This is the entry point for the FastAPI application.
It configures middleware, routes, and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from .config.settings import get_settings
from .api.routes import api_router
from .api.middleware import CorrelationIdMiddleware, register_error_handlers
from .domain.enums import StorageBackend
from .glpi.client import GlpiClient
from .repositories.factory import build_repositories
from .repositories.mongo_client import create_indexes, close_connection, health_check
from .services.bi_service import BiService
from .services.canvas_service import CanvasService
from .utils.logger import setup_logging, get_logger

VERSION = "1.0.0"

# Setup logging first
setup_logging()
logger = get_logger(__name__)


# =============================================================================
# Application Lifecycle
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
        - Builds the GLPI client (left unset when credentials are missing)
        - Builds repositories over the configured storage backend
        - Creates MongoDB indexes when using MongoDB

    Shutdown:
        - Releases the GLPI session and closes its connection pool
        - Closes database connections
    """
    settings = get_settings()
    logger.info("Starting Opsboard...")

    missing = settings.missing_glpi_settings
    if missing:
        logger.warning(f"GLPI not configured, ticket endpoints disabled. Missing: {', '.join(missing)}")
        app.state.glpi = None
    else:
        app.state.glpi = GlpiClient.from_settings(settings)

    repositories = build_repositories(settings)
    app.state.repositories = repositories
    app.state.bi_service = BiService(repositories.bis)
    app.state.canvas_service = CanvasService(repositories.canvas)

    use_mongo = settings.storage_backend.lower() == StorageBackend.MONGO.value
    if use_mongo:
        try:
            create_indexes()
            logger.info("MongoDB indexes created")
        except PyMongoError as e:
            logger.error(f"Failed to create indexes: {e}")

    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Shutting down...")
    if app.state.glpi is not None:
        await app.state.glpi.aclose()
    if use_mongo:
        close_connection()
    logger.info("Application shutdown complete")


# =============================================================================
# Application Factory
# =============================================================================

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()
    application = FastAPI(
        title="Opsboard",
        description="GLPI ticket dashboard, BI intake tracker, automation registry and task board",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        openapi_url="/api/openapi.json" if settings.debug else None,
    )

    # Register middleware
    _configure_middleware(application)

    # Register error handlers
    register_error_handlers(application)

    # Register routes
    _configure_routes(application)

    return application


def _configure_middleware(app: FastAPI) -> None:
    """Configure application middleware."""
    settings = get_settings()
    # allow_credentials must be False when allowing all origins
    allow_all = settings.cors_origins.strip() == "*"

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_origins_list,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-Id"],
    )

    # Correlation ID middleware
    app.add_middleware(CorrelationIdMiddleware)


def _configure_routes(app: FastAPI) -> None:
    """Configure application routes."""
    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["Health"])
    async def health():
        """
        Health check endpoint.

        Reports storage connectivity and whether GLPI credentials are set.
        GLPI itself is not contacted.
        """
        settings = get_settings()
        glpi = getattr(app.state, "glpi", None)
        glpi_health = glpi.health() if glpi is not None else {
            "configured": False,
            "missing": settings.missing_glpi_settings,
        }

        storage = {"backend": settings.storage_backend.lower()}
        healthy = glpi_health["configured"]
        if storage["backend"] == StorageBackend.MONGO.value:
            storage["mongo"] = health_check()
            healthy = healthy and storage["mongo"].get("status") == "healthy"

        return {
            "status": "healthy" if healthy else "degraded",
            "version": VERSION,
            "environment": settings.environment,
            "storage": storage,
            "glpi": glpi_health
        }

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Opsboard",
            "version": VERSION,
            "docs": "/api/docs" if get_settings().debug else None
        }


# =============================================================================
# Application Instance
# =============================================================================

# Create the application instance
app = create_app()
