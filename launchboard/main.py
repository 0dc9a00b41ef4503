# launchboard/main.py
from fastapi import FastAPI, Depends, HTTPException, status
from contextlib import asynccontextmanager
import time

# Core imports
from launchboard.core.config import settings
from launchboard.core import tracing
from launchboard.db.database import init_db
from launchboard.db.gateway import DataGateway, get_gateway

# API routes
from launchboard.api.v1.router import api_router

# Middleware
from launchboard.middleware.tracing import TracingMiddleware
from launchboard.middleware.security import SecurityHeadersMiddleware
from launchboard.middleware.cors import setup_cors_middleware

from launchboard.exceptions.handlers import register_exception_handlers

SERVICE_VERSION = tracing.SERVICE_VERSION


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: logging and table creation
    """
    tracing.setup_structured_logging()
    tracing.info("Launchboard API startup initiated")

    try:
        await init_db()
    except Exception as e:
        tracing.error(f"Database initialization failed: {e}")
        raise

    tracing.info(f"Environment: {settings.ENVIRONMENT}")
    tracing.info(f"Log Level: {settings.LOG_LEVEL}")
    tracing.info(f"Rollback on failed moves: {'Enabled' if settings.BOARD_ROLLBACK_ON_FAILURE else 'Disabled'}")
    tracing.info(f"CORS Origins: {len(settings.cors_origins_list)} configured")
    tracing.info(f"Launchboard API v{SERVICE_VERSION} startup complete")

    yield

    tracing.info("Launchboard API shutdown complete")


app = FastAPI(
    title="Launchboard API",
    description="Kanban launch board with drag-and-drop ordering, activity log and unit economics",
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.ENVIRONMENT == "development" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT == "development" else None,
    openapi_url="/openapi.json" if settings.ENVIRONMENT == "development" else None
)

# =============================================================================
# MIDDLEWARE SETUP (last added runs first)
# =============================================================================

app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.ENVIRONMENT != "development")
setup_cors_middleware(app)
app.add_middleware(TracingMiddleware)

# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

register_exception_handlers(app)

# =============================================================================
# API ROUTES
# =============================================================================

app.include_router(api_router, prefix="/api/v1")


# =============================================================================
# SYSTEM ENDPOINTS
# =============================================================================

@app.get("/health", tags=["System"])
async def health_check(gateway: DataGateway = Depends(get_gateway)):
    """
    Health check with a data store round trip
    """
    try:
        task_count = await gateway.count("tasks")
    except Exception as e:
        tracing.error(f"Health check failed: {e}",
                      endpoint="/health",
                      error_type=type(e).__name__)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy - data store unreachable"
        )

    return {
        "status": "healthy",
        "service": "Launchboard API",
        "version": SERVICE_VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": time.time(),
        "trace_id": tracing.get_current_trace_id(),
        "checks": {
            "database": "connected",
            "tasks": task_count
        }
    }


@app.get("/", tags=["System"])
async def api_information():
    """API information endpoint"""
    return {
        "message": "Launchboard API",
        "version": SERVICE_VERSION,
        "environment": settings.ENVIRONMENT,
        "status": "operational",
        "trace_id": tracing.get_current_trace_id(),
        "endpoints": {
            "health": "/health",
            "board": "/api/v1/board",
            "tasks": "/api/v1/tasks",
            "unit_economics": "/api/v1/unit-economics",
            "documentation": "/docs" if settings.ENVIRONMENT == "development" else "Contact administrator"
        },
        "timestamp": time.time()
    }
