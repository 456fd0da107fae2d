"""
InsightMaster FastAPI Application

Main entry point for the InsightMaster API: article management, insight
recording, AI analysis and the insight training mode.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Common library imports
from common.database import MongoDB
from common.utils import error_response

# App-specific imports
from insightmaster.config import Settings, settings as default_settings
from insightmaster.dependencies import Services, build_services
from insightmaster.routers import (
    auth_router,
    articles_router,
    insights_router,
    analysis_router,
    ai_router,
    training_router,
    users_router,
    health_router,
)

logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api"


# =============================================================================
# Exception Handlers
# =============================================================================
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTPException and APIException in the error envelope."""
    detail = exc.detail
    if isinstance(detail, dict):
        body = error_response(
            message=detail.get("message", ""),
            code=detail.get("code"),
            details=detail.get("details"),
        )
    else:
        body = error_response(message=str(detail))

    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {detail}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}")

    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request schema errors are reported as 400 with the field errors."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    logger.info(f"{request.method} {request.url.path} -> 400: validation failed")
    return JSONResponse(
        status_code=400,
        content=error_response(
            message="Invalid request data",
            code="VALIDATION_ERROR",
            errors=errors,
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Unexpected errors surface their message with a 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_response(message=str(exc) or "Internal server error", code="INTERNAL_ERROR"),
    )


# =============================================================================
# Application Factory
# =============================================================================
def create_app(
    settings: Optional[Settings] = None,
    services: Optional[Services] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to the environment)
        services: Pre-built services; when given, the lifespan does not
            connect to MongoDB (used by tests)
    """
    settings = settings or default_settings
    database = MongoDB()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.

        Connects to MongoDB and builds the services on startup, closes the
        connection on shutdown.
        """
        if services is not None:
            yield
            return

        logger.info(f"Starting InsightMaster API {settings.APP_VERSION} ({settings.ENVIRONMENT})")

        missing = settings.validate_required()
        if missing:
            logger.warning(f"Missing settings: {', '.join(missing)}")

        await database.connect(
            uri=settings.MONGODB_URI,
            database_name=settings.MONGODB_DATABASE,
        )
        app.state.services = build_services(database.db, settings, database=database)
        logger.info("All services initialized")

        yield

        logger.info("Shutting down InsightMaster API")
        await database.disconnect()

    app = FastAPI(
        title="InsightMaster API",
        description="Critical reading and insight training for articles",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development() else None,
        redoc_url="/redoc" if settings.is_development() else None,
    )
    if services is not None:
        app.state.services = services

    # =========================================================================
    # CORS Middleware
    # =========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Include Routers (all under /api prefix)
    # =========================================================================
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(articles_router, prefix=API_PREFIX)
    app.include_router(insights_router, prefix=API_PREFIX)
    app.include_router(analysis_router, prefix=API_PREFIX)
    app.include_router(ai_router, prefix=API_PREFIX)
    app.include_router(training_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(health_router, prefix=API_PREFIX)

    return app


app = create_app()


# =============================================================================
# Run with Uvicorn
# =============================================================================
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.is_development(),
    )
