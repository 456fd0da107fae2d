"""
FastAPI router for the health check.
"""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import success_response

from insightmaster.dependencies import Services, get_services

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(services: Annotated[Services, Depends(get_services)]):
    """
    Health check endpoint.

    Returns the status of the API and database connection. ``degraded``
    when the database is not connected.
    """
    db_connected = services.database is not None and services.database.is_connected

    return success_response({
        "status": "healthy" if db_connected else "degraded",
        "version": services.settings.APP_VERSION,
        "environment": services.settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {
            "database": {"status": "connected" if db_connected else "disconnected"},
            "api": {"status": "running"},
            "ai": {"status": "configured" if services.ai_service.enabled else "fallback"},
        },
    })
