"""
InsightMaster API routers.
"""

from insightmaster.routers.auth import router as auth_router
from insightmaster.routers.articles import router as articles_router
from insightmaster.routers.insights import router as insights_router
from insightmaster.routers.analysis import router as analysis_router
from insightmaster.routers.ai import router as ai_router
from insightmaster.routers.training import router as training_router
from insightmaster.routers.users import router as users_router
from insightmaster.routers.health import router as health_router

__all__ = [
    "auth_router",
    "articles_router",
    "insights_router",
    "analysis_router",
    "ai_router",
    "training_router",
    "users_router",
    "health_router",
]
