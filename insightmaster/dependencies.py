"""
FastAPI dependencies for InsightMaster.

Services are built once at startup by ``build_services`` and stored on
``app.state.services``; the getters below read them back from the request.
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.ai import AIProvider, ClaudeProvider, OpenAIProvider
from common.auth import JWTAuth, extract_token
from common.database import MongoDB
from common.utils import ForbiddenException, NotFoundException

from insightmaster.config import Settings
from insightmaster.services.ai import AIInsightService
from insightmaster.services.analysis import InsightAnalyzer
from insightmaster.services.articles import ArticleRepository
from insightmaster.services.auth import AuthService
from insightmaster.services.user import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything a request handler may need, built once per application."""
    settings: Settings
    database: Optional[MongoDB]
    auth: JWTAuth
    users: UserRepository
    articles: ArticleRepository
    auth_service: AuthService
    ai_service: AIInsightService
    analyzer: InsightAnalyzer


# =============================================================================
# Initialization
# =============================================================================

def create_ai_provider(settings: Settings) -> Optional[AIProvider]:
    """
    Build the configured AI provider, or None when no API key is set.

    Args:
        settings: Application settings

    Returns:
        AIProvider instance or None
    """
    if not settings.ai_enabled():
        logger.warning(
            f"No API key configured for AI provider '{settings.AI_PROVIDER}'; "
            f"AI features will use fallback data"
        )
        return None

    if settings.AI_PROVIDER == "claude":
        logger.info(f"Using Claude provider ({settings.CLAUDE_MODEL})")
        return ClaudeProvider(api_key=settings.CLAUDE_API_KEY, model=settings.CLAUDE_MODEL)

    logger.info(f"Using OpenAI provider ({settings.OPENAI_MODEL})")
    return OpenAIProvider(
        api_key=settings.OPENAI_API_KEY,
        model=settings.OPENAI_MODEL,
        base_url=settings.OPENAI_API_BASE_URL,
    )


def build_services(
    db: AsyncIOMotorDatabase,
    settings: Settings,
    database: Optional[MongoDB] = None,
    ai_provider: Optional[AIProvider] = None,
) -> Services:
    """
    Initialize all services with the database connection.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        settings: Application settings
        database: Connection handle, used by the health check
        ai_provider: Override for the AI provider (defaults to settings)
    """
    auth = JWTAuth(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        token_expire_days=settings.JWT_EXPIRE_DAYS,
    )
    users = UserRepository(db=db, auth=auth)

    provider = ai_provider if ai_provider is not None else create_ai_provider(settings)

    return Services(
        settings=settings,
        database=database,
        auth=auth,
        users=users,
        articles=ArticleRepository(db=db),
        auth_service=AuthService(users=users, auth=auth),
        ai_service=AIInsightService(
            provider=provider,
            temperature=settings.AI_TEMPERATURE,
            max_tokens=settings.AI_MAX_TOKENS,
        ),
        analyzer=InsightAnalyzer(),
    )


# =============================================================================
# Service Getters
# =============================================================================

def get_services(request: Request) -> Services:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized. Call build_services at startup.")
    return services


def get_settings(request: Request) -> Settings:
    return get_services(request).settings


def get_auth_service(request: Request) -> AuthService:
    return get_services(request).auth_service


def get_user_repository(request: Request) -> UserRepository:
    return get_services(request).users


def get_article_repository(request: Request) -> ArticleRepository:
    return get_services(request).articles


def get_ai_service(request: Request) -> AIInsightService:
    return get_services(request).ai_service


def get_analyzer(request: Request) -> InsightAnalyzer:
    return get_services(request).analyzer


# =============================================================================
# Authentication
# =============================================================================

async def require_auth(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> dict:
    """
    Dependency that requires authentication.

    Reads the bearer token, falling back to the session cookie, and returns
    the active user document.

    Usage:
        @router.get("/protected")
        async def protected_route(user: Annotated[dict, Depends(require_auth)]):
            return {"user_id": str(user["_id"])}
    """
    cookie_name = get_settings(request).AUTH_COOKIE_NAME
    token = extract_token(request, cookie_name=cookie_name)
    user = await auth_service.validate_token(token)
    request.state.token = token
    return user


async def load_owned_article(
    article_id: str,
    user: dict,
    articles: ArticleRepository,
) -> dict:
    """
    Load an article and check that the user owns it.

    Raises:
        NotFoundException: Article does not exist
        ForbiddenException: Article belongs to another user
    """
    article = await articles.find_by_id(article_id)
    if not article:
        raise NotFoundException(message="Article not found", code="ARTICLE_NOT_FOUND")

    if str(article.get("userId")) != str(user["_id"]):
        logger.warning(f"User {user['_id']} denied access to article {article_id}")
        raise ForbiddenException(
            message="You do not have permission to access this article",
            code="ARTICLE_FORBIDDEN",
        )

    return article
