"""
FastAPI router for the current user's profile, password and statistics.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from common.utils import (
    BadRequestException,
    InternalServerException,
    NotFoundException,
    success_response,
)

from insightmaster.config import Settings
from insightmaster.dependencies import (
    get_article_repository,
    get_auth_service,
    get_settings,
    get_user_repository,
    require_auth,
)
from insightmaster.models.article import ArticleStatus, article_summary
from insightmaster.models.user import serialize_user
from insightmaster.schemas.user import PasswordChangeRequest, ProfileUpdateRequest
from insightmaster.services.articles import ArticleRepository
from insightmaster.services.auth import AuthService
from insightmaster.services.user import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

NAME_MAX_LENGTH = 50
BIO_MAX_LENGTH = 500
RECENT_ARTICLES_LIMIT = 5


@router.get("/me")
async def get_profile(user: Annotated[dict, Depends(require_auth)]):
    """Get the current user's profile."""
    return success_response(serialize_user(user))


@router.put("/me")
async def update_profile(
    body: ProfileUpdateRequest,
    user: Annotated[dict, Depends(require_auth)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
):
    """
    Update the current user's profile.

    Name is required (at most 50 characters); bio is limited to 500.
    """
    name = (body.name or "").strip()
    if not name:
        raise BadRequestException(message="Name is required", code="MISSING_NAME")
    if len(name) > NAME_MAX_LENGTH:
        raise BadRequestException(
            message=f"Name must be at most {NAME_MAX_LENGTH} characters",
            code="NAME_TOO_LONG",
        )
    if body.bio and len(body.bio) > BIO_MAX_LENGTH:
        raise BadRequestException(
            message=f"Bio must be at most {BIO_MAX_LENGTH} characters",
            code="BIO_TOO_LONG",
        )

    updates = {"name": name, "bio": body.bio or ""}
    if body.profileImageUrl is not None:
        updates["profileImageUrl"] = body.profileImageUrl

    updated = await users.update(str(user["_id"]), updates)
    if not updated:
        raise InternalServerException(message="Failed to update profile", code="PROFILE_UPDATE_FAILED")

    return success_response(serialize_user(updated), message="Profile updated")


@router.delete("/me")
async def delete_account(
    request: Request,
    response: Response,
    user: Annotated[dict, Depends(require_auth)],
    users: Annotated[UserRepository, Depends(get_user_repository)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Deactivate the current account and end the session."""
    user_id = str(user["_id"])
    if not await users.deactivate(user_id):
        raise NotFoundException(message="User not found", code="USER_NOT_FOUND")

    await auth_service.logout(getattr(request.state, "token", None))
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/")

    logger.info(f"Deactivated user {user_id}")
    return success_response(message="Account deleted")


@router.put("/me/password")
async def change_password(
    body: PasswordChangeRequest,
    user: Annotated[dict, Depends(require_auth)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Change the current user's password."""
    await auth_service.change_password(
        user_id=str(user["_id"]),
        current_password=body.currentPassword,
        new_password=body.newPassword,
        new_password_confirm=body.newPasswordConfirm,
    )
    return success_response(message="Password changed")


@router.get("/me/stats")
async def get_stats(
    user: Annotated[dict, Depends(require_auth)],
    articles: Annotated[ArticleRepository, Depends(get_article_repository)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """
    Dashboard statistics for the current user.

    Article counts by status, total insights, the five newest articles,
    category breakdowns and daily activity for the recent window.
    """
    user_id = str(user["_id"])
    since = datetime.now(timezone.utc) - timedelta(days=settings.ACTIVITY_WINDOW_DAYS)

    recent = await articles.find_by_user(
        user_id, limit=RECENT_ARTICLES_LIMIT, sort_field="createdAt"
    )
    published = await articles.count_by_user(user_id, ArticleStatus.PUBLISHED.value)
    drafts = await articles.count_by_user(user_id, ArticleStatus.DRAFT.value)
    total_insights = await articles.count_insights_by_user(user_id)
    article_categories = await articles.article_category_counts(user_id)
    insight_categories = await articles.insight_category_counts(user_id)
    activity = await articles.recent_activity(user_id, since)

    return success_response({
        "totalArticles": published + drafts,
        "publishedArticles": published,
        "draftArticles": drafts,
        "totalInsights": total_insights,
        "recentArticles": [article_summary(doc) for doc in recent],
        "articleCategories": article_categories,
        "insightCategories": insight_categories,
        "recentActivity": activity,
    })
