"""
FastAPI router for Auth endpoints.

Provides registration, login, logout and token validation. Login and
registration return the token in the body and also set it as an httpOnly
cookie for browser clients.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from common.auth import extract_token
from common.utils import UnauthorizedException, success_response

from insightmaster.config import Settings
from insightmaster.dependencies import get_auth_service, get_settings
from insightmaster.models.user import serialize_user
from insightmaster.schemas.auth import LoginRequest, RegisterRequest
from insightmaster.services.auth import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def set_auth_cookie(response: Response, token: str, max_age: int, settings: Settings) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.is_production(),
        samesite="strict",
    )


@router.post("/register", status_code=201)
async def register(
    body: RegisterRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """
    Register a new user account.

    Requires name, email, password and matching passwordConfirm.
    """
    user, token = await auth_service.register(
        name=body.name,
        email=body.email,
        password=body.password,
        password_confirm=body.passwordConfirm,
    )
    set_auth_cookie(response, token, auth_service.token_max_age, settings)

    return success_response({"user": user, "token": token}, message="Registration successful")


@router.post("/login")
async def login(
    body: LoginRequest,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Log in with email and password."""
    user, token = await auth_service.login(email=body.email, password=body.password)
    set_auth_cookie(response, token, auth_service.token_max_age, settings)

    return success_response({"user": user, "token": token}, message="Login successful")


@router.post("/logout")
async def logout(
    request: Request,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Revoke the current token (if any) and clear the session cookie."""
    token = extract_token(request, cookie_name=settings.AUTH_COOKIE_NAME)
    await auth_service.logout(token)
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/")

    return success_response(message="Logged out")


@router.get("/validate")
async def validate(
    request: Request,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Validate a bearer token and return the user it belongs to."""
    token = extract_token(request)
    if not token:
        raise UnauthorizedException(message="Authentication required", code="AUTH_REQUIRED")

    user = await auth_service.validate_token(token)
    return success_response({"valid": True, "user": serialize_user(user)})
