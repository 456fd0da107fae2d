"""
Authentication service.

Registration, login, token validation and password changes on top of the
UserRepository and JWTAuth.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from common.auth import JWTAuth
from common.utils import (
    BadRequestException,
    ConflictException,
    NotFoundException,
    UnauthorizedException,
    validate_password,
)

from insightmaster.models.user import UserStatus, serialize_user, token_claims
from insightmaster.services.user.user_repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def check_password_strength(password: str) -> None:
    """
    Enforce the password rule.

    Raises:
        BadRequestException: With the list of failed requirements
    """
    is_valid, errors = validate_password(password)
    if not is_valid:
        raise BadRequestException(
            message=(
                "Password must be at least 8 characters and include an uppercase "
                "letter, a lowercase letter, a digit and a special character (@$!%*?&)"
            ),
            code="WEAK_PASSWORD",
            details={"errors": errors},
        )


class AuthService:
    """
    Account lifecycle and token handling.
    """

    def __init__(self, users: UserRepository, auth: JWTAuth):
        """
        Initialize AuthService.

        Args:
            users: User repository
            auth: Token/password provider
        """
        self._users = users
        self._auth = auth

    @property
    def token_max_age(self) -> int:
        """Session cookie lifetime in seconds, matching token expiry."""
        return self._auth.token_max_age

    async def issue_token(self, user: Dict[str, Any]) -> str:
        """Create a signed token carrying the user claim."""
        return await self._auth.create_token(str(user["_id"]), user=token_claims(user))

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        password_confirm: str,
    ) -> Tuple[Dict[str, Any], str]:
        """
        Register a new account.

        Returns:
            (public user dict, token)

        Raises:
            BadRequestException: Missing fields, mismatched or weak password
            ConflictException: Email already registered
        """
        if not name or not email or not password or not password_confirm:
            raise BadRequestException(
                message="Name, email, password and password confirmation are required",
                code="MISSING_FIELDS",
            )

        if password != password_confirm:
            raise BadRequestException(
                message="Passwords do not match",
                code="PASSWORD_MISMATCH",
            )

        check_password_strength(password)

        if await self._users.find_by_email(email):
            raise ConflictException(
                message="This email address is already registered",
                code="EMAIL_EXISTS",
            )

        user = await self._users.create(name=name, email=email, password=password)
        token = await self.issue_token(user)

        logger.info(f"Registered user {user['_id']}")
        return serialize_user(user), token

    async def login(self, email: str, password: str) -> Tuple[Dict[str, Any], str]:
        """
        Verify credentials and issue a token.

        Raises:
            BadRequestException: Missing email or password
            UnauthorizedException: Bad credentials or disabled account
        """
        if not email or not password:
            raise BadRequestException(
                message="Email and password are required",
                code="MISSING_FIELDS",
            )

        user = await self._users.find_by_email(email)
        if not user or not self._auth.verify_password(password, user.get("passwordHash", "")):
            logger.info("Failed login attempt")
            raise UnauthorizedException(message=INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")

        if user.get("status") != UserStatus.ACTIVE.value:
            raise UnauthorizedException(message="This account is disabled", code="ACCOUNT_DISABLED")

        await self._users.update_last_login(str(user["_id"]))
        token = await self.issue_token(user)

        logger.info(f"User {user['_id']} logged in")
        return serialize_user(user), token

    async def logout(self, token: Optional[str]) -> None:
        if token:
            await self._auth.revoke_token(token)

    async def validate_token(self, token: Optional[str]) -> Dict[str, Any]:
        """
        Resolve a token to its active user document.

        Raises:
            UnauthorizedException: Missing/invalid token, unknown or inactive user
        """
        if not token:
            raise UnauthorizedException(message="Authentication required", code="AUTH_REQUIRED")

        try:
            claims = await self._auth.verify_token(token)
        except ValueError as e:
            raise UnauthorizedException(message=str(e), code="INVALID_TOKEN")

        user = await self._users.find_by_id(claims.get("sub", ""))
        if not user:
            raise UnauthorizedException(message="User not found", code="USER_NOT_FOUND")

        if user.get("status") != UserStatus.ACTIVE.value:
            raise UnauthorizedException(message="This account is disabled", code="ACCOUNT_DISABLED")

        return user

    async def change_password(
        self,
        user_id: str,
        current_password: str,
        new_password: str,
        new_password_confirm: str,
    ) -> None:
        """
        Change a user's password after verifying the current one.

        Raises:
            BadRequestException: Missing fields, mismatch, weak or wrong password
            NotFoundException: User no longer exists
        """
        if not current_password or not new_password or not new_password_confirm:
            raise BadRequestException(
                message="Current password, new password and confirmation are required",
                code="MISSING_FIELDS",
            )

        if new_password != new_password_confirm:
            raise BadRequestException(
                message="New passwords do not match",
                code="PASSWORD_MISMATCH",
            )

        check_password_strength(new_password)

        user = await self._users.find_by_id(user_id)
        if not user:
            raise NotFoundException(message="User not found", code="USER_NOT_FOUND")

        if not self._auth.verify_password(current_password, user.get("passwordHash", "")):
            raise BadRequestException(
                message="Current password is incorrect",
                code="INVALID_PASSWORD",
            )

        await self._users.update_password(user_id, new_password)
        logger.info(f"Password changed for user {user_id}")
