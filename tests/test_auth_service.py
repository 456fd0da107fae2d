"""Unit tests for JWT auth, password rules and AuthService."""

import pytest
from unittest.mock import MagicMock
from bson import ObjectId

from common.auth import JWTAuth
from common.utils import (
    BadRequestException,
    ConflictException,
    NotFoundException,
    UnauthorizedException,
    validate_password,
)

from insightmaster.services.auth import AuthService
from insightmaster.services.user import UserRepository

TEST_PASSWORD = "Passw0rd!"


@pytest.fixture
def users(sample_user_doc):
    repo = MagicMock(spec=UserRepository)
    repo.find_by_email.return_value = sample_user_doc
    repo.find_by_id.return_value = sample_user_doc
    return repo


@pytest.fixture
def auth_service(users, jwt_auth):
    return AuthService(users=users, auth=jwt_auth)


# ─────────────────────────────────────────────────────────────────
# JWTAuth
# ─────────────────────────────────────────────────────────────────


class TestJWTAuth:
    @pytest.mark.asyncio
    async def test_token_round_trip(self, jwt_auth):
        token = await jwt_auth.create_token("user-1", user={"name": "Aiko"})
        claims = await jwt_auth.verify_token(token)
        assert claims["sub"] == "user-1"
        assert claims["user"] == {"name": "Aiko"}

    @pytest.mark.asyncio
    async def test_wrong_secret_rejected(self, jwt_auth):
        token = await JWTAuth(secret="other").create_token("user-1")
        with pytest.raises(ValueError):
            await jwt_auth.verify_token(token)

    @pytest.mark.asyncio
    async def test_revoked_token_rejected(self, jwt_auth):
        token = await jwt_auth.create_token("user-1")
        await jwt_auth.revoke_token(token)
        with pytest.raises(ValueError):
            await jwt_auth.verify_token(token)

    def test_password_hash_round_trip(self, jwt_auth):
        hashed = jwt_auth.hash_password(TEST_PASSWORD)
        assert hashed != TEST_PASSWORD
        assert jwt_auth.verify_password(TEST_PASSWORD, hashed)
        assert not jwt_auth.verify_password("Wrong0rd!", hashed)
        assert not jwt_auth.verify_password(TEST_PASSWORD, "")

    def test_token_max_age(self):
        assert JWTAuth(secret="s", token_expire_days=7).token_max_age == 7 * 24 * 60 * 60


class TestValidatePassword:
    def test_strong_password(self):
        assert validate_password("Passw0rd!") == (True, [])

    @pytest.mark.parametrize(
        "password",
        ["Pa0!", "password0!", "PASSWORD0!", "Password!!", "Passw0rdd", "Passw0rd#"],
    )
    def test_weak_passwords(self, password):
        is_valid, errors = validate_password(password)
        assert not is_valid
        assert errors


# ─────────────────────────────────────────────────────────────────
# AuthService
# ─────────────────────────────────────────────────────────────────


class TestRegister:
    @pytest.mark.asyncio
    async def test_creates_user_and_returns_token(self, auth_service, users, jwt_auth, sample_user_doc):
        users.find_by_email.return_value = None
        users.create.return_value = sample_user_doc

        user, token = await auth_service.register("Aiko", "aiko@example.com", TEST_PASSWORD, TEST_PASSWORD)

        users.create.assert_called_once_with(name="Aiko", email="aiko@example.com", password=TEST_PASSWORD)
        assert "passwordHash" not in user
        claims = await jwt_auth.verify_token(token)
        assert claims["sub"] == str(sample_user_doc["_id"])
        assert claims["user"]["email"] == "aiko@example.com"

    @pytest.mark.asyncio
    async def test_missing_fields(self, auth_service):
        with pytest.raises(BadRequestException):
            await auth_service.register("", "aiko@example.com", TEST_PASSWORD, TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_password_mismatch(self, auth_service):
        with pytest.raises(BadRequestException) as exc:
            await auth_service.register("Aiko", "aiko@example.com", TEST_PASSWORD, "Other0rd!")
        assert exc.value.detail["code"] == "PASSWORD_MISMATCH"

    @pytest.mark.asyncio
    async def test_weak_password(self, auth_service):
        with pytest.raises(BadRequestException) as exc:
            await auth_service.register("Aiko", "aiko@example.com", "weak", "weak")
        assert exc.value.detail["code"] == "WEAK_PASSWORD"

    @pytest.mark.asyncio
    async def test_duplicate_email(self, auth_service, users):
        with pytest.raises(ConflictException):
            await auth_service.register("Aiko", "aiko@example.com", TEST_PASSWORD, TEST_PASSWORD)
        users.create.assert_not_called()


class TestLogin:
    @pytest.mark.asyncio
    async def test_success_updates_last_login(self, auth_service, users, sample_user_id):
        user, token = await auth_service.login("aiko@example.com", TEST_PASSWORD)

        assert user["id"] == sample_user_id
        assert token
        users.update_last_login.assert_called_once_with(sample_user_id)

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_share_message(self, auth_service, users):
        with pytest.raises(UnauthorizedException) as wrong_password:
            await auth_service.login("aiko@example.com", "Wrong0rd!")

        users.find_by_email.return_value = None
        with pytest.raises(UnauthorizedException) as unknown_email:
            await auth_service.login("nobody@example.com", TEST_PASSWORD)

        assert wrong_password.value.detail["message"] == unknown_email.value.detail["message"]

    @pytest.mark.asyncio
    async def test_inactive_account(self, auth_service, sample_user_doc):
        sample_user_doc["status"] = "inactive"
        with pytest.raises(UnauthorizedException) as exc:
            await auth_service.login("aiko@example.com", TEST_PASSWORD)
        assert exc.value.detail["code"] == "ACCOUNT_DISABLED"

    @pytest.mark.asyncio
    async def test_missing_credentials(self, auth_service):
        with pytest.raises(BadRequestException):
            await auth_service.login("", "")


class TestValidateToken:
    @pytest.mark.asyncio
    async def test_returns_user(self, auth_service, sample_user_doc, sample_user_id, jwt_auth):
        token = await jwt_auth.create_token(sample_user_id)
        assert await auth_service.validate_token(token) == sample_user_doc

    @pytest.mark.asyncio
    async def test_missing_token(self, auth_service):
        with pytest.raises(UnauthorizedException):
            await auth_service.validate_token(None)

    @pytest.mark.asyncio
    async def test_garbage_token(self, auth_service):
        with pytest.raises(UnauthorizedException) as exc:
            await auth_service.validate_token("not-a-jwt")
        assert exc.value.detail["code"] == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_unknown_user(self, auth_service, users, jwt_auth):
        users.find_by_id.return_value = None
        token = await jwt_auth.create_token(str(ObjectId()))
        with pytest.raises(UnauthorizedException):
            await auth_service.validate_token(token)

    @pytest.mark.asyncio
    async def test_logout_revokes_token(self, auth_service, jwt_auth, sample_user_id):
        token = await jwt_auth.create_token(sample_user_id)
        await auth_service.logout(token)
        with pytest.raises(UnauthorizedException):
            await auth_service.validate_token(token)


class TestChangePassword:
    @pytest.mark.asyncio
    async def test_success(self, auth_service, users, sample_user_id):
        await auth_service.change_password(sample_user_id, TEST_PASSWORD, "N3wPass!", "N3wPass!")
        users.update_password.assert_called_once_with(sample_user_id, "N3wPass!")

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, auth_service, users, sample_user_id):
        with pytest.raises(BadRequestException) as exc:
            await auth_service.change_password(sample_user_id, "Wrong0rd!", "N3wPass!", "N3wPass!")
        assert exc.value.detail["code"] == "INVALID_PASSWORD"
        users.update_password.assert_not_called()

    @pytest.mark.asyncio
    async def test_confirmation_mismatch(self, auth_service, sample_user_id):
        with pytest.raises(BadRequestException):
            await auth_service.change_password(sample_user_id, TEST_PASSWORD, "N3wPass!", "N3wPass?")

    @pytest.mark.asyncio
    async def test_user_gone(self, auth_service, users, sample_user_id):
        users.find_by_id.return_value = None
        with pytest.raises(NotFoundException):
            await auth_service.change_password(sample_user_id, TEST_PASSWORD, "N3wPass!", "N3wPass!")
