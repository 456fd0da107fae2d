"""Shared test fixtures for InsightMaster tests."""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from fastapi.testclient import TestClient
from jose import jwt

from common.auth import JWTAuth

from insightmaster.config import Settings
from insightmaster.dependencies import Services
from insightmaster.services.ai import AIInsightService
from insightmaster.services.analysis import InsightAnalyzer
from insightmaster.services.articles import ArticleRepository
from insightmaster.services.auth import AuthService
from insightmaster.services.user import UserRepository

TEST_SECRET = "test-secret"
TEST_PASSWORD = "Passw0rd!"


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def sample_article_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() and aggregate() return cursors synchronously (not
    # coroutines), so use MagicMock for them.
    collection.find = MagicMock()
    collection.aggregate = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def make_cursor():
    """Build a Motor-style cursor whose chained calls return itself."""
    def _make(docs):
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.skip.return_value = cursor
        cursor.limit.return_value = cursor
        cursor.to_list = AsyncMock(return_value=docs)
        return cursor
    return _make


@pytest.fixture
def jwt_auth():
    return JWTAuth(secret=TEST_SECRET)


@pytest.fixture
def sample_user_doc(sample_user_id, jwt_auth):
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(sample_user_id),
        "name": "Aiko Tanaka",
        "email": "aiko@example.com",
        "passwordHash": jwt_auth.hash_password(TEST_PASSWORD),
        "role": "user",
        "status": "active",
        "bio": "",
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def sample_article_doc(sample_article_id, sample_user_id):
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(sample_article_id),
        "userId": ObjectId(sample_user_id),
        "title": "Renewable energy adoption accelerates",
        "content": "Solar capacity doubled last year as costs fell sharply.",
        "category": "environment",
        "status": "draft",
        "tags": ["energy"],
        "readingTime": 1,
        "insights": [
            {
                "id": str(ObjectId()),
                "content": "Falling costs drive solar adoption",
                "category": "main_idea",
                "evidence": "costs fell sharply",
                "createdAt": now,
                "updatedAt": now,
            },
        ],
        "createdAt": now,
        "updatedAt": now,
    }


# ─────────────────────────────────────────────────────────────────
# HTTP layer
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        ENVIRONMENT="test",
        JWT_SECRET=TEST_SECRET,
        OPENAI_API_KEY=None,
        CLAUDE_API_KEY=None,
    )


@pytest.fixture
def mock_users(sample_user_doc):
    users = MagicMock(spec=UserRepository)
    users.find_by_id.return_value = sample_user_doc
    return users


@pytest.fixture
def mock_articles():
    return MagicMock(spec=ArticleRepository)


@pytest.fixture
def services(test_settings, jwt_auth, mock_users, mock_articles):
    """Services with mocked repositories and no AI provider."""
    return Services(
        settings=test_settings,
        database=None,
        auth=jwt_auth,
        users=mock_users,
        articles=mock_articles,
        auth_service=AuthService(users=mock_users, auth=jwt_auth),
        ai_service=AIInsightService(provider=None),
        analyzer=InsightAnalyzer(),
    )


@pytest.fixture
def client(services, test_settings):
    from api import create_app

    app = create_app(settings=test_settings, services=services)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers(sample_user_id):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": sample_user_id, "iat": now, "exp": now + timedelta(days=1)},
        TEST_SECRET,
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}
