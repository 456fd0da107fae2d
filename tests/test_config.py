"""Unit tests for application settings validation."""

import pytest

from insightmaster.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("JWT_SECRET", "ENVIRONMENT", "AI_PROVIDER"):
        monkeypatch.delenv(key, raising=False)


class TestValidateRequired:
    def test_jwt_secret_has_no_default(self):
        assert Settings(_env_file=None).JWT_SECRET is None

    def test_production_without_jwt_secret_raises(self):
        settings = Settings(_env_file=None, ENVIRONMENT="production")

        with pytest.raises(ValueError, match="JWT_SECRET"):
            settings.validate_required()

    def test_development_reports_missing_jwt_secret(self):
        settings = Settings(_env_file=None, ENVIRONMENT="development")

        errors = settings.validate_required()

        assert any("JWT_SECRET" in e for e in errors)

    def test_production_with_secret_is_valid(self):
        settings = Settings(_env_file=None, ENVIRONMENT="production", JWT_SECRET="s3cret")
        assert settings.validate_required() == []

    def test_unknown_ai_provider_is_reported(self):
        settings = Settings(_env_file=None, JWT_SECRET="s3cret", AI_PROVIDER="gemini")
        assert settings.validate_required() == ["Unknown AI_PROVIDER: gemini"]
