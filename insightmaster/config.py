"""
InsightMaster application settings.

Extends the base settings with InsightMaster-specific configuration.
"""

from common.config import BaseAppSettings

from insightmaster import __version__


class Settings(BaseAppSettings):
    """InsightMaster-specific settings."""

    # ==========================================================================
    # Application Settings
    # ==========================================================================
    APP_VERSION: str = __version__

    # ==========================================================================
    # Authentication
    # ==========================================================================
    # JWT_SECRET has no default; validate_required() rejects a missing one in production

    # httpOnly cookie carrying the session token for browser clients
    AUTH_COOKIE_NAME: str = "token"

    # ==========================================================================
    # AI Settings
    # ==========================================================================
    AI_TEMPERATURE: float = 0.3
    AI_MAX_TOKENS: int = 2000

    # ==========================================================================
    # Statistics
    # ==========================================================================
    ACTIVITY_WINDOW_DAYS: int = 30

    def ai_enabled(self) -> bool:
        """True when an API key is configured for the selected provider."""
        return bool(self.get_ai_api_key())


# Global settings instance
settings = Settings()
