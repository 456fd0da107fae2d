"""
Common library for reusable infrastructure components.

This package provides generic modules shared by the InsightMaster API:

- database: Async MongoDB connection handle (Motor)
- auth: JWT + bcrypt authentication provider and FastAPI token extraction
- ai: Pluggable AI providers (OpenAI, Claude)
- utils: Standard responses, exceptions, password validation
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import AuthProvider, JWTAuth, extract_token
from common.ai import AIProvider, ClaudeProvider, OpenAIProvider
from common.utils import (
    success_response,
    error_response,
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    InternalServerException,
    validate_password,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "AuthProvider",
    "JWTAuth",
    "extract_token",
    # AI
    "AIProvider",
    "ClaudeProvider",
    "OpenAIProvider",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "InternalServerException",
    "validate_password",
    # Config
    "BaseAppSettings",
]
