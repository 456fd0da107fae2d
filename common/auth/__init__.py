"""
Authentication module - JWT + bcrypt auth provider and token extraction.
"""

from common.auth.base import AuthProvider
from common.auth.jwt_auth import JWTAuth
from common.auth.dependencies import extract_token

__all__ = ["AuthProvider", "JWTAuth", "extract_token"]
