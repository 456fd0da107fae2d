"""
Abstract authentication provider interface.

Defines the contract that token/credential providers must implement so the
application can swap signing strategies without touching route handlers.

Example:
    from common.auth import AuthProvider, JWTAuth

    def get_auth_provider(settings) -> AuthProvider:
        return JWTAuth(secret=settings.JWT_SECRET)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class AuthProvider(ABC):
    """
    Abstract authentication provider.

    Password hashing is synchronous (CPU bound); token operations are async
    so implementations backed by remote revocation stores fit the same shape.
    """

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """
        Hash a plaintext password for storage.

        Args:
            password: The plaintext password

        Returns:
            The encoded hash
        """
        pass

    @abstractmethod
    def verify_password(self, password: str, hashed: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Args:
            password: The plaintext password
            hashed: The stored hash

        Returns:
            True when the password matches
        """
        pass

    @abstractmethod
    async def create_token(
        self,
        user_id: str,
        **claims: Any,
    ) -> str:
        """
        Create an authentication token for a user.

        Args:
            user_id: The user's ID
            **claims: Additional claims to include in the token

        Returns:
            The authentication token string
        """
        pass

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify an authentication token.

        Args:
            token: The token to verify

        Returns:
            Dictionary containing decoded token claims (at minimum: sub)

        Raises:
            ValueError: If token is invalid, expired, or revoked
        """
        pass

    @abstractmethod
    async def revoke_token(self, token: str) -> None:
        """
        Revoke/invalidate a token.

        Args:
            token: The token to revoke
        """
        pass
