"""
User document helpers.
"""

from enum import Enum
from typing import Any, Dict, Optional


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


PUBLIC_USER_FIELDS = (
    "name",
    "email",
    "role",
    "status",
    "profileImageUrl",
    "bio",
    "createdAt",
    "updatedAt",
    "lastLoginAt",
)


def serialize_user(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert a user document into its API representation (no password hash)."""
    if doc is None:
        return None

    data: Dict[str, Any] = {"id": str(doc["_id"])}
    for field in PUBLIC_USER_FIELDS:
        if field in doc:
            data[field] = doc[field]
    return data


def token_claims(doc: Dict[str, Any]) -> Dict[str, Any]:
    """User claim embedded in issued JWTs."""
    return {
        "id": str(doc["_id"]),
        "name": doc.get("name"),
        "email": doc.get("email"),
        "role": doc.get("role", UserRole.USER.value),
        "status": doc.get("status", UserStatus.ACTIVE.value),
    }
