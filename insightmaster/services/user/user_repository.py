"""
User repository.

Handles persistence of user accounts in the ``users`` collection.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import AuthProvider

from insightmaster.models.user import UserRole, UserStatus

logger = logging.getLogger(__name__)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Convert a string id to ObjectId, returning None when it is malformed."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


class UserRepository:
    """
    Data access for user accounts.

    Password hashing is delegated to the AuthProvider so stored hashes and
    login verification always agree.
    """

    def __init__(self, db: AsyncIOMotorDatabase, auth: AuthProvider):
        """
        Initialize UserRepository.

        Args:
            db: MongoDB database connection
            auth: Provider used to hash passwords
        """
        self._db = db
        self._auth = auth
        self._users_collection = db["users"]

    async def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Find a user by email (case-insensitive via lower-cased storage)."""
        return await self._users_collection.find_one({"email": email.strip().lower()})

    async def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return await self._users_collection.find_one({"_id": oid})

    async def create(self, name: str, email: str, password: str) -> Dict[str, Any]:
        """
        Create a new active user with role ``user``.

        Args:
            name: Display name
            email: Email address (stored lower-cased)
            password: Plaintext password, hashed before storage

        Returns:
            The inserted user document
        """
        now = datetime.now(timezone.utc)
        user = {
            "name": name.strip(),
            "email": email.strip().lower(),
            "passwordHash": self._auth.hash_password(password),
            "role": UserRole.USER.value,
            "status": UserStatus.ACTIVE.value,
            "createdAt": now,
            "updatedAt": now,
        }

        result = await self._users_collection.insert_one(user)
        user["_id"] = result.inserted_id

        logger.info(f"Created user {user['_id']}")
        return user

    async def update(self, user_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a partial update and return the updated document."""
        oid = to_object_id(user_id)
        if oid is None:
            return None

        fields = {k: v for k, v in updates.items() if k not in ("_id", "passwordHash")}
        fields["updatedAt"] = datetime.now(timezone.utc)

        return await self._users_collection.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=True,
        )

    async def update_password(self, user_id: str, new_password: str) -> bool:
        oid = to_object_id(user_id)
        if oid is None:
            return False

        result = await self._users_collection.update_one(
            {"_id": oid},
            {"$set": {
                "passwordHash": self._auth.hash_password(new_password),
                "updatedAt": datetime.now(timezone.utc),
            }},
        )
        return result.modified_count > 0

    async def update_last_login(self, user_id: str) -> None:
        oid = to_object_id(user_id)
        if oid is None:
            return
        now = datetime.now(timezone.utc)
        await self._users_collection.update_one(
            {"_id": oid},
            {"$set": {"lastLoginAt": now, "updatedAt": now}},
        )

    async def deactivate(self, user_id: str) -> bool:
        """Logical delete: mark the account inactive."""
        oid = to_object_id(user_id)
        if oid is None:
            return False

        result = await self._users_collection.update_one(
            {"_id": oid},
            {"$set": {
                "status": UserStatus.INACTIVE.value,
                "updatedAt": datetime.now(timezone.utc),
            }},
        )
        if result.modified_count:
            logger.info(f"Deactivated user {user_id}")
        return result.modified_count > 0
