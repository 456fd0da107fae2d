"""
Pydantic models for User profile request validation.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ProfileUpdateRequest(BaseModel):
    """Request body for updating the current user's profile."""
    name: Optional[str] = None
    bio: Optional[str] = None
    profileImageUrl: Optional[str] = None


class PasswordChangeRequest(BaseModel):
    """Request body for changing the current user's password."""
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None
    newPasswordConfirm: Optional[str] = Field(None, alias="confirmPassword")

    model_config = {"populate_by_name": True}
