"""
Pydantic models for Auth request validation.

Fields are optional at the schema level so missing values reach the auth
service, which reports them with a single consistent message.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request body for user registration."""
    name: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    passwordConfirm: Optional[str] = None


class LoginRequest(BaseModel):
    """Request body for user login."""
    email: Optional[str] = None
    password: Optional[str] = None
