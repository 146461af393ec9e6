"""
Account-related Pydantic schemas for request validation.
"""
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from nuber_api.models.user import UserRole


class AccountCreate(BaseModel):
    """Schema for account creation."""
    email: EmailStr
    password: str = Field(min_length=1)
    role: UserRole


class UserLogin(BaseModel):
    """Schema for login request."""
    email: EmailStr
    password: str


class ProfileUpdate(BaseModel):
    """Schema for profile edits; only supplied fields change."""
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=1)
