"""
Pydantic schemas for the User entity.
Input models for registration, login and profile updates, and the public
output model (never includes the password hash).
"""

import datetime
from typing import Optional

from pydantic import EmailStr, Field, model_validator

from .base import CamelModel, ORMCamelModel

class UserCreate(CamelModel):
    """
    Registration payload.

    Attributes:
        username (str): Unique login name.
        email (EmailStr): Contact email.
        password (str): Plain text password (hashed before storage).
        confirm_password (Optional[str]): Must match `password` when given.
        full_name (Optional[str]): Display name.
    """
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    confirm_password: Optional[str] = None
    full_name: Optional[str] = None

    @model_validator(mode="after")
    def passwords_match(self):
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self

class UserLogin(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class UserProfileUpdate(CamelModel):
    """Self-service profile changes. Role flags are not part of this schema."""
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None

class UserAdminUpdate(UserProfileUpdate):
    """Admin edit of any user, including the role flags."""
    is_author: Optional[bool] = None
    is_admin: Optional[bool] = None

class UserSchema(ORMCamelModel):
    """
    Output schema for a user (no password).
    """
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    is_author: bool
    is_admin: bool
    created_at: Optional[datetime.datetime] = None

class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserSchema
