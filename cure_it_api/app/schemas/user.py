"""
Pydantic models for accounts and authentication payloads.

``UserRecord`` is the stored representation and includes the password
hash; it never leaves the service layer.  Everything returned through
the API is a ``UserRead``.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import EmailStr, Field

from .base import CamelModel


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class UserRead(CamelModel):
    """Schema for reading an account from the API."""

    id: str
    email: str = Field(..., examples=["user@example.com"])
    role: Role = Role.USER
    created_at: datetime
    updated_at: datetime
    last_login_at: Optional[datetime] = None
    city: Optional[str] = None
    state: Optional[str] = None


class UserRecord(UserRead):
    """Stored account including the salted password hash."""

    password: str

    def public(self) -> UserRead:
        """Return the account without its password hash."""
        return UserRead.model_validate(self.model_dump(exclude={"password"}))


class LoginRequest(CamelModel):
    email: EmailStr = Field(..., examples=["user@example.com"])
    password: str = Field(..., min_length=1, examples=["secret123"])


class RegisterRequest(CamelModel):
    """Schema for explicit registration.

    ``role`` defaults to ``user``.  Requesting ``admin`` is only honoured
    when the caller is already authenticated as an administrator; the
    check lives in the auth endpoint.
    """

    email: EmailStr = Field(..., examples=["user@example.com"])
    password: str = Field(..., min_length=6, examples=["secret123"])
    role: Optional[Role] = None


class UserUpdate(CamelModel):
    """Admin-driven profile update.  Only provided fields change."""

    city: Optional[str] = None
    state: Optional[str] = None
    role: Optional[Role] = None


class LoginResponse(CamelModel):
    user: UserRead
    session_id: str


class UserResponse(CamelModel):
    user: UserRead
