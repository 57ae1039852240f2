"""
Business logic for authentication.

``login`` doubles as registration: an email the store has never seen
is provisioned on the spot with the supplied password.  That branch is
kept in exactly one place, ``AuthService.login``.  The configured admin
email is the only address provisioned with the ``admin`` role; every
other address becomes a ``user``.

Wrong passwords and bad tokens raise :class:`AuthenticationError` with
a generic message so callers cannot tell which factor failed.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..core.errors import AuthenticationError, ValidationError
from ..core.security import hash_password, verify_password
from ..schemas.session import SessionRead
from ..schemas.user import Role, UserRead
from ..storage.base import Storage
from .session_service import SessionService


logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks, account provisioning and session resolution."""

    def __init__(self, storage: Storage, sessions: SessionService, admin_email: str) -> None:
        self.storage = storage
        self.sessions = sessions
        self.admin_email = admin_email

    def role_for_email(self, email: str) -> Role:
        return Role.ADMIN if email == self.admin_email else Role.USER

    async def login(self, email: str, password: str) -> Tuple[UserRead, SessionRead]:
        """Verify credentials (or provision a new account) and open a session.

        On a password mismatch nothing is written: no session is created
        and ``last_login_at`` is left untouched.
        """
        user = self.storage.get_user_by_email(email)
        provisioned = False
        if user is None:
            role = self.role_for_email(email)
            try:
                user = self.storage.create_user(
                    {"email": email, "password": hash_password(password), "role": role.value}
                )
                provisioned = True
                logger.info("Provisioned account %s with role %s on first login", user.id, role.value)
            except ValidationError:
                # A concurrent login provisioned the email after our lookup.
                user = self.storage.get_user_by_email(email)
                if user is None:
                    raise
        if not provisioned and not verify_password(password, user.password):
            logger.warning("Failed login for %s", email)
            raise AuthenticationError("Invalid email or password")

        user = self.storage.update_user(user.id, {"last_login_at": self.sessions.clock()})
        session = await self.sessions.create(user.id)
        logger.info("Login successful for account %s", user.id)
        return user.public(), session

    async def register(self, email: str, password: str, role: Optional[Role] = None) -> UserRead:
        """Create an account explicitly.

        Fails with :class:`ValidationError` when the email is taken.
        Whether the caller may request ``admin`` is decided by the
        endpoint before this is called.
        """
        if self.storage.get_user_by_email(email) is not None:
            raise ValidationError("User with this email already exists")
        role = role or Role.USER
        user = self.storage.create_user(
            {"email": email, "password": hash_password(password), "role": role.value}
        )
        logger.info("Registered account %s with role %s", user.id, role.value)
        return user.public()

    async def logout(self, token: str) -> bool:
        """Drop the session.  Logging out twice is harmless."""
        removed = await self.sessions.delete(token)
        if removed:
            logger.info("Session closed")
        return removed

    async def current_user(self, token: str) -> UserRead:
        """Resolve a bearer token to its account or raise ``AuthenticationError``."""
        session = await self.sessions.resolve(token)
        if session is None:
            raise AuthenticationError("Invalid or expired session")
        user = self.storage.get_user(session.user_id)
        if user is None:
            raise AuthenticationError("User not found")
        return user.public()
