"""
Security helpers: password hashing, session tokens and auth dependencies.

Passwords are hashed with PBKDF2‑HMAC‑SHA256 and a per-password random
salt; the stored string is ``salthex$hashhex``.  Session tokens are
opaque random strings issued by the session service and sent back by
clients as ``Authorization: Bearer <token>``.

``require_auth`` and ``require_admin`` are FastAPI dependencies that
resolve the bearer token into an :class:`AuthContext` or fail with
:class:`AuthenticationError` (401) / :class:`AuthorizationError` (403).
They run before any endpoint logic, so a non-admin never learns
whether the entity it tried to modify exists.
"""

import hashlib
import hmac
import os
import secrets
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..schemas.user import Role, UserRead
from .errors import AuthenticationError, AuthorizationError

PBKDF2_ITERATIONS = 100_000


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    resulting string contains the salt and hash separated by a
    ``$`` (salt in hex, then hash in hex).

    Parameters
    ----------
    password : str
        The plain text password to hash.

    Returns
    -------
    str
        Salt and hash concatenated with ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored salt+hash string.

    Splits the stored string into salt and hash, recomputes the
    PBKDF2‑HMAC digest and compares it using constant‑time comparison.
    Malformed stored values never match.
    """
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def generate_session_token() -> str:
    """Return an unguessable, URL-safe session identifier."""
    return secrets.token_urlsafe(32)


@dataclass
class AuthContext:
    """The authenticated account and the session token it presented."""

    user: UserRead
    session_id: str

    @property
    def is_admin(self) -> bool:
        return self.user.role == Role.ADMIN


security = HTTPBearer(auto_error=False)


def bearer_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> str:
    """Extract the bearer token or fail with 401 when the header is missing."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")
    return credentials.credentials


async def require_auth(request: Request, token: str = Depends(bearer_token)) -> AuthContext:
    """Dependency that resolves the bearer token to the current account.

    Fails with 401 if the session is unknown or expired, or if the
    owning account no longer exists.
    """
    user = await request.app.state.auth_service.current_user(token)
    return AuthContext(user=user, session_id=token)


async def require_admin(context: AuthContext = Depends(require_auth)) -> AuthContext:
    """Dependency that additionally requires the ``admin`` role."""
    if not context.is_admin:
        raise AuthorizationError("Admin access required")
    return context

