"""
Authentication endpoints for API v1.

``POST /auth/login`` verifies credentials, or provisions an account for
an unseen email, and returns the account with a new session id.
Clients send that id back as ``Authorization: Bearer <sessionId>``.
Passwords and their hashes never appear in a response.
"""

from typing import Dict, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials

from cure_it_api.app.api.deps import get_auth_service
from cure_it_api.app.core.errors import AuthorizationError
from cure_it_api.app.core.security import AuthContext, bearer_token, require_auth, security
from cure_it_api.app.schemas.user import LoginRequest, LoginResponse, RegisterRequest, Role, UserResponse
from cure_it_api.app.services.auth_service import AuthService

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """Log in, creating the account on first use of an email."""
    user, session = await auth.login(payload.email, payload.password)
    return LoginResponse(user=user, session_id=session.id)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    request: Request,
    auth: AuthService = Depends(get_auth_service),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserResponse:
    """Register an account explicitly.

    Anyone may register a ``user``; the Authorization header is ignored
    for those requests.  Registering an ``admin`` requires the request
    to carry an administrator's session.
    """
    if payload.role == Role.ADMIN:
        if credentials is None or not credentials.credentials:
            raise AuthorizationError("Only administrators can create admin accounts")
        caller = await require_auth(request, credentials.credentials)
        if not caller.is_admin:
            raise AuthorizationError("Only administrators can create admin accounts")
    user = await auth.register(payload.email, payload.password, payload.role)
    return UserResponse(user=user)


@router.post("/logout")
async def logout(
    token: str = Depends(bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> Dict[str, bool]:
    """End the session named by the bearer token.

    Unknown or already expired tokens are accepted, so repeating a
    logout is harmless.
    """
    await auth.logout(token)
    return {"success": True}


@router.get("/me", response_model=UserResponse)
async def me(context: AuthContext = Depends(require_auth)) -> UserResponse:
    """Return the account that owns the presented session."""
    return UserResponse(user=context.user)
