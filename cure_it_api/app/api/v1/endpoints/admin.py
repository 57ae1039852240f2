"""
Administrator endpoints for API v1.

Every route here depends on ``require_admin``: a missing or expired
session yields 401 and a non-admin account yields 403.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from cure_it_api.app.api.deps import get_analytics_service, get_user_service
from cure_it_api.app.core.security import AuthContext, require_admin
from cure_it_api.app.schemas.analytics import AnalyticsRead
from cure_it_api.app.schemas.user import UserRead, UserUpdate
from cure_it_api.app.services.analytics_service import AnalyticsService
from cure_it_api.app.services.user_service import UserService

router = APIRouter()


@router.get("/users", response_model=List[UserRead])
async def list_users(
    current_user: AuthContext = Depends(require_admin),
    users: UserService = Depends(get_user_service),
) -> List[UserRead]:
    """List all accounts, newest first."""
    return await users.list_users()


@router.patch("/users/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    current_user: AuthContext = Depends(require_admin),
    users: UserService = Depends(get_user_service),
) -> UserRead:
    """Update an account's city, state or role."""
    user = await users.update_user(user_id, payload)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/analytics", response_model=AnalyticsRead)
async def analytics(
    current_user: AuthContext = Depends(require_admin),
    service: AnalyticsService = Depends(get_analytics_service),
) -> AnalyticsRead:
    """Account and contact statistics, recomputed on every request."""
    return await service.overview()
