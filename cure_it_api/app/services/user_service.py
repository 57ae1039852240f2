"""
Business logic for administering accounts.

Accounts are never deleted.  Administrators can list them and adjust
profile fields (city, state) or the role; every change refreshes
``updated_at``.  Permission checks happen at the endpoint level.
"""

import logging
from typing import List, Optional

from ..schemas.user import UserRead, UserUpdate
from ..storage.base import Storage


logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def list_users(self) -> List[UserRead]:
        """Return all accounts, newest first, without password hashes."""
        return [user.public() for user in self.storage.list_users()]

    async def update_user(self, user_id: str, data: UserUpdate) -> Optional[UserRead]:
        """Apply an admin profile update.  Returns ``None`` for an unknown id."""
        updates = data.model_dump(exclude_unset=True, mode="json")
        if updates.get("role") is None:
            updates.pop("role", None)
        user = self.storage.update_user(user_id, updates)
        if user is None:
            return None
        logger.info("Updated account %s: %s", user_id, sorted(updates))
        return user.public()
