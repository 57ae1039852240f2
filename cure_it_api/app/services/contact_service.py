"""
Service layer for the emergency contact directory.

Directory queries only see active contacts.  ``city``, ``state`` and
``service_type`` filters match exactly; ``search`` matches a
case-insensitive substring of the name, designation or facility.  All
filters combine with AND, and results are always ordered by service
type and then name because clients group the list by service type.

Create, update and delete are admin operations; the role check is
done by the ``require_admin`` dependency, not here.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..schemas.contact import ContactCreate, ContactFilters, ContactRead, ContactUpdate
from ..storage.base import Storage


logger = logging.getLogger(__name__)


class ContactService:
    """Query and maintain emergency contacts."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def list_contacts(self, filters: Optional[ContactFilters] = None) -> List[ContactRead]:
        return self.storage.list_contacts(filters or ContactFilters())

    async def get_contact(self, contact_id: str) -> Optional[ContactRead]:
        """Retrieve a contact by id, active or not."""
        return self.storage.get_contact(contact_id)

    async def create_contact(self, data: ContactCreate) -> ContactRead:
        contact = self.storage.create_contact(data.model_dump(mode="json"))
        logger.info("Created contact %s (%s, %s)", contact.id, contact.service_type.value, contact.city)
        return contact

    async def update_contact(self, contact_id: str, data: ContactUpdate) -> Optional[ContactRead]:
        """Apply a partial update.

        ``updated_at`` is refreshed even if the payload changes nothing.
        Returns ``None`` if the contact does not exist.
        """
        updates = data.model_dump(exclude_unset=True, mode="json")
        contact = self.storage.update_contact(contact_id, updates)
        if contact is not None:
            logger.info("Updated contact %s: %s", contact_id, sorted(updates))
        return contact

    async def delete_contact(self, contact_id: str) -> bool:
        deleted = self.storage.delete_contact(contact_id)
        if deleted:
            logger.info("Deleted contact %s", contact_id)
        return deleted
