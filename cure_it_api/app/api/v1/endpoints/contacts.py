"""
Emergency contact endpoints for API v1.

Listing and retrieving contacts is public.  Creating, updating and
deleting contacts is restricted to administrators; the role check
happens before the contact is looked up, so a non-admin always gets
403 and never 404.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from cure_it_api.app.api.deps import get_contact_service
from cure_it_api.app.core.security import AuthContext, require_admin
from cure_it_api.app.schemas.contact import ContactCreate, ContactFilters, ContactRead, ContactUpdate
from cure_it_api.app.services.contact_service import ContactService

router = APIRouter()


@router.get("", response_model=List[ContactRead])
async def list_contacts(
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    service_type: Optional[str] = Query(None, alias="serviceType"),
    search: Optional[str] = Query(None),
    contacts: ContactService = Depends(get_contact_service),
) -> List[ContactRead]:
    """Return active contacts, optionally filtered.

    ``city``, ``state`` and ``serviceType`` match exactly; ``search``
    matches name, designation or facility case-insensitively.  Results
    are ordered by service type, then name.
    """
    filters = ContactFilters(city=city, state=state, service_type=service_type, search=search)
    return await contacts.list_contacts(filters)


@router.get("/{contact_id}", response_model=ContactRead)
async def get_contact(
    contact_id: str,
    contacts: ContactService = Depends(get_contact_service),
) -> ContactRead:
    contact = await contacts.get_contact(contact_id)
    if contact is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found")
    return contact


@router.post("", response_model=ContactRead, status_code=status.HTTP_201_CREATED)
async def create_contact(
    payload: ContactCreate,
    current_user: AuthContext = Depends(require_admin),
    contacts: ContactService = Depends(get_contact_service),
) -> ContactRead:
    """Create a new contact (admin only)."""
    return await contacts.create_contact(payload)


@router.put("/{contact_id}", response_model=ContactRead)
async def update_contact(
    contact_id: str,
    payload: ContactUpdate,
    current_user: AuthContext = Depends(require_admin),
    contacts: ContactService = Depends(get_contact_service),
) -> ContactRead:
    """Update an existing contact (admin only).  Omitted fields keep their values."""
    contact = await contacts.update_contact(contact_id, payload)
    if contact is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found")
    return contact


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: str,
    current_user: AuthContext = Depends(require_admin),
    contacts: ContactService = Depends(get_contact_service),
) -> Dict[str, bool]:
    """Delete a contact permanently (admin only)."""
    deleted = await contacts.delete_contact(contact_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found")
    return {"success": True}
