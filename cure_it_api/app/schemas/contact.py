"""
Pydantic schemas for emergency contacts.

A contact belongs to one of four service types and to a city/state
pair.  ``availability`` defaults to ``24/7`` and contacts are active
unless an administrator deactivates them.  Only active contacts take
part in directory queries.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .base import CamelModel


class ServiceType(str, Enum):
    POLICE = "police"
    MEDICAL = "medical"
    FIRE = "fire"
    MUNICIPAL = "municipal"


REQUIRED_TEXT_FIELDS = ("name", "phone", "city", "state")


def _require_text(value: Optional[str]) -> str:
    if value is None:
        raise ValueError("Field may not be null")
    value = value.strip()
    if not value:
        raise ValueError("Field may not be empty")
    return value


class ContactBase(CamelModel):
    name: str = Field(..., examples=["AIIMS Delhi"])
    designation: Optional[str] = Field(None, examples=["Emergency Department"])
    facility: Optional[str] = Field(None, examples=["All India Institute of Medical Sciences"])
    service_type: ServiceType = Field(..., examples=["medical"])
    phone: str = Field(..., examples=["011-26588500"])
    alternate_phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: str = Field(..., examples=["Delhi"])
    state: str = Field(..., examples=["Delhi"])
    availability: str = "24/7"
    is_active: bool = True

    @field_validator(*REQUIRED_TEXT_FIELDS)
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        return _require_text(v)


class ContactCreate(ContactBase):
    """Schema for creating a new contact (admin only)."""


class ContactUpdate(CamelModel):
    """Schema for a partial update.

    All fields are optional; only provided values are updated.  Required
    fields may be changed but not cleared.
    """

    name: Optional[str] = None
    designation: Optional[str] = None
    facility: Optional[str] = None
    service_type: Optional[ServiceType] = None
    phone: Optional[str] = None
    alternate_phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    availability: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator(*REQUIRED_TEXT_FIELDS, "service_type", "availability", "is_active")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field may not be null")
        if isinstance(v, str) and not isinstance(v, Enum):
            return _require_text(v)
        return v


class ContactRead(ContactBase):
    """Schema for reading a contact from the API."""

    id: str
    created_at: datetime
    updated_at: datetime


class ContactFilters(BaseModel):
    """Directory query filters.  Empty strings count as absent."""

    city: Optional[str] = None
    state: Optional[str] = None
    service_type: Optional[str] = None
    search: Optional[str] = None

    @field_validator("city", "state", "service_type", "search")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v
