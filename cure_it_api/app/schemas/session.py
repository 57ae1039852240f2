"""Pydantic model for login sessions."""

from datetime import datetime

from .base import CamelModel


class SessionRead(CamelModel):
    """A bearer session.  ``id`` is the opaque token the client sends back."""

    id: str
    user_id: str
    expires_at: datetime
    created_at: datetime
