"""
Error taxonomy shared by services, storage and the HTTP layer.

Every error carries the HTTP status it maps to and a message that is
safe to show to the caller.  ``main.create_app`` registers handlers
that render these as ``{"error": message}`` (plus ``details`` when
present).
"""

from typing import List, Optional


class CureItError(Exception):
    """Base class for all application errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[str]] = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(CureItError):
    """Malformed or conflicting input (including duplicate emails)."""

    status_code = 400
    default_message = "Invalid input"


class AuthenticationError(CureItError):
    """Missing, invalid or expired session, or wrong credentials."""

    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(CureItError):
    """Authenticated, but the account's role is not sufficient."""

    status_code = 403
    default_message = "Admin access required"


class NotFoundError(CureItError):
    status_code = 404
    default_message = "Not found"


class UpstreamServiceError(CureItError):
    """A third-party dependency (reverse geocoding) failed."""

    status_code = 502
    default_message = "Upstream service failed"


class InternalError(CureItError):
    status_code = 500
