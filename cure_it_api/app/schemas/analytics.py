"""Response schema for the admin analytics view."""

from typing import Dict

from .base import CamelModel


class AnalyticsRead(CamelModel):
    total_users: int
    active_today: int
    admin_users: int
    total_contacts: int
    service_distribution: Dict[str, int]
    location_distribution: Dict[str, int]
