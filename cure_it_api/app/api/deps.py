"""
FastAPI dependencies that hand endpoints the services built at startup.

``create_app`` constructs one storage backend and the services on top
of it and keeps them on ``app.state``; these providers read them back
for each request.
"""

from fastapi import Request

from ..services.analytics_service import AnalyticsService
from ..services.auth_service import AuthService
from ..services.contact_service import ContactService
from ..services.location_service import LocationService
from ..services.user_service import UserService


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_contact_service(request: Request) -> ContactService:
    return request.app.state.contact_service


def get_analytics_service(request: Request) -> AnalyticsService:
    return request.app.state.analytics_service


def get_location_service(request: Request) -> LocationService:
    return request.app.state.location_service
