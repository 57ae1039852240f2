"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified prefix.
When new domains are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import admin, auth, contacts, health, location

router = APIRouter()

router.include_router(health.router, tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(contacts.router, prefix="/emergency-contacts", tags=["emergency-contacts"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(location.router, prefix="/location", tags=["location"])
