"""Payloads for coordinate-based location detection."""

from pydantic import Field

from .base import CamelModel


class LocationRequest(CamelModel):
    latitude: float = Field(..., ge=-90, le=90, examples=[19.076])
    longitude: float = Field(..., ge=-180, le=180, examples=[72.8777])


class LocationRead(CamelModel):
    city: str
    state: str
    country: str
