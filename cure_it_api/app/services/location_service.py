"""
Service layer for coordinate-based location detection.

Coordinates are resolved to city/state/country by the BigDataCloud
reverse-geocoding API.  Any failure of that dependency (network error,
non-2xx status, unparsable body) is absorbed here: the caller always
receives a location, falling back to Mumbai, Maharashtra, India.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..core.errors import UpstreamServiceError
from ..schemas.location import LocationRead


logger = logging.getLogger(__name__)

FALLBACK_LOCATION = LocationRead(city="Mumbai", state="Maharashtra", country="India")


class LocationService:
    """Reverse-geocode coordinates with a fixed fallback location."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        # Tests inject an ``httpx.MockTransport`` here.
        self.transport = transport

    async def _reverse_geocode(self, latitude: float, longitude: float) -> dict:
        params = {"latitude": latitude, "longitude": longitude, "localityLanguage": "en"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamServiceError(f"Geocoding failed: {exc}") from exc
        if not isinstance(data, dict):
            raise UpstreamServiceError("Geocoding returned an unexpected payload")
        return data

    async def detect(self, latitude: float, longitude: float) -> LocationRead:
        """Return the city, state and country for a coordinate pair."""
        try:
            data = await self._reverse_geocode(latitude, longitude)
        except UpstreamServiceError as exc:
            logger.warning("Using fallback location for (%s, %s): %s", latitude, longitude, exc.message)
            return FALLBACK_LOCATION

        location = LocationRead(
            city=data.get("city") or data.get("locality") or data.get("principalSubdivision") or FALLBACK_LOCATION.city,
            state=data.get("principalSubdivision") or data.get("countryName") or FALLBACK_LOCATION.state,
            country=data.get("countryName") or FALLBACK_LOCATION.country,
        )
        logger.debug("Resolved (%s, %s) to %s", latitude, longitude, location)
        return location
