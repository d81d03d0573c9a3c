"""
Geocoding payload models.

Provider payloads (Google Maps, Nominatim) are parsed into pydantic models
before adaptation so missing or null keys are handled in one place.
GeocodingResult is the provider-neutral shape every adapter produces.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class GeocodingResult(BaseModel):
    """Normalized reverse geocoding result.

    Coordinates are GeoJSON Points, ``bounding_box`` a GeoJSON Polygon.
    """

    request_coordinates: dict[str, Any]
    result_coordinates: dict[str, Any]
    bounding_box: Optional[dict[str, Any]] = None
    formatted_display_name: str
    city: Optional[str] = None
    country: Optional[str] = None
    provider_name: str


# ── Google Maps ───────────────────────────────────────────────────────────────


class GoogleMapsLocation(BaseModel):
    lat: float
    lng: float


class GoogleMapsViewport(BaseModel):
    northeast: Optional[GoogleMapsLocation] = None
    southwest: Optional[GoogleMapsLocation] = None


class GoogleMapsGeometry(BaseModel):
    location: Optional[GoogleMapsLocation] = None
    location_type: Optional[str] = None
    bounds: Optional[GoogleMapsViewport] = None
    viewport: Optional[GoogleMapsViewport] = None


class GoogleMapsAddressComponent(BaseModel):
    long_name: Optional[str] = None
    short_name: Optional[str] = None
    types: Optional[list[str]] = None


class GoogleMapsResult(BaseModel):
    place_id: Optional[str] = None
    formatted_address: Optional[str] = None
    address_components: Optional[list[GoogleMapsAddressComponent]] = None
    geometry: Optional[GoogleMapsGeometry] = None
    types: Optional[list[str]] = None


class GoogleMapsResponse(BaseModel):
    status: Optional[str] = None
    error_message: Optional[str] = None
    results: Optional[list[GoogleMapsResult]] = None


# ── Nominatim ─────────────────────────────────────────────────────────────────


class NominatimAddress(BaseModel):
    # Nominatim returns many optional keys depending on the place type
    model_config = ConfigDict(extra="allow")

    house_number: Optional[str] = None
    road: Optional[str] = None
    city: Optional[str] = None
    town: Optional[str] = None
    village: Optional[str] = None
    municipality: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None


class NominatimResponse(BaseModel):
    place_id: Optional[int] = None
    lat: Optional[str] = None
    lon: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    address: Optional[NominatimAddress] = None
    # [south, north, west, east] as strings
    boundingbox: Optional[list[str]] = None
    error: Optional[str] = None
