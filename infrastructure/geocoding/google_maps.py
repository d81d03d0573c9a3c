"""Google Maps reverse geocoding: response adapter and provider client.

The adapter formats display names as ``"Name (Street Address)"`` when the
first result carries an establishment, falling back to Google's
``formatted_address``.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from errors import GeocodingError
from infrastructure.geocoding.models import (
    GeocodingResult,
    GoogleMapsAddressComponent,
    GoogleMapsGeometry,
    GoogleMapsResponse,
    GoogleMapsResult,
)
from infrastructure.http_client import HttpClient
from shared.geo import build_bounding_box_polygon, make_point, point_lon_lat
from shared.logging import get_logger

log = get_logger(__name__)

_GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"

ESTABLISHMENT_TYPES = ("establishment", "point_of_interest", "premise")
CITY_TYPES = ("locality", "administrative_area_level_2", "sublocality")

Components = Optional[list[GoogleMapsAddressComponent]]


def _first_with_type(components: Components, wanted: tuple[str, ...]) -> Optional[str]:
    if components is None:
        return None
    for component in components:
        if component.types and any(t in component.types for t in wanted):
            return component.long_name
    return None


class GoogleMapsResponseAdapter:
    provider_name = "GoogleMaps"

    def adapt(
        self,
        response: Optional[GoogleMapsResponse],
        request_coordinates: dict[str, Any],
        provider_name: str,
    ) -> GeocodingResult:
        if response is None or not response.results:
            lon_lat = point_lon_lat(request_coordinates)
            log.warning(
                "google_maps_empty_response",
                lon=lon_lat[0] if lon_lat else None,
                lat=lon_lat[1] if lon_lat else None,
            )
            raise GeocodingError(
                "Google Maps returned empty or null response", provider=provider_name
            )

        # The first result is the most specific one
        first = response.results[0]
        geometry = first.geometry

        if geometry is not None and geometry.location is not None:
            result_coordinates = make_point(geometry.location.lng, geometry.location.lat)
        else:
            result_coordinates = request_coordinates

        components = first.address_components
        return GeocodingResult(
            request_coordinates=request_coordinates,
            result_coordinates=result_coordinates,
            bounding_box=self.extract_bounding_box(geometry) if geometry else None,
            formatted_display_name=self.format_display_name(first),
            city=self.extract_city(components),
            country=self.extract_country(components),
            provider_name=provider_name,
        )

    def format_display_name(self, result: GoogleMapsResult) -> str:
        establishment = self.extract_establishment_name(result.address_components)
        if establishment and establishment.strip():
            street = self.extract_street_address(result.address_components)
            if street and street.strip():
                return f"{establishment} ({street})"
            return establishment
        return result.formatted_address if result.formatted_address is not None else "Unknown location"

    @staticmethod
    def extract_establishment_name(components: Components) -> Optional[str]:
        return _first_with_type(components, ESTABLISHMENT_TYPES)

    @staticmethod
    def extract_street_address(components: Components) -> Optional[str]:
        """``"<street_number> <route>"``, just the route, or None without a route."""
        if components is None:
            return None

        street_number = None
        route = None
        for component in components:
            if not component.types:
                continue
            if "street_number" in component.types:
                street_number = component.long_name
            elif "route" in component.types:
                route = component.long_name

        if route is None:
            return None
        if street_number is not None:
            return f"{street_number} {route}"
        return route

    @staticmethod
    def extract_city(components: Components) -> Optional[str]:
        return _first_with_type(components, CITY_TYPES)

    @staticmethod
    def extract_country(components: Components) -> Optional[str]:
        return _first_with_type(components, ("country",))

    @staticmethod
    def extract_bounding_box(geometry: GoogleMapsGeometry) -> Optional[dict[str, Any]]:
        viewport = geometry.bounds if geometry.bounds is not None else geometry.viewport
        if viewport is None or viewport.northeast is None or viewport.southwest is None:
            return None

        ne, sw = viewport.northeast, viewport.southwest
        try:
            return build_bounding_box_polygon(sw.lat, ne.lat, sw.lng, ne.lng)
        except ValueError as e:
            log.warning("google_maps_bounding_box_invalid", error=str(e))
            return None


class GoogleMapsProvider:
    name = "GoogleMaps"
    display_name = "Google Maps"

    def __init__(
        self,
        api_key: str,
        http_client: HttpClient,
        adapter: Optional[GoogleMapsResponseAdapter] = None,
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._adapter = adapter or GoogleMapsResponseAdapter()

    async def reverse_geocode(self, lon: float, lat: float) -> GeocodingResult:
        if not self._api_key:
            log.warning("google_maps_api_key_not_configured")
            raise GeocodingError("Google Maps API key is not configured", provider=self.name)

        request_coordinates = make_point(lon, lat)
        data = await self._http.get_json(
            _GOOGLE_GEOCODE_URL,
            provider=self.name,
            params={"latlng": f"{lat},{lon}", "key": self._api_key},
        )
        try:
            payload = GoogleMapsResponse.model_validate(data)
        except PydanticValidationError as e:
            raise GeocodingError(
                f"Google Maps returned an unreadable payload: {e}", provider=self.name
            ) from e

        if payload.status not in ("OK", "ZERO_RESULTS"):
            log.error(
                "google_maps_status_error",
                status=payload.status,
                error_message=payload.error_message,
            )
            raise GeocodingError(
                f"Google Maps error status {payload.status}: {payload.error_message or ''}".strip(),
                provider=self.name,
            )

        return self._adapter.adapt(payload, request_coordinates, self.name)

    async def aclose(self) -> None:
        await self._http.aclose()
