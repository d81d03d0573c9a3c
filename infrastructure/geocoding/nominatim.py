"""Nominatim (OpenStreetMap) reverse geocoding: response adapter and provider.

Nominatim's usage policy requires an identifying User-Agent; the registry sets one
on the provider's HttpClient. The base URL is configurable for self-hosted
instances.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from errors import GeocodingError
from infrastructure.geocoding.models import GeocodingResult, NominatimResponse
from infrastructure.http_client import HttpClient
from shared.geo import build_bounding_box_polygon, make_point
from shared.logging import get_logger

log = get_logger(__name__)

CITY_KEYS = ("city", "town", "village", "municipality")


class NominatimResponseAdapter:
    provider_name = "Nominatim"

    def adapt(
        self,
        response: Optional[NominatimResponse],
        request_coordinates: dict[str, Any],
        provider_name: str,
    ) -> GeocodingResult:
        if response is None or response.error:
            message = response.error if response is not None else "null response"
            log.warning("nominatim_empty_response", error=message)
            raise GeocodingError(f"Nominatim returned no result: {message}", provider=provider_name)

        result_coordinates = request_coordinates
        if response.lat is not None and response.lon is not None:
            try:
                result_coordinates = make_point(float(response.lon), float(response.lat))
            except ValueError:
                log.warning("nominatim_coordinates_invalid", lat=response.lat, lon=response.lon)

        address = response.address
        city = None
        if address is not None:
            city = next(
                (getattr(address, key) for key in CITY_KEYS if getattr(address, key)),
                None,
            )

        return GeocodingResult(
            request_coordinates=request_coordinates,
            result_coordinates=result_coordinates,
            bounding_box=self.extract_bounding_box(response.boundingbox),
            formatted_display_name=self.format_display_name(response),
            city=city,
            country=address.country if address is not None else None,
            provider_name=provider_name,
        )

    @staticmethod
    def format_display_name(response: NominatimResponse) -> str:
        street = None
        if response.address is not None and response.address.road:
            if response.address.house_number:
                street = f"{response.address.road} {response.address.house_number}"
            else:
                street = response.address.road

        if response.name and response.name.strip():
            return f"{response.name} ({street})" if street else response.name
        if street:
            return street
        return response.display_name or "Unknown location"

    @staticmethod
    def extract_bounding_box(bbox: Optional[list[str]]) -> Optional[dict[str, Any]]:
        if not bbox or len(bbox) != 4:
            return None
        try:
            south, north, west, east = (float(v) for v in bbox)
            return build_bounding_box_polygon(south, north, west, east)
        except ValueError as e:
            log.warning("nominatim_bounding_box_invalid", error=str(e))
            return None


class NominatimProvider:
    name = "Nominatim"
    display_name = "Nominatim (OpenStreetMap)"

    def __init__(
        self,
        base_url: str,
        http_client: HttpClient,
        language: str = "en",
        adapter: Optional[NominatimResponseAdapter] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client
        self._language = language
        self._adapter = adapter or NominatimResponseAdapter()

    async def reverse_geocode(self, lon: float, lat: float) -> GeocodingResult:
        request_coordinates = make_point(lon, lat)
        data = await self._http.get_json(
            f"{self._base_url}/reverse",
            provider=self.name,
            params={
                "format": "jsonv2",
                "lat": lat,
                "lon": lon,
                "addressdetails": 1,
                "accept-language": self._language,
            },
        )
        try:
            payload = NominatimResponse.model_validate(data)
        except PydanticValidationError as e:
            raise GeocodingError(
                f"Nominatim returned an unreadable payload: {e}", provider=self.name
            ) from e

        return self._adapter.adapt(payload, request_coordinates, self.name)

    async def aclose(self) -> None:
        await self._http.aclose()
