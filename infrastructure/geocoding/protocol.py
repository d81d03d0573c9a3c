"""Geocoding protocols: services depend on these, not the concrete providers."""

from typing import Any, Protocol, TypeVar

from infrastructure.geocoding.models import GeocodingResult

PayloadT = TypeVar("PayloadT", contravariant=True)


class GeocodingResponseAdapter(Protocol[PayloadT]):
    provider_name: str

    def adapt(
        self,
        response: PayloadT,
        request_coordinates: dict[str, Any],
        provider_name: str,
    ) -> GeocodingResult: ...


class GeocodingProvider(Protocol):
    name: str
    display_name: str

    async def reverse_geocode(self, lon: float, lat: float) -> GeocodingResult: ...

    async def aclose(self) -> None: ...
