"""Registry of configured geocoding providers.

Built once at startup from GeocodingSettings. Lookups are case-insensitive
so ``"GoogleMaps"``, ``"googlemaps"`` and the settings key all resolve to
the same provider.
"""

from __future__ import annotations

from typing import Optional

from config import GeocodingSettings
from errors import GeocodingError
from infrastructure.geocoding.google_maps import GoogleMapsProvider
from infrastructure.geocoding.models import GeocodingResult
from infrastructure.geocoding.nominatim import NominatimProvider
from infrastructure.geocoding.protocol import GeocodingProvider
from infrastructure.http_client import HttpClient
from shared.logging import get_logger

log = get_logger(__name__)


class GeocodingProviderRegistry:
    def __init__(
        self,
        providers: list[GeocodingProvider],
        primary: str,
        fallback: Optional[str] = None,
    ) -> None:
        self._providers = {p.name.lower(): p for p in providers}
        self._primary = primary.lower()
        self._fallback = fallback.lower() if fallback else None
        if self._primary not in self._providers:
            raise ValueError(f"Primary geocoding provider '{primary}' is not enabled")
        if self._fallback is not None and self._fallback not in self._providers:
            log.warning("geocoding_fallback_provider_disabled", provider=fallback)
            self._fallback = None

    @classmethod
    def from_settings(cls, settings: GeocodingSettings) -> "GeocodingProviderRegistry":
        providers: list[GeocodingProvider] = []
        if settings.geocoding_nominatim_enabled:
            providers.append(
                NominatimProvider(
                    base_url=settings.geocoding_nominatim_url,
                    http_client=HttpClient(
                        timeout=settings.geocoding_timeout_seconds,
                        headers={"User-Agent": settings.geocoding_nominatim_user_agent},
                    ),
                    language=settings.geocoding_nominatim_language,
                )
            )
        if settings.geocoding_googlemaps_enabled:
            providers.append(
                GoogleMapsProvider(
                    api_key=settings.geocoding_googlemaps_api_key,
                    http_client=HttpClient(timeout=settings.geocoding_timeout_seconds),
                )
            )
        return cls(
            providers,
            primary=settings.geocoding_primary_provider,
            fallback=settings.geocoding_fallback_provider or None,
        )

    def get(self, name: str) -> Optional[GeocodingProvider]:
        return self._providers.get(name.lower())

    def enabled_providers(self) -> list[GeocodingProvider]:
        return list(self._providers.values())

    def is_primary(self, name: str) -> bool:
        return name.lower() == self._primary

    async def reverse_geocode(self, lon: float, lat: float) -> GeocodingResult:
        """Geocode with the primary provider, then the fallback if it fails."""
        order = [self._primary] + ([self._fallback] if self._fallback else [])
        last_error: Optional[GeocodingError] = None
        for key in order:
            provider = self._providers[key]
            try:
                return await provider.reverse_geocode(lon, lat)
            except GeocodingError as e:
                log.warning(
                    "geocoding_provider_failed",
                    provider=provider.name,
                    error=e.message,
                )
                last_error = e
        raise GeocodingError(
            f"All geocoding providers failed: {last_error.message if last_error else 'unknown'}"
        )

    async def aclose(self) -> None:
        for provider in self._providers.values():
            await provider.aclose()
