"""Async JSON client for geocoding provider APIs."""

from typing import Any, Optional

import httpx

from errors import GeocodingError
from shared.logging import get_logger

log = get_logger(__name__)


class HttpClient:
    """Wraps httpx.AsyncClient for one provider.

    Transport failures, non-200 responses and non-JSON bodies are all raised
    as ``GeocodingError`` tagged with the provider name, so providers only deal
    with the decoded payload.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        headers: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(timeout=timeout, headers=headers, transport=transport)

    async def get_json(self, url: str, *, provider: str, params: Optional[dict[str, Any]] = None) -> Any:
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as e:
            log.error(
                "geocoding_request_failed",
                provider=provider,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise GeocodingError(f"{provider} request failed: {e}", provider=provider) from e

        if response.status_code != 200:
            log.error(
                "geocoding_http_error",
                provider=provider,
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            raise GeocodingError(
                f"{provider} returned HTTP {response.status_code}", provider=provider
            )

        try:
            return response.json()
        except ValueError as e:
            raise GeocodingError(
                f"{provider} returned an unreadable payload: {e}", provider=provider
            ) from e

    async def aclose(self) -> None:
        await self._client.aclose()
