"""City Data API provider.

## Endpoint
- Base URL: configured via CITY_API_BASE_URL
- Full URL example: {base_url}/cities/paris/insights?apiKey=...

## Authentication
- Static API key in the `apiKey` query parameter
- Rejected keys return 401/403, surfaced as `AuthenticationError`

## Retries
- Off by default (`max_attempts=1`)
- When enabled, only timeouts and network errors are retried; an HTTP error
  status is never retried

## Caching
- None. Every call hits the upstream API.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from city_infos.models.city import City, CityInsights, CityWeather
from city_infos.providers.base import (
    AuthenticationError,
    CityDataProvider,
    ProviderError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CITIES = TypeAdapter(list[City])
_INSIGHTS = TypeAdapter(CityInsights)
_WEATHER = TypeAdapter(list[CityWeather])


class CityApiProvider(CityDataProvider):
    """HTTP client for the upstream City Data API.

    Example:
        ```python
        async with CityApiProvider(base_url, api_key="secret") as provider:
            if await provider.city_exists("paris"):
                insights = await provider.get_insights("paris")
        ```
    """

    name = "city_api"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        max_attempts: int = 1,
        retry_wait: float = 0.5,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the provider.

        Args:
            base_url: Upstream base URL, without trailing slash
            api_key: API key sent with every request
            timeout: Request timeout in seconds
            max_attempts: Attempts per call on network errors (1 = no retry)
            retry_wait: Multiplier for the exponential backoff between attempts
            client: Pre-configured HTTP client (owned by the caller)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_wait = retry_wait
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> CityApiProvider:
        """Enter async context manager."""
        self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
            self._owns_client = True
        return self._client

    async def _fetch(self, path: str) -> Any:
        """GET an upstream path and return its decoded JSON body.

        Args:
            path: Path relative to the base URL, starting with '/'

        Returns:
            Decoded JSON payload

        Raises:
            AuthenticationError: If the API key is rejected
            ProviderError: On transport errors, error statuses or invalid JSON
        """
        client = self._get_client()
        url = f"{self.base_url}{path}"

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=self.retry_wait, max=5),
                retry=retry_if_exception_type(
                    (httpx.TimeoutException, httpx.NetworkError)
                ),
                reraise=True,
            ):
                with attempt:
                    response = await client.get(url, params={"apiKey": self.api_key})
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {e!r}")
            raise ProviderError(
                f"Request to {path} failed: {e}",
                provider=self.name,
            ) from e

        if response.status_code in (401, 403):
            logger.error(f"City Data API rejected the API key ({response.status_code})")
            raise AuthenticationError(
                f"Authentication failed for {path}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        if not response.is_success:
            logger.error(f"City Data API returned {response.status_code} for {path}")
            raise ProviderError(
                f"API request failed: {response.status_code}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                f"Failed to parse response: {e}",
                provider=self.name,
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    def _translate(self, adapter: TypeAdapter[T], data: Any, path: str) -> T:
        """Validate an upstream payload against its canonical model."""
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            logger.error(f"Unexpected payload from {path}: {e.error_count()} error(s)")
            raise ProviderError(
                f"Unexpected payload from {path}: {e}",
                provider=self.name,
            ) from e

    async def list_cities(self) -> list[City]:
        path = "/cities"
        cities = self._translate(_CITIES, await self._fetch(path), path)
        logger.debug(f"Fetched {len(cities)} cities")
        return cities

    async def get_insights(self, city_id: str) -> CityInsights:
        path = f"/cities/{quote(city_id, safe='')}/insights"
        return self._translate(_INSIGHTS, await self._fetch(path), path)

    async def get_weather_predictions(self) -> list[CityWeather]:
        path = "/weather-predictions"
        return self._translate(_WEATHER, await self._fetch(path), path)
