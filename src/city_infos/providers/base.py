"""Base City Data provider abstraction.

This module defines the interface for the upstream City Data API and the
errors raised when it misbehaves.

## Upstream endpoints

| Endpoint | Response | Canonical model |
|----------|----------|-----------------|
| GET /cities | `[{id, ...}]` | `City` |
| GET /cities/{id}/insights | `{population, knownFor, coordinates: {latitude, longitude}, ...}` | `CityInsights` |
| GET /weather-predictions | `[{cityId, predictions: [{when, min, max, ...}]}]` | `CityWeather` |

Every endpoint is authenticated with a static API key sent as the `apiKey`
query parameter.

## Error policy

Any non-2xx status, transport failure, undecodable body or payload that does
not match the canonical models raises `ProviderError`. Callers turn it into a
generic internal error; no partial upstream data is ever returned.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from city_infos.models.city import City, CityInsights, CityWeather


class ProviderError(Exception):
    """Base exception for City Data API errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.response_body = response_body


class AuthenticationError(ProviderError):
    """Raised when the upstream API rejects the API key."""

    pass


class CityDataProvider(ABC):
    """Abstract base class for City Data providers.

    Attributes:
        name: Human-readable provider name
    """

    name: str

    @abstractmethod
    async def list_cities(self) -> list[City]:
        """Get every city known upstream.

        Raises:
            ProviderError: If the list cannot be retrieved
        """

    @abstractmethod
    async def get_insights(self, city_id: str) -> CityInsights:
        """Get population, tags and coordinates for a city.

        Raises:
            ProviderError: If the insights cannot be retrieved
        """

    @abstractmethod
    async def get_weather_predictions(self) -> list[CityWeather]:
        """Get weather predictions for all cities.

        Raises:
            ProviderError: If the predictions cannot be retrieved
        """

    async def city_exists(self, city_id: str) -> bool:
        """Check whether a city identifier is known upstream.

        Raises:
            ProviderError: If the city list cannot be retrieved
        """
        cities = await self.list_cities()
        return any(city.id == city_id for city in cities)

    async def aclose(self) -> None:
        """Release provider resources. No-op by default."""
        return None
