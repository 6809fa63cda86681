"""Pytest fixtures for city infos tests.

This module provides test fixtures that ensure:
1. No external API calls are made (the City Data API is faked in-process)
2. Every test starts with an empty recipe store
3. Isolated test environment with controlled configuration
"""

import os

import pytest

# Set test environment BEFORE importing application modules
# This ensures no real services are contacted during test collection
os.environ.setdefault("CITY_API_KEY", "test-api-key")
os.environ.setdefault("CITY_API_BASE_URL", "https://city-data.test")
os.environ.setdefault("DEBUG", "true")

from fastapi.testclient import TestClient

from city_infos.api.app import create_app
from city_infos.config import Settings
from city_infos.models.city import City, CityInsights, CityWeather
from city_infos.providers.base import CityDataProvider, ProviderError
from city_infos.recipes.store import InMemoryRecipeStore


# =============================================================================
# Upstream payloads
# =============================================================================

CITIES_PAYLOAD = [
    {"id": "paris", "name": "Paris"},
    {"id": "lyon", "name": "Lyon"},
    # Known upstream but missing from the weather predictions
    {"id": "ghost-town", "name": "Ghost Town"},
]

INSIGHTS_PAYLOAD = {
    "paris": {
        "population": 2000000,
        "knownFor": ["art"],
        "coordinates": {"latitude": 48.8, "longitude": 2.3},
        "mayor": "unused",
    },
    "lyon": {
        "population": 520000,
        "knownFor": ["gastronomy", "silk"],
        "coordinates": {"latitude": 45.76, "longitude": 4.84},
    },
    "ghost-town": {
        "population": 0,
        "knownFor": [],
        "coordinates": {"latitude": 0.0, "longitude": 0.0},
    },
}

WEATHER_PAYLOAD = [
    {
        "cityId": "paris",
        "predictions": [
            {"when": "2024-01-01", "min": 1, "max": 5, "humidity": 80},
        ],
    },
    {
        "cityId": "lyon",
        "predictions": [
            {"when": "2024-01-01", "min": 2, "max": 8},
            {"when": "2024-01-02", "min": 3.5, "max": 9.5},
        ],
    },
]


# =============================================================================
# Fake City Data provider
# =============================================================================


class FakeCityProvider(CityDataProvider):
    """In-process stand-in for the City Data API.

    Put method names in `failing` to make them raise `ProviderError`.
    Every call is recorded in `calls`.
    """

    name = "fake"

    def __init__(self):
        self.cities = [City.model_validate(c) for c in CITIES_PAYLOAD]
        self.insights = {
            city_id: CityInsights.model_validate(data)
            for city_id, data in INSIGHTS_PAYLOAD.items()
        }
        self.weather = [CityWeather.model_validate(w) for w in WEATHER_PAYLOAD]
        self.failing: set[str] = set()
        self.calls: list[str] = []

    def _record(self, method: str) -> None:
        self.calls.append(method)
        if method in self.failing:
            raise ProviderError(
                f"{method} failed: 503",
                provider=self.name,
                status_code=503,
            )

    async def list_cities(self) -> list[City]:
        self._record("list_cities")
        return list(self.cities)

    async def get_insights(self, city_id: str) -> CityInsights:
        self._record("get_insights")
        if city_id not in self.insights:
            raise ProviderError(
                "API request failed: 404",
                provider=self.name,
                status_code=404,
            )
        return self.insights[city_id]

    async def get_weather_predictions(self) -> list[CityWeather]:
        self._record("get_weather_predictions")
        return list(self.weather)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset settings cache before each test to ensure clean state."""
    from city_infos.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings that ignore any local .env file."""
    return Settings(_env_file=None, city_api_key="test-api-key")


@pytest.fixture
def fake_provider() -> FakeCityProvider:
    """Fake upstream provider with paris, lyon and ghost-town."""
    return FakeCityProvider()


@pytest.fixture
def recipe_store() -> InMemoryRecipeStore:
    """Empty in-memory recipe store."""
    return InMemoryRecipeStore()


@pytest.fixture
def client(test_settings, fake_provider, recipe_store):
    """Test client for an app wired to the fake provider and a fresh store."""
    app = create_app(
        settings=test_settings,
        city_provider=fake_provider,
        recipe_store=recipe_store,
    )
    with TestClient(app) as test_client:
        yield test_client
