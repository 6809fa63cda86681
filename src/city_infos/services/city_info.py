"""City information and recipe operations.

`CityInfoService` holds the request-handling logic behind the HTTP routes:
it checks cities against the City Data API, assembles the composite city
infos, and validates and applies recipe changes on the injected store.

## Error mapping

| Exception | Meaning | HTTP |
|-----------|---------|------|
| CityNotFoundError | unknown city | 404 |
| RecipeNotFoundError | unknown recipe for this city | 404 |
| RecipeValidationError | missing, too short or too long content | 400 |
| ProviderError | upstream failure or inconsistent upstream data | 500 |

Every check runs before the store is touched, so a failed request never
leaves a partial write.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any

from city_infos.models.city import CityInfos, CityInsights, CityWeather
from city_infos.models.recipe import MAX_CONTENT_LENGTH, MIN_CONTENT_LENGTH, Recipe
from city_infos.providers.base import CityDataProvider, ProviderError
from city_infos.recipes.store import RecipeStore

logger = logging.getLogger(__name__)

# Optionally signed, ASCII digits only
RECIPE_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


class CityNotFoundError(Exception):
    """Raised when a city identifier is unknown upstream."""

    def __init__(self, city_id: str):
        super().__init__(f"City not found: {city_id}")
        self.city_id = city_id


class RecipeNotFoundError(Exception):
    """Raised when a city has no recipe with the requested id."""

    def __init__(self, city_id: str, recipe_id: str):
        super().__init__(f"Recipe {recipe_id} not found for city {city_id}")
        self.city_id = city_id
        self.recipe_id = recipe_id


class RecipeValidationError(ValueError):
    """Raised when recipe content is rejected."""

    pass


class CityWeatherMissingError(ProviderError):
    """Raised when an existing city has no upstream weather entry."""

    def __init__(self, city_id: str, provider: str):
        super().__init__(
            f"No weather predictions for city {city_id}",
            provider=provider,
        )
        self.city_id = city_id


def validate_content(content: Any) -> str:
    """Check recipe content, returning it unchanged when valid.

    Checks run in order and the first failure wins: presence, minimum
    length, maximum length.

    Raises:
        RecipeValidationError: If the content is rejected
    """
    if content is None or content == "":
        raise RecipeValidationError("Content is required")
    if not isinstance(content, str):
        raise RecipeValidationError("Content must be a string")
    if len(content) < MIN_CONTENT_LENGTH:
        raise RecipeValidationError(
            f"Content is too short (minimum {MIN_CONTENT_LENGTH} characters)"
        )
    if len(content) > MAX_CONTENT_LENGTH:
        raise RecipeValidationError(
            f"Content is too long (maximum {MAX_CONTENT_LENGTH} characters)"
        )
    return content


def parse_recipe_id(value: str) -> int | None:
    """Parse a recipe id from a path segment.

    Anything other than an optionally signed run of ASCII digits yields
    None, which never matches a stored recipe.
    """
    if not RECIPE_ID_PATTERN.fullmatch(value):
        return None
    return int(value)


class CityInfoService:
    """Request-handling logic for city infos and recipes.

    Args:
        provider: Upstream City Data API client
        store: Recipe storage
        concurrent: Issue the upstream calls of `get_city_infos` concurrently
    """

    def __init__(
        self,
        provider: CityDataProvider,
        store: RecipeStore,
        concurrent: bool = False,
    ):
        self.provider = provider
        self.store = store
        self.concurrent = concurrent

    async def ensure_city_exists(self, city_id: str) -> None:
        """Raise CityNotFoundError unless the city is known upstream."""
        if not await self.provider.city_exists(city_id):
            logger.info(f"City not found: {city_id}")
            raise CityNotFoundError(city_id)

    async def get_city_infos(self, city_id: str) -> CityInfos:
        """Build the composite infos for a city.

        Raises:
            CityNotFoundError: If the city is unknown
            ProviderError: If any upstream call fails or the city has no
                weather predictions
        """
        if self.concurrent:
            insights, weather = await self._fetch_concurrently(city_id)
        else:
            await self.ensure_city_exists(city_id)
            insights = await self.provider.get_insights(city_id)
            weather = await self.provider.get_weather_predictions()

        city_weather = self._find_city_weather(city_id, weather)
        recipes = list(self.store.list(city_id))
        logger.debug(f"City {city_id} has {len(recipes)} recipe(s)")

        return CityInfos.from_upstream(insights, city_weather, recipes)

    async def _fetch_concurrently(
        self, city_id: str
    ) -> tuple[CityInsights, list[CityWeather]]:
        """Run the three upstream calls at once.

        Results are evaluated in the sequential order, so an unknown city is
        still reported as not found even if the insights call failed too.
        """
        exists, insights, weather = await asyncio.gather(
            self.provider.city_exists(city_id),
            self.provider.get_insights(city_id),
            self.provider.get_weather_predictions(),
            return_exceptions=True,
        )
        if isinstance(exists, BaseException):
            raise exists
        if not exists:
            logger.info(f"City not found: {city_id}")
            raise CityNotFoundError(city_id)
        for result in (insights, weather):
            if isinstance(result, BaseException):
                raise result
        return insights, weather

    def _find_city_weather(
        self, city_id: str, weather: list[CityWeather]
    ) -> CityWeather:
        for entry in weather:
            if entry.city_id == city_id:
                return entry

        logger.error(f"Weather predictions missing for existing city {city_id}")
        raise CityWeatherMissingError(city_id, provider=self.provider.name)

    async def add_recipe(self, city_id: str, content: Any) -> Recipe:
        """Validate and store a new recipe for a city.

        Raises:
            CityNotFoundError: If the city is unknown
            RecipeValidationError: If the content is rejected
            ProviderError: If the existence check fails
        """
        await self.ensure_city_exists(city_id)

        try:
            content = validate_content(content)
        except RecipeValidationError as e:
            logger.info(f"Rejected recipe for {city_id}: {e}")
            raise

        recipe = self.store.add(city_id, content)
        logger.info(f"Recipe {recipe.id} added for city {city_id}")
        return recipe

    async def delete_recipe(self, city_id: str, recipe_id: str) -> None:
        """Remove a recipe from a city.

        Raises:
            CityNotFoundError: If the city is unknown
            RecipeNotFoundError: If the city has no recipe with this id,
                including ids that are not integers
            ProviderError: If the existence check fails
        """
        await self.ensure_city_exists(city_id)

        parsed_id = parse_recipe_id(recipe_id)
        if parsed_id is None or not self.store.remove(city_id, parsed_id):
            logger.info(f"Recipe {recipe_id} not found for city {city_id}")
            raise RecipeNotFoundError(city_id, recipe_id)

        logger.info(f"Recipe {parsed_id} deleted for city {city_id}")
