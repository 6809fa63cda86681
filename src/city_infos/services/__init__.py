"""Request-handling services."""

from city_infos.services.city_info import (
    CityInfoService,
    CityNotFoundError,
    CityWeatherMissingError,
    RecipeNotFoundError,
    RecipeValidationError,
)

__all__ = [
    "CityInfoService",
    "CityNotFoundError",
    "CityWeatherMissingError",
    "RecipeNotFoundError",
    "RecipeValidationError",
]
