"""Domain models for the city infos service."""

from city_infos.models.location import Coordinates
from city_infos.models.recipe import MAX_CONTENT_LENGTH, MIN_CONTENT_LENGTH, Recipe
from city_infos.models.city import (
    City,
    CityInfos,
    CityInsights,
    CityWeather,
    WeatherPrediction,
)

__all__ = [
    # Location
    "Coordinates",
    # Recipe
    "Recipe",
    "MIN_CONTENT_LENGTH",
    "MAX_CONTENT_LENGTH",
    # City
    "City",
    "CityInfos",
    "CityInsights",
    "CityWeather",
    "WeatherPrediction",
]
