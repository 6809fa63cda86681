"""Tests for location, city and recipe models."""

import pytest
from pydantic import ValidationError

from city_infos.models.city import (
    City,
    CityInfos,
    CityInsights,
    CityWeather,
    WeatherPrediction,
)
from city_infos.models.location import Coordinates
from city_infos.models.recipe import MAX_CONTENT_LENGTH, MIN_CONTENT_LENGTH, Recipe


class TestCoordinates:
    """Tests for the Coordinates model."""

    def test_valid_coordinates(self):
        """Test creating valid coordinates."""
        coords = Coordinates(latitude=48.8, longitude=2.3)
        assert coords.latitude == 48.8
        assert coords.longitude == 2.3

    def test_invalid_latitude(self):
        """Test that invalid latitude raises error."""
        with pytest.raises(ValueError):
            Coordinates(latitude=91, longitude=0)

    def test_invalid_longitude(self):
        """Test that invalid longitude raises error."""
        with pytest.raises(ValueError):
            Coordinates(latitude=0, longitude=-181)

    def test_to_tuple(self):
        """Test conversion to a (latitude, longitude) pair."""
        assert Coordinates(latitude=48.8, longitude=2.3).to_tuple() == (48.8, 2.3)


class TestUpstreamModels:
    """Tests for models parsed from City Data API payloads."""

    def test_city_ignores_extra_fields(self):
        """Test that only the id is kept from city list entries."""
        city = City.model_validate({"id": "paris", "name": "Paris"})
        assert city.model_dump() == {"id": "paris"}

    def test_insights_from_camel_case(self):
        """Test parsing upstream insights."""
        insights = CityInsights.model_validate({
            "population": 2000000,
            "knownFor": ["art"],
            "coordinates": {"latitude": 48.8, "longitude": 2.3},
            "area": 105.4,
        })
        assert insights.population == 2000000
        assert insights.known_for == ["art"]
        assert insights.coordinates.to_tuple() == (48.8, 2.3)

    def test_insights_require_coordinates(self):
        """Test that incomplete insights are rejected."""
        with pytest.raises(ValidationError):
            CityInsights.model_validate({"population": 1, "knownFor": []})

    def test_prediction_keeps_only_when_min_max(self):
        """Test that extra prediction fields are dropped."""
        prediction = WeatherPrediction.model_validate(
            {"when": "2024-01-01", "min": 1, "max": 5, "humidity": 80}
        )
        assert prediction.model_dump() == {"when": "2024-01-01", "min": 1, "max": 5}

    def test_prediction_keeps_integer_temperatures(self):
        """Test that integer temperatures are not turned into floats."""
        prediction = WeatherPrediction.model_validate({"when": "x", "min": 1, "max": 5.5})
        assert isinstance(prediction.min, int)
        assert isinstance(prediction.max, float)

    def test_prediction_rejects_numeric_strings(self):
        """Test that string temperatures are rejected, not converted."""
        with pytest.raises(ValidationError):
            WeatherPrediction.model_validate({"when": "x", "min": "5", "max": 7})
        with pytest.raises(ValidationError):
            WeatherPrediction.model_validate({"when": "x", "min": 5, "max": "7.5"})

    def test_prediction_passes_null_through(self):
        """Test that a null temperature is copied as null."""
        prediction = WeatherPrediction.model_validate({"when": "x", "min": 1, "max": None})
        assert prediction.model_dump() == {"when": "x", "min": 1, "max": None}

    def test_city_weather_alias(self):
        """Test that cityId maps to city_id."""
        weather = CityWeather.model_validate({"cityId": "paris", "predictions": []})
        assert weather.city_id == "paris"


class TestRecipe:
    """Tests for the Recipe model."""

    def test_content_bounds(self):
        """Test the content length limits."""
        Recipe(id=1, content="x" * MIN_CONTENT_LENGTH)
        Recipe(id=1, content="x" * MAX_CONTENT_LENGTH)
        with pytest.raises(ValidationError):
            Recipe(id=1, content="x" * (MIN_CONTENT_LENGTH - 1))
        with pytest.raises(ValidationError):
            Recipe(id=1, content="x" * (MAX_CONTENT_LENGTH + 1))

    def test_recipe_is_immutable(self):
        """Test that stored recipes cannot be modified in place."""
        recipe = Recipe(id=1, content="Croque monsieur")
        with pytest.raises(ValidationError):
            recipe.content = "Something else entirely"


class TestCityInfos:
    """Tests for the composite response model."""

    def test_from_upstream_serializes_by_alias(self):
        """Test the response shape sent to clients."""
        insights = CityInsights.model_validate({
            "population": 2000000,
            "knownFor": ["art"],
            "coordinates": {"latitude": 48.8, "longitude": 2.3},
        })
        weather = CityWeather.model_validate({
            "cityId": "paris",
            "predictions": [{"when": "2024-01-01", "min": 1, "max": 5, "rain": 0}],
        })
        recipes = [Recipe(id=1, content="Croque monsieur")]

        infos = CityInfos.from_upstream(insights, weather, recipes)

        assert infos.model_dump(mode="json", by_alias=True) == {
            "coordinates": [48.8, 2.3],
            "population": 2000000,
            "knownFor": ["art"],
            "weatherPredictions": [{"when": "2024-01-01", "min": 1, "max": 5}],
            "recipes": [{"id": 1, "content": "Croque monsieur"}],
        }
