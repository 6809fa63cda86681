"""City, insight and weather models.

Upstream payloads from the City Data API are translated into these models.
Fields the service does not use are ignored, so upstream additions never
leak into responses.

Upstream names are camelCase (`knownFor`, `cityId`); the models expose
snake_case attributes and accept/serialize the camelCase aliases.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel

from city_infos.models.location import Coordinates
from city_infos.models.recipe import Recipe


class CamelModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class City(CamelModel):
    """Entry of the upstream city list. Only the identifier matters here."""

    id: str


class CityInsights(CamelModel):
    """Detailed upstream information about one city."""

    population: int = Field(..., ge=0)
    known_for: list[str] = Field(default_factory=list)
    coordinates: Coordinates


class WeatherPrediction(CamelModel):
    """A single prediction reduced to its timestamp and temperature range.

    Temperatures are copied as sent: JSON numbers or null. Strings are
    rejected rather than converted.
    """

    when: str
    min: StrictInt | StrictFloat | None
    max: StrictInt | StrictFloat | None


class CityWeather(CamelModel):
    """Upstream weather predictions for one city."""

    city_id: str
    predictions: list[WeatherPrediction] = Field(default_factory=list)


class CityInfos(CamelModel):
    """Composite city information returned by GET /cities/{cityId}/infos."""

    coordinates: tuple[float, float] = Field(
        ..., description="Ordered pair [latitude, longitude]"
    )
    population: int
    known_for: list[str]
    weather_predictions: list[WeatherPrediction]
    recipes: list[Recipe]

    @classmethod
    def from_upstream(
        cls,
        insights: CityInsights,
        weather: CityWeather,
        recipes: list[Recipe],
    ) -> CityInfos:
        """Assemble the composite response from upstream data and recipes."""
        return cls(
            coordinates=insights.coordinates.to_tuple(),
            population=insights.population,
            known_for=list(insights.known_for),
            weather_predictions=list(weather.predictions),
            recipes=list(recipes),
        )
