"""Recipe models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MIN_CONTENT_LENGTH = 10
MAX_CONTENT_LENGTH = 2000


class Recipe(BaseModel):
    """A short user-submitted tip attached to a city.

    Ids are allocated by the recipe store and are unique for the lifetime
    of the process, across all cities.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1)
    content: str = Field(
        ..., min_length=MIN_CONTENT_LENGTH, max_length=MAX_CONTENT_LENGTH
    )
