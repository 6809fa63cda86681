"""Recipe storage.

The recipe store is the only mutable state the service owns. Handlers never
touch it directly; they receive a `RecipeStore` through dependency injection,
so the in-memory implementation can be replaced by a persistent one without
changing request handling.

## Concurrency

Requests run as cooperative tasks on a single event loop. None of the store
operations await, so each one runs to completion without interleaving and
no lock is needed. A store backed by real I/O would have to revisit this.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from city_infos.models.recipe import Recipe

logger = logging.getLogger(__name__)


class RecipeStore(ABC):
    """Interface for per-city recipe storage.

    Recipes are kept in insertion order per city. Recipe ids are allocated
    by the store from a single counter shared by all cities; they strictly
    increase and are never reused, even after a deletion.
    """

    @abstractmethod
    def add(self, city_id: str, content: str) -> Recipe:
        """Append a recipe to a city's list and return it with its new id."""

    @abstractmethod
    def remove(self, city_id: str, recipe_id: int) -> bool:
        """Remove a recipe from a city's list.

        Returns:
            True if a recipe was removed, False if the city has no such recipe
        """

    @abstractmethod
    def list(self, city_id: str) -> Sequence[Recipe]:
        """Return a city's recipes in insertion order (empty if none)."""


class InMemoryRecipeStore(RecipeStore):
    """Process-local recipe store. Contents are lost on restart."""

    def __init__(self, first_id: int = 1):
        self._recipes: dict[str, list[Recipe]] = {}
        self._next_id = first_id

    def add(self, city_id: str, content: str) -> Recipe:
        # Build the recipe before bumping the counter so a rejected
        # content never consumes an id.
        recipe = Recipe(id=self._next_id, content=content)
        self._next_id += 1
        self._recipes.setdefault(city_id, []).append(recipe)
        logger.debug(f"Stored recipe {recipe.id} for city {city_id}")
        return recipe

    def remove(self, city_id: str, recipe_id: int) -> bool:
        recipes = self._recipes.get(city_id)
        if not recipes or not any(r.id == recipe_id for r in recipes):
            return False

        self._recipes[city_id] = [r for r in recipes if r.id != recipe_id]
        logger.debug(f"Removed recipe {recipe_id} for city {city_id}")
        return True

    def list(self, city_id: str) -> Sequence[Recipe]:
        return tuple(self._recipes.get(city_id, ()))

    def __len__(self) -> int:
        """Total number of recipes across all cities."""
        return sum(len(recipes) for recipes in self._recipes.values())
