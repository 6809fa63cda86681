"""Recipe storage."""

from city_infos.recipes.store import InMemoryRecipeStore, RecipeStore

__all__ = [
    "RecipeStore",
    "InMemoryRecipeStore",
]
