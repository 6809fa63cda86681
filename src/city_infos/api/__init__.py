"""FastAPI application and routes.

This module provides the REST API for the city infos service.

## API Structure

- GET /cities/{cityId}/infos - Coordinates, population, tags, weather and recipes
- POST /cities/{cityId}/recipes - Add a recipe to a city
- DELETE /cities/{cityId}/recipes/{recipeId} - Remove a recipe
- GET /health - Liveness check

## Errors

Errors are JSON objects with a `detail` message. Upstream failures are
reported as a generic 500; details only go to the logs.
"""

from city_infos.api.app import create_app

__all__ = ["create_app"]
