"""FastAPI dependencies for request handling.

The recipe store and the upstream provider are created once per application
and kept on `app.state`; these dependencies hand them to the routes.

## Usage

```python
from fastapi import Depends
from city_infos.api.dependencies import get_city_info_service

@router.get("/{city_id}/infos")
async def city_infos(city_id: str, service: CityInfoService = Depends(get_city_info_service)):
    return await service.get_city_infos(city_id)
```
"""

from __future__ import annotations

from fastapi import Depends, Request

from city_infos.config import Settings
from city_infos.providers.base import CityDataProvider
from city_infos.recipes.store import RecipeStore
from city_infos.services.city_info import CityInfoService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_city_provider(request: Request) -> CityDataProvider:
    """Upstream City Data provider opened by the application lifespan."""
    provider = request.app.state.city_provider
    if provider is None:
        raise RuntimeError("City Data provider not initialized")
    return provider


def get_recipe_store(request: Request) -> RecipeStore:
    """Process-wide recipe store."""
    return request.app.state.recipe_store


def get_city_info_service(
    provider: CityDataProvider = Depends(get_city_provider),
    store: RecipeStore = Depends(get_recipe_store),
    settings: Settings = Depends(get_app_settings),
) -> CityInfoService:
    """Request-handling service bound to the shared provider and store."""
    return CityInfoService(
        provider,
        store,
        concurrent=settings.concurrent_upstream_calls,
    )
