"""FastAPI application factory.

Creates and configures the FastAPI application with all routes and middleware.

## Usage

```python
from city_infos.api import create_app

app = create_app()

# Run with uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="localhost", port=3000)
```

## Configuration

The app is configured via environment variables. See `city_infos.config`
for available settings. Tests can inject their own settings, upstream
provider and recipe store.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from city_infos.config import Settings, get_settings
from city_infos.providers.base import CityDataProvider
from city_infos.providers.city_api import CityApiProvider
from city_infos.recipes.store import InMemoryRecipeStore, RecipeStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown tasks:
    - Open the City Data API client unless one was injected
    - Close it on shutdown
    """
    settings: Settings = app.state.settings

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    owns_provider = app.state.city_provider is None
    if owns_provider:
        app.state.city_provider = CityApiProvider(
            base_url=settings.city_api_base_url,
            api_key=settings.city_api_key,
            timeout=settings.city_api_timeout,
            max_attempts=settings.city_api_max_attempts,
        )
        logger.info(f"City Data API: {settings.city_api_base_url}")

    yield

    # Shutdown
    logger.info("Shutting down")
    if owns_provider:
        await app.state.city_provider.aclose()
        app.state.city_provider = None


def create_app(
    settings: Settings | None = None,
    city_provider: CityDataProvider | None = None,
    recipe_store: RecipeStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        city_provider: Upstream provider to use instead of the HTTP client
        recipe_store: Recipe store to use instead of a fresh in-memory one

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="City insights, weather predictions and user recipes",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.city_provider = city_provider
    # The store lives as long as the application object.
    app.state.recipe_store = recipe_store if recipe_store is not None else InMemoryRecipeStore()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["*"],
    )

    # Include routers
    from city_infos.api.routes import cities

    app.include_router(cities.router, prefix="/cities", tags=["Cities"])

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    return app
