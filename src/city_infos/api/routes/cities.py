"""City infos and recipe routes."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from city_infos.api.dependencies import get_city_info_service
from city_infos.models.city import CityInfos
from city_infos.models.recipe import MAX_CONTENT_LENGTH, MIN_CONTENT_LENGTH, Recipe
from city_infos.providers.base import ProviderError
from city_infos.services.city_info import (
    CityInfoService,
    CityNotFoundError,
    RecipeNotFoundError,
    RecipeValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

INTERNAL_ERROR = "Internal server error"

RECIPE_BODY_SCHEMA = {
    "requestBody": {
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "content": {
                            "type": "string",
                            "minLength": MIN_CONTENT_LENGTH,
                            "maxLength": MAX_CONTENT_LENGTH,
                        }
                    },
                    "required": ["content"],
                }
            }
        },
        "required": True,
    }
}


def _city_not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="City not found",
    )


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_ERROR,
    )


async def _read_json_body(request: Request) -> Any:
    """Decode a JSON request body. An empty body reads as an empty object."""
    body = await request.body()
    if not body:
        return {}
    try:
        return json.loads(body)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Malformed JSON body",
        )


@router.get("/{city_id}/infos", response_model=CityInfos)
async def get_city_infos(
    city_id: str,
    service: CityInfoService = Depends(get_city_info_service),
) -> CityInfos:
    """Get coordinates, population, tags, weather and recipes for a city."""
    logger.info(f"City infos requested for {city_id}")
    try:
        return await service.get_city_infos(city_id)
    except CityNotFoundError:
        raise _city_not_found()
    except ProviderError as e:
        logger.error(f"Upstream failure for city infos {city_id}: {e}")
        raise _internal_error()
    except Exception:
        logger.exception(f"Unexpected error for city infos {city_id}")
        raise _internal_error()


@router.post(
    "/{city_id}/recipes",
    response_model=Recipe,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=RECIPE_BODY_SCHEMA,
)
async def create_recipe(
    city_id: str,
    request: Request,
    service: CityInfoService = Depends(get_city_info_service),
) -> Recipe:
    """Add a recipe to a city."""
    payload = await _read_json_body(request)
    content = payload.get("content") if isinstance(payload, dict) else None
    logger.info(f"Recipe submitted for {city_id}")

    try:
        return await service.add_recipe(city_id, content)
    except CityNotFoundError:
        raise _city_not_found()
    except RecipeValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except ProviderError as e:
        logger.error(f"Upstream failure while adding recipe for {city_id}: {e}")
        raise _internal_error()
    except Exception:
        logger.exception(f"Unexpected error while adding recipe for {city_id}")
        raise _internal_error()


@router.delete(
    "/{city_id}/recipes/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_recipe(
    city_id: str,
    recipe_id: str,
    service: CityInfoService = Depends(get_city_info_service),
) -> Response:
    """Delete a recipe from a city.

    Recipe ids that are not integers are reported as not found.
    """
    logger.info(f"Deletion of recipe {recipe_id} requested for {city_id}")
    try:
        await service.delete_recipe(city_id, recipe_id)
    except CityNotFoundError:
        raise _city_not_found()
    except RecipeNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Recipe not found",
        )
    except ProviderError as e:
        logger.error(f"Upstream failure while deleting recipe for {city_id}: {e}")
        raise _internal_error()
    except Exception:
        logger.exception(f"Unexpected error while deleting recipe for {city_id}")
        raise _internal_error()

    return Response(status_code=status.HTTP_204_NO_CONTENT)
