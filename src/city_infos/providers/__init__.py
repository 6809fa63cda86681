"""City Data providers."""

from city_infos.providers.base import AuthenticationError, CityDataProvider, ProviderError
from city_infos.providers.city_api import CityApiProvider

__all__ = [
    "CityDataProvider",
    "ProviderError",
    "AuthenticationError",
    "CityApiProvider",
]
