"""Metadata provider clients."""

from autoorganize.api.cache_db import CacheDB
from autoorganize.api.exceptions import (
    APIError,
    APIConfigurationError,
    APIConnectionError,
    APIResponseError,
)
from autoorganize.api.tmdb_client import TmdbClient

__all__ = [
    "CacheDB",
    "APIError",
    "APIConfigurationError",
    "APIConnectionError",
    "APIResponseError",
    "TmdbClient",
]
