"""Process-wide client registration for FastAPI hosts."""
from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import HTTPException, status

from .client import WeatherKitClient
from .config import get_settings
from .errors import ClientInitializationError

logger = logging.getLogger(__name__)

# first construction failure, re-raised instead of rebuilding the client
_initialization_error: ClientInitializationError | None = None


@lru_cache(maxsize=1)
def _build_shared_client() -> WeatherKitClient:
    return WeatherKitClient(get_settings())


def get_weatherkit() -> WeatherKitClient:
    """Build the shared client from settings once per process.

    A failed construction is remembered and raised again on every later call.
    """

    global _initialization_error
    if _initialization_error is not None:
        raise _initialization_error
    try:
        return _build_shared_client()
    except ClientInitializationError as exc:
        _initialization_error = exc
        raise


def reset_weatherkit() -> None:
    """Forget the shared client or its construction failure, e.g. after settings change."""

    global _initialization_error
    _initialization_error = None
    _build_shared_client.cache_clear()


def weatherkit_client() -> WeatherKitClient:
    """FastAPI dependency handing each request its own query state.

    Use as ``client: WeatherKitClient = Depends(weatherkit_client)``.
    """

    try:
        shared = get_weatherkit()
    except ClientInitializationError as exc:
        logger.warning("weatherkit client misconfigured", extra={"error": str(exc)})
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return shared.fork()


__all__ = ["get_weatherkit", "reset_weatherkit", "weatherkit_client"]
