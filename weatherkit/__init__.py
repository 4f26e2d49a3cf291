"""Client for the WeatherKit REST API."""
from __future__ import annotations

import logging

# the host application decides where records go
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .client import WeatherKitClient  # noqa: E402
from .errors import (  # noqa: E402
    ClientInitializationError,
    DataSetNotFoundError,
    KeyDecodingError,
    KeyFileMissingError,
    MissingCoordinatesError,
    TokenGenerationFailedError,
    WeatherKitError,
)
from .schemas import DEFAULT_DATA_SETS, DataSet, SignedAuth, TokenAuth  # noqa: E402

__all__ = [
    "ClientInitializationError",
    "DEFAULT_DATA_SETS",
    "DataSet",
    "DataSetNotFoundError",
    "KeyDecodingError",
    "KeyFileMissingError",
    "MissingCoordinatesError",
    "SignedAuth",
    "TokenAuth",
    "TokenGenerationFailedError",
    "WeatherKitClient",
    "WeatherKitError",
]
