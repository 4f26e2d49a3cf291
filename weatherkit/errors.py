"""Exception hierarchy raised by the WeatherKit client."""
from __future__ import annotations


class WeatherKitError(Exception):
    """Base error for WeatherKit client failures."""


class KeyFileMissingError(WeatherKitError):
    """Raised when the signing key path does not resolve to a file."""


class KeyDecodingError(WeatherKitError):
    """Raised when key bytes cannot be parsed as a private key."""


class TokenGenerationFailedError(WeatherKitError):
    """Raised when signing the bearer token fails."""


class ClientInitializationError(WeatherKitError):
    """Raised once at construction when auth could not be resolved."""


class MissingCoordinatesError(WeatherKitError):
    """Raised when a fetch is attempted before latitude and longitude are set."""


class DataSetNotFoundError(WeatherKitError):
    """Raised when a requested data set is absent from the response."""

    def __init__(self, data_set: str) -> None:
        super().__init__(f"{data_set} data set not available for this location")
        self.data_set = data_set


__all__ = [
    "ClientInitializationError",
    "DataSetNotFoundError",
    "KeyDecodingError",
    "KeyFileMissingError",
    "MissingCoordinatesError",
    "TokenGenerationFailedError",
    "WeatherKitError",
]
