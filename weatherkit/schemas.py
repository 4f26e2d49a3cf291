"""Pydantic schemas shared across the WeatherKit client."""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class DataSet(str, Enum):
    """Data sets the weather endpoint can return."""

    CURRENT_WEATHER = "currentWeather"
    FORECAST_DAILY = "forecastDaily"
    FORECAST_HOURLY = "forecastHourly"
    FORECAST_NEXT_HOUR = "forecastNextHour"


DEFAULT_DATA_SETS: Tuple[str, ...] = tuple(data_set.value for data_set in DataSet)


class Coordinates(BaseModel):
    """A latitude/longitude pair. Range checks are left to the remote API."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class TokenAuth(BaseModel):
    """Pre-issued bearer token managed by the caller."""

    model_config = ConfigDict(frozen=True)

    type: Literal["token"] = "token"
    jwt: SecretStr


class SignedAuth(BaseModel):
    """Private key details used to sign a developer token at construction."""

    model_config = ConfigDict(frozen=True)

    type: Literal["signed"] = "signed"
    key: str = Field(..., description="Inline PEM text or a path to a .p8 key file.")
    key_id: str
    team_id: str
    bundle_id: str
    token_ttl: int = Field(default=3600, ge=1, description="Token lifetime in seconds.")


AuthConfig = Annotated[Union[TokenAuth, SignedAuth], Field(discriminator="type")]


__all__ = [
    "AuthConfig",
    "Coordinates",
    "DEFAULT_DATA_SETS",
    "DataSet",
    "SignedAuth",
    "TokenAuth",
]
