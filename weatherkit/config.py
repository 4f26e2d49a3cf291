"""Settings for the WeatherKit client."""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

from .schemas import AuthConfig, SignedAuth, TokenAuth

DEFAULT_WEATHER_ENDPOINT = "https://weatherkit.apple.com/api/v1/weather"
DEFAULT_AVAILABILITY_ENDPOINT = "https://weatherkit.apple.com/api/v1/availability"

# names used by earlier releases of the config file
_LEGACY_AUTH_TYPES = {"jwt": "token", "p8": "signed"}


class Settings(BaseSettings):
    """Central configuration loaded from ``WEATHERKIT_*`` environment variables."""

    auth_type: Literal["token", "signed"] = Field(
        default="token",
        description="'token' to send a pre-generated JWT, 'signed' to sign one from a .p8 key.",
    )
    jwt_token: SecretStr | None = Field(default=None, description="Pre-generated bearer token.")
    key: str = Field(default="", description="Inline PEM private key or a path to the key file.")
    key_id: str = Field(default="")
    team_id: str = Field(default="")
    bundle_id: str = Field(default="")
    token_ttl: int = Field(default=3600, ge=1)
    key_storage_root: str | None = Field(
        default=None, description="Directory that relative key paths are resolved against."
    )

    language_code: str = Field(default="en")
    timezone: str = Field(default="UTC")

    weather_endpoint: str = Field(default=DEFAULT_WEATHER_ENDPOINT)
    availability_endpoint: str = Field(default=DEFAULT_AVAILABILITY_ENDPOINT)
    timeout_seconds: float = Field(default=10.0, gt=0)

    class Config:
        env_prefix = "WEATHERKIT_"
        env_file = ".env"
        extra = "ignore"

    @field_validator("auth_type", mode="before")
    @classmethod
    def _normalize_auth_type(cls, value: object) -> object:
        if isinstance(value, str):
            lowered = value.strip().lower()
            return _LEGACY_AUTH_TYPES.get(lowered, lowered)
        return value

    def auth_config(self) -> AuthConfig:
        """Build the auth variant selected by ``auth_type``."""

        if self.auth_type == "signed":
            return SignedAuth(
                key=self.key,
                key_id=self.key_id,
                team_id=self.team_id,
                bundle_id=self.bundle_id,
                token_ttl=self.token_ttl,
            )
        return TokenAuth(jwt=self.jwt_token or SecretStr(""))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    return Settings()
