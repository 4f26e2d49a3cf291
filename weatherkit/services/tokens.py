"""Bearer token providers for WeatherKit authentication."""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

import jwt

from ..errors import TokenGenerationFailedError
from ..schemas import AuthConfig
from .keys import decode_private_key
from .storage import KeyStorage

logger = logging.getLogger(__name__)

SIGNING_ALGORITHM = "ES256"


class BaseTokenProvider(ABC):
    """Common interface for the token variants."""

    @abstractmethod
    def get_token(self) -> str:
        """Return the bearer token sent in the ``Authorization`` header."""

    def __str__(self) -> str:
        return self.get_token()


class StaticTokenProvider(BaseTokenProvider):
    """Hands back a caller-supplied token untouched."""

    def __init__(self, token: str) -> None:
        self._token = token

    def get_token(self) -> str:
        return self._token


class SignedTokenProvider(BaseTokenProvider):
    """Signs an ES256 developer token once, when constructed.

    The token is never refreshed; it lives as long as the provider does. The
    decoded private key is only held for the duration of the signing call.
    """

    def __init__(
        self,
        key: str,
        key_id: str,
        team_id: str,
        bundle_id: str,
        token_ttl: int = 3600,
        storage: KeyStorage | None = None,
    ) -> None:
        self.key_id = key_id
        self.team_id = team_id
        self.bundle_id = bundle_id
        self.token_ttl = token_ttl
        self._token = self._mint(decode_private_key(key, storage))

    def _mint(self, private_key: object) -> str:
        issued_at = int(time.time())
        claims = {
            "iss": self.team_id,
            "sub": self.bundle_id,
            "iat": issued_at,
            "exp": issued_at + self.token_ttl,
        }
        headers = {
            "kid": self.key_id,
            "id": f"{self.team_id}.{self.bundle_id}",
        }
        try:
            token = jwt.encode(claims, private_key, algorithm=SIGNING_ALGORITHM, headers=headers)
        except Exception as exc:
            raise TokenGenerationFailedError("Token failed to generate") from exc
        logger.info(
            "weatherkit token minted",
            extra={"key_id": self.key_id, "team_id": self.team_id, "expires_at": claims["exp"]},
        )
        return token

    def get_token(self) -> str:
        return self._token


def build_token_provider(auth: AuthConfig, storage: KeyStorage | None = None) -> BaseTokenProvider:
    """Pick the provider for ``auth`` once; the choice is fixed for the client's lifetime."""

    if auth.type == "signed":
        return SignedTokenProvider(
            key=auth.key,
            key_id=auth.key_id,
            team_id=auth.team_id,
            bundle_id=auth.bundle_id,
            token_ttl=auth.token_ttl,
            storage=storage,
        )
    return StaticTokenProvider(auth.jwt.get_secret_value())


__all__ = [
    "BaseTokenProvider",
    "SIGNING_ALGORITHM",
    "SignedTokenProvider",
    "StaticTokenProvider",
    "build_token_provider",
]
