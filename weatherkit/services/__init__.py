"""Building blocks composed by the WeatherKit client."""
from .keys import PEM_PRIVATE_KEY_HEADER, decode_private_key
from .logging import RequestContext, request_log_store
from .query import PreparedRequest, QueryBuilder
from .storage import KeyStorage, LocalKeyStorage
from .tokens import BaseTokenProvider, SignedTokenProvider, StaticTokenProvider, build_token_provider

__all__ = [
    "BaseTokenProvider",
    "KeyStorage",
    "LocalKeyStorage",
    "PEM_PRIVATE_KEY_HEADER",
    "PreparedRequest",
    "QueryBuilder",
    "RequestContext",
    "SignedTokenProvider",
    "StaticTokenProvider",
    "build_token_provider",
    "decode_private_key",
    "request_log_store",
]
