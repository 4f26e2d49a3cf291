"""WeatherKit REST client with chained query setters."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Tuple

import httpx

from .config import Settings, get_settings
from .errors import (
    ClientInitializationError,
    DataSetNotFoundError,
    KeyDecodingError,
    KeyFileMissingError,
    TokenGenerationFailedError,
)
from .schemas import AuthConfig, DataSet
from .services.logging import RequestContext, log_event
from .services.query import PreparedRequest, QueryBuilder
from .services.storage import KeyStorage, LocalKeyStorage
from .services.tokens import BaseTokenProvider, build_token_provider

logger = logging.getLogger(__name__)


class WeatherKitClient:
    """Fetch weather and data-set availability for a coordinate pair.

    Setters mutate this instance, so one client should serve one caller at a
    time. Use :meth:`fork` to hand independent query state to concurrent users
    while sharing the token and HTTP connection pool.

    ``availability()`` replaces the selected data sets with whatever the API
    reports for the location, so a following ``weather()`` only asks for those.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        auth: AuthConfig | None = None,
        http_client: httpx.Client | None = None,
        storage: KeyStorage | None = None,
        token_provider: BaseTokenProvider | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        if token_provider is None:
            auth = auth or self._settings.auth_config()
            storage = storage or LocalKeyStorage(self._settings.key_storage_root)
            try:
                token_provider = build_token_provider(auth, storage)
            except (KeyFileMissingError, KeyDecodingError, TokenGenerationFailedError) as exc:
                raise ClientInitializationError(str(exc)) from exc
        self._token_provider = token_provider

        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self._settings.timeout_seconds)

        self._query = QueryBuilder(
            language=self._settings.language_code,
            timezone_name=self._settings.timezone,
        )

    @property
    def bearer_token(self) -> str:
        return self._token_provider.get_token()

    @property
    def selected_data_sets(self) -> Tuple[str, ...]:
        return tuple(self._query.selected_data_sets)

    def fork(self) -> "WeatherKitClient":
        """Return a client with fresh query state sharing this one's token and HTTP client."""

        return WeatherKitClient(
            self._settings,
            http_client=self._http,
            token_provider=self._token_provider,
        )

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> "WeatherKitClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # query setters

    def location(self, lat: float, lon: float) -> "WeatherKitClient":
        """Set the latitude and longitude. Required before any fetch."""

        self._query.location(lat, lon)
        return self

    def data_sets(self, data_sets: Iterable[str]) -> "WeatherKitClient":
        self._query.data_sets(data_sets)
        return self

    def current_as_of(self, as_of: datetime | None) -> "WeatherKitClient":
        self._query.current_as_of(as_of)
        return self

    def hourly_start(self, start: datetime | None) -> "WeatherKitClient":
        self._query.hourly_start(start)
        return self

    def hourly_end(self, end: datetime | None) -> "WeatherKitClient":
        self._query.hourly_end(end)
        return self

    def daily_start(self, start: datetime | None) -> "WeatherKitClient":
        self._query.daily_start(start)
        return self

    def daily_end(self, end: datetime | None) -> "WeatherKitClient":
        self._query.daily_end(end)
        return self

    def timezone(self, timezone_name: str) -> "WeatherKitClient":
        self._query.timezone(timezone_name)
        return self

    def language(self, lang: str) -> "WeatherKitClient":
        self._query.language(lang)
        return self

    def country(self, country: str) -> "WeatherKitClient":
        self._query.country(country)
        return self

    def build_params(self) -> Mapping[str, str]:
        return self._query.build_params()

    # endpoints

    def weather(self, context: RequestContext | None = None) -> Mapping[str, Any]:
        """Fetch the selected data sets and return the decoded body as-is."""

        request = self._query.prepare("weather", self._settings.weather_endpoint, self.bearer_token)
        return self._send(request, context)

    def availability(self, context: RequestContext | None = None) -> List[str]:
        """Fetch the data sets supported at the location and select exactly those."""

        request = self._query.prepare("availability", self._settings.availability_endpoint, self.bearer_token)
        available = [str(name) for name in self._send(request, context)]
        self._query.data_sets(available)
        log_event(
            logger,
            context,
            "weatherkit data sets narrowed to availability",
            event="weatherkit.data_sets_replaced",
            data_sets=available,
        )
        return available

    def currently(self, context: RequestContext | None = None) -> Any:
        return self._single_data_set(DataSet.CURRENT_WEATHER.value, context)

    def hourly(self, context: RequestContext | None = None) -> Any:
        return self._single_data_set(DataSet.FORECAST_HOURLY.value, context)

    def daily(self, context: RequestContext | None = None) -> Any:
        return self._single_data_set(DataSet.FORECAST_DAILY.value, context)

    def next_hour(self, context: RequestContext | None = None) -> Any:
        return self._single_data_set(DataSet.FORECAST_NEXT_HOUR.value, context)

    def _single_data_set(self, data_set: str, context: RequestContext | None) -> Any:
        response = self.data_sets([data_set]).weather(context=context)
        return extract_data_set(response, data_set)

    def _send(self, request: PreparedRequest, context: RequestContext | None) -> Any:
        if context:
            context.with_endpoint(request.endpoint)
        log_event(
            logger,
            context,
            "weatherkit request prepared",
            event="weatherkit.request_built",
            url=request.url,
            params=dict(request.params),
        )
        response = self._http.get(request.url, params=dict(request.params), headers=dict(request.headers))
        response.raise_for_status()
        log_event(
            logger,
            context,
            "weatherkit response received",
            event="weatherkit.response_received",
            status_code=response.status_code,
        )
        return response.json()


def extract_data_set(response: Any, data_set: str) -> Any:
    """Return the ``data_set`` entry of a weather response or raise ``DataSetNotFoundError``."""

    if not isinstance(response, Mapping) or data_set not in response:
        raise DataSetNotFoundError(data_set)
    return response[data_set]


__all__ = ["WeatherKitClient", "extract_data_set"]
