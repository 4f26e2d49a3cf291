"""Query state for WeatherKit requests and its serialization."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Literal, Mapping, Optional

from ..errors import MissingCoordinatesError
from ..schemas import DEFAULT_DATA_SETS, Coordinates

Endpoint = Literal["weather", "availability"]


@dataclass(frozen=True)
class PreparedRequest:
    """Snapshot of everything sent for one call, taken right before I/O."""

    endpoint: Endpoint
    url: str
    params: Mapping[str, str]
    headers: Mapping[str, str]


def to_zulu(value: datetime) -> str:
    """Format ``value`` as ``YYYY-MM-DDTHH:MM:SSZ``. Naive datetimes are read as UTC."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_coordinate(value: float) -> str:
    """Render ``value`` in fixed-point notation, never with an exponent."""

    text = repr(float(value))
    if "e" not in text and "E" not in text:
        return text
    text = f"{value:.10f}".rstrip("0")
    return text + "0" if text.endswith(".") else text


class QueryBuilder:
    """Accumulates the optional query parameters through chained setters.

    Every setter overwrites its field and returns the builder. The data-set
    selection is kept exactly as given; the defaults only apply at construction.
    """

    def __init__(self, language: str = "en", timezone_name: str | None = None) -> None:
        self.latitude: Optional[float] = None
        self.longitude: Optional[float] = None
        self.selected_data_sets: List[str] = list(DEFAULT_DATA_SETS)
        self.lang: str = language
        self.country_code: Optional[str] = None
        self.timezone_name: Optional[str] = timezone_name
        self.current_as_of_at: Optional[datetime] = None
        self.hourly_start_at: Optional[datetime] = None
        self.hourly_end_at: Optional[datetime] = None
        self.daily_start_at: Optional[datetime] = None
        self.daily_end_at: Optional[datetime] = None

    def location(self, lat: float, lon: float) -> "QueryBuilder":
        self.latitude = lat
        self.longitude = lon
        return self

    def data_sets(self, data_sets: Iterable[str]) -> "QueryBuilder":
        self.selected_data_sets = [str(getattr(name, "value", name)) for name in data_sets]
        return self

    def current_as_of(self, as_of: datetime | None) -> "QueryBuilder":
        """Time to obtain current conditions for. Defaults to now on the server."""

        self.current_as_of_at = as_of
        return self

    def hourly_start(self, start: datetime | None) -> "QueryBuilder":
        """Start of the hourly forecast. Absent means the current hour."""

        self.hourly_start_at = start
        return self

    def hourly_end(self, end: datetime | None) -> "QueryBuilder":
        """End of the hourly forecast. Absent means 24 hours or the daily span, whichever is longer."""

        self.hourly_end_at = end
        return self

    def daily_start(self, start: datetime | None) -> "QueryBuilder":
        """Start of the daily forecast. Absent means the current day."""

        self.daily_start_at = start
        return self

    def daily_end(self, end: datetime | None) -> "QueryBuilder":
        """End of the daily forecast. Absent means ten days."""

        self.daily_end_at = end
        return self

    def timezone(self, timezone_name: str) -> "QueryBuilder":
        """Timezone used to roll hourly data up into daily forecasts."""

        self.timezone_name = timezone_name
        return self

    def language(self, lang: str) -> "QueryBuilder":
        self.lang = lang
        return self

    def country(self, country: str) -> "QueryBuilder":
        self.country_code = country
        return self

    def coordinates(self) -> Coordinates:
        if self.latitude is None or self.longitude is None:
            raise MissingCoordinatesError("Missing coordinates of either latitude or longitude.")
        return Coordinates(latitude=self.latitude, longitude=self.longitude)

    def build_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.selected_data_sets:
            params["dataSets"] = ",".join(self.selected_data_sets)
        if self.timezone_name:
            params["timezone"] = self.timezone_name
        for key, value in (
            ("currentAsOf", self.current_as_of_at),
            ("dailyStart", self.daily_start_at),
            ("dailyEnd", self.daily_end_at),
            ("hourlyStart", self.hourly_start_at),
            ("hourlyEnd", self.hourly_end_at),
        ):
            if value is not None:
                params[key] = to_zulu(value)
        return params

    def _coordinate_path(self) -> str:
        coords = self.coordinates()
        return f"{format_coordinate(coords.latitude)}/{format_coordinate(coords.longitude)}"

    def weather_url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/{self.lang}/{self._coordinate_path()}"

    def availability_url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/{self._coordinate_path()}"

    def prepare(self, endpoint: Endpoint, base_url: str, token: str) -> PreparedRequest:
        """Freeze the current state into a request for ``endpoint``.

        Raises ``MissingCoordinatesError`` before anything is sent when the
        location has not been set.
        """

        if endpoint == "weather":
            url = self.weather_url(base_url)
        else:
            url = self.availability_url(base_url)
        return PreparedRequest(
            endpoint=endpoint,
            url=url,
            params=self.build_params(),
            headers={"Authorization": f"Bearer {token}"},
        )


__all__ = ["Endpoint", "PreparedRequest", "QueryBuilder", "format_coordinate", "to_zulu"]
