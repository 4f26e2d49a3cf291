"""Shared fixtures: throwaway signing keys and a fake WeatherKit API."""
from __future__ import annotations

from typing import Any, Dict, List

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from weatherkit.config import Settings

WEATHER_PAYLOAD: Dict[str, Any] = {
    "currentWeather": {"name": "CurrentWeather", "temperature": 11.2, "conditionCode": "Cloudy"},
    "forecastDaily": {"name": "DailyForecast", "days": [{"temperatureMax": 14.0}]},
    "forecastHourly": {"name": "HourlyForecast", "hours": [{"temperature": 10.5}]},
    "forecastNextHour": {"name": "NextHourForecast", "minutes": []},
}


@pytest.fixture(scope="session")
def ec_private_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_private_pem(ec_private_key: ec.EllipticCurvePrivateKey) -> str:
    return ec_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def rsa_private_pem() -> str:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def token_settings() -> Settings:
    return Settings(_env_file=None, auth_type="token", jwt_token="static-token", language_code="en", timezone="UTC")


class FakeWeatherKitAPI:
    """Records outgoing requests and answers with canned payloads."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.weather_payload: Any = dict(WEATHER_PAYLOAD)
        self.availability_payload: Any = ["currentWeather", "forecastDaily"]
        self.status_code = 200
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if "/availability/" in request.url.path:
            return httpx.Response(self.status_code, json=self.availability_payload)
        return httpx.Response(self.status_code, json=self.weather_payload)

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def last_params(self) -> Dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture
def fake_api() -> FakeWeatherKitAPI:
    return FakeWeatherKitAPI()
