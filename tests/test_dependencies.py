"""Tests for the FastAPI registration of the shared client."""

import logging
from typing import Iterator

import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient

from weatherkit.client import WeatherKitClient
from weatherkit.config import get_settings
from weatherkit.dependencies import get_weatherkit, reset_weatherkit, weatherkit_client
from weatherkit.errors import ClientInitializationError
from weatherkit.services import tokens


def _build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/selection")
    def selection(narrow: bool = False, client: WeatherKitClient = Depends(weatherkit_client)) -> dict:
        if narrow:
            client.data_sets(["currentWeather"])
        return {"data_sets": list(client.selected_data_sets), "token": client.bearer_token}

    return app


@pytest.fixture(autouse=True)
def _reset_caches(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("AUTH_TYPE", "JWT_TOKEN", "KEY", "KEY_ID", "TEAM_ID", "BUNDLE_ID"):
        monkeypatch.delenv(f"WEATHERKIT_{name}", raising=False)
    get_settings.cache_clear()
    reset_weatherkit()
    yield
    get_settings.cache_clear()
    reset_weatherkit()


def test_each_request_gets_its_own_query_state(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHERKIT_JWT_TOKEN", "shared-token")
    client = TestClient(_build_app())

    narrowed = client.get("/selection", params={"narrow": True}).json()
    fresh = client.get("/selection").json()

    assert narrowed["data_sets"] == ["currentWeather"]
    assert fresh["data_sets"] == ["currentWeather", "forecastDaily", "forecastHourly", "forecastNextHour"]
    assert fresh["token"] == "shared-token"


def test_shared_client_is_built_once(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHERKIT_JWT_TOKEN", "shared-token")

    assert get_weatherkit() is get_weatherkit()
    assert weatherkit_client() is not weatherkit_client()


def test_misconfigured_key_returns_503(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("WEATHERKIT_AUTH_TYPE", "p8")
    monkeypatch.setenv("WEATHERKIT_KEY", str(tmp_path / "missing.p8"))
    client = TestClient(_build_app())

    response = client.get("/selection")

    assert response.status_code == 503
    assert "Cannot find key" in response.json()["detail"]


def test_failed_construction_is_not_retried(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("WEATHERKIT_AUTH_TYPE", "signed")
    monkeypatch.setenv("WEATHERKIT_KEY", str(tmp_path / "missing.p8"))
    calls = []
    original = tokens.decode_private_key

    def counting_decode(*args, **kwargs):
        calls.append(args)
        return original(*args, **kwargs)

    monkeypatch.setattr(tokens, "decode_private_key", counting_decode)

    with pytest.raises(ClientInitializationError) as first:
        get_weatherkit()
    for _ in range(2):
        with pytest.raises(HTTPException) as excinfo:
            weatherkit_client()
        assert excinfo.value.status_code == 503
        assert excinfo.value.__cause__ is first.value

    assert len(calls) == 1


def test_reset_allows_rebuilding_after_configuration_fix(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("WEATHERKIT_AUTH_TYPE", "signed")
    monkeypatch.setenv("WEATHERKIT_KEY", str(tmp_path / "missing.p8"))
    with pytest.raises(ClientInitializationError):
        get_weatherkit()

    monkeypatch.setenv("WEATHERKIT_AUTH_TYPE", "token")
    monkeypatch.setenv("WEATHERKIT_JWT_TOKEN", "fixed-token")
    get_settings.cache_clear()
    reset_weatherkit()

    assert get_weatherkit().bearer_token == "fixed-token"


def test_construction_failure_logged_as_warning_without_traceback(
    monkeypatch: pytest.MonkeyPatch, tmp_path, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("WEATHERKIT_AUTH_TYPE", "signed")
    monkeypatch.setenv("WEATHERKIT_KEY", str(tmp_path / "missing.p8"))

    with caplog.at_level(logging.WARNING, logger="weatherkit.dependencies"):
        with pytest.raises(HTTPException):
            weatherkit_client()

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.exc_info is None
