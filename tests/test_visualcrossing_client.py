"""Upstream client request shape and error mapping tests."""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from weather_lookup.exceptions import UpstreamError
from weather_lookup.weather.visualcrossing import VisualCrossingClient

BASE_URL = "https://weather.example.com/VisualCrossingWebServices/rest/services/timeline"


def _make_settings(**overrides: Any) -> SimpleNamespace:
    defaults: dict[str, Any] = {
        "weather_api_key": "test-api-key",
        "weather_api_base_url": BASE_URL,
        "weather_timeout_seconds": 5.0,
        "weather_user_agent": "weather-lookup-tests/0.1",
    }
    defaults.update(overrides)
    return SimpleNamespace(**defaults)


def _make_client(handler: Callable[[httpx.Request], httpx.Response]) -> VisualCrossingClient:
    return VisualCrossingClient(
        settings=_make_settings(),
        logger=logging.getLogger("test.visualcrossing"),
        transport=httpx.MockTransport(handler),
    )


def test_fetch_sends_fixed_query_and_encoded_city() -> None:
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"days": [{"temp": 3.0}]})

    with _make_client(_handler) as client:
        payload = client.fetch("New York")

    assert payload == {"days": [{"temp": 3.0}]}
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "GET"
    assert request.url.host == "weather.example.com"
    assert request.url.raw_path.decode().startswith(
        "/VisualCrossingWebServices/rest/services/timeline/New%20York?"
    )
    assert request.url.params["unitGroup"] == "metric"
    assert request.url.params["include"] == "days"
    assert request.url.params["contentType"] == "json"
    assert request.url.params["key"] == "test-api-key"
    assert request.headers["User-Agent"] == "weather-lookup-tests/0.1"


def test_city_with_slash_stays_in_one_path_segment() -> None:
    seen: list[str] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.raw_path.decode())
        return httpx.Response(200, json={"days": []})

    with _make_client(_handler) as client:
        client.fetch("Frankfurt/Main")

    assert seen[0].split("?")[0].endswith("/timeline/Frankfurt%2FMain")


@pytest.mark.parametrize("status", [400, 401, 404, 429, 500, 503])
def test_non_success_status_raises_with_status_and_body(status: int) -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, text="Bad API Request: Invalid location parameter value.")

    with _make_client(_handler) as client:
        with pytest.raises(UpstreamError) as excinfo:
            client.fetch("Atlantis")

    assert excinfo.value.status_code == status
    assert excinfo.value.body == "Bad API Request: Invalid location parameter value."
    assert f"status code {status}" in str(excinfo.value)


def test_error_body_is_truncated_and_redacted() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text=f"failed {request.url} " + "x" * 2000)

    with _make_client(_handler) as client:
        with pytest.raises(UpstreamError) as excinfo:
            client.fetch("Rome")

    body = excinfo.value.body or ""
    assert "test-api-key" not in body
    assert "test-api-key" not in str(excinfo.value)
    assert len(body) <= 520


def test_network_failure_raises_without_status() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _make_client(_handler) as client:
        with pytest.raises(UpstreamError, match="ConnectError") as excinfo:
            client.fetch("Rome")

    assert excinfo.value.status_code is None
    assert excinfo.value.body is None


def test_timeout_raises_upstream_error() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with _make_client(_handler) as client:
        with pytest.raises(UpstreamError, match="ReadTimeout"):
            client.fetch("Rome")


def test_non_json_success_body_raises() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with _make_client(_handler) as client:
        with pytest.raises(UpstreamError, match="non-JSON") as excinfo:
            client.fetch("Rome")

    assert excinfo.value.status_code == 200
    assert excinfo.value.body == "<html>maintenance</html>"


def test_no_retry_on_server_error() -> None:
    calls: list[int] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(503, text="busy")

    with _make_client(_handler) as client:
        with pytest.raises(UpstreamError):
            client.fetch("Rome")

    assert len(calls) == 1
