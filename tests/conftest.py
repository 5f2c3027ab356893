"""ABOUTME: Pytest configuration and shared fixtures for the OpenWeather MCP tests.

Provides sample provider payloads and an httpx.MockTransport-backed fake provider
that records every outbound request, so tests can assert on call counts.
"""

from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from openweather_mcp.mcp_base import MCPServerBase
from openweather_mcp.weather_client import WeatherClient

TEST_API_KEY = "test-key"
TEST_BASE_URL = "https://weather.test/day_summary"


class FakeProvider:
    """Callable httpx.MockTransport handler that records requests."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self._handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def provider_payload() -> Dict[str, Any]:
    """Fixture providing a full OpenWeather day-summary response (no timezone).

    Returns:
        Dictionary in OpenWeather day_summary format
    """
    return {
        "lat": 48.8566,
        "lon": 2.3522,
        "date": "2024-01-01",
        "units": "metric",
        "cloud_cover": {"afternoon": 75},
        "humidity": {"afternoon": 82},
        "precipitation": {"total": 2.4},
        "temperature": {
            "min": 3.1,
            "max": 8.6,
            "afternoon": 7.9,
            "night": 4.2,
            "evening": 6.0,
            "morning": 3.5,
        },
        "pressure": {"afternoon": 1012},
        "wind": {"max": {"speed": 6.2, "direction": 240}},
    }


@pytest.fixture
def make_provider() -> Callable[..., FakeProvider]:
    """Fixture providing a factory for fake providers.

    Usage:
        provider = make_provider(json_body={...}, status_code=200)
        provider = make_provider(error=httpx.ConnectError, error_message="refused")
    """

    def _make(
        json_body: Any = None,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
        content: Optional[bytes] = None,
        error: Optional[type] = None,
        error_message: str = "",
    ) -> FakeProvider:
        def handler(request: httpx.Request) -> httpx.Response:
            if error is not None:
                raise error(error_message, request=request)
            if content is not None:
                return httpx.Response(status_code, content=content, headers=headers)
            return httpx.Response(status_code, json=json_body, headers=headers)

        return FakeProvider(handler)

    return _make


@pytest.fixture
def make_client() -> Callable[..., WeatherClient]:
    """Fixture providing a factory for WeatherClient bound to a fake provider."""

    def _make(provider: Optional[FakeProvider] = None, api_key: str = TEST_API_KEY) -> WeatherClient:
        return WeatherClient(
            api_key=api_key,
            base_url=TEST_BASE_URL,
            transport=provider.transport if provider else None,
        )

    return _make


@pytest.fixture
def mcp_server() -> MCPServerBase:
    """Fixture providing a bare MCPServerBase for handler tests."""
    return MCPServerBase("openweather-test")
