"""ABOUTME: Tests for the OpenWeather client and payload normalization.

Uses httpx.MockTransport so no real network calls are made; the fake provider
records requests so short-circuit paths can assert zero outbound calls.
"""

import httpx
import pytest

from openweather_mcp.validation import validate_latitude
from openweather_mcp.weather_client import (
    MISSING_API_KEY_MESSAGE,
    WeatherClient,
    get_temperature_unit,
    get_wind_speed_unit,
    normalize_weather_payload,
)

from conftest import TEST_API_KEY, TEST_BASE_URL

PARIS = (48.8566, 2.3522)


class TestUnitLabels:
    """Tests for unit label derivation."""

    @pytest.mark.parametrize(
        "units,temp_unit,speed_unit",
        [
            ("metric", "°C", "m/s"),
            ("imperial", "°F", "mph"),
            ("kelvin", "K", "m/s"),
        ],
    )
    def test_labels(self, units, temp_unit, speed_unit):
        """Test temperature and wind speed labels per unit system."""
        assert get_temperature_unit(units) == temp_unit
        assert get_wind_speed_unit(units) == speed_unit


class TestNormalization:
    """Tests for normalize_weather_payload."""

    def test_full_payload(self, provider_payload):
        """Test every field is mapped with its unit label."""
        data = normalize_weather_payload(provider_payload, *PARIS, "2024-01-01", "metric")

        assert data.location.latitude == 48.8566
        assert data.location.longitude == 2.3522
        assert data.location.timezone == "+00:00"
        assert data.date == "2024-01-01"
        assert data.units == "metric"
        assert data.temperature.min.value == 3.1
        assert data.temperature.min.unit == "°C"
        assert data.temperature.night.value == 4.2
        assert data.humidity.afternoon == 82
        assert data.humidity.unit == "%"
        assert data.pressure.afternoon == 1012
        assert data.pressure.unit == "hPa"
        assert data.cloud_cover.afternoon == 75
        assert data.precipitation.total == 2.4
        assert data.precipitation.unit == "mm"
        assert data.wind.max.speed == 6.2
        assert data.wind.max.direction == 240
        assert data.wind.max.speed_unit == "m/s"
        assert data.wind.max.direction_unit == "degrees"

    def test_integers_stay_integers(self, provider_payload):
        """Test integer readings are not converted to floats."""
        data = normalize_weather_payload(provider_payload, *PARIS, "2024-01-01", "metric")
        assert isinstance(data.humidity.afternoon, int)
        assert isinstance(data.temperature.max.value, float)

    def test_timezone_passed_through(self, provider_payload):
        """Test a provider timezone is used when present."""
        provider_payload["timezone"] = "+01:00"
        data = normalize_weather_payload(provider_payload, *PARIS, "2024-01-01", "metric")
        assert data.location.timezone == "+01:00"

    def test_missing_precipitation_defaults_to_zero(self, provider_payload):
        """Test a missing sub-block still yields a populated block with 0."""
        del provider_payload["precipitation"]
        data = normalize_weather_payload(provider_payload, *PARIS, "2024-01-01", "metric")
        assert data.precipitation is not None
        assert data.precipitation.total == 0
        assert data.precipitation.unit == "mm"

    def test_empty_payload_defaults_everything(self):
        """Test an empty object normalizes to all zeros with labels."""
        data = normalize_weather_payload({}, 0, 0, "2024-01-01", "imperial")
        assert data.temperature.afternoon.value == 0
        assert data.temperature.afternoon.unit == "°F"
        assert data.wind.max.speed == 0
        assert data.wind.max.speed_unit == "mph"
        assert data.location.timezone == "+00:00"

    def test_null_fields_default_to_zero(self):
        """Test explicit nulls are treated like missing values."""
        data = normalize_weather_payload(
            {"humidity": {"afternoon": None}, "wind": None},
            0, 0, "2024-01-01", "metric",
        )
        assert data.humidity.afternoon == 0
        assert data.wind.max.direction == 0

    def test_reported_zero_kept(self):
        """Test a reported 0.0 reading is kept as reported."""
        data = normalize_weather_payload({"precipitation": {"total": 0.0}}, 0, 0, "2024-01-01", "metric")
        assert data.precipitation.total == 0.0

    def test_non_object_payload_raises(self):
        """Test a non-object payload is a normalization failure."""
        with pytest.raises(TypeError):
            normalize_weather_payload([1, 2, 3], 0, 0, "2024-01-01", "metric")

    def test_non_object_block_raises(self):
        """Test a sub-block that is not an object is a normalization failure."""
        with pytest.raises(TypeError, match="temperature"):
            normalize_weather_payload({"temperature": 12}, 0, 0, "2024-01-01", "metric")


class TestFetchWeather:
    """Tests for WeatherClient.fetch_weather."""

    @pytest.mark.asyncio
    async def test_success(self, make_provider, make_client, provider_payload):
        """Test a 2xx response is normalized into an OK result."""
        provider = make_provider(json_body=provider_payload)
        client = make_client(provider)

        result = await client.fetch_weather(*PARIS, "2024-01-01", "metric")

        assert result.ok
        assert result.status == "OK"
        assert result.data.temperature.max.value == 8.6
        assert result.data.location.timezone == "+00:00"
        assert provider.call_count == 1

    @pytest.mark.asyncio
    async def test_query_parameters(self, make_provider, make_client, provider_payload):
        """Test the outbound GET carries coordinates, date, units and key."""
        provider = make_provider(json_body=provider_payload)
        client = make_client(provider)

        await client.fetch_weather(*PARIS, "2024-01-01", "imperial")

        request = provider.requests[0]
        assert request.method == "GET"
        assert str(request.url).startswith(TEST_BASE_URL)
        assert request.url.params["lat"] == "48.8566"
        assert request.url.params["lon"] == "2.3522"
        assert request.url.params["date"] == "2024-01-01"
        assert request.url.params["units"] == "imperial"
        assert request.url.params["appid"] == TEST_API_KEY

    @pytest.mark.asyncio
    async def test_missing_api_key_short_circuits(self, make_provider, make_client, provider_payload):
        """Test no credential yields a configuration error and no network call."""
        provider = make_provider(json_body=provider_payload)
        client = make_client(provider, api_key="")

        result = await client.fetch_weather(*PARIS, "2024-01-01")

        assert not result.ok
        assert result.error_message == MISSING_API_KEY_MESSAGE
        assert result.error_message.startswith("Weather API key not configured")
        assert result.error_code == "configuration_error"
        assert provider.call_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("latitude", [-90.5, 95, 1e9])
    async def test_invalid_latitude_matches_validator(self, make_provider, make_client, latitude):
        """Test the client rejects bad latitude with the validator's exact text."""
        provider = make_provider(json_body={})
        client = make_client(provider)

        result = await client.fetch_weather(latitude, 0, "2024-01-01")

        assert result.error_message == validate_latitude(latitude)[1]
        assert result.error_code == "validation_failed"
        assert provider.call_count == 0

    @pytest.mark.asyncio
    async def test_invalid_date_no_call(self, make_provider, make_client):
        """Test a malformed date is rejected before any call."""
        provider = make_provider(json_body={})
        client = make_client(provider)

        result = await client.fetch_weather(0, 0, "01/01/2024")

        assert result.error_message == "Date must be in YYYY-MM-DD format"
        assert provider.call_count == 0

    @pytest.mark.asyncio
    async def test_provider_message_used(self, make_provider, make_client):
        """Test a 429 with a message body returns that message."""
        provider = make_provider(json_body={"message": "rate limited"}, status_code=429)
        client = make_client(provider)

        result = await client.fetch_weather(*PARIS, "2024-01-01")

        assert not result.ok
        assert result.error_message == "rate limited"
        assert result.error_code == "rate_limited"
        assert result.error_type == "provider_error"
        assert result.details["status_code"] == 429
        assert provider.call_count == 1

    @pytest.mark.asyncio
    async def test_retry_after_reported(self, make_provider, make_client):
        """Test a numeric Retry-After header is surfaced in details."""
        provider = make_provider(
            json_body={"message": "rate limited"},
            status_code=429,
            headers={"Retry-After": "60"},
        )
        client = make_client(provider)

        result = await client.fetch_weather(*PARIS, "2024-01-01")

        assert result.details["retry_after_seconds"] == 60

    @pytest.mark.asyncio
    async def test_status_without_message(self, make_provider, make_client):
        """Test a non-2xx without a message gets a generic status message."""
        provider = make_provider(content=b"<html>Bad Gateway</html>", status_code=502)
        client = make_client(provider)

        result = await client.fetch_weather(*PARIS, "2024-01-01")

        assert result.error_message == "Request failed with status code 502"
        assert result.error_code == "fetch_failed"

    @pytest.mark.asyncio
    async def test_unauthorized(self, make_provider, make_client):
        """Test a 401 maps to the unauthorized code with the provider's message."""
        provider = make_provider(json_body={"cod": 401, "message": "Invalid API key."}, status_code=401)
        client = make_client(provider)

        result = await client.fetch_weather(*PARIS, "2024-01-01")

        assert result.error_message == "Invalid API key."
        assert result.error_code == "unauthorized"

    @pytest.mark.asyncio
    async def test_timeout(self, make_provider, make_client):
        """Test a timeout becomes a transport error, not an exception."""
        provider = make_provider(error=httpx.ReadTimeout, error_message="timed out")
        client = make_client(provider)

        result = await client.fetch_weather(*PARIS, "2024-01-01")

        assert not result.ok
        assert result.error_message == "Request failed: timed out"
        assert result.error_code == "timeout"
        assert result.error_type == "transport_error"
        assert provider.call_count == 1

    @pytest.mark.asyncio
    async def test_connection_refused(self, make_provider, make_client):
        """Test a connection failure becomes a network error."""
        provider = make_provider(error=httpx.ConnectError, error_message="Connection refused")
        client = make_client(provider)

        result = await client.fetch_weather(*PARIS, "2024-01-01")

        assert result.error_message == "Request failed: Connection refused"
        assert result.error_code == "network_error"

    @pytest.mark.asyncio
    async def test_empty_transport_message_uses_exception_name(self, make_provider, make_client):
        """Test an empty transport diagnostic falls back to the exception class name."""
        provider = make_provider(error=httpx.ConnectTimeout)
        client = make_client(provider)

        result = await client.fetch_weather(*PARIS, "2024-01-01")

        assert result.error_message == "Request failed: ConnectTimeout"

    @pytest.mark.asyncio
    async def test_non_json_success_body(self, make_provider, make_client):
        """Test an unparseable 2xx body is a normalization error."""
        provider = make_provider(content=b"not json")
        client = make_client(provider)

        result = await client.fetch_weather(*PARIS, "2024-01-01")

        assert not result.ok
        assert result.error_message.startswith("Error formatting weather data: ")
        assert result.error_code == "normalization_error"

    @pytest.mark.asyncio
    async def test_malformed_reading(self, make_provider, make_client):
        """Test a non-numeric reading is a normalization error, not an exception."""
        provider = make_provider(json_body={"humidity": {"afternoon": "very"}})
        client = make_client(provider)

        result = await client.fetch_weather(*PARIS, "2024-01-01")

        assert result.error_message.startswith("Error formatting weather data: ")

    @pytest.mark.asyncio
    async def test_identical_data_identical_result(self, make_provider, make_client, provider_payload):
        """Test repeated calls against identical data give equal results."""
        provider = make_provider(json_body=provider_payload)
        client = make_client(provider)

        first = await client.fetch_weather(*PARIS, "2024-01-01")
        second = await client.fetch_weather(*PARIS, "2024-01-01")

        assert first == second
        assert provider.call_count == 2


class TestClientConfiguration:
    """Tests for client construction from settings."""

    def test_reads_environment(self, monkeypatch):
        """Test key and base URL come from the environment when not given."""
        monkeypatch.setenv("WEATHER_API_KEY", "env-key")
        monkeypatch.setenv("WEATHER_BASE_URL", "https://example.test/api")

        client = WeatherClient()

        assert client.api_key == "env-key"
        assert client.base_url == "https://example.test/api"
        assert client.timeout == 30.0

    def test_explicit_values_win(self, monkeypatch):
        """Test explicit arguments override the environment."""
        monkeypatch.setenv("WEATHER_API_KEY", "env-key")

        client = WeatherClient(api_key="arg-key", base_url=TEST_BASE_URL)

        assert client.api_key == "arg-key"
        assert client.base_url == TEST_BASE_URL
