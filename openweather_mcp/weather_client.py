"""ABOUTME: OpenWeather day-summary client - the only boundary to the weather provider.

Makes at most one GET per call, bounded by a fixed timeout, and turns every
outcome (missing credential, invalid input, provider error, transport failure,
malformed payload) into a WeatherResult value. Nothing raises past fetch_weather.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from .error_handling import (
    ERROR_CONFIGURATION,
    ERROR_NETWORK_ERROR,
    ERROR_NORMALIZATION,
    ERROR_TIMEOUT,
    ERROR_TYPE_CONFIGURATION,
    ERROR_TYPE_NORMALIZATION,
    ERROR_TYPE_PROVIDER,
    ERROR_TYPE_TRANSPORT,
    ERROR_TYPE_UNEXPECTED,
    ERROR_TYPE_VALIDATION,
    ERROR_UNEXPECTED,
    ERROR_VALIDATION_FAILED,
)
from .http_utils import (
    get_error_message,
    get_retry_after_seconds,
    interpret_http_error,
    safe_http_get,
)
from .models import (
    AfternoonReading,
    Location,
    Precipitation,
    Reading,
    Temperature,
    WeatherData,
    WeatherResult,
    Wind,
    WindReading,
)
from .settings import WeatherSettings
from .validation import validate_coordinates_and_date

logger = logging.getLogger(__name__)

# ============================================================================
# CONSTANTS
# ============================================================================

API_TIMEOUT_SECONDS = 30.0
DEFAULT_TIMEZONE = "+00:00"

MISSING_API_KEY_MESSAGE = (
    "Weather API key not configured. Please set WEATHER_API_KEY environment variable."
)

# Unit labels
CELSIUS_DISPLAY_UNIT = "°C"
FAHRENHEIT_DISPLAY_UNIT = "°F"
KELVIN_DISPLAY_UNIT = "K"
METERS_PER_SECOND_UNIT = "m/s"
MILES_PER_HOUR_UNIT = "mph"

TEMPERATURE_POINTS = ("min", "max", "morning", "afternoon", "evening", "night")


# ============================================================================
# UNIT LABELS
# ============================================================================


def get_temperature_unit(units: str) -> str:
    """Get temperature unit symbol.

    Args:
        units: Unit system ("metric", "imperial" or "kelvin")

    Returns:
        "°C", "°F" or "K"
    """
    if units == "metric":
        return CELSIUS_DISPLAY_UNIT
    if units == "imperial":
        return FAHRENHEIT_DISPLAY_UNIT
    return KELVIN_DISPLAY_UNIT


def get_wind_speed_unit(units: str) -> str:
    """Get wind speed unit: "mph" for imperial, "m/s" otherwise."""
    return MILES_PER_HOUR_UNIT if units == "imperial" else METERS_PER_SECOND_UNIT


# ============================================================================
# NORMALIZATION
# ============================================================================


def _block(source: Dict[str, Any], key: str, path: str) -> Dict[str, Any]:
    """Get a nested object from the payload, treating absent/null as empty."""
    value = source.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"Expected object for '{path}', got {type(value).__name__}")
    return value


def _number(source: Dict[str, Any], key: str, path: str, missing: List[str]) -> Any:
    """Get a numeric field, substituting 0 when it is absent or null."""
    value = source.get(key)
    if value is None:
        missing.append(path)
        return 0
    return value


def normalize_weather_payload(
    payload: Any,
    lat: float,
    lon: float,
    date: str,
    units: str
) -> WeatherData:
    """Map an OpenWeather day-summary payload onto the canonical WeatherData shape.

    Every sub-block is always populated: missing numeric fields become 0 and a
    missing timezone becomes "+00:00". A reported zero and a missing reading
    therefore look the same downstream; the defaulted paths are logged.

    Args:
        payload: Decoded JSON body of a successful response
        lat: Requested latitude
        lon: Requested longitude
        date: Requested date (YYYY-MM-DD)
        units: Requested unit system

    Returns:
        WeatherData with every sub-block present

    Raises:
        TypeError: If the payload or one of its blocks is not a JSON object
        pydantic.ValidationError: If a reading is not numeric
    """
    if not isinstance(payload, dict):
        raise TypeError(f"Expected JSON object, got {type(payload).__name__}")

    temp_unit = get_temperature_unit(units)
    speed_unit = get_wind_speed_unit(units)
    missing: List[str] = []

    temperature = _block(payload, "temperature", "temperature")
    humidity = _block(payload, "humidity", "humidity")
    pressure = _block(payload, "pressure", "pressure")
    cloud_cover = _block(payload, "cloud_cover", "cloud_cover")
    precipitation = _block(payload, "precipitation", "precipitation")
    wind_max = _block(_block(payload, "wind", "wind"), "max", "wind.max")

    timezone = payload.get("timezone")
    if not timezone:
        missing.append("timezone")
        timezone = DEFAULT_TIMEZONE

    data = WeatherData(
        location=Location(latitude=lat, longitude=lon, timezone=str(timezone)),
        date=date,
        units=units,
        temperature=Temperature(**{
            point: Reading(
                value=_number(temperature, point, f"temperature.{point}", missing),
                unit=temp_unit,
            )
            for point in TEMPERATURE_POINTS
        }),
        humidity=AfternoonReading(
            afternoon=_number(humidity, "afternoon", "humidity.afternoon", missing),
            unit="%",
        ),
        pressure=AfternoonReading(
            afternoon=_number(pressure, "afternoon", "pressure.afternoon", missing),
            unit="hPa",
        ),
        cloud_cover=AfternoonReading(
            afternoon=_number(cloud_cover, "afternoon", "cloud_cover.afternoon", missing),
            unit="%",
        ),
        precipitation=Precipitation(
            total=_number(precipitation, "total", "precipitation.total", missing),
            unit="mm",
        ),
        wind=Wind(
            max=WindReading(
                speed=_number(wind_max, "speed", "wind.max.speed", missing),
                direction=_number(wind_max, "direction", "wind.max.direction", missing),
                speed_unit=speed_unit,
                direction_unit="degrees",
            )
        ),
    )

    if missing:
        logger.debug(f"Provider payload missing fields, defaulted: {', '.join(missing)}")

    return data


# ============================================================================
# CLIENT
# ============================================================================


class WeatherClient:
    """Client for the OpenWeather One Call day-summary API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = API_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Optional[WeatherSettings] = None,
    ):
        """
        Initialize the weather client.

        Args:
            api_key: OpenWeather API key. If None, read from WEATHER_API_KEY.
            base_url: Day-summary endpoint. If None, read from WEATHER_BASE_URL.
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
            settings: Preloaded settings; loaded from the environment if omitted
        """
        if api_key is None or base_url is None:
            settings = settings or WeatherSettings()
            api_key = settings.weather_api_key if api_key is None else api_key
            base_url = settings.weather_base_url if base_url is None else base_url

        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

        logger.info(f"Initialized weather client for {self.base_url}")

    async def fetch_weather(
        self,
        latitude: float,
        longitude: float,
        date: str,
        units: str = "metric"
    ) -> WeatherResult:
        """Get weather data for a specific location and date.

        Args:
            latitude: Latitude coordinate (-90 to 90)
            longitude: Longitude coordinate (-180 to 180)
            date: Date in YYYY-MM-DD format
            units: "metric", "imperial" or "kelvin"

        Returns:
            WeatherResult - OK with normalized data, or ERROR with a message
        """
        if not self.api_key:
            logger.error("Weather API key not configured; refusing to call provider")
            return WeatherResult.failure(
                MISSING_API_KEY_MESSAGE,
                ERROR_CONFIGURATION,
                ERROR_TYPE_CONFIGURATION,
            )

        try:
            error = validate_coordinates_and_date(latitude, longitude, date)
            if error:
                logger.warning(f"Weather client rejected input: {error}")
                return WeatherResult.failure(error, ERROR_VALIDATION_FAILED, ERROR_TYPE_VALIDATION)

            params = {
                "lat": latitude,
                "lon": longitude,
                "date": date,
                "appid": self.api_key,
                "units": units,
            }

            logger.debug(f"Fetching weather for ({latitude}, {longitude}) on {date} in {units}")

            try:
                response = await safe_http_get(
                    self.base_url,
                    params=params,
                    timeout=self.timeout,
                    transport=self.transport,
                )
            except httpx.HTTPStatusError as e:
                return self._provider_error(e.response)
            except httpx.TimeoutException as e:
                logger.error(f"Weather fetch timeout for ({latitude}, {longitude}): {e!r}")
                return self._transport_error(e, ERROR_TIMEOUT)
            except httpx.RequestError as e:
                logger.error(f"Weather fetch failed for ({latitude}, {longitude}): {e!r}")
                return self._transport_error(e, ERROR_NETWORK_ERROR)

            try:
                data = normalize_weather_payload(response.json(), latitude, longitude, date, units)
            except Exception as e:
                logger.error(f"Error formatting weather data: {e}")
                return WeatherResult.failure(
                    f"Error formatting weather data: {e}",
                    ERROR_NORMALIZATION,
                    ERROR_TYPE_NORMALIZATION,
                )

            logger.info(f"Fetched weather for ({latitude}, {longitude}) on {date}")
            return WeatherResult.success(data)

        except Exception as e:
            logger.error(f"Unexpected error fetching weather: {e}", exc_info=True)
            return WeatherResult.failure(
                str(e) or "Unknown error",
                ERROR_UNEXPECTED,
                ERROR_TYPE_UNEXPECTED,
            )

    def _provider_error(self, response: httpx.Response) -> WeatherResult:
        """Build an ERROR result for a non-2xx provider response."""
        status_code = response.status_code
        message = get_error_message(response) or f"Request failed with status code {status_code}"

        details: Dict[str, Any] = {"status_code": status_code}
        retry_after = get_retry_after_seconds(response)
        if retry_after is not None:
            details["retry_after_seconds"] = retry_after

        logger.error(f"Weather provider returned {status_code}: {message}")
        return WeatherResult.failure(
            message,
            interpret_http_error(status_code),
            ERROR_TYPE_PROVIDER,
            details,
        )

    def _transport_error(self, error: httpx.RequestError, error_code: str) -> WeatherResult:
        """Build an ERROR result for a call that could not complete."""
        diagnostic = str(error) or type(error).__name__
        return WeatherResult.failure(
            f"Request failed: {diagnostic}",
            error_code,
            ERROR_TYPE_TRANSPORT,
        )
