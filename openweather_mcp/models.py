"""ABOUTME: Pydantic models for the weather tool - validated request and canonical result shape.

WeatherRequest is the validated tool input. WeatherData is the canonical,
format-independent weather shape produced by the client and consumed by the
renderers. WeatherResult tags one client call as OK (with data) or ERROR (with
a message).
"""

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .validation import (
    VALID_RESPONSE_FORMATS,
    VALID_UNITS,
    validate_choice_field,
    validate_date_field,
    validate_latitude_field,
    validate_longitude_field,
)

# Upstream readings keep their JSON numeric type (65 stays 65, 7.9 stays 7.9)
Number = Union[int, float]

UnitSystem = Literal["metric", "imperial", "kelvin"]
ResponseFormat = Literal["markdown", "json"]


# ============================================================================
# REQUEST
# ============================================================================

class WeatherRequest(BaseModel):
    """Validated input for the openweather_get_weather tool.

    Immutable once constructed. Unknown fields are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: float = Field(..., description="Latitude coordinate between -90 and 90")
    longitude: float = Field(..., description="Longitude coordinate between -180 and 180")
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    units: UnitSystem = Field(
        default="metric",
        description="Temperature units - 'metric' (Celsius), 'imperial' (Fahrenheit) or 'kelvin'"
    )
    response_format: ResponseFormat = Field(
        default="markdown",
        description="Output format - 'markdown' for human-readable or 'json' for structured data"
    )

    @field_validator("latitude", mode="before")
    @classmethod
    def check_latitude(cls, v: Any) -> Any:
        return validate_latitude_field(v)

    @field_validator("longitude", mode="before")
    @classmethod
    def check_longitude(cls, v: Any) -> Any:
        return validate_longitude_field(v)

    @field_validator("date", mode="before")
    @classmethod
    def check_date(cls, v: Any) -> Any:
        return validate_date_field(v)

    @field_validator("units", mode="before")
    @classmethod
    def check_units(cls, v: Any) -> Any:
        return validate_choice_field(v, VALID_UNITS, "Units")

    @field_validator("response_format", mode="before")
    @classmethod
    def check_response_format(cls, v: Any) -> Any:
        return validate_choice_field(v, VALID_RESPONSE_FORMATS, "Response format")


# ============================================================================
# CANONICAL WEATHER SHAPE
# ============================================================================

class Location(BaseModel):
    latitude: float
    longitude: float
    timezone: str


class Reading(BaseModel):
    """A single value with its unit label."""

    value: Number
    unit: str


class Temperature(BaseModel):
    min: Reading
    max: Reading
    morning: Reading
    afternoon: Reading
    evening: Reading
    night: Reading


class AfternoonReading(BaseModel):
    """Afternoon-only reading (humidity, pressure, cloud cover)."""

    afternoon: Number
    unit: str


class Precipitation(BaseModel):
    total: Number
    unit: str = "mm"


class WindReading(BaseModel):
    speed: Number
    direction: Number
    speed_unit: str
    direction_unit: str = "degrees"


class Wind(BaseModel):
    max: WindReading


class WeatherData(BaseModel):
    """Canonical weather data for one location and date.

    Sub-blocks are optional so renderers can cope with their absence, but the
    client always fills every one of them.
    """

    location: Location
    date: str
    units: str
    temperature: Optional[Temperature] = None
    humidity: Optional[AfternoonReading] = None
    pressure: Optional[AfternoonReading] = None
    cloud_cover: Optional[AfternoonReading] = None
    precipitation: Optional[Precipitation] = None
    wind: Optional[Wind] = None


class WeatherResult(BaseModel):
    """Outcome of one weather client call: OK with data, or ERROR with a message."""

    status: Literal["OK", "ERROR"]
    data: Optional[WeatherData] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    error_type: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "OK"

    @classmethod
    def success(cls, data: WeatherData) -> "WeatherResult":
        return cls(status="OK", data=data)

    @classmethod
    def failure(
        cls,
        error_message: str,
        error_code: str,
        error_type: str = "error",
        details: Optional[Dict[str, Any]] = None
    ) -> "WeatherResult":
        return cls(
            status="ERROR",
            error_message=error_message,
            error_code=error_code,
            error_type=error_type,
            details=details or {},
        )
