"""ABOUTME: Renderers turning canonical WeatherData into JSON or markdown text.

Pure functions: no I/O, no network state, input is never mutated. Markdown comes
in two profiles - "plain" and "decorated" (emoji title and section headings).
"""

import json
from typing import Callable, List, Literal, Optional, Tuple

from .models import WeatherData

MarkdownStyle = Literal["plain", "decorated"]

# Emoji used by the decorated markdown profile
EMOJI_TITLE = "🌤️"
EMOJI_TEMPERATURE = "🌡️"
EMOJI_HUMIDITY = "💧"
EMOJI_PRESSURE = "🧭"
EMOJI_CLOUD_COVER = "☁️"
EMOJI_PRECIPITATION = "🌧️"
EMOJI_WIND = "💨"

# Units written directly against the value ("7.9°C", "82%"); others get a space
ATTACHED_UNITS = ("°C", "°F", "K", "%")


def _with_unit(value, unit: str) -> str:
    if unit in ATTACHED_UNITS:
        return f"{value}{unit}"
    return f"{value} {unit}"


def _heading(title: str, emoji: str, style: MarkdownStyle) -> str:
    if style == "decorated":
        return f"{emoji} {title}"
    return title


# ============================================================================
# SECTION BUILDERS
# ============================================================================
# Each returns the bullet lines for one section, or None when the block is absent.


def _temperature_lines(data: WeatherData) -> Optional[List[str]]:
    t = data.temperature
    if t is None:
        return None
    return [
        f"Min: {_with_unit(t.min.value, t.min.unit)}",
        f"Max: {_with_unit(t.max.value, t.max.unit)}",
        f"Morning: {_with_unit(t.morning.value, t.morning.unit)}",
        f"Afternoon: {_with_unit(t.afternoon.value, t.afternoon.unit)}",
        f"Evening: {_with_unit(t.evening.value, t.evening.unit)}",
        f"Night: {_with_unit(t.night.value, t.night.unit)}",
    ]


def _humidity_lines(data: WeatherData) -> Optional[List[str]]:
    if data.humidity is None:
        return None
    return [f"Afternoon: {_with_unit(data.humidity.afternoon, data.humidity.unit)}"]


def _pressure_lines(data: WeatherData) -> Optional[List[str]]:
    if data.pressure is None:
        return None
    return [f"Afternoon: {_with_unit(data.pressure.afternoon, data.pressure.unit)}"]


def _cloud_cover_lines(data: WeatherData) -> Optional[List[str]]:
    if data.cloud_cover is None:
        return None
    return [f"Afternoon: {_with_unit(data.cloud_cover.afternoon, data.cloud_cover.unit)}"]


def _precipitation_lines(data: WeatherData) -> Optional[List[str]]:
    if data.precipitation is None:
        return None
    return [f"Total: {_with_unit(data.precipitation.total, data.precipitation.unit)}"]


def _wind_lines(data: WeatherData) -> Optional[List[str]]:
    if data.wind is None:
        return None
    w = data.wind.max
    return [
        f"Max Speed: {_with_unit(w.speed, w.speed_unit)}",
        f"Direction: {_with_unit(w.direction, w.direction_unit)}",
    ]


# Fixed section order
SECTIONS: Tuple[Tuple[str, str, Callable[[WeatherData], Optional[List[str]]]], ...] = (
    ("Temperature", EMOJI_TEMPERATURE, _temperature_lines),
    ("Humidity", EMOJI_HUMIDITY, _humidity_lines),
    ("Pressure", EMOJI_PRESSURE, _pressure_lines),
    ("Cloud Cover", EMOJI_CLOUD_COVER, _cloud_cover_lines),
    ("Precipitation", EMOJI_PRECIPITATION, _precipitation_lines),
    ("Wind", EMOJI_WIND, _wind_lines),
)


# ============================================================================
# RENDERERS
# ============================================================================


def format_weather_markdown(data: WeatherData, style: MarkdownStyle = "plain") -> str:
    """Format weather data as a markdown document for human-readable output.

    Layout: title, location/date/timezone/units header, then one section per
    present sub-block in the order Temperature, Humidity, Pressure, Cloud Cover,
    Precipitation, Wind. Absent sub-blocks are left out entirely.

    Args:
        data: Canonical weather data
        style: "plain" or "decorated" (emoji title and headings)

    Returns:
        Markdown text
    """
    location = data.location
    lines = [
        f"# {_heading('Weather Data', EMOJI_TITLE, style)}",
        "",
        f"**Location**: {location.latitude}, {location.longitude}",
        f"**Date**: {data.date}",
        f"**Timezone**: {location.timezone}",
        f"**Units**: {data.units}",
    ]

    for title, emoji, build in SECTIONS:
        section = build(data)
        if section is None:
            continue
        lines.append("")
        lines.append(f"## {_heading(title, emoji, style)}")
        lines.extend(f"- {line}" for line in section)

    return "\n".join(lines) + "\n"


def format_weather_json(data: WeatherData) -> str:
    """Format weather data as JSON for structured output.

    Keys follow model declaration order, numbers stay numbers, and absent
    sub-blocks are dropped, so identical data always serializes identically.
    """
    return json.dumps(data.model_dump(exclude_none=True), indent=2, ensure_ascii=False)


def render_weather(
    data: WeatherData,
    response_format: str = "markdown",
    style: MarkdownStyle = "plain"
) -> str:
    """Dispatch to the JSON or markdown renderer."""
    if response_format == "json":
        return format_weather_json(data)
    return format_weather_markdown(data, style)
