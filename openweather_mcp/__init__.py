"""ABOUTME: OpenWeather MCP server - weather lookup tool over the Model Context Protocol."""

from .formatting import format_weather_json, format_weather_markdown, render_weather
from .handler import TOOL_NAME, InvocationCounter, UnknownToolError, WeatherToolHandler
from .mcp_base import MCPServerBase
from .models import WeatherData, WeatherRequest, WeatherResult
from .server import create_server
from .settings import WeatherSettings
from .weather_client import WeatherClient, normalize_weather_payload

__all__ = [
    "MCPServerBase",
    "TOOL_NAME",
    "InvocationCounter",
    "UnknownToolError",
    "WeatherClient",
    "WeatherData",
    "WeatherRequest",
    "WeatherResult",
    "WeatherSettings",
    "WeatherToolHandler",
    "create_server",
    "format_weather_json",
    "format_weather_markdown",
    "normalize_weather_payload",
    "render_weather",
]
