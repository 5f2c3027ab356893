"""ABOUTME: OpenWeather MCP Server - historical/current daily weather via the OpenWeather API.

Registers the openweather_get_weather tool on a FastMCP server. The tool takes
coordinates, a date, units and a response format, and returns either a markdown
document or a JSON object describing that day's weather.
"""

from typing import Any, Dict, Optional

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, CallToolResult, ErrorData, Tool, ToolAnnotations

from .handler import TOOL_NAME, UnknownToolError, WeatherToolHandler
from .mcp_base import MCPServerBase
from .settings import WeatherSettings
from .validation import VALID_RESPONSE_FORMATS, VALID_UNITS
from .weather_client import WeatherClient

SERVER_NAME = "openweather"
TOOL_TITLE = "Get OpenWeather Data"

TOOL_DESCRIPTION = """Get historical or current weather data for a specific location using OpenWeather API.

This tool retrieves comprehensive weather information including temperature, humidity, pressure,
wind, precipitation, and cloud cover for any geographic coordinates on a specified date.

Args:
  - latitude (number): Latitude coordinate between -90 and 90 (e.g., 40.7128 for New York City)
  - longitude (number): Longitude coordinate between -180 and 180 (e.g., -74.0060 for New York City)
  - date (string): Date in YYYY-MM-DD format (e.g., "2024-01-15")
  - units (string): "metric" (Celsius), "imperial" (Fahrenheit), or "kelvin" (default: "metric")
  - response_format (string): "markdown" for human-readable or "json" for structured data (default: "markdown")

Returns:
  For JSON format: an object with location {latitude, longitude, timezone}, date, units,
  temperature {min, max, morning, afternoon, evening, night: {value, unit}},
  humidity/pressure/cloud_cover {afternoon, unit}, precipitation {total, unit},
  and wind {max: {speed, direction, speed_unit, direction_unit}}.

  For Markdown format: a document with a location/date header and one section per measurement.

Examples:
  - "What was the weather in Paris on January 1st, 2024?"
    -> {latitude: 48.8566, longitude: 2.3522, date: "2024-01-01"}
  - "Get temperature data for Tokyo today in Fahrenheit"
    -> {latitude: 35.6762, longitude: 139.6503, date: "<today>", units: "imperial"}
  - "Show me weather data in JSON for analysis" -> {..., response_format: "json"}
  - Don't use for multi-day forecasts; this returns a single day's summary.

Error Handling:
  - "Weather API key not configured" if WEATHER_API_KEY is not set
  - "Latitude must be between -90 and 90" for invalid latitude
  - "Longitude must be between -180 and 180" for invalid longitude
  - "Date must be in YYYY-MM-DD format" for malformed dates
  - The provider's own message (or the HTTP status) for API failures
"""

INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "latitude": {
            "type": "number",
            "minimum": -90,
            "maximum": 90,
            "description": "Latitude coordinate (-90 to 90)",
        },
        "longitude": {
            "type": "number",
            "minimum": -180,
            "maximum": 180,
            "description": "Longitude coordinate (-180 to 180)",
        },
        "date": {
            "type": "string",
            "pattern": "^[0-9]{4}-[0-9]{2}-[0-9]{2}$",
            "description": "Date in YYYY-MM-DD format",
        },
        "units": {
            "type": "string",
            "enum": list(VALID_UNITS),
            "default": "metric",
            "description": "Temperature units",
        },
        "response_format": {
            "type": "string",
            "enum": list(VALID_RESPONSE_FORMATS),
            "default": "markdown",
            "description": "Output format",
        },
    },
    "required": ["latitude", "longitude", "date"],
    "additionalProperties": False,
}

WEATHER_TOOL = Tool(
    name=TOOL_NAME,
    title=TOOL_TITLE,
    description=TOOL_DESCRIPTION,
    inputSchema=INPUT_SCHEMA,
    annotations=ToolAnnotations(
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    ),
)


def create_server(
    settings: Optional[WeatherSettings] = None,
    client: Optional[WeatherClient] = None,
) -> MCPServerBase:
    """Create the MCP server and register the weather tool.

    Arguments are handed to WeatherToolHandler untouched; WeatherRequest is the
    only validator. A call naming any other tool is answered with an
    INVALID_PARAMS protocol error.

    Args:
        settings: Configuration; loaded from the environment if omitted
        client: Weather client; built from settings if omitted

    Returns:
        MCPServerBase with the tool registered; its handler is available as
        ``server.handler``
    """
    settings = settings or WeatherSettings()
    server = MCPServerBase(SERVER_NAME, log_level=settings.log_level)

    client = client or WeatherClient(settings=settings)
    handler = WeatherToolHandler(
        server,
        client,
        markdown_style=settings.weather_markdown_style,
        track_invocations=settings.weather_track_invocations,
    )
    server.handler = handler

    async def dispatch(tool_name: str, arguments: Dict[str, Any]) -> CallToolResult:
        try:
            return await handler.dispatch(tool_name, arguments)
        except UnknownToolError as e:
            raise McpError(ErrorData(code=INVALID_PARAMS, message=str(e))) from e

    server.register_tools([WEATHER_TOOL], dispatch)
    return server
