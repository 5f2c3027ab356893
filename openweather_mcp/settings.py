"""ABOUTME: Process-wide configuration for the OpenWeather MCP server.

Values are read once at startup from the environment (and an optional .env file)
and never mutated afterwards.
"""

from typing import Literal

from pydantic_settings import BaseSettings

DEFAULT_WEATHER_BASE_URL = "https://api.openweathermap.org/data/3.0/onecall/day_summary"


class WeatherSettings(BaseSettings):
    """OpenWeather MCP configuration from environment."""

    weather_api_key: str = ""
    weather_base_url: str = DEFAULT_WEATHER_BASE_URL

    # Deployment profile: emoji-decorated markdown and/or an invocation counter
    weather_markdown_style: Literal["plain", "decorated"] = "plain"
    weather_track_invocations: bool = False

    mcp_transport: Literal["stdio", "streamable-http", "sse"] = "stdio"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.weather_api_key)
