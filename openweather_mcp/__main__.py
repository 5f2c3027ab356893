"""ABOUTME: Entry point - runs the OpenWeather MCP server (stdio by default)."""

import logging
import sys

from .server import create_server
from .settings import WeatherSettings

logger = logging.getLogger(__name__)


def main() -> None:
    """Load configuration, build the server and run it on the configured transport."""
    settings = WeatherSettings()
    server = create_server(settings)

    if settings.api_key_configured:
        logger.info("Weather API key configured: Yes")
    else:
        logger.warning("WEATHER_API_KEY not set; every tool call will return a configuration error")

    logger.info(f"Starting OpenWeather MCP server ({settings.mcp_transport})...")
    try:
        server.run(transport=settings.mcp_transport)
    except Exception as e:
        logger.error(f"Fatal error running server: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
