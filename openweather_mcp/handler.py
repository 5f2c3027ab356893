"""ABOUTME: Tool handler orchestrating validation, the weather client, and rendering.

One pass per invocation: validate -> call provider -> render -> respond. Every
failure comes back as an isError CallToolResult; only an unknown tool name is
raised, since that is a protocol mistake rather than a domain error.
"""

import itertools
import logging
import time
from typing import Any, Dict, Optional

from mcp.types import CallToolResult
from pydantic import ValidationError

from .error_handling import (
    create_error_result,
    create_unexpected_error,
    create_validation_error,
)
from .formatting import MarkdownStyle, render_weather
from .mcp_base import MCPServerBase
from .models import WeatherRequest
from .validation import describe_validation_error
from .weather_client import WeatherClient

logger = logging.getLogger(__name__)

TOOL_NAME = "openweather_get_weather"
LOGGED_ARGUMENTS = ("latitude", "longitude", "date", "units", "response_format")


class UnknownToolError(Exception):
    """Raised when a caller invokes a tool this server does not provide."""

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class InvocationCounter:
    """Monotonic invocation counter with increment-then-read semantics.

    Backed by itertools.count, whose next() is atomic in CPython, so concurrent
    invocations on the event loop never observe the same value.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._last = 0

    def increment(self) -> int:
        value = next(self._counter)
        self._last = value
        return value

    @property
    def value(self) -> int:
        return self._last


class WeatherToolHandler:
    """Handler for the openweather_get_weather tool."""

    def __init__(
        self,
        server: MCPServerBase,
        client: WeatherClient,
        markdown_style: MarkdownStyle = "plain",
        track_invocations: bool = False,
    ):
        """
        Args:
            server: Server base providing result helpers and tool logging
            client: Weather client used for the single outbound call
            markdown_style: "plain" or "decorated" markdown/error text
            track_invocations: Report a running invocation count in metadata
        """
        self.server = server
        self.client = client
        self.markdown_style = markdown_style
        self.counter: Optional[InvocationCounter] = InvocationCounter() if track_invocations else None

    @property
    def decorated(self) -> bool:
        return self.markdown_style == "decorated"

    async def dispatch(self, tool_name: str, arguments: Dict[str, Any]) -> CallToolResult:
        """Route a tool call by name.

        Raises:
            UnknownToolError: If tool_name is not provided by this server
        """
        if tool_name != TOOL_NAME:
            logger.error(f"Rejected call to unknown tool: {tool_name}")
            raise UnknownToolError(tool_name)
        return await self.handle(arguments)

    async def handle(self, arguments: Dict[str, Any]) -> CallToolResult:
        """Run one weather tool invocation.

        Args:
            arguments: Raw tool arguments (latitude, longitude, date, units, response_format)

        Returns:
            CallToolResult with the rendered text, or an isError result
        """
        base_metadata: Dict[str, Any] = {}
        if self.counter is not None:
            base_metadata["invocation_count"] = self.counter.increment()

        start_time = time.monotonic()

        try:
            self.server.log_tool_start(
                TOOL_NAME, **{k: arguments[k] for k in LOGGED_ARGUMENTS if k in arguments}
            )

            try:
                request = WeatherRequest.model_validate(arguments)
            except ValidationError as e:
                field_name, message = describe_validation_error(e)
                logger.warning(f"Validation failed for {field_name or 'request'}: {message}")
                return create_validation_error(
                    field_name=field_name,
                    error_message=message,
                    field_value=arguments.get(field_name) if field_name else None,
                    additional_metadata=base_metadata,
                    decorated=self.decorated,
                )

            result = await self.client.fetch_weather(
                request.latitude,
                request.longitude,
                request.date,
                request.units,
            )

            if not result.ok:
                self.server.log_tool_error(
                    TOOL_NAME,
                    result.error_code,
                    result.error_message,
                    latitude=request.latitude,
                    longitude=request.longitude,
                    date=request.date,
                )
                return create_error_result(
                    error_message=result.error_message,
                    error_code=result.error_code,
                    error_type=result.error_type,
                    additional_metadata={**result.details, **base_metadata},
                    decorated=self.decorated,
                )

            text = render_weather(result.data, request.response_format, self.markdown_style)

            metadata = {
                "location": result.data.location.model_dump(),
                "date": request.date,
                "units": request.units,
                "response_format": request.response_format,
                **base_metadata,
            }

            duration_ms = int((time.monotonic() - start_time) * 1000)
            self.server.log_tool_complete(TOOL_NAME, duration_ms=duration_ms, chars=len(text))
            return self.server.create_success_result(text, metadata)

        except Exception as e:
            logger.error(f"Unexpected error in {TOOL_NAME}: {e}", exc_info=True)
            return create_unexpected_error(e, base_metadata, decorated=self.decorated)
