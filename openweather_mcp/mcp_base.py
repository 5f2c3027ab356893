"""ABOUTME: Base class for the MCP server with common initialization, logging, and result patterns.

Uses the official MCP SDK (modelcontextprotocol/python-sdk) FastMCP server for
transports, with tools served through the low-level request handlers so their
arguments arrive exactly as the client sent them.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union
from mcp.server.fastmcp import FastMCP
from mcp.types import (
    CallToolRequest,
    CallToolResult,
    ServerResult,
    TextContent,
    Tool,
)

ToolDispatcher = Callable[[str, Dict[str, Any]], Awaitable[CallToolResult]]


def setup_logging(logger_name: str, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Configure logging for an MCP server.

    Logs go to stderr (the logging default), which keeps stdout free for the
    stdio transport.

    Args:
        logger_name: Name of the logger (typically __name__)
        level: Logging level (default: logging.INFO)

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level)
    return logging.getLogger(logger_name)


def _format_fields(fields: Dict[str, Any]) -> str:
    return ", ".join(f"{k}={v}" for k, v in fields.items())


class MCPServerBase:
    """Base class for MCP servers with common patterns.

    Provides:
    - Standard MCP server initialization
    - Tool registration that bypasses FastMCP's signature-derived argument model
    - Success results and tool lifecycle logging
    """

    def __init__(self, server_name: str, log_level: Union[int, str] = logging.INFO):
        """Initialize MCP server base.

        Args:
            server_name: Name of the MCP server (e.g., "openweather")
            log_level: Logging level name or number
        """
        self.server_name = server_name
        self.mcp = FastMCP(server_name)
        self.logger = setup_logging(__name__, log_level)
        self.tools: List[Tool] = []
        self._dispatch: Optional[ToolDispatcher] = None

    def get_mcp(self) -> FastMCP:
        """Get the FastMCP server instance."""
        return self.mcp

    def run(self, transport: str = "stdio") -> None:
        """Run the MCP server.

        Args:
            transport: Transport protocol ("stdio", "streamable-http", "sse")
        """
        self.mcp.run(transport=transport)

    def register_tools(self, tools: List[Tool], dispatch: ToolDispatcher) -> None:
        """Serve tools/list and tools/call from explicit definitions.

        FastMCP's @tool decorator coerces and filters arguments through a model
        built from the function signature before the tool runs. Tools registered
        here receive the raw arguments instead, and any exception dispatch raises
        (McpError in particular) reaches the client as a JSON-RPC error rather
        than an isError result.

        Args:
            tools: Tool definitions advertised by tools/list
            dispatch: Coroutine called with (tool_name, arguments) for every tools/call
        """
        self.tools = list(tools)
        self._dispatch = dispatch

        lowlevel = self.mcp._mcp_server
        lowlevel.list_tools()(self.list_tools)
        lowlevel.request_handlers[CallToolRequest] = self._handle_call_tool_request

    async def list_tools(self) -> List[Tool]:
        return list(self.tools)

    async def call_tool(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
        """Invoke a registered tool the way a tools/call request does."""
        if self._dispatch is None:
            raise RuntimeError(f"No tools registered on {self.server_name}")
        return await self._dispatch(tool_name, arguments if arguments is not None else {})

    async def _handle_call_tool_request(self, request: CallToolRequest) -> ServerResult:
        result = await self.call_tool(request.params.name, request.params.arguments)
        return ServerResult(result)

    def create_success_result(
        self,
        content: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> CallToolResult:
        """Wrap rendered weather text in a single-block CallToolResult."""
        text_content = TextContent(type="text", text=content)
        if metadata:
            return CallToolResult(content=[text_content], metadata=metadata)
        return CallToolResult(content=[text_content])

    def log_tool_start(self, tool_name: str, **params) -> None:
        if params:
            self.logger.info(f"{tool_name} started: {_format_fields(params)}")
        else:
            self.logger.info(f"{tool_name} started")

    def log_tool_complete(self, tool_name: str, **metrics) -> None:
        self.logger.info(f"{tool_name} completed: {_format_fields(metrics)}")

    def log_tool_error(
        self,
        tool_name: str,
        error_code: str,
        error_message: str,
        **context
    ) -> None:
        """Log a failed invocation with its error code and the request it served."""
        suffix = f" ({_format_fields(context)})" if context else ""
        self.logger.error(f"{tool_name} error [{error_code}]: {error_message}{suffix}")
