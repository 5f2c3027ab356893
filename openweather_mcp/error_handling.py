"""ABOUTME: Shared error handling utilities for the weather MCP tool.

Provides standardized error codes, error types, HTTP status code helpers and
error result creation functions so every failure mode reaches the caller in the
same envelope shape.
"""

from typing import Optional, Dict, Any
from mcp.types import TextContent, CallToolResult


# =============================================================================
# Error Code Constants
# =============================================================================

# Input validation errors
ERROR_VALIDATION_FAILED: str = "validation_failed"

# Configuration errors
ERROR_CONFIGURATION: str = "configuration_error"

# Provider (non-2xx) errors
ERROR_PROVIDER: str = "provider_error"
ERROR_RATE_LIMITED: str = "rate_limited"
ERROR_UNAUTHORIZED: str = "unauthorized"
ERROR_NOT_FOUND: str = "not_found"
ERROR_FETCH_FAILED: str = "fetch_failed"

# Transport errors
ERROR_TIMEOUT: str = "timeout"
ERROR_NETWORK_ERROR: str = "network_error"

# Processing errors
ERROR_NORMALIZATION: str = "normalization_error"

# General errors
ERROR_UNEXPECTED: str = "unexpected_error"


# =============================================================================
# Error Type Constants (error category reported in metadata)
# =============================================================================

ERROR_TYPE_VALIDATION: str = "validation_error"
ERROR_TYPE_CONFIGURATION: str = "configuration_error"
ERROR_TYPE_PROVIDER: str = "provider_error"
ERROR_TYPE_TRANSPORT: str = "transport_error"
ERROR_TYPE_NORMALIZATION: str = "normalization_error"
ERROR_TYPE_UNEXPECTED: str = "unexpected_error"

# Prefix for error text in the decorated output profile
DECORATED_ERROR_PREFIX = "❌ "


# =============================================================================
# HTTP Status Code Helpers
# =============================================================================

class HTTPStatusCodes:
    """Helper methods for HTTP status code checks.

    Provides semantic methods to check HTTP status codes instead of
    hardcoding numeric values throughout the codebase.
    """

    @staticmethod
    def is_rate_limit(status_code: int) -> bool:
        """Check if status code is 429 (Too Many Requests)."""
        return status_code == 429

    @staticmethod
    def is_auth_error(status_code: int) -> bool:
        """Check if status code is 401 (Unauthorized) or 403 (Forbidden).

        OpenWeather answers 401 for a missing or invalid appid.
        """
        return status_code in (401, 403)

    @staticmethod
    def is_not_found(status_code: int) -> bool:
        """Check if status code is 404 (Not Found)."""
        return status_code == 404

    @staticmethod
    def is_server_error(status_code: int) -> bool:
        """Check if status code is in range 500-599."""
        return 500 <= status_code < 600


# =============================================================================
# Main Error Creation Function
# =============================================================================

def create_error_result(
    error_message: str,
    error_code: str,
    error_type: str = "error",
    additional_metadata: Optional[Dict[str, Any]] = None,
    decorated: bool = False
) -> CallToolResult:
    """Create standardized error CallToolResult.

    This is the main error creation function used by the weather tool.
    Use the convenience wrapper functions below for common error types.

    Args:
        error_message: Human-readable error message for users and LLMs
        error_code: Machine-readable error code (use ERROR_* constants)
        error_type: Error category/type (e.g., "validation_error", "provider_error")
        additional_metadata: Additional context for debugging (optional)
        decorated: Prefix the text with an emoji marker (decorated profile)

    Returns:
        CallToolResult with standardized error format

    Example:
        result = create_error_result(
            error_message="rate limited",
            error_code=ERROR_RATE_LIMITED,
            error_type=ERROR_TYPE_PROVIDER,
            additional_metadata={"status_code": 429}
        )
    """
    metadata = {
        "error_type": error_type,
        "error_code": error_code,
    }

    if additional_metadata:
        metadata.update(additional_metadata)

    text = f"Error: {error_message}"
    if decorated:
        text = DECORATED_ERROR_PREFIX + text

    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=True,
        metadata=metadata
    )


# =============================================================================
# Convenience Wrapper Functions
# =============================================================================

def create_validation_error(
    field_name: str,
    error_message: str,
    field_value: Any = None,
    additional_metadata: Optional[Dict[str, Any]] = None,
    decorated: bool = False
) -> CallToolResult:
    """Create a validation error for invalid input fields.

    The message is used verbatim so it matches the client's defensive check
    word for word; the offending field goes into metadata.

    Args:
        field_name: Name of the field that failed validation
        error_message: Human-readable description of the validation failure
        field_value: The invalid value that was provided (optional, for debugging)
        additional_metadata: Extra metadata to merge in (optional)
        decorated: Prefix the text with an emoji marker (decorated profile)

    Returns:
        CallToolResult with validation error

    Example:
        return create_validation_error(
            field_name="latitude",
            error_message="Latitude must be between -90 and 90",
            field_value=95
        )
    """
    metadata: Dict[str, Any] = {"field_name": field_name}
    if field_value is not None:
        metadata["field_value"] = field_value
    if additional_metadata:
        metadata.update(additional_metadata)

    return create_error_result(
        error_message=error_message,
        error_code=ERROR_VALIDATION_FAILED,
        error_type=ERROR_TYPE_VALIDATION,
        additional_metadata=metadata,
        decorated=decorated
    )


def create_unexpected_error(
    error: Exception,
    additional_metadata: Optional[Dict[str, Any]] = None,
    decorated: bool = False
) -> CallToolResult:
    """Create an error result for an exception caught at the handler boundary.

    Args:
        error: The exception that escaped the pipeline
        additional_metadata: Extra metadata to merge in (optional)
        decorated: Prefix the text with an emoji marker (decorated profile)

    Returns:
        CallToolResult with unexpected error
    """
    metadata: Dict[str, Any] = {"exception_type": type(error).__name__}
    if additional_metadata:
        metadata.update(additional_metadata)

    return create_error_result(
        error_message=str(error) or "Unknown error",
        error_code=ERROR_UNEXPECTED,
        error_type=ERROR_TYPE_UNEXPECTED,
        additional_metadata=metadata,
        decorated=decorated
    )
