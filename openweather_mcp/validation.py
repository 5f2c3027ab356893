"""ABOUTME: Validation helpers for weather tool input.

Provides the single source of truth for input error messages. The same checks
back the Pydantic request model and the weather client's defensive re-check, so
error text is identical regardless of which layer rejects a request.

Design:
- Constants for coordinate limits, date pattern and enumerated options
- Standalone validator functions (return tuple[bool, Optional[str]])
- Field validator functions (for @field_validator decorators)
- Helpers for turning a Pydantic ValidationError into a single message
"""

import re
from typing import Any, Optional, Sequence, Tuple

from pydantic import ValidationError


# =============================================================================
# Validation Constants
# =============================================================================

MIN_LATITUDE: int = -90
MAX_LATITUDE: int = 90
MIN_LONGITUDE: int = -180
MAX_LONGITUDE: int = 180

# Textual pattern only, no calendar check ("2024-02-31" passes)
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
DATE_FORMAT_MESSAGE = "Date must be in YYYY-MM-DD format"

VALID_UNITS: Tuple[str, ...] = ("metric", "imperial", "kelvin")
VALID_RESPONSE_FORMATS: Tuple[str, ...] = ("markdown", "json")

# Human-readable names used in messages, keyed by request field
FIELD_LABELS = {
    "latitude": "Latitude",
    "longitude": "Longitude",
    "date": "Date",
    "units": "Units",
    "response_format": "Response format",
}


# =============================================================================
# Standalone Validator Functions
# =============================================================================

def validate_coordinate(
    value: Any,
    min_val: int,
    max_val: int,
    label: str
) -> Tuple[bool, Optional[str]]:
    """Validate a numeric coordinate and return (is_valid, error_message).

    Booleans and numeric strings are rejected; NaN fails the range check.

    Args:
        value: Coordinate to validate
        min_val: Minimum allowed value (inclusive)
        max_val: Maximum allowed value (inclusive)
        label: Name used in error messages (e.g. "Latitude")

    Returns:
        Tuple of (is_valid, error_message)
        - (True, None) if valid
        - (False, error_message) if invalid

    Example:
        is_valid, error = validate_coordinate(95, -90, 90, "Latitude")
        # (False, "Latitude must be between -90 and 90")
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False, f"{label} must be a number"

    if not (min_val <= value <= max_val):
        return False, f"{label} must be between {min_val} and {max_val}"

    return True, None


def validate_latitude(value: Any) -> Tuple[bool, Optional[str]]:
    """Validate latitude is a number in [-90, 90]."""
    return validate_coordinate(value, MIN_LATITUDE, MAX_LATITUDE, "Latitude")


def validate_longitude(value: Any) -> Tuple[bool, Optional[str]]:
    """Validate longitude is a number in [-180, 180]."""
    return validate_coordinate(value, MIN_LONGITUDE, MAX_LONGITUDE, "Longitude")


def validate_date_string(value: Any) -> Tuple[bool, Optional[str]]:
    """Validate date matches YYYY-MM-DD and return (is_valid, error_message).

    Example:
        is_valid, error = validate_date_string("2024-1-1")
        # (False, "Date must be in YYYY-MM-DD format")
    """
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return False, DATE_FORMAT_MESSAGE

    return True, None


def validate_choice(
    value: Any,
    options: Sequence[str],
    label: str
) -> Tuple[bool, Optional[str]]:
    """Validate value is one of the enumerated options.

    Example:
        is_valid, error = validate_choice("celsius", VALID_UNITS, "Units")
        # (False, "Units must be one of: metric, imperial, kelvin")
    """
    if not isinstance(value, str) or value not in options:
        return False, f"{label} must be one of: {', '.join(options)}"

    return True, None


def validate_coordinates_and_date(
    latitude: Any,
    longitude: Any,
    date: Any
) -> Optional[str]:
    """Run the coordinate and date checks in precedence order.

    Returns:
        The first error message, or None if all checks pass
    """
    for is_valid, error in (
        validate_latitude(latitude),
        validate_longitude(longitude),
        validate_date_string(date),
    ):
        if not is_valid:
            return error
    return None


# =============================================================================
# Pydantic Field Validator Functions (for @field_validator decorators)
# =============================================================================

def validate_latitude_field(v: Any) -> float:
    """Pydantic field validator for latitude.

    Usage:
        @field_validator("latitude", mode="before")
        @classmethod
        def check_latitude(cls, v):
            return validate_latitude_field(v)
    """
    is_valid, error = validate_latitude(v)
    if not is_valid:
        raise ValueError(error)
    return v


def validate_longitude_field(v: Any) -> float:
    """Pydantic field validator for longitude."""
    is_valid, error = validate_longitude(v)
    if not is_valid:
        raise ValueError(error)
    return v


def validate_date_field(v: Any) -> str:
    """Pydantic field validator for YYYY-MM-DD date strings."""
    is_valid, error = validate_date_string(v)
    if not is_valid:
        raise ValueError(error)
    return v


def validate_choice_field(v: Any, options: Sequence[str], label: str) -> str:
    """Pydantic field validator for enumerated string options."""
    is_valid, error = validate_choice(v, options, label)
    if not is_valid:
        raise ValueError(error)
    return v


# =============================================================================
# ValidationError Helpers
# =============================================================================

def describe_validation_error(exc: ValidationError) -> Tuple[str, str]:
    """Reduce a Pydantic ValidationError to its first violated constraint.

    Pydantic reports declared fields in declaration order and unknown fields
    after them, which gives the latitude, longitude, date, enums, extras
    precedence.

    Args:
        exc: ValidationError raised while building a request model

    Returns:
        Tuple of (field_name, error_message)
    """
    errors = exc.errors()
    if not errors:
        return "", str(exc)

    first = errors[0]
    loc = first.get("loc") or ()
    field_name = str(loc[0]) if loc else ""
    error_type = first.get("type")

    if error_type == "missing":
        return field_name, f"{field_name} is required"

    if error_type == "extra_forbidden":
        return field_name, f"Unrecognized field: {field_name}"

    # Messages raised from our own validators carry the original ValueError
    ctx_error = (first.get("ctx") or {}).get("error")
    if ctx_error is not None:
        return field_name, str(ctx_error)

    message = first.get("msg", "Invalid value")
    if not field_name:
        return field_name, message

    label = FIELD_LABELS.get(field_name, field_name)
    return field_name, f"{label}: {message}"

