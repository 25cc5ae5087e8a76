"""
Input validation and sanitization utilities.
"""

from typing import Optional, Tuple
from pydantic import ValidationError
from loguru import logger

from ..schemas.rescue_data import UserLocation


def sanitize_string(value: str, max_length: int = 1000) -> str:
    """
    Sanitize string input.

    Args:
        value: Input string
        max_length: Maximum allowed length

    Returns:
        Sanitized string
    """
    if value is None:
        return ""

    if not isinstance(value, str):
        return str(value)

    # Remove null bytes
    value = value.replace("\x00", "")

    # Truncate to max length
    value = value[:max_length]

    # Strip leading/trailing whitespace
    value = value.strip()

    return value


def validate_coordinates(latitude: Optional[float], longitude: Optional[float]) -> Tuple[bool, Optional[str]]:
    """
    Validate a latitude/longitude pair.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if latitude is None or longitude is None:
        return False, "latitude and longitude are required"

    if not -90 <= latitude <= 90:
        return False, "latitude must be between -90 and 90"

    if not -180 <= longitude <= 180:
        return False, "longitude must be between -180 and 180"

    return True, None


def parse_user_location(
    latitude: Optional[float],
    longitude: Optional[float]
) -> Optional[UserLocation]:
    """
    Build a UserLocation from optional query values.

    A missing or invalid position means "no distance computation", so this
    never raises.
    """
    if latitude is None or longitude is None:
        return None

    try:
        return UserLocation(latitude=latitude, longitude=longitude)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid user location ({latitude}, {longitude}): {e}")
        return None


def require_coordinates(latitude: Optional[float], longitude: Optional[float]) -> UserLocation:
    """
    Build a UserLocation for lookups where a position is mandatory.

    Raises:
        ValueError: If either coordinate is missing or out of range
    """
    is_valid, error_msg = validate_coordinates(latitude, longitude)
    if not is_valid:
        raise ValueError(error_msg)
    return UserLocation(latitude=latitude, longitude=longitude)


def validate_positive(value: int, name: str) -> int:
    """
    Check that a limit, page or radius is positive.

    Raises:
        ValueError: If the value is not positive
    """
    if value is None or value <= 0:
        raise ValueError(f"{name} must be a positive number")
    return value
