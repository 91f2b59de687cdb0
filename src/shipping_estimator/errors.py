"""Domain errors raised by the shipping core and their logging helper."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    INVALID_COORDINATE = "invalid_coordinate"
    NEGATIVE_DISTANCE = "negative_distance"
    NOT_FOUND = "not_found"
    NO_ACTIVE_WAREHOUSES = "no_active_warehouses"
    UNSUPPORTED_LOCATION = "unsupported_location"
    DATABASE = "database"
    CONFIGURATION = "configuration"


class ShippingError(Exception):
    """Base class for every failure the shipping core reports to its callers.

    Args:
        message: Human readable description.
        context: Structured details (ids, offending values) for logs and responses.
    """

    kind: ErrorKind = ErrorKind.CONFIGURATION
    hint: str = "Please review your request and try again."
    is_operational: bool = True

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})


class InvalidCoordinateError(ShippingError):
    """A latitude/longitude is non-numeric, non-finite or out of range."""

    kind = ErrorKind.INVALID_COORDINATE
    hint = "Latitude must be between -90 and 90 and longitude between -180 and 180."

    def __init__(self, field: str, point: str, value: Any, reason: str) -> None:
        super().__init__(
            f"Invalid {field} for {point}: {value!r} ({reason})",
            {"field": field, "point": point, "value": value},
        )
        self.field = field
        self.point = point
        self.value = value


class NegativeDistanceError(ShippingError):
    kind = ErrorKind.NEGATIVE_DISTANCE
    hint = "Distances are produced by the geodistance helper and are never negative."
    is_operational = False

    def __init__(self, distance_km: float) -> None:
        super().__init__(f"Distance cannot be negative: {distance_km}", {"distance_km": distance_km})
        self.distance_km = distance_km


class ResourceNotFoundError(ShippingError):
    kind = ErrorKind.NOT_FOUND
    hint = "Verify that the provided ID exists and is spelled correctly."

    def __init__(self, resource_type: str, resource_id: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            {**(context or {}), "resourceType": resource_type, "resourceId": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class NoActiveWarehousesError(ShippingError):
    kind = ErrorKind.NO_ACTIVE_WAREHOUSES
    hint = "The system has no active warehouses configured. Please contact the administrator."

    def __init__(self, context: dict[str, Any] | None = None) -> None:
        super().__init__("No active warehouses found in the system", context)


class UnsupportedLocationError(ShippingError):
    """Coordinates exist on a stored record but cannot be served."""

    kind = ErrorKind.UNSUPPORTED_LOCATION
    hint = (
        "Verify that latitude is between -90 and 90, and longitude is between -180 and 180. "
        "Ensure the location is within the serviceable area."
    )


class DatabaseConnectionError(ShippingError):
    kind = ErrorKind.DATABASE
    hint = "Database connection issue. Please try again in a few moments."
    is_operational = False

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, {**(context or {}), "category": "database"})


class ConfigurationError(ShippingError):
    kind = ErrorKind.CONFIGURATION
    hint = "System configuration error. Please contact the administrator."
    is_operational = False

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, {**(context or {}), "category": "configuration"})


def log_error(error: BaseException, **context: Any) -> None:
    """Log an error together with its structured context."""
    if isinstance(error, ShippingError):
        logger.error(
            f"[{type(error).__name__}] {error.message}",
            extra={
                "error_kind": error.kind.value,
                "is_operational": error.is_operational,
                "error_context": {**error.context, **context},
            },
        )
    else:
        logger.error(f"[{type(error).__name__}] {error}", extra={"error_context": context}, exc_info=error)
