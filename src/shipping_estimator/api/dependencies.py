"""Request-scoped helpers shared by the route modules."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ..context import ShippingContext
from ..errors import ErrorKind, ShippingError

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.INVALID_COORDINATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NEGATIVE_DISTANCE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.NO_ACTIVE_WAREHOUSES: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.UNSUPPORTED_LOCATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.DATABASE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _json_safe(value: Any) -> Any:
    # error context can carry NaN/inf coordinates, which strict JSON rejects
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if value is None or isinstance(value, (str, int, float)):
        return value
    return str(value)


def get_context(request: Request) -> ShippingContext:
    return request.app.state.shipping


def error_response(error: ShippingError) -> JSONResponse:
    """Render a domain error as ``{error, message, hint, details, timestamp}``."""
    return JSONResponse(
        status_code=STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        content={
            "error": type(error).__name__,
            "message": error.message,
            "hint": error.hint,
            "details": _json_safe(error.context),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
