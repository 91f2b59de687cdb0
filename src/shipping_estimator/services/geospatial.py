"""Geospatial helper functions."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real

from ..errors import InvalidCoordinateError
from ..models.domain import Location

EARTH_RADIUS_KM = 6371.0

_LIMITS = {"latitude": 90.0, "longitude": 180.0}


def _check_coordinate(field: str, point: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidCoordinateError(field, point, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidCoordinateError(field, point, value, "must be finite")
    limit = _LIMITS[field]
    if value < -limit or value > limit:
        raise InvalidCoordinateError(field, point, value, f"must be between {-limit:g} and {limit:g} degrees")


def validate_location(location: Location, point: str = "point") -> Location:
    """Raise InvalidCoordinateError unless both coordinates are finite and in range."""

    _check_coordinate("latitude", point, location.latitude)
    _check_coordinate("longitude", point, location.longitude)
    return location


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Location, b: Location) -> float:
    """Great-circle distance in kilometres between two validated locations."""

    validate_location(a, "a")
    validate_location(b, "b")
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def round_to(value: float, digits: int = 2) -> float:
    """Round half away from zero on the shortest decimal form of ``value``.

    ``round()`` rounds half to even on the binary value, so ``round(2.675, 2)``
    gives 2.67; monetary amounts here follow the printed value instead (2.68).
    """

    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def distance_km_rounded(a: Location, b: Location, digits: int = 2) -> float:
    return round_to(distance_km(a, b), digits)
