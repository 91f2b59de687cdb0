"""Conversion of raw table rows (database or seed file) into domain models."""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from ..models.domain import Customer, DeliverySpeedConfig, Location, Product, Seller, Warehouse


def _coerce_float(value: Any) -> float:
    """Parse numbers that may arrive as strings (Postgres DECIMAL columns do).

    Unparseable values become NaN so they fail coordinate validation downstream
    instead of being silently defaulted.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace(",", "").strip())
    except ValueError:
        return math.nan


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _location(row: Mapping[str, Any]) -> Location:
    return Location(latitude=_coerce_float(row.get("latitude")), longitude=_coerce_float(row.get("longitude")))


def seller_from_row(row: Mapping[str, Any]) -> Seller:
    return Seller(id=str(row["id"]), name=str(row.get("name") or ""), location=_location(row))


def customer_from_row(row: Mapping[str, Any]) -> Customer:
    return Customer(id=str(row["id"]), name=str(row.get("name") or ""), location=_location(row))


def warehouse_from_row(row: Mapping[str, Any]) -> Warehouse:
    return Warehouse(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        location=_location(row),
        is_active=bool(row.get("is_active", True)),
        city=_optional_str(row.get("city")),
    )


def product_from_row(row: Mapping[str, Any]) -> Product:
    return Product(
        id=str(row["id"]),
        weight_kg=_coerce_float(row.get("weight_kg")),
        name=_optional_str(row.get("name")),
        seller_id=_optional_str(row.get("seller_id")),
    )


def delivery_speed_from_row(row: Mapping[str, Any]) -> DeliverySpeedConfig:
    return DeliverySpeedConfig(
        speed_type=str(row["speed_type"]),
        base_charge=_coerce_float(row.get("base_charge")),
        extra_charge_per_kg=_coerce_float(row.get("extra_charge_per_kg") or 0),
    )
