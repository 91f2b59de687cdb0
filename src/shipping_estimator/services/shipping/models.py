"""Shipping result models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from ...errors import ErrorKind, ShippingError
from ...models.domain import Location

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ChargeBreakdown:
    base_charge: float
    transport_charge: float
    express_charge: float


@dataclass(frozen=True, slots=True)
class PriceQuote:
    total: float
    transport_mode: str
    breakdown: ChargeBreakdown


@dataclass(frozen=True, slots=True)
class NearestWarehouseResult:
    warehouse_id: str
    warehouse_location: Location
    warehouse_name: str
    distance_km: float


@dataclass(frozen=True, slots=True)
class ShippingChargeResult:
    shipping_charge: float
    transport_mode: str
    distance_km: float
    weight_kg: float
    breakdown: ChargeBreakdown


@dataclass(frozen=True, slots=True)
class CompleteShippingResult:
    """Seller to customer shipment priced from the seller's nearest warehouse."""

    shipping_charge: float
    nearest_warehouse: NearestWarehouseResult
    transport_mode: str
    distance_km: float
    weight_kg: float
    breakdown: ChargeBreakdown


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Either a value or the domain error that prevented computing it."""

    value: Optional[T] = None
    error: Optional[ShippingError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
