"""Domain models for marketplace parties, warehouses and rate configuration."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Location:
    latitude: float
    longitude: float


@dataclass(slots=True)
class Seller:
    id: str
    name: str
    location: Location


@dataclass(slots=True)
class Customer:
    """A buyer (e.g. a kirana store) receiving shipments."""

    id: str
    name: str
    location: Location


@dataclass(slots=True)
class Warehouse:
    """A fulfilment warehouse; only active ones are considered for routing."""

    id: str
    name: str
    location: Location
    is_active: bool = True
    city: Optional[str] = None


@dataclass(slots=True)
class Product:
    id: str
    weight_kg: float
    name: Optional[str] = None
    seller_id: Optional[str] = None


@dataclass(slots=True)
class DeliverySpeedConfig:
    """Charges attached to a delivery speed ("standard" or "express")."""

    speed_type: str
    base_charge: float
    extra_charge_per_kg: float = 0.0
