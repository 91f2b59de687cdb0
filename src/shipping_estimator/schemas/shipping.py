"""Pydantic request/response models for shipping endpoints."""

from __future__ import annotations

import re
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..services.cache import CacheStats
from ..services.shipping.models import (
    ChargeBreakdown,
    CompleteShippingResult,
    NearestWarehouseResult,
    ShippingChargeResult,
)
from ..services.shipping.transport import TransportBand

UUID_V4_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

DeliverySpeed = Literal["standard", "express"]


def _require_uuid(value: str, field: str) -> str:
    if not value:
        raise ValueError(f"{field} is required")
    if not isinstance(value, str) or not UUID_V4_PATTERN.match(value):
        raise ValueError(f"{field} must be a valid UUID")
    return value


class NearestWarehouseRequest(BaseModel):
    sellerId: str = Field(..., description="Seller whose nearest active warehouse is requested.")

    @field_validator("sellerId")
    @classmethod
    def validate_seller_id(cls, value: str) -> str:
        return _require_uuid(value, "sellerId")


class _ChargeOptions(BaseModel):
    customerId: str
    deliverySpeed: DeliverySpeed = Field(default="standard", description="standard or express.")
    productId: Optional[str] = Field(
        default=None,
        description="Product whose weight is shipped; 1 kg is assumed when omitted.",
    )

    @field_validator("customerId")
    @classmethod
    def validate_customer_id(cls, value: str) -> str:
        return _require_uuid(value, "customerId")

    @field_validator("productId", mode="before")
    @classmethod
    def validate_product_id(cls, value: Optional[str]) -> Optional[str]:
        if value is None or value == "":
            return None
        return _require_uuid(value, "productId")


class ShippingChargeRequest(_ChargeOptions):
    warehouseId: str

    @field_validator("warehouseId")
    @classmethod
    def validate_warehouse_id(cls, value: str) -> str:
        return _require_uuid(value, "warehouseId")


class CalculateShippingRequest(_ChargeOptions):
    sellerId: str

    @field_validator("sellerId")
    @classmethod
    def validate_seller_id(cls, value: str) -> str:
        return _require_uuid(value, "sellerId")


class WarehouseLocationModel(BaseModel):
    lat: float
    long: float


class BreakdownModel(BaseModel):
    baseCharge: float
    transportCharge: float
    expressCharge: float

    @classmethod
    def from_breakdown(cls, breakdown: ChargeBreakdown) -> "BreakdownModel":
        return cls(
            baseCharge=breakdown.base_charge,
            transportCharge=breakdown.transport_charge,
            expressCharge=breakdown.express_charge,
        )


class NearestWarehouseModel(BaseModel):
    warehouseId: str
    warehouseLocation: WarehouseLocationModel
    warehouseName: str


class NearestWarehouseResponse(NearestWarehouseModel):
    distance_km: float

    @classmethod
    def from_result(cls, result: NearestWarehouseResult) -> "NearestWarehouseResponse":
        return cls(
            warehouseId=result.warehouse_id,
            warehouseLocation=WarehouseLocationModel(
                lat=result.warehouse_location.latitude,
                long=result.warehouse_location.longitude,
            ),
            warehouseName=result.warehouse_name,
            distance_km=result.distance_km,
        )


class ShippingChargeResponse(BaseModel):
    shippingCharge: float
    transportMode: str
    distance_km: float
    weight_kg: float
    breakdown: BreakdownModel

    @classmethod
    def from_result(cls, result: ShippingChargeResult) -> "ShippingChargeResponse":
        return cls(
            shippingCharge=result.shipping_charge,
            transportMode=result.transport_mode,
            distance_km=result.distance_km,
            weight_kg=result.weight_kg,
            breakdown=BreakdownModel.from_breakdown(result.breakdown),
        )


class CompleteShippingResponse(BaseModel):
    shippingCharge: float
    nearestWarehouse: NearestWarehouseModel
    transportMode: str
    distance_km: float
    weight_kg: float
    breakdown: BreakdownModel

    @classmethod
    def from_result(cls, result: CompleteShippingResult) -> "CompleteShippingResponse":
        warehouse = result.nearest_warehouse
        return cls(
            shippingCharge=result.shipping_charge,
            nearestWarehouse=NearestWarehouseModel(
                warehouseId=warehouse.warehouse_id,
                warehouseLocation=WarehouseLocationModel(
                    lat=warehouse.warehouse_location.latitude,
                    long=warehouse.warehouse_location.longitude,
                ),
                warehouseName=warehouse.warehouse_name,
            ),
            transportMode=result.transport_mode,
            distance_km=result.distance_km,
            weight_kg=result.weight_kg,
            breakdown=BreakdownModel.from_breakdown(result.breakdown),
        )


class TransportBandModel(BaseModel):
    mode: str
    minKm: float
    maxKm: Optional[float] = None
    ratePerKmPerKg: float

    @classmethod
    def from_band(cls, band: TransportBand) -> "TransportBandModel":
        return cls(
            mode=band.mode,
            minKm=band.min_km,
            maxKm=band.max_km,
            ratePerKmPerKg=band.rate_per_km_per_kg,
        )


class RatesResponse(BaseModel):
    bands: list[TransportBandModel]
    defaultWeightKg: float


class CacheStatsModel(BaseModel):
    hits: int
    misses: int
    size: int
    hitRate: float

    @classmethod
    def from_stats(cls, stats: CacheStats) -> "CacheStatsModel":
        return cls(hits=stats.hits, misses=stats.misses, size=stats.size, hitRate=stats.hit_rate)
