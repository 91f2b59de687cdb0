"""Shipping pricing services."""

from .models import (
    ChargeBreakdown,
    CompleteShippingResult,
    NearestWarehouseResult,
    Outcome,
    PriceQuote,
    ShippingChargeResult,
)
from .pricing import PricingEngine
from .service import ShippingService
from .transport import DEFAULT_BANDS, TransportBand, TransportRate, TransportRateSelector

__all__ = [
    "ChargeBreakdown",
    "CompleteShippingResult",
    "DEFAULT_BANDS",
    "NearestWarehouseResult",
    "Outcome",
    "PriceQuote",
    "PricingEngine",
    "ShippingChargeResult",
    "ShippingService",
    "TransportBand",
    "TransportRate",
    "TransportRateSelector",
]
