"""Charge composition for a single warehouse to customer shipment."""

from __future__ import annotations

from ...models.domain import DeliverySpeedConfig
from ..geospatial import round_to
from .models import ChargeBreakdown, PriceQuote
from .transport import TransportRateSelector

EXPRESS_SPEED = "express"
MONEY_DIGITS = 2


class PricingEngine:
    """Prices a shipment as base charge + transport charge + express surcharge.

    The transport charge is ``distance * rate * weight`` with the rate taken from
    the band covering ``distance``. The express surcharge applies only to the
    ``express`` speed and is charged per kilogram. The base charge is copied from
    the speed configuration as-is; transport, express and total are each rounded
    to two decimals, the total being computed from the unrounded components.
    """

    def __init__(self, selector: TransportRateSelector | None = None) -> None:
        self.selector = selector or TransportRateSelector()

    def price(self, distance_km: float, weight_kg: float, speed_config: DeliverySpeedConfig) -> PriceQuote:
        if not weight_kg > 0:
            raise ValueError(f"weight_kg must be greater than 0, got {weight_kg}")

        rate = self.selector.select(distance_km)
        base_charge = float(speed_config.base_charge)
        transport_charge = distance_km * rate.rate_per_km_per_kg * weight_kg
        express_charge = (
            float(speed_config.extra_charge_per_kg) * weight_kg
            if speed_config.speed_type == EXPRESS_SPEED
            else 0.0
        )
        total = base_charge + transport_charge + express_charge

        return PriceQuote(
            total=round_to(total, MONEY_DIGITS),
            transport_mode=rate.mode,
            breakdown=ChargeBreakdown(
                base_charge=base_charge,
                transport_charge=round_to(transport_charge, MONEY_DIGITS),
                express_charge=round_to(express_charge, MONEY_DIGITS),
            ),
        )
