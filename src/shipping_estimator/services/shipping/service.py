"""Shipping orchestration: nearest warehouse lookup and charge calculation."""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Optional, TypeVar

from ...config import settings
from ...data.repository import EntityStore
from ...errors import (
    ConfigurationError,
    DatabaseConnectionError,
    InvalidCoordinateError,
    NoActiveWarehousesError,
    ResourceNotFoundError,
    ShippingError,
    UnsupportedLocationError,
    log_error,
)
from ...models.domain import DeliverySpeedConfig, Location, Warehouse
from ..cache import CacheKeys, EphemeralCache
from ..geospatial import distance_km, round_to, validate_location
from .models import (
    CompleteShippingResult,
    NearestWarehouseResult,
    Outcome,
    ShippingChargeResult,
)
from .pricing import PricingEngine
from .transport import TransportRateSelector

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SPEED = "standard"


def _ensure_serviceable(location: Location, entity: str, entity_id: str) -> None:
    try:
        validate_location(location, entity.lower())
    except InvalidCoordinateError as exc:
        raise UnsupportedLocationError(
            f"{entity} {entity_id} has invalid coordinates: {exc.message}",
            {f"{entity.lower()}Id": entity_id, "field": exc.field, "value": exc.value},
        ) from exc


def _ensure_charges_configured(config: DeliverySpeedConfig) -> None:
    for field in ("base_charge", "extra_charge_per_kg"):
        value = getattr(config, field)
        if not math.isfinite(value) or value < 0:
            raise ConfigurationError(
                f"Delivery speed '{config.speed_type}' has an invalid {field}: {value}",
                {"speedType": config.speed_type, "field": field, "value": value},
            )


class ShippingService:
    """Answers the three pricing questions against an entity store.

    Results are cached in the shared ``EphemeralCache`` once fully computed;
    failures are logged where they are detected and never cached.
    """

    def __init__(
        self,
        store: EntityStore,
        cache: EphemeralCache,
        *,
        selector: TransportRateSelector | None = None,
        pricing: PricingEngine | None = None,
        nearest_warehouse_ttl_ms: int | None = None,
        shipping_charge_ttl_ms: int | None = None,
        complete_shipping_ttl_ms: int | None = None,
        default_weight_kg: float | None = None,
        strict_product_lookup: bool | None = None,
    ) -> None:
        self.store = store
        self.cache = cache
        self.selector = selector or (pricing.selector if pricing else TransportRateSelector())
        self.pricing = pricing or PricingEngine(self.selector)
        self.nearest_warehouse_ttl_ms = (
            nearest_warehouse_ttl_ms if nearest_warehouse_ttl_ms is not None else settings.nearest_warehouse_ttl_ms
        )
        self.shipping_charge_ttl_ms = (
            shipping_charge_ttl_ms if shipping_charge_ttl_ms is not None else settings.shipping_charge_ttl_ms
        )
        self.complete_shipping_ttl_ms = (
            complete_shipping_ttl_ms if complete_shipping_ttl_ms is not None else settings.complete_shipping_ttl_ms
        )
        self.default_weight_kg = default_weight_kg if default_weight_kg is not None else settings.default_weight_kg
        self.strict_product_lookup = (
            strict_product_lookup if strict_product_lookup is not None else settings.strict_product_lookup
        )

    def find_nearest_warehouse(self, seller_id: str) -> NearestWarehouseResult:
        """Return the active warehouse closest to the seller's location.

        Equidistant warehouses resolve to the one listed first by the store.
        """
        cache_key = CacheKeys.nearest_warehouse(seller_id)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for nearest warehouse of seller {seller_id}")
            return cached

        try:
            seller = self.store.get_seller_by_id(seller_id)
            if seller is None:
                raise ResourceNotFoundError("Seller", seller_id)
            _ensure_serviceable(seller.location, "Seller", seller_id)

            warehouses = self.store.list_active_warehouses()
            if not warehouses:
                raise NoActiveWarehousesError({"sellerId": seller_id})

            nearest: Optional[Warehouse] = None
            min_distance = float("inf")
            for warehouse in warehouses:
                _ensure_serviceable(warehouse.location, "Warehouse", warehouse.id)
                distance = distance_km(seller.location, warehouse.location)
                if distance < min_distance:
                    min_distance = distance
                    nearest = warehouse
            if nearest is None:
                raise UnsupportedLocationError(
                    f"Could not determine nearest warehouse for seller {seller_id}",
                    {"sellerId": seller_id, "candidates": len(warehouses)},
                )
        except ShippingError as exc:
            log_error(exc, operation="find_nearest_warehouse", sellerId=seller_id)
            raise

        result = NearestWarehouseResult(
            warehouse_id=nearest.id,
            warehouse_location=nearest.location,
            warehouse_name=nearest.name,
            distance_km=round_to(min_distance, 2),
        )
        self.cache.set(cache_key, result, self.nearest_warehouse_ttl_ms)
        logger.info(
            f"Nearest warehouse for seller {seller_id}: {nearest.name} ({result.distance_km} km, "
            f"{len(warehouses)} candidates)"
        )
        return result

    def _resolve_weight(self, product_id: Optional[str]) -> float:
        if not product_id:
            return self.default_weight_kg

        try:
            product = self.store.get_product_by_id(product_id)
        except DatabaseConnectionError as exc:
            if self.strict_product_lookup:
                raise
            logger.warning(
                f"Product {product_id} lookup failed ({exc.message}); using default weight {self.default_weight_kg} kg"
            )
            return self.default_weight_kg

        if product is not None and product.weight_kg > 0:
            return float(product.weight_kg)

        if self.strict_product_lookup:
            raise ResourceNotFoundError("Product", product_id)
        reason = "not found" if product is None else f"has non-positive weight {product.weight_kg}"
        logger.warning(
            f"Product {product_id} {reason}; using default weight {self.default_weight_kg} kg"
        )
        return self.default_weight_kg

    def calculate_shipping_charge(
        self,
        warehouse_id: str,
        customer_id: str,
        speed_type: str = DEFAULT_SPEED,
        product_id: Optional[str] = None,
    ) -> ShippingChargeResult:
        cache_key = CacheKeys.shipping_charge(warehouse_id, customer_id, speed_type, product_id)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for shipping charge {cache_key}")
            return cached

        try:
            warehouse = self.store.get_warehouse_by_id(warehouse_id)
            if warehouse is None:
                raise ResourceNotFoundError("Warehouse", warehouse_id)
            _ensure_serviceable(warehouse.location, "Warehouse", warehouse_id)

            customer = self.store.get_customer_by_id(customer_id)
            if customer is None:
                raise ResourceNotFoundError("Customer", customer_id)
            _ensure_serviceable(customer.location, "Customer", customer_id)

            speed_config = self.store.get_delivery_speed_config(speed_type)
            if speed_config is None:
                raise ResourceNotFoundError("DeliverySpeedConfig", speed_type)
            _ensure_charges_configured(speed_config)

            weight_kg = self._resolve_weight(product_id)
            distance = distance_km(warehouse.location, customer.location)
            quote = self.pricing.price(distance, weight_kg, speed_config)
        except ShippingError as exc:
            log_error(
                exc,
                operation="calculate_shipping_charge",
                warehouseId=warehouse_id,
                customerId=customer_id,
                deliverySpeed=speed_type,
                productId=product_id,
            )
            raise

        result = ShippingChargeResult(
            shipping_charge=quote.total,
            transport_mode=quote.transport_mode,
            distance_km=round_to(distance, 2),
            weight_kg=weight_kg,
            breakdown=quote.breakdown,
        )
        self.cache.set(cache_key, result, self.shipping_charge_ttl_ms)
        logger.info(
            f"Shipping charge {warehouse_id} -> {customer_id} ({speed_type}): {result.shipping_charge} "
            f"via {result.transport_mode} over {result.distance_km} km"
        )
        return result

    def calculate_complete_shipping(
        self,
        seller_id: str,
        customer_id: str,
        speed_type: str = DEFAULT_SPEED,
        product_id: Optional[str] = None,
    ) -> CompleteShippingResult:
        """Price a seller to customer shipment routed through the seller's nearest warehouse."""
        cache_key = CacheKeys.calculation(seller_id, customer_id, speed_type, product_id)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit for complete shipping {cache_key}")
            return cached

        # both steps log their own failures
        nearest = self.find_nearest_warehouse(seller_id)
        charge = self.calculate_shipping_charge(nearest.warehouse_id, customer_id, speed_type, product_id)

        result = CompleteShippingResult(
            shipping_charge=charge.shipping_charge,
            nearest_warehouse=nearest,
            transport_mode=charge.transport_mode,
            distance_km=charge.distance_km,
            weight_kg=charge.weight_kg,
            breakdown=charge.breakdown,
        )
        self.cache.set(cache_key, result, self.complete_shipping_ttl_ms)
        return result

    def attempt(self, operation: Callable[..., T], *args: Any, **kwargs: Any) -> Outcome[T]:
        """Run ``operation`` and return its result or domain error as an ``Outcome``.

        Only ``ShippingError`` is captured; anything else propagates.
        """
        try:
            return Outcome(value=operation(*args, **kwargs))
        except ShippingError as exc:
            return Outcome(error=exc)

    def invalidate_seller(self, seller_id: str) -> int:
        """Forget cached lookups and calculations for one seller."""
        removed = int(self.cache.delete(CacheKeys.nearest_warehouse(seller_id)))
        removed += self.cache.delete_pattern(f"calculation:{seller_id}:")
        return removed

    def invalidate_warehouses(self) -> int:
        """Forget everything derived from warehouse data."""
        return sum(
            self.cache.delete_pattern(prefix)
            for prefix in ("nearest_warehouse:", "shipping_charge:", "calculation:")
        )
