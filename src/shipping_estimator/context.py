"""Application wiring: one cache, one store and one service per process."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .config import Settings, settings as default_settings
from .data.factory import build_store
from .data.repository import EntityStore
from .services.cache import EphemeralCache
from .services.shipping.service import ShippingService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ShippingContext:
    settings: Settings
    cache: EphemeralCache
    store: EntityStore
    service: ShippingService

    def start(self) -> None:
        self.cache.start_sweeper(self.settings.cache_cleanup_interval_seconds)

    def stop(self) -> None:
        self.cache.stop_sweeper()
        self.cache.clear()


def build_context(
    store: EntityStore | None = None,
    cache: EphemeralCache | None = None,
    config: Settings | None = None,
) -> ShippingContext:
    """Construct the shared cache, entity store and shipping service."""
    config = config or default_settings
    cache = cache or EphemeralCache(default_ttl_ms=config.cache_default_ttl_ms)
    store = store if store is not None else build_store(config.seed_file)
    service = ShippingService(
        store,
        cache,
        nearest_warehouse_ttl_ms=config.nearest_warehouse_ttl_ms,
        shipping_charge_ttl_ms=config.shipping_charge_ttl_ms,
        complete_shipping_ttl_ms=config.complete_shipping_ttl_ms,
        default_weight_kg=config.default_weight_kg,
        strict_product_lookup=config.strict_product_lookup,
    )
    logger.info(f"Shipping context ready with {type(store).__name__}")
    return ShippingContext(settings=config, cache=cache, store=store, service=service)
