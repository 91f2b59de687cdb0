"""Read-only entity store contract and its in-memory implementation."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional, Protocol

from ..models.domain import Customer, DeliverySpeedConfig, Product, Seller, Warehouse
from .rows import (
    customer_from_row,
    delivery_speed_from_row,
    product_from_row,
    seller_from_row,
    warehouse_from_row,
)

logger = logging.getLogger(__name__)


class EntityStore(Protocol):
    """Lookups the shipping core needs from the persistence layer."""

    def get_seller_by_id(self, seller_id: str) -> Optional[Seller]: ...

    def get_customer_by_id(self, customer_id: str) -> Optional[Customer]: ...

    def get_warehouse_by_id(self, warehouse_id: str) -> Optional[Warehouse]: ...

    def list_active_warehouses(self) -> list[Warehouse]: ...

    def get_product_by_id(self, product_id: str) -> Optional[Product]: ...

    def get_delivery_speed_config(self, speed_type: str) -> Optional[DeliverySpeedConfig]: ...


class InMemoryEntityStore:
    """Dict-backed store; warehouses are listed in insertion order."""

    def __init__(
        self,
        *,
        sellers: Iterable[Seller] = (),
        customers: Iterable[Customer] = (),
        warehouses: Iterable[Warehouse] = (),
        products: Iterable[Product] = (),
        delivery_speeds: Iterable[DeliverySpeedConfig] = (),
    ) -> None:
        self.sellers = {seller.id: seller for seller in sellers}
        self.customers = {customer.id: customer for customer in customers}
        self.warehouses = {warehouse.id: warehouse for warehouse in warehouses}
        self.products = {product.id: product for product in products}
        self.delivery_speeds = {config.speed_type: config for config in delivery_speeds}

    def get_seller_by_id(self, seller_id: str) -> Optional[Seller]:
        return self.sellers.get(seller_id)

    def get_customer_by_id(self, customer_id: str) -> Optional[Customer]:
        return self.customers.get(customer_id)

    def get_warehouse_by_id(self, warehouse_id: str) -> Optional[Warehouse]:
        return self.warehouses.get(warehouse_id)

    def list_active_warehouses(self) -> list[Warehouse]:
        return [warehouse for warehouse in self.warehouses.values() if warehouse.is_active]

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    def get_delivery_speed_config(self, speed_type: str) -> Optional[DeliverySpeedConfig]:
        return self.delivery_speeds.get(speed_type)


def load_seed_store(source: Path) -> InMemoryEntityStore:
    """Build an in-memory store from a JSON seed file keyed by table name."""

    if not source.exists():
        raise FileNotFoundError(f"Seed file not found: {source}")

    with source.open(mode="r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Seed file '{source}' must contain a JSON object.")

    store = InMemoryEntityStore(
        sellers=[seller_from_row(row) for row in payload.get("sellers", [])],
        customers=[customer_from_row(row) for row in payload.get("customers", [])],
        warehouses=[warehouse_from_row(row) for row in payload.get("warehouses", [])],
        products=[product_from_row(row) for row in payload.get("products", [])],
        delivery_speeds=[delivery_speed_from_row(row) for row in payload.get("delivery_speeds", [])],
    )
    logger.info(
        f"Loaded seed data from {source}: {len(store.sellers)} sellers, {len(store.customers)} customers, "
        f"{len(store.warehouses)} warehouses, {len(store.products)} products"
    )
    return store
