"""Entity store backed by the marketplace's Supabase tables."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..errors import DatabaseConnectionError
from ..models.domain import Customer, DeliverySpeedConfig, Product, Seller, Warehouse
from .rows import (
    customer_from_row,
    delivery_speed_from_row,
    product_from_row,
    seller_from_row,
    warehouse_from_row,
)

logger = logging.getLogger(__name__)

PARTY_COLUMNS = "id, name, latitude, longitude"
WAREHOUSE_COLUMNS = "id, name, latitude, longitude, city, is_active"
PRODUCT_COLUMNS = "id, name, seller_id, weight_kg"
DELIVERY_SPEED_COLUMNS = "speed_type, base_charge, extra_charge_per_kg"


class SupabaseEntityStore:
    """Reads sellers, customers, warehouses, products and delivery speeds.

    Query failures (network, PostgREST errors) surface as DatabaseConnectionError;
    a missing row is reported as ``None``.
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    def _execute(self, table: str, build: Callable[[Any], Any]) -> list[dict]:
        try:
            response = build(self.client.table(table)).execute()
        except Exception as exc:
            logger.error(f"Supabase query on '{table}' failed: {exc}")
            raise DatabaseConnectionError(
                f"Database error querying '{table}': {exc}", {"table": table}
            ) from exc
        return list(response.data or [])

    def _first(self, table: str, columns: str, column: str, value: Any) -> Optional[dict]:
        rows = self._execute(table, lambda query: query.select(columns).eq(column, value).limit(1))
        return rows[0] if rows else None

    def get_seller_by_id(self, seller_id: str) -> Optional[Seller]:
        row = self._first("sellers", PARTY_COLUMNS, "id", seller_id)
        return seller_from_row(row) if row else None

    def get_customer_by_id(self, customer_id: str) -> Optional[Customer]:
        row = self._first("customers", PARTY_COLUMNS, "id", customer_id)
        return customer_from_row(row) if row else None

    def get_warehouse_by_id(self, warehouse_id: str) -> Optional[Warehouse]:
        row = self._first("warehouses", WAREHOUSE_COLUMNS, "id", warehouse_id)
        return warehouse_from_row(row) if row else None

    def list_active_warehouses(self) -> list[Warehouse]:
        # ordered by id so equidistant warehouses resolve the same way on every call
        rows = self._execute(
            "warehouses",
            lambda query: query.select(WAREHOUSE_COLUMNS).eq("is_active", True).order("id"),
        )
        return [warehouse_from_row(row) for row in rows]

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        row = self._first("products", PRODUCT_COLUMNS, "id", product_id)
        return product_from_row(row) if row else None

    def get_delivery_speed_config(self, speed_type: str) -> Optional[DeliverySpeedConfig]:
        row = self._first("delivery_speeds", DELIVERY_SPEED_COLUMNS, "speed_type", speed_type)
        return delivery_speed_from_row(row) if row else None

    def ping(self) -> int:
        """Count active warehouses; used by the database health check."""
        return len(self._execute("warehouses", lambda query: query.select("id").eq("is_active", True)))
