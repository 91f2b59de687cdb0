import math
from types import SimpleNamespace

import pytest

from shipping_estimator.data.supabase_store import SupabaseEntityStore
from shipping_estimator.errors import DatabaseConnectionError


class DummyQuery:
    """Records the PostgREST-style builder calls and filters canned rows."""

    def __init__(self, rows: list[dict], calls: list[tuple]) -> None:
        self.rows = rows
        self.calls = calls
        self.filters: list[tuple[str, object]] = []
        self.limit_count: int | None = None
        self.order_column: str | None = None

    def select(self, columns: str):
        self.calls.append(("select", columns))
        return self

    def eq(self, column: str, value):
        self.calls.append(("eq", column, value))
        self.filters.append((column, value))
        return self

    def limit(self, count: int):
        self.calls.append(("limit", count))
        self.limit_count = count
        return self

    def order(self, column: str):
        self.calls.append(("order", column))
        self.order_column = column
        return self

    def execute(self):
        rows = [row for row in self.rows if all(row.get(col) == val for col, val in self.filters)]
        if self.order_column:
            rows.sort(key=lambda row: row[self.order_column])
        if self.limit_count is not None:
            rows = rows[: self.limit_count]
        return SimpleNamespace(data=rows)


class DummyClient:
    def __init__(self, tables: dict[str, list[dict]]) -> None:
        self.tables = tables
        self.calls: list[tuple] = []

    def table(self, name: str):
        self.calls.append(("table", name))
        return DummyQuery(self.tables.get(name, []), self.calls)


class FailingClient:
    def table(self, name: str):
        raise ConnectionError("network unreachable")


def _client() -> DummyClient:
    return DummyClient(
        {
            "sellers": [{"id": "s1", "name": "Nestle Seller", "latitude": "19.0760", "longitude": "72.8777"}],
            "customers": [{"id": "c1", "name": "Kirana", "latitude": 11.232, "longitude": 23.445495}],
            "warehouses": [
                {"id": "w2", "name": "B", "latitude": 1.0, "longitude": 2.0, "city": "Mumbai", "is_active": True},
                {"id": "w1", "name": "A", "latitude": 3.0, "longitude": 4.0, "city": None, "is_active": True},
                {"id": "w3", "name": "C", "latitude": 5.0, "longitude": 6.0, "city": "Delhi", "is_active": False},
            ],
            "products": [{"id": "p1", "name": "Rice Bag 10Kg", "seller_id": "s1", "weight_kg": "10.00"}],
            "delivery_speeds": [
                {"speed_type": "standard", "base_charge": "10.00", "extra_charge_per_kg": "0.00"},
                {"speed_type": "express", "base_charge": "10.00", "extra_charge_per_kg": "1.20"},
            ],
        }
    )


def test_seller_row_is_converted_with_numeric_strings():
    seller = SupabaseEntityStore(_client()).get_seller_by_id("s1")

    assert seller is not None
    assert seller.name == "Nestle Seller"
    assert seller.location.latitude == pytest.approx(19.076)
    assert seller.location.longitude == pytest.approx(72.8777)


def test_missing_rows_return_none():
    store = SupabaseEntityStore(_client())
    assert store.get_seller_by_id("nope") is None
    assert store.get_customer_by_id("nope") is None
    assert store.get_warehouse_by_id("nope") is None
    assert store.get_product_by_id("nope") is None
    assert store.get_delivery_speed_config("overnight") is None


def test_lookup_queries_filter_by_id_and_limit():
    client = _client()
    SupabaseEntityStore(client).get_customer_by_id("c1")

    assert ("table", "customers") in client.calls
    assert ("eq", "id", "c1") in client.calls
    assert ("limit", 1) in client.calls


def test_active_warehouses_are_ordered_by_id():
    client = _client()
    warehouses = SupabaseEntityStore(client).list_active_warehouses()

    assert [warehouse.id for warehouse in warehouses] == ["w1", "w2"]
    assert ("eq", "is_active", True) in client.calls
    assert ("order", "id") in client.calls
    assert warehouses[1].city == "Mumbai"
    assert warehouses[0].city is None


def test_product_and_speed_rows():
    store = SupabaseEntityStore(_client())

    product = store.get_product_by_id("p1")
    express = store.get_delivery_speed_config("express")

    assert product is not None and product.weight_kg == 10.0
    assert product.seller_id == "s1"
    assert express is not None
    assert express.base_charge == 10.0
    assert express.extra_charge_per_kg == pytest.approx(1.2)


def test_unparseable_coordinates_become_nan():
    client = DummyClient({"customers": [{"id": "c9", "name": "X", "latitude": "north", "longitude": None}]})
    customer = SupabaseEntityStore(client).get_customer_by_id("c9")

    assert customer is not None
    assert math.isnan(customer.location.latitude)
    assert math.isnan(customer.location.longitude)


def test_client_failures_raise_database_error():
    store = SupabaseEntityStore(FailingClient())
    with pytest.raises(DatabaseConnectionError) as excinfo:
        store.list_active_warehouses()
    assert excinfo.value.context == {"table": "warehouses", "category": "database"}


def test_ping_counts_active_warehouses():
    assert SupabaseEntityStore(_client()).ping() == 2
