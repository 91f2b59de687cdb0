import json
from pathlib import Path

import pytest

from shipping_estimator.config import Settings
from shipping_estimator.data import factory
from shipping_estimator.data.repository import InMemoryEntityStore, load_seed_store
from shipping_estimator.data.supabase_store import SupabaseEntityStore
from shipping_estimator.services.cache import EphemeralCache
from shipping_estimator.services.shipping.service import ShippingService

SEED_FILE = Path(__file__).resolve().parents[1] / "data" / "seed.json"

RICE_SELLER = "660e8400-e29b-41d4-a716-446655440002"
CHENNAI_SHOP = "550e8400-e29b-41d4-a716-446655440008"
CHENNAI_WAREHOUSE = "770e8400-e29b-41d4-a716-446655440004"
RICE_BAG_10KG = "880e8400-e29b-41d4-a716-446655440004"


def test_seed_file_loads_demo_data():
    store = load_seed_store(SEED_FILE)

    assert len(store.sellers) == 3
    assert len(store.customers) == 8
    assert len(store.list_active_warehouses()) == 4
    assert store.get_product_by_id(RICE_BAG_10KG).weight_kg == 10.0
    assert store.get_delivery_speed_config("express").extra_charge_per_kg == pytest.approx(1.2)


def test_seed_data_prices_a_same_city_shipment():
    service = ShippingService(load_seed_store(SEED_FILE), EphemeralCache(), default_weight_kg=1.0)

    result = service.calculate_complete_shipping(RICE_SELLER, CHENNAI_SHOP, "express", RICE_BAG_10KG)

    assert result.nearest_warehouse.warehouse_id == CHENNAI_WAREHOUSE
    assert result.nearest_warehouse.warehouse_name == "CHN_Warehouse"
    assert result.distance_km == 0.0
    assert result.transport_mode == "Mini Van"
    assert result.shipping_charge == 22.0


def test_missing_seed_file_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_seed_store(tmp_path / "absent.json")


def test_seed_file_must_be_an_object(tmp_path: Path):
    source = tmp_path / "seed.json"
    source.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_seed_store(source)


def test_build_store_prefers_supabase(monkeypatch: pytest.MonkeyPatch):
    client = object()
    monkeypatch.setattr(factory, "get_supabase_client", lambda: client)

    store = factory.build_store(SEED_FILE)

    assert isinstance(store, SupabaseEntityStore)
    assert store.client is client


def test_build_store_falls_back_to_seed_then_empty(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setattr(factory, "get_supabase_client", lambda: None)

    seeded = factory.build_store(SEED_FILE)
    empty = factory.build_store(tmp_path / "absent.json")

    assert isinstance(seeded, InMemoryEntityStore) and len(seeded.warehouses) == 4
    assert isinstance(empty, InMemoryEntityStore) and empty.list_active_warehouses() == []


def test_settings_defaults():
    config = Settings(_env_file=None)

    assert config.api_prefix == "/api/v1"
    assert config.nearest_warehouse_ttl_ms == 300_000
    assert config.shipping_charge_ttl_ms == 120_000
    assert config.complete_shipping_ttl_ms == 120_000
    assert config.cache_cleanup_interval_seconds == 60.0
    assert config.default_weight_kg == 1.0
    assert config.strict_product_lookup is False
    assert config.seed_file.is_absolute()


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("http://a.test,http://b.test", ("http://a.test", "http://b.test")),
        ('["http://a.test"]', ("http://a.test",)),
        ("http://only.test", ("http://only.test",)),
        ("", ()),
    ],
)
def test_allowed_origins_parsing(raw: str, expected: tuple):
    assert Settings(_env_file=None, frontend_allowed_origins=raw).frontend_allowed_origins == expected


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SHIP_STRICT_PRODUCT_LOOKUP", "true")
    monkeypatch.setenv("SHIP_SHIPPING_CHARGE_TTL_MS", "5000")

    config = Settings(_env_file=None)

    assert config.strict_product_lookup is True
    assert config.shipping_charge_ttl_ms == 5000


def test_non_positive_ttl_is_rejected():
    with pytest.raises(ValueError):
        Settings(_env_file=None, nearest_warehouse_ttl_ms=0)
