#!/usr/bin/env python3
"""Helper script to check and create the .env file for the shipping estimator."""

from pathlib import Path
import os
import sys

TEMPLATE = """# Supabase Configuration (optional; the seed data set is used when unset)
# Get these from: https://supabase.com/dashboard -> Your Project -> Settings -> API
SHIP_SUPABASE_URL=https://your-project-id.supabase.co
SHIP_SUPABASE_KEY=your-service-role-key-here

# API Configuration
SHIP_API_PREFIX=/api/v1
# SHIP_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list
# SHIP_FRONTEND_ALLOWED_ORIGINS=http://localhost:5173,http://127.0.0.1:5173

# Demo data used without a database
SHIP_SEED_FILE=./data/seed.json

# Cache lifetimes (milliseconds) and sweep interval (seconds)
SHIP_NEAREST_WAREHOUSE_TTL_MS=300000
SHIP_SHIPPING_CHARGE_TTL_MS=120000
SHIP_COMPLETE_SHIPPING_TTL_MS=120000
SHIP_CACHE_CLEANUP_INTERVAL_SECONDS=60

# Pricing policy
SHIP_DEFAULT_WEIGHT_KG=1.0
SHIP_STRICT_PRODUCT_LOOKUP=false
"""


def _mask(value: str) -> str:
    return value[:20] + "..." + value[-10:] if len(value) > 20 else value


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Shipping Estimator Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"No .env file found at: {env_file}")
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env file at: {env_file}")
        print("Edit it to add Supabase credentials, or leave them unset to use the seed data.")
        return

    print(f"Found .env file at: {env_file}")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        if line.startswith("SHIP_SUPABASE_KEY="):
            name, value = line.split("=", 1)
            print(f"{name}={_mask(value.strip())}")
        else:
            print(line)
    print("-" * 60)
    print()

    for name in ("SHIP_SUPABASE_URL", "SHIP_SUPABASE_KEY"):
        value = os.getenv(name)
        print(f"{name} (from environment): {_mask(value) if value else 'not set'}")
    print()

    print("Testing config loading...")
    try:
        sys.path.insert(0, str(project_root / "src"))
        from shipping_estimator.config import settings
    except Exception as e:
        print(f"Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    if settings.supabase_url and settings.supabase_key:
        print("Supabase is configured; the API will read from the database.")
    else:
        print(f"Supabase is NOT configured; the API will serve {settings.seed_file}.")
        if not settings.seed_file.exists():
            print("Warning: the seed file does not exist either; every lookup will report not found.")
    print(f"Cache TTLs (ms): nearest={settings.nearest_warehouse_ttl_ms}, "
          f"charge={settings.shipping_charge_ttl_ms}, complete={settings.complete_shipping_ttl_ms}")
    print(f"Default weight: {settings.default_weight_kg} kg, strict product lookup: {settings.strict_product_lookup}")


if __name__ == "__main__":
    main()
