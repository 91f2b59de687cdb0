"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="SHIP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "B2B Shipping Estimator API"
    api_prefix: str = "/api/v1"
    seed_file: Path = Field(
        default=Path("data/seed.json"),
        description="Demo data set used when no database is configured.",
    )
    cache_default_ttl_ms: int = Field(default=300_000, gt=0)
    nearest_warehouse_ttl_ms: int = Field(
        default=300_000,
        gt=0,
        description="Warehouse topology changes rarely, so lookups live longer than prices.",
    )
    shipping_charge_ttl_ms: int = Field(default=120_000, gt=0)
    complete_shipping_ttl_ms: int = Field(default=120_000, gt=0)
    cache_cleanup_interval_seconds: float = Field(default=60.0, gt=0.0)
    default_weight_kg: float = Field(
        default=1.0,
        gt=0.0,
        description="Shipment weight used when no product is supplied.",
    )
    strict_product_lookup: bool = Field(
        default=False,
        description="Fail with not-found instead of falling back to the default weight for unknown products.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("seed_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
