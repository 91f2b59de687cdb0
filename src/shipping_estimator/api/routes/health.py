"""Health endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from ...context import ShippingContext
from ...data.supabase_store import SupabaseEntityStore
from ...errors import DatabaseConnectionError, log_error
from ...schemas.shipping import CacheStatsModel
from ..dependencies import get_context

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/cache", status_code=status.HTTP_200_OK)
def cache_stats(context: ShippingContext = Depends(get_context)) -> dict:
    """Hit/miss counters and size of the shared calculation cache."""
    stats = CacheStatsModel.from_stats(context.cache.get_stats())
    return {**stats.model_dump(), "sweeperRunning": context.cache.sweeper_running}


@router.post("/health/cache/clear", status_code=status.HTTP_200_OK)
def clear_cache(
    pattern: Optional[str] = Query(default=None, description="Only drop keys containing this text."),
    sellerId: Optional[str] = Query(default=None, description="Drop lookups and calculations for one seller."),
    warehouses: bool = Query(default=False, description="Drop everything derived from warehouse data."),
    context: ShippingContext = Depends(get_context),
) -> dict:
    """Drop cached results, e.g. after seller, warehouse or rate data changed.

    With no filter the whole cache is cleared and its counters reset.
    """
    service = context.service
    if sellerId:
        removed = service.invalidate_seller(sellerId)
    elif warehouses:
        removed = service.invalidate_warehouses()
    elif pattern:
        removed = context.cache.delete_pattern(pattern)
    else:
        removed = context.cache.get_stats().size
        context.cache.clear()
    return {"status": "success", "removed": removed, "pattern": pattern, "sellerId": sellerId}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database(context: ShippingContext = Depends(get_context)) -> dict:
    """Check which entity store is in use and whether it answers."""
    store = context.store
    if not isinstance(store, SupabaseEntityStore):
        return {
            "configured": False,
            "store": type(store).__name__,
            "message": "Supabase not configured. Set SHIP_SUPABASE_URL and SHIP_SUPABASE_KEY environment variables.",
            "warehouses_count": len(store.list_active_warehouses()),
        }

    try:
        count = store.ping()
    except DatabaseConnectionError as exc:
        log_error(exc, operation="health_check")
        return {
            "configured": True,
            "connected": False,
            "error": exc.message,
            "message": f"Database connection error: {exc.message}",
        }
    return {
        "configured": True,
        "connected": True,
        "warehouses_count": count,
        "message": f"Database connected. Found {count} active warehouses.",
    }
