"""Supabase client used by the database-backed entity store."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Return the process-wide Supabase client, or None when it cannot be built.

    Missing SHIP_SUPABASE_URL / SHIP_SUPABASE_KEY is not an error: the API then
    serves the seed data set. Creating the client does not contact the server,
    so connectivity problems only surface on the first query.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logger.info("Supabase credentials not configured; falling back to local data")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client for {settings.supabase_url}: {e}")
        return None
