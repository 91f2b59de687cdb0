"""Select the entity store: database first, falling back to the seed file."""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import settings
from ..db.supabase import get_supabase_client
from .repository import EntityStore, InMemoryEntityStore, load_seed_store
from .supabase_store import SupabaseEntityStore

logger = logging.getLogger(__name__)


def build_store(seed_file: Path | None = None) -> EntityStore:
    """Return a Supabase-backed store when configured, else the seed data set.

    With neither available an empty store is returned; lookups then report
    not-found and the nearest-warehouse search reports no active warehouses.
    """
    client = get_supabase_client()
    if client is not None:
        logger.info("Using Supabase entity store")
        return SupabaseEntityStore(client)

    source = seed_file or settings.seed_file
    try:
        return load_seed_store(source)
    except FileNotFoundError:
        logger.warning(f"No database configured and seed file {source} is missing; starting with an empty store")
        return InMemoryEntityStore()
