"""Entity store implementations."""

from .factory import build_store
from .repository import EntityStore, InMemoryEntityStore, load_seed_store
from .supabase_store import SupabaseEntityStore

__all__ = [
    "EntityStore",
    "InMemoryEntityStore",
    "SupabaseEntityStore",
    "build_store",
    "load_seed_store",
]
