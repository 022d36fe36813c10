"""Entity storage and derived-tree caching for Taxonomist."""

from .cache import CacheSlot, DerivedCache
from .context import CacheContext
from .entities import EntityStore, SlugConflictError

__all__ = ["CacheContext", "CacheSlot", "DerivedCache", "EntityStore", "SlugConflictError"]
