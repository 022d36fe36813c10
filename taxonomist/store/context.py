"""Explicit identifiers shared by an entity store and its derived cache."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheContext:
    """
    Names of one independent store/cache pair.

    Separate contexts give separate, non-interfering instances.
    """
    cache_name: str = "content"
    index_cache_name: str = "content_index"
