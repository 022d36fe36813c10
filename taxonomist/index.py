"""
Content index for Taxonomist.

Ties the entity store and the derived tree cache together behind the
operations used by the parser/watcher layer (save, delete) and by the
serving layer (lookups and trees).
"""

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional, Union

from .models import ROOT_SLUG, ContentItem, ContentType, Entity, EntityKind, LinkType, TaxonomyNode
from .store import CacheContext, CacheSlot, DerivedCache, EntityStore
from .tree import find_node


class ContentIndex:
    """
    Entry point for indexing content and reading the derived trees.

    Saves and deletes never invalidate the trees by themselves; call
    invalidate() once a batch of writes is complete, or wrap the writes in
    batch().
    """

    def __init__(self, context: Optional[CacheContext] = None):
        """
        Initialize the content index.

        Args:
            context: Names of the store and cache (defaults to CacheContext())
        """
        self.context = context or CacheContext()
        self.store = EntityStore(self.context)
        self.cache = DerivedCache(self.store)

    # Inbound

    def save_content_item(self, item: ContentItem) -> ContentItem:
        return self.store.save_content_item(item)

    def save_index_item(self, item: ContentItem) -> Optional[TaxonomyNode]:
        return self.store.save_index_item(item)

    def save_all(self, items: Iterable[ContentItem]) -> int:
        """
        Save a batch of items and invalidate the trees once.

        Returns:
            Number of items saved
        """
        count = 0
        with self.batch():
            for item in items:
                self.save_content_item(item)
                count += 1
        logging.info(f"Indexed {count} content items into {self.context.cache_name}")
        return count

    def delete_by_slug(self, slug: str) -> Optional[Entity]:
        return self.store.delete(slug)

    def delete_all(self) -> None:
        self.store.clear()
        self.cache.invalidate()

    @contextmanager
    def batch(self) -> Iterator["ContentIndex"]:
        """Run a group of writes, invalidating every tree once on exit."""
        try:
            yield self
        finally:
            self.cache.invalidate()

    def invalidate(self, slot: Optional[Union[CacheSlot, str]] = None) -> None:
        self.cache.invalidate(slot)

    # Outbound

    def get_by_slug(self, slug: str) -> Optional[Entity]:
        return self.store.get(slug)

    def get_taxonomy_tree(self) -> TaxonomyNode:
        return self.cache.get_or_build(CacheSlot.TAXONOMY_TREE)

    def get_content_tree(self, root_slug: str = ROOT_SLUG) -> Optional[TaxonomyNode]:
        """
        Get the content tree, or the subtree under one taxonomy.

        Only the full tree is cached; subtrees are looked up inside it.

        Returns:
            The tree rooted at root_slug, or None if no such taxonomy exists
        """
        tree = self.cache.get_or_build(CacheSlot.CONTENT_TREE)
        if root_slug == ROOT_SLUG:
            return tree
        return find_node(tree, root_slug)

    def list_all(self, kind: Optional[Union[EntityKind, str]] = None) -> List[Entity]:
        return self.store.enumerate(kind)

    def list_content(self, content_type: Optional[Union[ContentType, str]] = None) -> List[ContentItem]:
        return self.store.list_content(content_type)

    def list_taxonomies(self, link_type: Optional[Union[LinkType, str]] = None) -> List[TaxonomyNode]:
        return self.store.list_taxonomies(link_type)
