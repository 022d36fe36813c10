"""
Derived tree cache for Taxonomist.

Holds the last built taxonomy tree and content tree. A slot is filled on the
first read after it was invalidated; writes to the entity store never
invalidate it on their own.
"""

import logging
from enum import Enum
from typing import Dict, Optional, Union

from ..models import LinkType, TaxonomyNode
from ..tree import build_content_tree, build_taxonomy_tree, flatten_content
from .entities import EntityStore


class CacheSlot(str, Enum):
    TAXONOMY_TREE = "taxonomy_tree"
    CONTENT_TREE = "content_tree"


class DerivedCache:
    """
    Memoized trees built from a full scan of an entity store.

    Rebuilds are not serialized: readers racing on an empty slot may each
    rebuild, and the last one stored wins. Rebuilds of the same store state
    give identical trees.
    """

    def __init__(self, store: EntityStore):
        """
        Initialize the cache.

        Args:
            store: The entity store trees are built from; its context names
                this cache
        """
        self.store = store
        self.context = store.context
        self._slots: Dict[CacheSlot, TaxonomyNode] = {}

    def get(self, slot: Union[CacheSlot, str]) -> Optional[TaxonomyNode]:
        return self._slots.get(CacheSlot(slot))

    def get_or_build(self, slot: Union[CacheSlot, str]) -> TaxonomyNode:
        """
        Return the cached tree for a slot, building it if the slot is empty.
        """
        slot = CacheSlot(slot)
        tree = self._slots.get(slot)
        if tree is not None:
            return tree

        if slot == CacheSlot.TAXONOMY_TREE:
            return self.build_taxonomy_tree()
        return self.build_content_tree()

    def build_taxonomy_tree(self) -> TaxonomyNode:
        tree = build_taxonomy_tree(self.store.list_taxonomies(LinkType.TAXONOMY))
        self._slots[CacheSlot.TAXONOMY_TREE] = tree
        logging.info(f"[{self.context.index_cache_name}] Rebuilt taxonomy tree")
        return tree

    def build_content_tree(self) -> TaxonomyNode:
        """
        Rebuild the content tree and write every item's link back to the store.

        After this, a direct slug lookup returns an item whose navigation is
        already resolved.
        """
        items = {item.slug: item for item in self.store.list_content()}
        tree = build_content_tree(self.store.list_taxonomies(LinkType.TAXONOMY), items)

        linked = 0
        for item in flatten_content(tree):
            if self.store.update_field(item.slug, "link", item.link) is not None:
                linked += 1

        self._slots[CacheSlot.CONTENT_TREE] = tree
        logging.info(f"[{self.context.index_cache_name}] Rebuilt content tree, linked {linked} items")
        return tree

    def invalidate(self, slot: Optional[Union[CacheSlot, str]] = None) -> None:
        """
        Drop one slot, or every slot when none is given.
        """
        if slot is None:
            self._slots.clear()
            logging.debug(f"[{self.context.index_cache_name}] Invalidated all slots")
            return
        slot = CacheSlot(slot)
        self._slots.pop(slot, None)
        logging.debug(f"[{self.context.index_cache_name}] Invalidated {slot.value}")
