"""
Entity store for Taxonomist.

This module keeps every content item and taxonomy node in one concurrent map
keyed by slug. Writes to a key go through a per-key transaction so concurrent
contributions to the same taxonomy are never lost; reads take no lock.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional, Union

from ..content.paths import derive_taxonomy_name
from ..models import (
    ROOT_SLUG,
    ContentItem,
    ContentType,
    Entity,
    EntityKind,
    LinkType,
    SortBy,
    SortOrder,
    TaxonomyNode,
)
from .context import CacheContext


class SlugConflictError(ValueError):
    """Raised when a content item and a taxonomy claim the same slug."""


Transaction = Callable[[Optional[Entity]], Optional[Entity]]


class EntityStore:
    """
    Concurrent slug -> entity map, the source of truth for the derived trees.

    There is no cross-key transaction: an item's own record and each of its
    taxonomies are written separately, so readers may briefly see one without
    the other until the next save or rebuild.
    """

    def __init__(self, context: Optional[CacheContext] = None, lock_stripes: int = 64):
        """
        Initialize the entity store.

        Args:
            context: Names identifying this store and its derived cache
            lock_stripes: Number of locks that slugs are spread across
        """
        self.context = context or CacheContext()
        self._entities: Dict[str, Entity] = {}
        self._locks = [threading.Lock() for _ in range(max(1, lock_stripes))]

    def _lock_for(self, slug: str) -> threading.Lock:
        return self._locks[hash(slug) % len(self._locks)]

    def transaction(self, slug: str, fn: Transaction) -> Optional[Entity]:
        """
        Atomically replace the entity stored under a slug.

        ``fn`` receives the current entity (or None) and returns the new one;
        returning None removes the key. Concurrent transactions on the same
        slug run one after the other.

        Returns:
            The entity stored after the transaction
        """
        with self._lock_for(slug):
            updated = fn(self._entities.get(slug))
            if updated is None:
                self._entities.pop(slug, None)
            else:
                self._entities[slug] = updated
            return updated

    # Reads

    def get(self, slug: str) -> Optional[Entity]:
        return self._entities.get(slug)

    def enumerate(self, kind: Optional[Union[EntityKind, str]] = None) -> List[Entity]:
        """
        Snapshot every entity, optionally only those of one kind.

        Args:
            kind: "content", "taxonomy" or None for everything

        Returns:
            List of entities ordered by slug
        """
        snapshot = self._entities.copy()
        entities = [snapshot[slug] for slug in sorted(snapshot)]
        if kind is None:
            return entities
        kind = EntityKind(kind)
        return [entity for entity in entities if entity.kind == kind.value]

    def list_content(self, content_type: Optional[Union[ContentType, str]] = None) -> List[ContentItem]:
        items = self.enumerate(EntityKind.CONTENT)
        if content_type is None:
            return items
        return [item for item in items if item.type == ContentType(content_type)]

    def list_taxonomies(self, link_type: Optional[Union[LinkType, str]] = None) -> List[TaxonomyNode]:
        nodes = self.enumerate(EntityKind.TAXONOMY)
        if link_type is None:
            return nodes
        return [node for node in nodes if node.type == LinkType(link_type)]

    def __len__(self) -> int:
        return len(self._entities)

    # Writes

    def save_content_item(self, item: ContentItem) -> ContentItem:
        """
        Upsert a content item and append it to every taxonomy it declares.

        Index items are routed to save_index_item.
        """
        if item.type == ContentType.INDEX:
            self.save_index_item(item)
            return item

        self.put_content_item(item)
        for taxonomy in item.taxonomies:
            self._append_to_taxonomy(taxonomy, item)

        logging.debug(f"[{self.context.cache_name}] Saved {item.slug} under {len(item.taxonomies)} taxonomies")
        return item

    def put_content_item(self, item: ContentItem) -> ContentItem:
        """Upsert only the flat record of a non-index content item."""
        if item.type == ContentType.INDEX:
            raise ValueError(f"Index item {item.slug} has no flat record")

        def put(current: Optional[Entity]) -> Entity:
            if isinstance(current, TaxonomyNode):
                logging.warning(f"[{self.context.cache_name}] {item.slug} is already a taxonomy")
                raise SlugConflictError(f"Slug {item.slug} is already used by a taxonomy")
            return item

        self.transaction(item.slug, put)
        return item

    def save_index_item(self, item: ContentItem) -> Optional[TaxonomyNode]:
        """
        Merge an index item into the last taxonomy of its chain.

        The taxonomy takes the item as its index and inherits its title and
        position. ``sort_by`` and ``sort_order`` in the item metadata, when
        valid, set how the taxonomy orders its content. Nothing is added to the
        taxonomy's children.
        """
        if not item.taxonomies:
            logging.warning(f"[{self.context.cache_name}] Index item {item.slug} declares no taxonomy")
            return None

        declared = item.taxonomies[-1]

        def merge(current: Optional[Entity]) -> Entity:
            taxonomy = self._existing_taxonomy(current, declared)
            update = {
                "index": item,
                "position": item.position,
                "title": item.title,
            }
            update.update(_sorting_from_metadata(item.metadata))
            return taxonomy.model_copy(update=update)

        merged = self.transaction(declared.slug, merge)
        logging.debug(f"[{self.context.cache_name}] Merged index {item.slug} into {declared.slug}")
        return merged

    def update_field(self, slug: str, field: str, value) -> Optional[Entity]:
        """
        Atomically rewrite one field of an existing entity.

        The value is validated against the field's type, so a bad value
        raises a pydantic ValidationError and leaves the entity unchanged.

        Returns:
            The updated entity, or None if the slug is unknown
        """
        def update(current: Optional[Entity]) -> Optional[Entity]:
            if current is None:
                return None
            if field not in type(current).model_fields:
                raise ValueError(f"{type(current).__name__} has no field {field!r}")
            # Validate the new value like a fresh record would be
            return type(current).model_validate({**dict(current), field: value})

        return self.transaction(slug, update)

    def delete(self, slug: str) -> Optional[Entity]:
        """
        Remove an entity and its listings.

        A deleted content item is also removed from the children of every
        taxonomy it declared. Deleting the slug of an index item clears the
        owning taxonomy's index.

        Returns:
            The removed entity, or None if nothing was stored under the slug
        """
        removed: List[Entity] = []

        def pop(current: Optional[Entity]) -> None:
            if current is not None:
                removed.append(current)
            return None

        self.transaction(slug, pop)

        if not removed:
            return self._clear_index(slug)

        entity = removed[0]
        if isinstance(entity, ContentItem):
            for taxonomy in entity.taxonomies:
                self._remove_from_taxonomy(taxonomy.slug, slug)

        logging.debug(f"[{self.context.cache_name}] Deleted {slug}")
        return entity

    def clear(self) -> None:
        for lock in self._locks:
            lock.acquire()
        try:
            self._entities.clear()
        finally:
            for lock in self._locks:
                lock.release()

    # Internal

    def _existing_taxonomy(self, current: Optional[Entity], declared: TaxonomyNode) -> TaxonomyNode:
        if current is None:
            return declared.without_children()
        if isinstance(current, ContentItem):
            logging.warning(f"[{self.context.cache_name}] Taxonomy {declared.slug} collides with a content item")
            raise SlugConflictError(f"Slug {declared.slug} is already used by a content item")
        return current

    def _append_to_taxonomy(self, declared: TaxonomyNode, item: ContentItem) -> None:
        child = item.without_body()

        def append(current: Optional[Entity]) -> Entity:
            taxonomy = self._existing_taxonomy(current, declared)
            children = [c for c in taxonomy.children if c.slug != item.slug]
            children.append(child)
            return taxonomy.model_copy(update={"children": children})

        self.transaction(declared.slug, append)

    def _remove_from_taxonomy(self, taxonomy_slug: str, child_slug: str) -> None:
        def remove(current: Optional[Entity]) -> Optional[Entity]:
            if not isinstance(current, TaxonomyNode):
                return current
            children = [c for c in current.children if c.slug != child_slug]
            return current.model_copy(update={"children": children})

        self.transaction(taxonomy_slug, remove)

    def _clear_index(self, index_slug: str) -> Optional[ContentItem]:
        for taxonomy in self.list_taxonomies():
            if taxonomy.index is None or taxonomy.index.slug != index_slug:
                continue

            cleared: List[ContentItem] = []

            def clear(current: Optional[Entity]) -> Optional[Entity]:
                if not isinstance(current, TaxonomyNode) or current.index is None:
                    return current
                if current.index.slug != index_slug:
                    return current
                cleared.append(current.index)
                return current.model_copy(update={
                    "index": None,
                    "position": 0,
                    "title": _default_title(current.slug),
                })

            self.transaction(taxonomy.slug, clear)
            if cleared:
                logging.debug(f"[{self.context.cache_name}] Cleared index {index_slug} from {taxonomy.slug}")
                return cleared[0]
        return None


def _default_title(taxonomy_slug: str) -> str:
    if taxonomy_slug == ROOT_SLUG:
        return ""
    return derive_taxonomy_name(taxonomy_slug.rstrip("/").split("/")[-1])


def _sorting_from_metadata(metadata: Dict) -> Dict:
    sorting = {}
    try:
        if "sort_by" in metadata:
            sorting["sort_by"] = SortBy(metadata["sort_by"])
        if "sort_order" in metadata:
            sorting["sort_order"] = SortOrder(metadata["sort_order"])
    except ValueError as e:
        logging.warning(f"Ignoring invalid sorting in index metadata: {e}")
        return {}
    return sorting
