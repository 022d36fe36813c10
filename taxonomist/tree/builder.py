"""
Tree building for Taxonomist.

Pure functions that turn the flat set of taxonomy nodes held by the entity
store into the taxonomy tree and the content tree, and resolve previous/next
navigation between content items. Trees are always rebuilt from scratch.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from ..models import (
    ROOT_SLUG,
    ContentItem,
    LinkType,
    SortBy,
    SortOrder,
    TaxonomyNode,
)


def root_node() -> TaxonomyNode:
    return TaxonomyNode(slug=ROOT_SLUG, title="", level=1, parents=[])


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


_CONTENT_SORT_KEYS: Dict[SortBy, Callable[[ContentItem], object]] = {
    SortBy.DATE: lambda item: _as_utc(item.date),
    SortBy.TITLE: lambda item: item.title.casefold(),
    SortBy.SLUG: lambda item: item.slug,
}


def sort_content(items: Iterable[ContentItem], sort_by: SortBy, sort_order: SortOrder) -> List[ContentItem]:
    """
    Order sibling content items.

    Ties on the sort key are broken by slug, ascending in both directions.
    """
    by_slug = sorted(items, key=lambda item: item.slug)
    return sorted(
        by_slug,
        key=_CONTENT_SORT_KEYS[SortBy(sort_by)],
        reverse=SortOrder(sort_order) == SortOrder.DESC
    )


def sort_taxonomies(nodes: Iterable[TaxonomyNode]) -> List[TaxonomyNode]:
    return sorted(nodes, key=lambda node: (node.position, node.title.casefold(), node.slug))


def _owner_slug(item: ContentItem, listed_under: str) -> str:
    if item.taxonomies:
        return item.taxonomies[-1].slug
    return listed_under


def _resolve_parent(node: TaxonomyNode, nodes: Mapping[str, TaxonomyNode]) -> str:
    # Nearest ancestor present in the set; the root adopts orphans
    for slug in reversed(node.parents):
        if slug != node.slug and slug in nodes:
            return slug
    return ROOT_SLUG


def _nest(
    taxonomies: Iterable[TaxonomyNode],
    with_content: bool,
    items: Optional[Mapping[str, ContentItem]] = None
) -> TaxonomyNode:
    sources = [node for node in taxonomies if node.type == LinkType.TAXONOMY]

    nodes: Dict[str, TaxonomyNode] = {}
    for source in sources:
        update = {"children": []}
        if not with_content and source.index is not None:
            update["index"] = source.index.without_body()
        nodes[source.slug] = source.model_copy(update=update)

    if ROOT_SLUG not in nodes:
        nodes[ROOT_SLUG] = root_node()

    content: Dict[str, List[ContentItem]] = {slug: [] for slug in nodes}
    if with_content:
        for source in sources:
            for child in source.children:
                if not isinstance(child, ContentItem):
                    continue
                if _owner_slug(child, source.slug) != source.slug:
                    continue
                record = items.get(child.slug) if items else None
                content[source.slug].append(record if record is not None else child)

    subtaxonomies: Dict[str, List[TaxonomyNode]] = {slug: [] for slug in nodes}
    for slug, node in nodes.items():
        if slug == ROOT_SLUG:
            continue
        subtaxonomies[_resolve_parent(node, nodes)].append(node)

    for slug, node in nodes.items():
        node.children = (
            sort_content(content[slug], node.sort_by, node.sort_order)
            + sort_taxonomies(subtaxonomies[slug])
        )

    return nodes[ROOT_SLUG]


def build_taxonomy_tree(taxonomies: Iterable[TaxonomyNode]) -> TaxonomyNode:
    """
    Nest taxonomy nodes into a hierarchy without any content items.

    Args:
        taxonomies: Every taxonomy node in the store

    Returns:
        The root node "/"; synthesized with an empty title when absent
    """
    return _nest(taxonomies, with_content=False)


def flatten_content(tree: TaxonomyNode) -> List[ContentItem]:
    """Content items of a tree in depth-first, sibling order."""
    flattened: List[ContentItem] = []
    for child in tree.children:
        if isinstance(child, ContentItem):
            flattened.append(child)
        else:
            flattened.extend(flatten_content(child))
    return flattened


def content_link(item: ContentItem, previous: Optional[str] = None, next: Optional[str] = None) -> TaxonomyNode:
    """
    Build a content item's resolved link.

    The link sits one level below the item's innermost taxonomy.
    """
    owner = item.taxonomies[-1] if item.taxonomies else root_node()
    return TaxonomyNode(
        slug=item.slug,
        title=item.title,
        type=LinkType.POST,
        level=owner.level + 1,
        parents=list(owner.parents) + [owner.slug],
        position=item.position,
        previous=previous,
        next=next
    )


def navigation_pass(items: List[ContentItem]) -> List[ContentItem]:
    """
    Link each item to its neighbours in navigation order.

    Args:
        items: Content items in tree order, as returned by flatten_content

    Returns:
        Copies of the items with ``link`` set; the first item has no previous
        and the last has no next
    """
    linked = []
    for position, item in enumerate(items):
        previous = items[position - 1].slug if position > 0 else None
        following = items[position + 1].slug if position + 1 < len(items) else None
        linked.append(item.model_copy(update={"link": content_link(item, previous, following)}))
    return linked


def _replace_content(tree: TaxonomyNode, replacements: Mapping[str, ContentItem]) -> None:
    children = []
    for child in tree.children:
        if isinstance(child, ContentItem):
            children.append(replacements.get(child.slug, child))
        else:
            _replace_content(child, replacements)
            children.append(child)
    tree.children = children


def build_content_tree(
    taxonomies: Iterable[TaxonomyNode],
    items: Optional[Mapping[str, ContentItem]] = None
) -> TaxonomyNode:
    """
    Nest taxonomies together with their content items and resolve navigation.

    Each item is placed under its innermost taxonomy only, so it appears once
    in the navigation sequence.

    Args:
        taxonomies: Every taxonomy node in the store
        items: Full content records by slug; listed children are used as they
            are for slugs missing here

    Returns:
        The root node "/" with every content item carrying its link
    """
    tree = _nest(taxonomies, with_content=True, items=items)
    linked = navigation_pass(flatten_content(tree))
    _replace_content(tree, {item.slug: item for item in linked})
    return tree


def find_node(tree: TaxonomyNode, slug: str) -> Optional[TaxonomyNode]:
    """Depth-first search for the taxonomy node with the given slug."""
    if tree.slug == slug:
        return tree
    for child in tree.children:
        if isinstance(child, TaxonomyNode):
            found = find_node(child, slug)
            if found is not None:
                return found
    return None
