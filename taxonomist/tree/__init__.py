"""Taxonomy and content tree building."""

from .builder import (
    build_content_tree,
    build_taxonomy_tree,
    content_link,
    find_node,
    flatten_content,
    navigation_pass,
    sort_content,
    sort_taxonomies,
)

__all__ = [
    "build_content_tree",
    "build_taxonomy_tree",
    "content_link",
    "find_node",
    "flatten_content",
    "navigation_pass",
    "sort_content",
    "sort_taxonomies",
]
