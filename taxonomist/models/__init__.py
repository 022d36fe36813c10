"""Data models for Taxonomist."""

from .categories import CategoryDescriptor
from .content import (
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

__all__ = [
    "ROOT_SLUG",
    "CategoryDescriptor",
    "ContentItem",
    "ContentType",
    "Entity",
    "EntityKind",
    "LinkType",
    "SortBy",
    "SortOrder",
    "TaxonomyNode",
]
