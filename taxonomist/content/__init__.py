"""Path-derived content metadata."""

from .paths import (
    category_chain,
    derive_slug,
    derive_taxonomy_name,
    derive_title,
    get_title,
    is_path_from_static_assets,
    remove_root_path,
    static_assets_path,
    taxonomies_from_path,
)

__all__ = [
    "category_chain",
    "derive_slug",
    "derive_taxonomy_name",
    "derive_title",
    "get_title",
    "is_path_from_static_assets",
    "remove_root_path",
    "static_assets_path",
    "taxonomies_from_path",
]
