"""
Path-derived metadata for Taxonomist.

Pure functions turning a content file path into a slug, a display title and
the chain of categories (taxonomies) the file lives under.
"""

import hashlib
import os
from typing import List

from slugify import slugify

from ..models import ROOT_SLUG, CategoryDescriptor, TaxonomyNode


def static_assets_path(root_path: str, static_assets_folder_name: str) -> str:
    return os.path.join(root_path, static_assets_folder_name)


def is_path_from_static_assets(path: str, root_path: str, static_assets_folder_name: str) -> bool:
    static = static_assets_path(root_path, static_assets_folder_name).rstrip(os.sep)
    return path == static or path.startswith(static + os.sep)


def remove_root_path(path: str, root_path: str) -> str:
    """
    Strip the content root from an absolute file path.

    Args:
        path: Absolute file path
        root_path: Content root directory

    Returns:
        The path relative to the root, always starting with "/"
    """
    root = root_path.rstrip("/")
    if root and path.startswith(root):
        path = path[len(root):]
    if not path.startswith("/"):
        path = "/" + path
    return path


def _slug_segment(part: str) -> str:
    slug = slugify(part)
    if slug:
        return slug
    # Names with nothing to slugify still need a distinct segment
    return "-" + hashlib.sha1(part.encode("utf-8")).hexdigest()[:8]


def _slug_segments(segments: List[str]) -> List[str]:
    return [_slug_segment(part) for part in segments if part]


def _directory_slug(segments: List[str]) -> str:
    return "/" + "/".join(_slug_segments(segments))


def derive_slug(path: str) -> str:
    """
    Turn a file path into a slash-rooted slug.

    Only the file name loses its extension; dotted directory names are
    slugified like any other segment.

    Examples:
        derive_slug("/blog/art/3d/post.md")    # "/blog/art/3d/post"
        derive_slug("/blog/My new Project.md")  # "/blog/my-new-project"
        derive_slug("/docs/v1.2/intro.md")      # "/docs/v1-2/intro"
    """
    directory, name = os.path.split(path)
    stem, _ = os.path.splitext(name)
    return _directory_slug(directory.split("/") + [stem])


def _title_words(source: str) -> List[str]:
    return source.strip().replace("-", " ").replace("_", " ").split(" ")


def get_title(source: str) -> str:
    """
    Turn a string into a title, capitalizing only the first word.

    Words after the first are left as they are, so intentional casing
    ("SQL", "iOS") survives.

    Examples:
        get_title("post-about-art")   # "Post about art"
        get_title("My new Project")   # "My new Project"
    """
    words = _title_words(source)
    return " ".join([words[0].capitalize()] + words[1:])


def derive_title(path: str) -> str:
    stem, _ = os.path.splitext(os.path.basename(path))
    return get_title(stem)


def derive_taxonomy_name(source: str) -> str:
    """
    Turn a directory name into a category name.

    Every word is capitalized and words starting with a digit are upper-cased,
    so "3d-models" becomes "3D Models". Hyphens are split before the digit
    check, which means "4d-art" gives "4D Art".
    """
    words = [word.capitalize() for word in _title_words(source)]
    return " ".join(word.upper() if word[:1].isdigit() else word for word in words)


def category_chain(path: str) -> List[CategoryDescriptor]:
    """
    Split a file path into its hierarchy of categories.

    Examples:
        category_chain("/blog/art/3d-models/post.md")
        # [("Blog", "/blog"), ("Art", "/blog/art"), ("3D Models", "/blog/art/3d-models")]

        category_chain("/post.md")
        # [("", "/")]
    """
    directory = path[:len(path) - len(os.path.basename(path))]
    segments = [segment for segment in directory.split("/") if segment]

    if not segments:
        return [CategoryDescriptor(title="", slug=ROOT_SLUG)]

    chain = []
    for depth in range(1, len(segments) + 1):
        chain.append(CategoryDescriptor(
            title=derive_taxonomy_name(segments[depth - 1]),
            slug=_directory_slug(segments[:depth])
        ))
    return chain


def taxonomies_from_path(path: str) -> List[TaxonomyNode]:
    """
    Build the taxonomy nodes a file declares, one per category in its chain.

    Root files get the single root taxonomy (level 1, no parents).
    """
    chain = category_chain(path)

    if chain[0].slug == ROOT_SLUG:
        return [TaxonomyNode(slug=ROOT_SLUG, title="", level=1, parents=[])]

    nodes = []
    parents = [ROOT_SLUG]
    for category in chain:
        nodes.append(TaxonomyNode(
            slug=category.slug,
            title=category.title,
            level=len(parents) + 1,
            parents=list(parents)
        ))
        parents.append(category.slug)
    return nodes
