"""Category descriptors produced from file paths."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CategoryDescriptor:
    """
    One step of a path's category chain.
    """
    title: str
    slug: str
