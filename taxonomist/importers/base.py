"""
Base importer interface for Taxonomist.

This module defines the abstract interface that all content importers must
implement, and the helper they share to turn parsed fields into a validated
ContentItem.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..content.paths import derive_slug, derive_title, taxonomies_from_path
from ..models import ContentItem


def build_content_item(fields: Dict[str, Any]) -> ContentItem:
    """
    Construct and validate a content item from parsed fields.

    ``slug``, ``title`` and ``taxonomies`` are derived from ``file_path``
    unless the fields already provide them.

    Args:
        fields: Parsed fields; ``file_path`` and ``date`` are required

    Returns:
        The validated ContentItem
    """
    data = dict(fields)
    file_path = data["file_path"]
    data.setdefault("slug", derive_slug(file_path))
    data.setdefault("title", derive_title(file_path))
    data.setdefault("taxonomies", taxonomies_from_path(file_path))
    return ContentItem.model_validate(data)


class BaseImporter(ABC):
    """
    Abstract base class for all content importers.

    Each importer stands in for the markdown parser, turning its source into
    ContentItem records ready to be saved into a ContentIndex.
    """

    @abstractmethod
    def get_all_items(self) -> List[ContentItem]:
        """
        Retrieve every content item from the source.

        Returns:
            List of ContentItem objects, index items included
        """
        pass
