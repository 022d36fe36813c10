"""
Mock importer for testing Taxonomist.

This module provides a fixed set of content items for exercising the index
without a content directory.
"""

from datetime import datetime, timezone
from typing import List

from ..models import ContentItem, ContentType
from .base import BaseImporter, build_content_item


class MockImporter(BaseImporter):
    """
    Mock importer that returns hardcoded test content.
    """

    def __init__(self):
        """Initialize the mock importer with test data."""
        self._test_items = self._create_test_items()

    def get_all_items(self) -> List[ContentItem]:
        return list(self._test_items)

    def _create_test_items(self) -> List[ContentItem]:
        """
        Create hardcoded items covering pages, nested posts and index pages.

        Returns:
            List of test items
        """
        items = []

        # Root pages
        items.append(build_content_item({
            "type": ContentType.PAGE,
            "file_path": "/about.md",
            "body": "<p>About this site.</p>",
            "date": datetime(2021, 1, 1, tzinfo=timezone.utc),
            "is_published": True
        }))
        items.append(build_content_item({
            "type": ContentType.PAGE,
            "file_path": "/contact.md",
            "body": "<p>Get in touch.</p>",
            "date": datetime(2021, 1, 2, tzinfo=timezone.utc),
            "is_published": True
        }))

        # Blog index page
        items.append(build_content_item({
            "type": ContentType.INDEX,
            "file_path": "/blog/_index.md",
            "title": "The Blog",
            "body": "<p>Notes and articles.</p>",
            "date": datetime(2021, 1, 1, tzinfo=timezone.utc),
            "position": 1,
            "is_published": True
        }))

        # Blog posts
        items.append(build_content_item({
            "file_path": "/blog/my-new-project.md",
            "summary": "Starting something new",
            "body": "<p>Starting something new.</p>",
            "date": datetime(2022, 3, 14, tzinfo=timezone.utc),
            "is_published": True
        }))
        items.append(build_content_item({
            "file_path": "/blog/art/3d-models/low-poly-trees.md",
            "body": "<p>Modelling low poly trees.</p>",
            "date": datetime(2021, 6, 5, tzinfo=timezone.utc),
            "is_published": True,
            "metadata": {"tags": ["blender"]}
        }))
        items.append(build_content_item({
            "file_path": "/blog/art/3d-models/rigging-basics.md",
            "body": "<p>Rigging basics.</p>",
            "date": datetime(2023, 2, 1, tzinfo=timezone.utc),
            "is_published": True
        }))

        # Docs, ordered by title
        items.append(build_content_item({
            "type": ContentType.INDEX,
            "file_path": "/docs/_index.md",
            "title": "Documentation",
            "metadata": {"sort_by": "title", "sort_order": "asc"},
            "date": datetime(2021, 1, 1, tzinfo=timezone.utc),
            "position": 2,
            "is_published": True
        }))
        items.append(build_content_item({
            "file_path": "/docs/getting-started.md",
            "body": "<p>Install and run.</p>",
            "date": datetime(2022, 1, 1, tzinfo=timezone.utc),
            "is_published": True
        }))

        return items
