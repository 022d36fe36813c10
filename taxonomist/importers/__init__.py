"""Content importers standing in for the markdown parser."""

from .base import BaseImporter, build_content_item
from .filesystem import FileSystemImporter
from .mock import MockImporter

__all__ = ["BaseImporter", "FileSystemImporter", "MockImporter", "build_content_item"]
