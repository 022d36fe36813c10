"""
File system importer for Taxonomist.

Walks a content root for markdown files and turns each into a ContentItem.
Bodies are taken verbatim; rendering markdown is left to the caller.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from ..content.paths import is_path_from_static_assets, remove_root_path
from ..models import ContentItem, ContentType
from .base import BaseImporter, build_content_item


class FileSystemImporter(BaseImporter):
    """
    Importer for a directory of markdown files.

    Files named like ``index_file_name`` become taxonomy index items, files
    directly under the root become pages and everything else becomes posts.
    The static assets folder is skipped.
    """

    def __init__(
        self,
        root_path: str,
        static_assets_folder_name: str = "static",
        index_file_name: str = "_index.md",
        file_extensions: Optional[Sequence[str]] = None
    ):
        """
        Initialize the file system importer.

        Args:
            root_path: Directory holding the content
            static_assets_folder_name: Folder under the root that is not indexed
            index_file_name: File name marking a taxonomy's own page
            file_extensions: Extensions treated as content (default: .md)
        """
        self.root_path = Path(root_path)
        self.static_assets_folder_name = static_assets_folder_name
        self.index_file_name = index_file_name
        self.file_extensions = tuple(file_extensions or (".md",))

    def get_all_items(self) -> List[ContentItem]:
        if not self.root_path.is_dir():
            raise FileNotFoundError(f"Content root not found: {self.root_path}")

        root = str(self.root_path)
        items = []

        for file_path in sorted(self.root_path.rglob("*")):
            if not file_path.is_file() or file_path.suffix not in self.file_extensions:
                continue
            if is_path_from_static_assets(str(file_path), root, self.static_assets_folder_name):
                continue
            try:
                items.append(self._read_item(file_path))
            except UnicodeDecodeError as e:
                logging.warning(f"Skipping {file_path}: not valid UTF-8 ({e})")

        logging.info(f"Imported {len(items)} content items from {self.root_path}")
        return items

    def _read_item(self, file_path: Path) -> ContentItem:
        relative_path = remove_root_path(str(file_path), str(self.root_path))
        stat = file_path.stat()

        return build_content_item({
            "type": self._content_type(relative_path),
            "file_path": relative_path,
            "body": file_path.read_text(encoding="utf-8"),
            "date": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            "is_published": True
        })

    def _content_type(self, relative_path: str) -> ContentType:
        if Path(relative_path).name == self.index_file_name:
            return ContentType.INDEX
        if relative_path.count("/") == 1:
            return ContentType.PAGE
        return ContentType.POST
