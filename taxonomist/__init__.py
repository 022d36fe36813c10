"""
Taxonomist: indexes markdown-derived content into navigable trees.

Content records are kept in a concurrent entity store; the taxonomy tree and
the fully linked content tree are derived from it and cached until invalidated.
"""

__version__ = "0.1.0"
__author__ = "Taxonomist Project"

# Import main components
from .models import ContentItem, TaxonomyNode, CategoryDescriptor
from .store import CacheContext, DerivedCache, EntityStore, SlugConflictError
from .index import ContentIndex
from .importers import BaseImporter, MockImporter, FileSystemImporter

__all__ = [
    "ContentItem",
    "TaxonomyNode",
    "CategoryDescriptor",
    "CacheContext",
    "DerivedCache",
    "EntityStore",
    "SlugConflictError",
    "ContentIndex",
    "BaseImporter",
    "MockImporter",
    "FileSystemImporter"
]
