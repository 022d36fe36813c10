"""
Content data models for Taxonomist.

This module defines the two entity shapes kept in the entity store: content
items (posts, pages and taxonomy index pages) and taxonomy nodes. Both carry
a literal ``kind`` tag so a taxonomy's children can hold either shape.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


ROOT_SLUG = "/"


class EntityKind(str, Enum):
    CONTENT = "content"
    TAXONOMY = "taxonomy"


class ContentType(str, Enum):
    POST = "post"
    PAGE = "page"
    INDEX = "index"


class LinkType(str, Enum):
    TAXONOMY = "taxonomy"
    POST = "post"


class SortBy(str, Enum):
    TITLE = "title"
    DATE = "date"
    SLUG = "slug"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ContentItem(BaseModel):
    """
    A piece of content derived from a markdown file.

    Items of type ``index`` describe their owning taxonomy and are never
    listed among its children.
    """

    kind: Literal["content"] = "content"

    type: ContentType = Field(
        default=ContentType.POST,
        description="Whether the item is a post, a page or a taxonomy index page"
    )

    slug: str = Field(
        ...,
        description="Unique slash-rooted identifier derived from the file path"
    )

    title: str = Field(
        ...,
        description="Display title"
    )

    summary: Optional[str] = Field(
        default=None,
        description="Short summary shown in listings"
    )

    body: Optional[str] = Field(
        default=None,
        description="Rendered body; stripped on copies embedded in taxonomy listings"
    )

    file_path: str = Field(
        ...,
        description="Source file path relative to the content root"
    )

    date: datetime = Field(
        ...,
        description="Publication date"
    )

    is_published: bool = Field(
        default=False,
        description="Whether the item is published"
    )

    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Opaque metadata carried over from the parser"
    )

    position: int = Field(
        default=0,
        description="Ordering hint handed to the owning taxonomy by index items"
    )

    taxonomies: List["TaxonomyNode"] = Field(
        default_factory=list,
        description="Taxonomy chain the item belongs to, root-most first"
    )

    link: Optional["TaxonomyNode"] = Field(
        default=None,
        description="Resolved position in the content tree, with previous/next"
    )

    def without_body(self) -> "ContentItem":
        """Return a copy suitable for embedding in a taxonomy listing."""
        return self.model_copy(update={"body": None})


class TaxonomyNode(BaseModel):
    """
    A category in the content hierarchy.

    A node of type ``post`` is the resolved link of a content item: it holds
    the item's place in the tree and its previous/next neighbours as slugs.
    """

    kind: Literal["taxonomy"] = "taxonomy"

    slug: str = Field(
        ...,
        description="Unique slash-rooted identifier"
    )

    title: str = Field(
        ...,
        description="Display title"
    )

    type: LinkType = Field(
        default=LinkType.TAXONOMY,
        description="Taxonomy node or a content item's resolved link"
    )

    custom_type: Optional[str] = Field(
        default=None,
        description="Optional custom type label"
    )

    level: int = Field(
        default=1,
        description="Depth in the hierarchy, root is 1"
    )

    parents: List[str] = Field(
        default_factory=lambda: [ROOT_SLUG],
        description="Ancestor slugs, root first"
    )

    children: List[Annotated[Union["TaxonomyNode", ContentItem], Field(discriminator="kind")]] = Field(
        default_factory=list,
        description="Nested taxonomies and body-less content items"
    )

    index: Optional[ContentItem] = Field(
        default=None,
        description="The taxonomy's own descriptive content"
    )

    sort_by: SortBy = Field(
        default=SortBy.DATE,
        description="Field used to order content children"
    )

    sort_order: SortOrder = Field(
        default=SortOrder.DESC,
        description="Direction used to order content children"
    )

    position: int = Field(
        default=0,
        description="Ordering hint among sibling taxonomies"
    )

    previous: Optional[str] = Field(
        default=None,
        description="Slug of the previous item in navigation order"
    )

    next: Optional[str] = Field(
        default=None,
        description="Slug of the next item in navigation order"
    )

    def without_children(self) -> "TaxonomyNode":
        return self.model_copy(update={"children": []})


# Resolve the forward references between the two models
ContentItem.model_rebuild()
TaxonomyNode.model_rebuild()

Entity = Union[ContentItem, TaxonomyNode]
