"""
Unit tests for tree building and navigation.
"""

import unittest
from datetime import datetime, timezone

from taxonomist.importers import build_content_item
from taxonomist.models import ContentItem, ContentType, LinkType, SortBy, SortOrder, TaxonomyNode
from taxonomist.store import EntityStore
from taxonomist.tree import (
    build_content_tree,
    build_taxonomy_tree,
    find_node,
    flatten_content,
    navigation_pass,
    sort_content,
)


def make_item(file_path, year=2022, **fields):
    data = {
        "file_path": file_path,
        "body": "<p>body</p>",
        "date": datetime(year, 1, 1, tzinfo=timezone.utc),
    }
    data.update(fields)
    return build_content_item(data)


def taxonomy_slugs(node):
    return [c.slug for c in node.children if isinstance(c, TaxonomyNode)]


def content_slugs(node):
    return [c.slug for c in node.children if isinstance(c, ContentItem)]


class TestSortContent(unittest.TestCase):
    """Test sibling ordering."""

    def setUp(self):
        self.items = [
            make_item("/b/banana.md", year=2021),
            make_item("/b/apple.md", year=2023),
            make_item("/b/cherry.md", year=2022),
        ]

    def test_date_desc(self):
        ordered = sort_content(self.items, SortBy.DATE, SortOrder.DESC)
        self.assertEqual([i.slug for i in ordered], ["/b/apple", "/b/cherry", "/b/banana"])

    def test_title_asc(self):
        ordered = sort_content(self.items, SortBy.TITLE, SortOrder.ASC)
        self.assertEqual([i.title for i in ordered], ["Apple", "Banana", "Cherry"])

    def test_slug_desc(self):
        ordered = sort_content(self.items, SortBy.SLUG, SortOrder.DESC)
        self.assertEqual([i.slug for i in ordered], ["/b/cherry", "/b/banana", "/b/apple"])

    def test_ties_broken_by_slug(self):
        same_day = [make_item("/b/zeta.md"), make_item("/b/alpha.md"), make_item("/b/mid.md")]

        for order in (SortOrder.ASC, SortOrder.DESC):
            ordered = sort_content(same_day, SortBy.DATE, order)
            self.assertEqual([i.slug for i in ordered], ["/b/alpha", "/b/mid", "/b/zeta"])

    def test_naive_and_aware_dates(self):
        naive = make_item("/b/naive.md", date=datetime(2020, 1, 1))
        ordered = sort_content(self.items + [naive], SortBy.DATE, SortOrder.ASC)
        self.assertEqual(ordered[0].slug, "/b/naive")


class TestBuildTaxonomyTree(unittest.TestCase):
    """Test the taxonomy-only hierarchy."""

    def setUp(self):
        self.store = EntityStore()
        for path in [
            "/about.md",
            "/blog/post.md",
            "/blog/art/3d-models/model.md",
            "/blog/art/painting.md",
            "/docs/intro.md",
        ]:
            self.store.save_content_item(make_item(path))
        self.store.save_index_item(make_item(
            "/docs/_index.md", type=ContentType.INDEX, title="Documentation", position=-1
        ))

    def test_nesting(self):
        tree = build_taxonomy_tree(self.store.list_taxonomies())

        self.assertEqual(tree.slug, "/")
        self.assertEqual(tree.level, 1)
        self.assertEqual(taxonomy_slugs(tree), ["/docs", "/blog"])
        blog = find_node(tree, "/blog")
        self.assertEqual(taxonomy_slugs(blog), ["/blog/art"])
        self.assertEqual(taxonomy_slugs(find_node(tree, "/blog/art")), ["/blog/art/3d-models"])

    def test_no_content_items(self):
        tree = build_taxonomy_tree(self.store.list_taxonomies())

        def walk(node):
            for child in node.children:
                self.assertIsInstance(child, TaxonomyNode)
                walk(child)

        walk(tree)

    def test_index_body_stripped(self):
        self.store.save_index_item(make_item("/blog/_index.md", type=ContentType.INDEX, title="Blog"))
        tree = build_taxonomy_tree(self.store.list_taxonomies())

        self.assertIsNone(find_node(tree, "/blog").index.body)
        self.assertEqual(self.store.get("/blog").index.body, "<p>body</p>")

    def test_root_synthesized(self):
        store = EntityStore()
        store.save_content_item(make_item("/blog/post.md"))

        tree = build_taxonomy_tree(store.list_taxonomies())

        self.assertEqual(tree.slug, "/")
        self.assertEqual(tree.title, "")
        self.assertEqual(taxonomy_slugs(tree), ["/blog"])

    def test_orphan_attached_to_nearest_ancestor(self):
        orphan = TaxonomyNode(slug="/a/b/c", title="C", level=4, parents=["/", "/a", "/a/b"])
        parent = TaxonomyNode(slug="/a", title="A", level=2, parents=["/"])

        tree = build_taxonomy_tree([orphan, parent])

        self.assertEqual(taxonomy_slugs(tree), ["/a"])
        self.assertEqual(taxonomy_slugs(find_node(tree, "/a")), ["/a/b/c"])

    def test_empty(self):
        tree = build_taxonomy_tree([])
        self.assertEqual(tree.slug, "/")
        self.assertEqual(tree.children, [])

    def test_store_untouched(self):
        before = self.store.get("/blog").model_dump()
        build_taxonomy_tree(self.store.list_taxonomies())
        self.assertEqual(self.store.get("/blog").model_dump(), before)


class TestBuildContentTree(unittest.TestCase):
    """Test the content hierarchy and navigation."""

    def setUp(self):
        self.store = EntityStore()
        self.store.save_content_item(make_item("/about.md", type=ContentType.PAGE))
        self.store.save_content_item(make_item("/blog/first.md", year=2021))
        self.store.save_content_item(make_item("/blog/second.md", year=2022))
        self.store.save_content_item(make_item("/blog/art/sketch.md", year=2023))

    def build(self):
        items = {item.slug: item for item in self.store.list_content()}
        return build_content_tree(self.store.list_taxonomies(), items)

    def test_items_under_innermost_taxonomy(self):
        tree = self.build()

        self.assertEqual(content_slugs(tree), ["/about"])
        self.assertEqual(content_slugs(find_node(tree, "/blog")), ["/blog/second", "/blog/first"])
        self.assertEqual(content_slugs(find_node(tree, "/blog/art")), ["/blog/art/sketch"])
        # The store still lists every descendant under /blog
        self.assertEqual(len(self.store.get("/blog").children), 3)

    def test_content_before_subtaxonomies(self):
        blog = find_node(self.build(), "/blog")
        kinds = [child.kind for child in blog.children]
        self.assertEqual(kinds, ["content", "content", "taxonomy"])

    def test_bodies_from_store(self):
        tree = self.build()
        self.assertEqual(find_node(tree, "/blog").children[0].body, "<p>body</p>")

    def test_listed_child_used_without_record(self):
        tree = build_content_tree(self.store.list_taxonomies())
        self.assertIsNone(find_node(tree, "/blog").children[0].body)

    def test_navigation_order(self):
        order = [item.slug for item in flatten_content(self.build())]
        self.assertEqual(order, ["/about", "/blog/second", "/blog/first", "/blog/art/sketch"])

    def test_links(self):
        items = flatten_content(self.build())
        links = {item.slug: item.link for item in items}

        self.assertIsNone(links["/about"].previous)
        self.assertEqual(links["/about"].next, "/blog/second")
        self.assertEqual(links["/blog/first"].previous, "/blog/second")
        self.assertEqual(links["/blog/first"].next, "/blog/art/sketch")
        self.assertIsNone(links["/blog/art/sketch"].next)

        sketch = links["/blog/art/sketch"]
        self.assertEqual(sketch.type, LinkType.POST)
        self.assertEqual(sketch.level, 4)
        self.assertEqual(sketch.parents, ["/", "/blog", "/blog/art"])
        self.assertEqual(links["/about"].parents, ["/"])

    def test_deterministic(self):
        first = self.build().model_dump_json()
        store = EntityStore()
        for item in reversed(self.store.list_content()):
            store.save_content_item(item)
        items = {item.slug: item for item in store.list_content()}
        second = build_content_tree(store.list_taxonomies(), items).model_dump_json()

        self.assertEqual(first, second)


class TestNavigationPass(unittest.TestCase):
    """Test previous/next assignment."""

    def test_date_desc_walks_to_older(self):
        store = EntityStore()
        for year in (2021, 2022, 2023):
            store.save_content_item(make_item(f"/news/item-{year}.md", year=year))

        tree = build_content_tree(store.list_taxonomies())
        items = {item.slug: item for item in flatten_content(tree)}

        seen = []
        current = "/news/item-2023"
        while current is not None:
            seen.append(current)
            current = items[current].link.next
        self.assertEqual(seen, ["/news/item-2023", "/news/item-2022", "/news/item-2021"])
        self.assertIsNone(items["/news/item-2023"].link.previous)

    def test_single_and_empty(self):
        self.assertEqual(navigation_pass([]), [])

        linked = navigation_pass([make_item("/solo.md")])
        self.assertIsNone(linked[0].link.previous)
        self.assertIsNone(linked[0].link.next)

    def test_inputs_not_mutated(self):
        item = make_item("/solo.md")
        navigation_pass([item])
        self.assertIsNone(item.link)


if __name__ == '__main__':
    unittest.main(verbosity=2)
