"""
Unit tests for the derived tree cache.
"""

import threading
import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from taxonomist.importers import build_content_item
from taxonomist.models import ContentType
from taxonomist.store import CacheContext, CacheSlot, DerivedCache, EntityStore
from taxonomist.tree import build_content_tree


def make_item(file_path, year=2022, **fields):
    data = {
        "file_path": file_path,
        "body": "<p>body</p>",
        "date": datetime(year, 1, 1, tzinfo=timezone.utc),
    }
    data.update(fields)
    return build_content_item(data)


class TestDerivedCache(unittest.TestCase):
    """Test memoization, invalidation and link write-back."""

    def setUp(self):
        self.store = EntityStore(CacheContext(cache_name="c", index_cache_name="i"))
        self.cache = DerivedCache(self.store)
        self.store.save_content_item(make_item("/blog/old.md", year=2021))
        self.store.save_content_item(make_item("/blog/new.md", year=2023))

    def test_empty_until_read(self):
        self.assertIsNone(self.cache.get(CacheSlot.TAXONOMY_TREE))
        self.assertIsNone(self.cache.get("content_tree"))

    def test_memoized(self):
        first = self.cache.get_or_build(CacheSlot.TAXONOMY_TREE)
        second = self.cache.get_or_build(CacheSlot.TAXONOMY_TREE)
        self.assertIs(first, second)

    def test_writes_do_not_invalidate(self):
        tree = self.cache.get_or_build(CacheSlot.CONTENT_TREE)
        self.store.save_content_item(make_item("/blog/newest.md", year=2024))

        self.assertIs(self.cache.get_or_build(CacheSlot.CONTENT_TREE), tree)
        self.assertEqual(len(tree.children[0].children), 2)

    def test_invalidate_rebuilds(self):
        self.cache.get_or_build(CacheSlot.CONTENT_TREE)
        self.store.save_content_item(make_item("/blog/newest.md", year=2024))
        self.store.delete("/blog/old")
        self.cache.invalidate(CacheSlot.CONTENT_TREE)

        tree = self.cache.get_or_build(CacheSlot.CONTENT_TREE)
        blog = tree.children[0]
        self.assertEqual([c.slug for c in blog.children], ["/blog/newest", "/blog/new"])

    def test_invalidate_one_slot(self):
        taxonomy_tree = self.cache.get_or_build(CacheSlot.TAXONOMY_TREE)
        self.cache.get_or_build(CacheSlot.CONTENT_TREE)

        self.cache.invalidate("content_tree")

        self.assertIsNone(self.cache.get(CacheSlot.CONTENT_TREE))
        self.assertIs(self.cache.get(CacheSlot.TAXONOMY_TREE), taxonomy_tree)

    def test_invalidate_all(self):
        self.cache.get_or_build(CacheSlot.TAXONOMY_TREE)
        self.cache.get_or_build(CacheSlot.CONTENT_TREE)

        self.cache.invalidate()

        self.assertIsNone(self.cache.get(CacheSlot.TAXONOMY_TREE))
        self.assertIsNone(self.cache.get(CacheSlot.CONTENT_TREE))

    def test_links_written_back(self):
        self.assertIsNone(self.store.get("/blog/new").link)

        self.cache.get_or_build(CacheSlot.CONTENT_TREE)

        new = self.store.get("/blog/new")
        old = self.store.get("/blog/old")
        self.assertEqual(new.link.next, "/blog/old")
        self.assertEqual(old.link.previous, "/blog/new")
        self.assertIsNone(old.link.next)
        self.assertEqual(new.body, "<p>body</p>")

    def test_index_item_sets_taxonomy_title(self):
        self.store.save_index_item(make_item("/blog/_index.md", type=ContentType.INDEX, title="Journal"))
        tree = self.cache.get_or_build(CacheSlot.TAXONOMY_TREE)

        blog = tree.children[0]
        self.assertEqual(blog.title, "Journal")
        self.assertEqual(blog.children, [])

    def test_matches_single_threaded_rebuild(self):
        tree = self.cache.get_or_build(CacheSlot.CONTENT_TREE)

        items = {item.slug: item for item in self.store.list_content()}
        expected = build_content_tree(self.store.list_taxonomies(), items)

        self.assertEqual(tree.model_dump_json(), expected.model_dump_json())

    def test_racing_rebuilds_agree(self):
        self.cache.invalidate()
        barrier = threading.Barrier(4)
        results = []

        def read():
            barrier.wait()
            results.append(self.cache.get_or_build(CacheSlot.CONTENT_TREE).model_dump_json())

        threads = [threading.Thread(target=read) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(set(results)), 1)

    def test_build_uses_full_enumeration(self):
        with patch.object(self.store, "list_taxonomies", wraps=self.store.list_taxonomies) as listed:
            self.cache.get_or_build(CacheSlot.TAXONOMY_TREE)
            self.cache.get_or_build(CacheSlot.TAXONOMY_TREE)
        self.assertEqual(listed.call_count, 1)

    def test_unknown_slot(self):
        with self.assertRaises(ValueError):
            self.cache.get_or_build("sidebar")


if __name__ == '__main__':
    unittest.main(verbosity=2)
