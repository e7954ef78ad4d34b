import unittest

from portal import content
from portal.db import InMemoryDocumentStore
from portal.errors import InvalidRequestError, NotFoundError
from portal.repository import PortalRepository
from shared.types import Comment, ContentType, ItemStatus, VaultItem


def make_item(item_id, hours_ago=0, **overrides) -> VaultItem:
    fields = dict(
        id=item_id,
        type=ContentType.ARTICLE,
        title=f"Item {item_id}",
        author="Nexus Scout",
        date=f"2025-01-10T{23 - hours_ago:02d}:00:00+00:00",
        content="Some words about heroes.",
        categories=["Movies"],
    )
    fields.update(overrides)
    return VaultItem(**fields)


class PrepareItemTests(unittest.TestCase):
    def test_requires_title_and_content(self):
        with self.assertRaises(InvalidRequestError):
            content.prepare_item({"title": "  ", "content": "body"})
        with self.assertRaises(InvalidRequestError):
            content.prepare_item({"title": "Headline", "content": ""})

    def test_new_item_defaults(self):
        item = content.prepare_item(
            {"title": " Headline ", "content": "word " * 401, "categories": ["DC"]}
        )
        self.assertTrue(item.id)
        self.assertEqual(item.title, "Headline")
        self.assertEqual(item.read_time, "3 min read")
        self.assertEqual(item.author, "Command HQ")
        self.assertEqual(item.type, ContentType.ARTICLE)
        self.assertEqual(item.status, ItemStatus.PUBLISHED)
        self.assertEqual((item.views, item.likes, item.comments), (0, 0, []))
        self.assertTrue(item.date)

    def test_explicit_read_time_wins(self):
        item = content.prepare_item(
            {"title": "Headline", "content": "short", "read_time": "9 min read"}
        )
        self.assertEqual(item.read_time, "9 min read")

    def test_edit_keeps_engagement_and_id(self):
        existing = make_item("a", views=40, likes=3, user_ratings=[9])
        item = content.prepare_item(
            {"id": "other", "title": "New", "content": "body", "views": 0, "likes": 0},
            existing,
        )
        self.assertEqual(item.id, "a")
        self.assertEqual(item.title, "New")
        self.assertEqual((item.views, item.likes, item.user_ratings), (40, 3, [9]))
        self.assertEqual(item.author, "Nexus Scout")

    def test_partial_edit_keeps_stored_fields(self):
        existing = make_item("a", read_time="7 min read", is_hero=False)
        item = content.prepare_item({"status": "Draft", "is_hero": True}, existing)
        self.assertEqual(item.title, "Item a")
        self.assertEqual(item.content, "Some words about heroes.")
        self.assertEqual(item.status, ItemStatus.DRAFT)
        self.assertTrue(item.is_hero)
        self.assertEqual(item.read_time, "7 min read")

    def test_edit_with_new_content_recomputes_read_time(self):
        existing = make_item("a", read_time="7 min read")
        item = content.prepare_item({"content": "word " * 201}, existing)
        self.assertEqual(item.read_time, "2 min read")

    def test_edit_cannot_blank_the_title(self):
        with self.assertRaises(InvalidRequestError):
            content.prepare_item({"title": "  "}, make_item("a"))


class FeedTests(unittest.TestCase):
    def setUp(self):
        self.items = [
            make_item("old", hours_ago=5, views=10, likes=0),
            make_item("new", hours_ago=0, views=0, likes=50, is_hero=True),
            make_item(
                "draft",
                hours_ago=1,
                status=ItemStatus.DRAFT,
                is_hero=True,
                views=10_000,
            ),
            make_item(
                "trailer",
                hours_ago=2,
                type=ContentType.TRAILER,
                categories=["Marvel", "Trailers"],
                is_marvel_trending=True,
            ),
            make_item(
                "clip",
                hours_ago=3,
                categories=["dc"],
                is_video_section=True,
                is_dc_trending=True,
                views=200,
            ),
            make_item(
                "review",
                hours_ago=4,
                type=ContentType.REVIEW,
                categories=["Games", "Movies"],
            ),
            make_item("post", hours_ago=6, categories=["Blog"]),
        ]

    def ids(self, items):
        return [i.id for i in items]

    def test_published_is_newest_first_without_drafts(self):
        self.assertEqual(
            self.ids(content.published(self.items)),
            ["new", "trailer", "clip", "review", "old", "post"],
        )

    def test_home_sections(self):
        sections = content.home_sections(self.items)
        self.assertEqual(self.ids(sections.hero), ["new"])
        self.assertEqual(self.ids(sections.marvel_trending), ["trailer"])
        self.assertEqual(self.ids(sections.dc_trending), ["clip"])
        # likes weigh ten times views
        self.assertEqual(self.ids(sections.trending)[:2], ["new", "clip"])
        self.assertEqual(len(sections.trending), 5)
        self.assertNotIn("draft", self.ids(sections.main_feed))

    def test_category_items_are_case_insensitive(self):
        self.assertEqual(self.ids(content.category_items(self.items, "DC")), ["clip"])
        self.assertEqual(
            self.ids(content.category_items(self.items, "movies")),
            ["new", "review", "old"],
        )
        self.assertEqual(
            self.ids(
                content.category_items(self.items, "Movies", ContentType.REVIEW)
            ),
            ["review"],
        )

    def test_trailers_include_video_section(self):
        self.assertEqual(
            self.ids(content.trailer_items(self.items)), ["trailer", "clip"]
        )

    def test_reviews_filter_on_first_category(self):
        self.assertEqual(self.ids(content.review_items(self.items)), ["review"])
        self.assertEqual(self.ids(content.review_items(self.items, "Games")), ["review"])
        self.assertEqual(content.review_items(self.items, "Movies"), [])

    def test_blog_items(self):
        items = self.items + [make_item("typed", hours_ago=7, type=ContentType.BLOG)]
        self.assertEqual(self.ids(content.blog_items(items)), ["post", "typed"])

    def test_admin_items_search_filter_and_sort(self):
        items = self.items + [make_item("z", title="Zebra", author="Logan")]
        self.assertEqual(self.ids(content.admin_items(items, search="logan")), ["z"])
        self.assertEqual(
            self.ids(content.admin_items(items, category="Blog")), ["post"]
        )
        by_views = content.admin_items(items, sort_key="views", order="desc")
        self.assertEqual(by_views[0].id, "draft")
        by_title = content.admin_items(items, sort_key="title", order="asc")
        self.assertEqual(by_title[-1].id, "z")

    def test_related_items(self):
        target = make_item("target", categories=["Movies", "Marvel"])
        related = content.related_items(target, self.items + [target])
        self.assertNotIn("target", self.ids(related))
        self.assertNotIn("draft", self.ids(related))
        self.assertEqual(len(related), 3)
        # Shares Movies and the Article type.
        self.assertEqual(related[0].id, "old")

    def test_dashboard_stats(self):
        items = [
            make_item("a", views=10, likes=2, user_ratings=[10, 8]),
            make_item(
                "b",
                views=5,
                likes=1,
                categories=["Movies", "DC"],
                comments=[Comment(id="c", author="x", date="", text="t", avatar="")],
            ),
        ]
        stats = content.dashboard_stats(items)
        self.assertEqual(stats.total_items, 2)
        self.assertEqual(stats.total_views, 15)
        self.assertEqual(stats.total_engagements, 4)
        self.assertEqual(stats.average_rating, 4.5)
        self.assertEqual(stats.category_counts, {"Movies": 2, "DC": 1})

    def test_dashboard_stats_empty(self):
        self.assertEqual(content.dashboard_stats([]).average_rating, 0)

    def test_paginate(self):
        page, total = content.paginate(list(range(10)), 6, 6)
        self.assertEqual(page, [6, 7, 8, 9])
        self.assertEqual(total, 10)


class ContentServiceTests(unittest.TestCase):
    def setUp(self):
        self.repo = PortalRepository(InMemoryDocumentStore())

    def test_create_update_and_counters(self):
        item = content.create_item(self.repo, {"title": "Headline", "content": "body"})
        content.record_view(self.repo, item.id)
        content.record_view(self.repo, item.id)
        content.record_like(self.repo, item.id)

        updated = content.update_item(
            self.repo, item.id, {"title": "Edited", "content": "body", "views": 0}
        )
        self.assertEqual(updated.title, "Edited")
        self.assertEqual((updated.views, updated.likes), (2, 1))
        self.assertEqual(self.repo.get_item(item.id).title, "Edited")

    def test_update_missing_item(self):
        with self.assertRaises(NotFoundError):
            content.update_item(self.repo, "missing", {"title": "x", "content": "y"})

    def test_public_item_hides_drafts(self):
        item = content.create_item(
            self.repo, {"title": "Secret", "content": "body", "status": "Draft"}
        )
        self.assertEqual(content.get_item_or_raise(self.repo, item.id).id, item.id)
        with self.assertRaises(NotFoundError):
            content.get_public_item(self.repo, item.id)

    def test_delete_items_counts_existing_only(self):
        a = content.create_item(self.repo, {"title": "A", "content": "body"})
        b = content.create_item(self.repo, {"title": "B", "content": "body"})
        self.assertEqual(content.delete_items(self.repo, [a.id, b.id, "missing"]), 2)
        self.assertEqual(self.repo.list_items(), [])


if __name__ == "__main__":
    unittest.main()
