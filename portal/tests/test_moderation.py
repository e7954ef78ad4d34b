import unittest
from dataclasses import replace

from portal import moderation
from portal.db import InMemoryDocumentStore
from portal.errors import InvalidRequestError, NotFoundError
from portal.repository import PortalRepository
from shared.types import Comment, ContentType, VaultItem


class ModerationTests(unittest.TestCase):
    def setUp(self):
        self.repo = PortalRepository(InMemoryDocumentStore())
        self.item = self.repo.save_item(
            VaultItem(
                id="item-1",
                type=ContentType.ARTICLE,
                title="Joker 2 Verdict",
                author="Arkham Guard",
                date="2025-01-01T00:00:00+00:00",
                content="A musical odyssey into madness.",
                user_ratings=[7],
            )
        )

    def test_build_comment_validates_input(self):
        with self.assertRaises(InvalidRequestError):
            moderation.build_comment("", "text")
        with self.assertRaises(InvalidRequestError):
            moderation.build_comment("Bruce", "   ")
        with self.assertRaises(InvalidRequestError):
            moderation.build_comment("Bruce", "text", user_score=11)
        with self.assertRaises(InvalidRequestError):
            moderation.build_comment("Bruce", "text", user_score=0)

    def test_build_comment_defaults(self):
        comment = moderation.build_comment(" Bruce ", " Great read ")
        self.assertEqual(comment.author, "Bruce")
        self.assertEqual(comment.text, "Great read")
        self.assertEqual(comment.user_score, 10)
        self.assertTrue(comment.is_visible)
        self.assertIn("seed=Bruce", comment.avatar)

    def test_post_comment_appends_score(self):
        comment = moderation.build_comment("Bruce", "Great", user_score=9)
        updated = moderation.post_comment(self.repo, self.item.id, comment)
        self.assertEqual([c.id for c in updated.comments], [comment.id])
        self.assertEqual(updated.user_ratings, [7, 9])
        self.assertEqual(self.repo.get_item(self.item.id).user_ratings, [7, 9])

    def test_post_comment_on_missing_item(self):
        comment = moderation.build_comment("Bruce", "Great")
        with self.assertRaises(NotFoundError):
            moderation.post_comment(self.repo, "missing", comment)

    def test_toggle_hides_from_public(self):
        comment = moderation.build_comment("Bruce", "Great")
        moderation.post_comment(self.repo, self.item.id, comment)

        hidden = moderation.toggle_comment_visibility(self.repo, self.item.id, comment.id)
        self.assertEqual(moderation.visible_comments(hidden), [])
        shown = moderation.toggle_comment_visibility(self.repo, self.item.id, comment.id)
        self.assertEqual([c.id for c in moderation.visible_comments(shown)], [comment.id])

    def test_toggle_missing_comment(self):
        with self.assertRaises(NotFoundError):
            moderation.toggle_comment_visibility(self.repo, self.item.id, "nope")

    def test_delete_comment_removes_its_score(self):
        first = moderation.build_comment("Bruce", "Great", user_score=9)
        second = moderation.build_comment("Selina", "Meh", user_score=4)
        moderation.post_comment(self.repo, self.item.id, first)
        moderation.post_comment(self.repo, self.item.id, second)

        updated = moderation.delete_comment(self.repo, self.item.id, first.id)
        self.assertEqual([c.id for c in updated.comments], [second.id])
        self.assertEqual(updated.user_ratings, [7, 4])

    def test_average_score(self):
        self.assertEqual(moderation.average_score(self.item), "7.0")
        self.assertEqual(
            moderation.average_score(replace(self.item, user_ratings=[])), "N/A"
        )
        self.assertEqual(
            moderation.average_score(replace(self.item, user_ratings=[10, 9])), "9.5"
        )

    def test_moderation_queue_is_flat_newest_first_and_searchable(self):
        other = replace(
            self.item,
            id="item-2",
            title="Rivals Review",
            comments=[
                Comment(
                    id="c3",
                    author="Logan",
                    date="2025-01-03T00:00:00+00:00",
                    text="Snikt",
                    avatar="",
                    email="logan@example.com",
                )
            ],
        )
        first = replace(
            self.item,
            comments=[
                Comment(
                    id="c1",
                    author="Bruce",
                    date="2025-01-01T00:00:00+00:00",
                    text="Dark",
                    avatar="",
                ),
                Comment(
                    id="c2",
                    author="Selina",
                    date="2025-01-02T00:00:00+00:00",
                    text="Purr",
                    avatar="",
                ),
            ],
        )
        queue = moderation.moderation_queue([first, other])
        self.assertEqual([m.comment.id for m in queue], ["c3", "c2", "c1"])
        self.assertEqual(queue[0].article_title, "Rivals Review")

        self.assertEqual(
            [m.comment.id for m in moderation.moderation_queue([first, other], "JOKER")],
            ["c2", "c1"],
        )
        self.assertEqual(
            [m.comment.id for m in moderation.moderation_queue([first, other], "logan@")],
            ["c3"],
        )
        self.assertEqual(
            [m.comment.id for m in moderation.moderation_queue([first, other], "purr")],
            ["c2"],
        )


if __name__ == "__main__":
    unittest.main()
