import unittest
from unittest.mock import patch

from portal import content, site
from portal.db import InMemoryDocumentStore
from portal.errors import ConflictError, InvalidRequestError, NotFoundError
from portal.repository import PortalRepository
from shared.constants import DEFAULT_CATEGORIES
from shared.types import Subscriber


class CategoryTests(unittest.TestCase):
    def setUp(self):
        self.repo = PortalRepository(InMemoryDocumentStore())

    def test_defaults_when_nothing_stored(self):
        self.assertEqual(self.repo.get_categories(), DEFAULT_CATEGORIES)

    def test_add_category(self):
        categories = site.add_category(self.repo, "  Anime ")
        self.assertEqual(categories[-1], "Anime")
        self.assertEqual(self.repo.get_categories(), DEFAULT_CATEGORIES + ["Anime"])

    def test_add_category_validation(self):
        with self.assertRaises(InvalidRequestError):
            site.add_category(self.repo, "   ")
        with self.assertRaises(ConflictError):
            site.add_category(self.repo, "Movies")

    def test_delete_category(self):
        categories = site.delete_category(self.repo, "Rumors")
        self.assertNotIn("Rumors", categories)
        self.assertNotIn("Rumors", self.repo.get_categories())
        with self.assertRaises(NotFoundError):
            site.delete_category(self.repo, "Rumors")


class SettingsTests(unittest.TestCase):
    def setUp(self):
        self.repo = PortalRepository(InMemoryDocumentStore())

    def test_default_settings(self):
        settings = self.repo.get_settings()
        self.assertEqual(settings.contact_email, "uplink@heroportal.io")
        self.assertEqual(len(settings.social_links), 5)
        self.assertFalse(any(link.visible for link in settings.social_links))
        self.assertEqual(settings.copyright_year, "2026")

    def test_save_settings_merges_fields(self):
        site.save_settings(self.repo, address="Stark Tower", show_address=False)
        settings = self.repo.get_settings()
        self.assertEqual(settings.address, "Stark Tower")
        self.assertFalse(settings.show_address)
        self.assertEqual(settings.contact_email, "uplink@heroportal.io")

    def test_social_links(self):
        settings = site.add_social_link(self.repo, "Discord", "https://discord.gg/hero")
        link = settings.social_links[-1]
        self.assertEqual((link.platform, link.icon, link.visible), ("Discord", "link", True))

        settings = site.remove_social_link(self.repo, link.id)
        self.assertNotIn(link.id, [l.id for l in settings.social_links])
        with self.assertRaises(NotFoundError):
            site.remove_social_link(self.repo, link.id)
        with self.assertRaises(InvalidRequestError):
            site.add_social_link(self.repo, "Discord", "")


class SubscriberTests(unittest.TestCase):
    def setUp(self):
        self.repo = PortalRepository(InMemoryDocumentStore())

    def test_subscribe_deduplicates(self):
        first = site.subscribe(self.repo, "Fan@Example.com ")
        second = site.subscribe(self.repo, "fan@example.com")
        self.assertEqual(first.id, second.id)
        self.assertEqual(first.email, "fan@example.com")
        self.assertEqual(len(self.repo.list_subscribers()), 1)

    def test_subscribe_requires_address(self):
        with self.assertRaises(InvalidRequestError):
            site.subscribe(self.repo, "not-an-address")

    def test_search_is_newest_first(self):
        subscribers = [
            Subscriber(id="1", email="old@example.com", date="2025-01-01T00:00:00+00:00"),
            Subscriber(id="2", email="new@example.com", date="2025-02-01T00:00:00+00:00"),
            Subscriber(id="3", email="other@test.io", date="2025-03-01T00:00:00+00:00"),
        ]
        self.assertEqual(
            [s.id for s in site.search_subscribers(subscribers, "example")], ["2", "1"]
        )
        self.assertEqual([s.id for s in site.search_subscribers(subscribers)], ["3", "2", "1"])

    def test_delete_subscriber(self):
        subscriber = site.subscribe(self.repo, "fan@example.com")
        site.delete_subscriber(self.repo, subscriber.id)
        self.assertEqual(self.repo.list_subscribers(), [])
        with self.assertRaises(NotFoundError):
            site.delete_subscriber(self.repo, subscriber.id)


class SeedTests(unittest.TestCase):
    def setUp(self):
        self.repo = PortalRepository(InMemoryDocumentStore())

    def test_seed_only_when_empty(self):
        seeded = site.seed_vault(self.repo)
        self.assertGreater(seeded, 0)
        self.assertEqual(len(self.repo.list_items()), seeded)
        self.assertEqual(site.seed_vault(self.repo), 0)

    def test_seeded_items_feed_the_home_page(self):
        site.seed_vault(self.repo)
        sections = content.home_sections(self.repo.list_items())
        self.assertTrue(sections.hero)
        self.assertTrue(sections.marvel_trending)
        self.assertTrue(sections.dc_trending)
        self.assertEqual(sections.main_feed[0].id, "73_1biulkYk")

    @patch("portal.site.initial_vault_items", return_value=[])
    def test_seed_with_no_items(self, _mock_items):
        self.assertEqual(site.seed_vault(self.repo), 0)


if __name__ == "__main__":
    unittest.main()
