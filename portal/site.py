"""
Categories, site settings, newsletter subscribers and vault seeding.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from portal.errors import ConflictError, InvalidRequestError, NotFoundError
from portal.repository import PortalRepository
from portal.seed import initial_vault_items
from shared.constants import MAX_CATEGORY_LENGTH
from shared.types import SiteSettings, SocialLink, Subscriber
from shared.utils import get_unique_id, now_iso, parse_date

logger = logging.getLogger(__name__)


# Categories


def add_category(repo: PortalRepository, name: str) -> list[str]:
    name = (name or "").strip()
    if not name:
        raise InvalidRequestError("Category name must not be empty.")
    if len(name) > MAX_CATEGORY_LENGTH:
        raise InvalidRequestError("Category name is too long.")

    def _add(categories: list[str]) -> list[str]:
        if name in categories:
            raise ConflictError(f"Category {name} already exists.")
        return [*categories, name]

    categories = repo.update_categories(_add)
    logger.info("Added category %s", name)
    return categories


def delete_category(repo: PortalRepository, name: str) -> list[str]:
    def _remove(categories: list[str]) -> list[str]:
        if name not in categories:
            raise NotFoundError(f"Category {name} not found")
        return [c for c in categories if c != name]

    categories = repo.update_categories(_remove)
    logger.info("Deleted category %s", name)
    return categories


# Site settings


def save_settings(
    repo: PortalRepository,
    address: Optional[str] = None,
    contact_email: Optional[str] = None,
    show_address: Optional[bool] = None,
    social_links: Optional[list[SocialLink]] = None,
    copyright_year: Optional[str] = None,
) -> SiteSettings:
    """Merges the given fields into the stored settings."""
    current = repo.get_settings()
    changes = {
        key: value
        for key, value in (
            ("address", address),
            ("contact_email", contact_email),
            ("show_address", show_address),
            ("social_links", social_links),
            ("copyright_year", copyright_year),
        )
        if value is not None
    }
    settings = repo.save_settings(replace(current, **changes))
    logger.info("Saved site settings (%s)", ", ".join(sorted(changes)) or "no changes")
    return settings


def add_social_link(
    repo: PortalRepository, platform: str, url: str, icon: str = "link"
) -> SiteSettings:
    platform = (platform or "").strip()
    url = (url or "").strip()
    if not platform or not url:
        raise InvalidRequestError("Social link needs a platform and a URL.")
    current = repo.get_settings()
    link = SocialLink(id=get_unique_id(), platform=platform, url=url, icon=icon)
    return repo.save_settings(
        replace(current, social_links=[*current.social_links, link])
    )


def remove_social_link(repo: PortalRepository, link_id: str) -> SiteSettings:
    current = repo.get_settings()
    remaining = [link for link in current.social_links if link.id != link_id]
    if len(remaining) == len(current.social_links):
        raise NotFoundError(f"Social link {link_id} not found")
    return repo.save_settings(replace(current, social_links=remaining))


# Subscribers


def subscribe(repo: PortalRepository, email: str) -> Subscriber:
    """Adds the address to the newsletter list; re-subscribing returns the existing entry."""
    email = (email or "").strip().lower()
    if not email or "@" not in email:
        raise InvalidRequestError("A valid e-mail address is required.")
    existing = repo.find_subscriber(email)
    if existing is not None:
        return existing
    subscriber = repo.save_subscriber(
        Subscriber(id=get_unique_id(), email=email, date=now_iso())
    )
    logger.info("New subscriber %s", email)
    return subscriber


def search_subscribers(
    subscribers: Iterable[Subscriber], search: str = ""
) -> list[Subscriber]:
    term = search.lower()
    return sorted(
        (s for s in subscribers if term in s.email.lower()),
        key=lambda s: parse_date(s.date),
        reverse=True,
    )


def delete_subscriber(repo: PortalRepository, subscriber_id: str) -> None:
    if subscriber_id not in {s.id for s in repo.list_subscribers()}:
        raise NotFoundError(f"Subscriber {subscriber_id} not found")
    repo.delete_subscriber(subscriber_id)
    logger.info("Deleted subscriber %s", subscriber_id)


# Seeding


def seed_vault(repo: PortalRepository) -> int:
    """Writes the starter items when the vault is empty. Returns how many were written."""
    if repo.list_items():
        logger.info("Vault already populated; skipping seed")
        return 0
    items = initial_vault_items()
    for item in items:
        repo.save_item(item)
    logger.info("Seeded vault with %d items", len(items))
    return len(items)
