"""
Typed access to the portal collections on top of a DocumentStore.

Documents are stored camelCase, the way the web client wrote them, and decoded
into the dataclasses from `shared.types`.
"""

from __future__ import annotations

from dataclasses import asdict
from enum import Enum
from typing import Callable, Optional, Type, TypeVar

from dacite import Config, from_dict

from portal.db import DocumentStore
from portal.errors import NotFoundError
from shared.constants import (
    CATEGORIES_DOC,
    COMICS_COLLECTION,
    DEFAULT_CATEGORIES,
    RANKINGS_COLLECTION,
    SETTINGS_COLLECTION,
    SITE_SETTINGS_DOC,
    SUBSCRIBERS_COLLECTION,
    USERS_COLLECTION,
    VAULT_COLLECTION,
)
from shared.json_utils import convert_keys
from shared.types import (
    ComicEntry,
    RankingList,
    SiteSettings,
    SocialLink,
    Subscriber,
    User,
    VaultItem,
)

T = TypeVar("T")

DACITE_CONFIG = Config(cast=[Enum], check_types=False)


def to_document(obj) -> dict:
    return convert_keys(asdict(obj), "snake_to_camel")


def from_document(data_class: Type[T], doc_id: str | None, doc: dict) -> T:
    data = convert_keys(doc, "camel_to_snake")
    if doc_id is not None:
        data.setdefault("id", doc_id)
    return from_dict(data_class=data_class, data=data, config=DACITE_CONFIG)


def default_site_settings() -> SiteSettings:
    return SiteSettings(
        address="Multiverse HQ, Sector 7-G, Prime Reality Tower, New York, NY 10001",
        show_address=True,
        contact_email="uplink@heroportal.io",
        social_links=[
            SocialLink(id="fb", platform="Facebook", url="", icon="facebook", visible=False),
            SocialLink(id="wa", platform="WhatsApp", url="", icon="chat", visible=False),
            SocialLink(id="yt", platform="YouTube", url="", icon="play_circle", visible=False),
            SocialLink(id="x", platform="X", url="", icon="brand_family", visible=False),
            SocialLink(id="tk", platform="TikTok", url="", icon="music_note", visible=False),
        ],
        copyright_year="2026",
    )


class PortalRepository:
    """CRUD for every persisted portal entity."""

    def __init__(self, store: DocumentStore):
        self.store = store

    def _list(self, collection: str, data_class: Type[T]) -> list[T]:
        return [
            from_document(data_class, doc_id, doc)
            for doc_id, doc in self.store.list(collection)
        ]

    def _get(self, collection: str, data_class: Type[T], doc_id: str) -> Optional[T]:
        doc = self.store.get(collection, doc_id)
        if doc is None:
            return None
        return from_document(data_class, doc_id, doc)

    def _update(
        self,
        collection: str,
        data_class: Type[T],
        doc_id: str,
        mutate: Callable[[T], T],
    ) -> T:
        """Atomically load, mutate and write back an existing document."""

        def _apply(doc: Optional[dict]) -> dict:
            if doc is None:
                raise NotFoundError(f"{data_class.__name__} {doc_id} not found")
            return to_document(mutate(from_document(data_class, doc_id, doc)))

        written = self.store.update_with(collection, doc_id, _apply)
        return from_document(data_class, doc_id, written)

    # Vault items

    def list_items(self) -> list[VaultItem]:
        return self._list(VAULT_COLLECTION, VaultItem)

    def get_item(self, item_id: str) -> Optional[VaultItem]:
        return self._get(VAULT_COLLECTION, VaultItem, item_id)

    def save_item(self, item: VaultItem) -> VaultItem:
        self.store.set(VAULT_COLLECTION, item.id, to_document(item))
        return item

    def update_item(
        self, item_id: str, mutate: Callable[[VaultItem], VaultItem]
    ) -> VaultItem:
        return self._update(VAULT_COLLECTION, VaultItem, item_id, mutate)

    def delete_item(self, item_id: str) -> None:
        self.store.delete(VAULT_COLLECTION, item_id)

    def find_items_by_title(self, title: str) -> list[VaultItem]:
        return [
            from_document(VaultItem, doc_id, doc)
            for doc_id, doc in self.store.query(VAULT_COLLECTION, "title", title)
        ]

    # Users

    def list_users(self) -> list[User]:
        return self._list(USERS_COLLECTION, User)

    def get_user(self, user_id: str) -> Optional[User]:
        return self._get(USERS_COLLECTION, User, user_id)

    def find_user_by_email(self, email: str) -> Optional[User]:
        matches = self.store.query(USERS_COLLECTION, "email", email)
        if not matches:
            return None
        doc_id, doc = matches[0]
        return from_document(User, doc_id, doc)

    def save_user(self, user: User) -> User:
        self.store.set(USERS_COLLECTION, user.id, to_document(user))
        return user

    def update_user(self, user_id: str, mutate: Callable[[User], User]) -> User:
        return self._update(USERS_COLLECTION, User, user_id, mutate)

    def delete_user(self, user_id: str) -> None:
        self.store.delete(USERS_COLLECTION, user_id)

    # Categories and site settings

    def get_categories(self) -> list[str]:
        doc = self.store.get(SETTINGS_COLLECTION, CATEGORIES_DOC)
        if doc is None:
            return list(DEFAULT_CATEGORIES)
        return list(doc.get("items", []))

    def update_categories(
        self, mutate: Callable[[list[str]], list[str]]
    ) -> list[str]:
        def _apply(doc: Optional[dict]) -> dict:
            current = list(DEFAULT_CATEGORIES) if doc is None else doc.get("items", [])
            return {"items": mutate(list(current))}

        written = self.store.update_with(SETTINGS_COLLECTION, CATEGORIES_DOC, _apply)
        return list(written["items"])

    def get_settings(self) -> SiteSettings:
        doc = self.store.get(SETTINGS_COLLECTION, SITE_SETTINGS_DOC)
        if doc is None:
            return default_site_settings()
        return from_document(SiteSettings, None, doc)

    def save_settings(self, settings: SiteSettings) -> SiteSettings:
        self.store.set(SETTINGS_COLLECTION, SITE_SETTINGS_DOC, to_document(settings))
        return settings

    # Ranking lists

    def list_rankings(self) -> list[RankingList]:
        return self._list(RANKINGS_COLLECTION, RankingList)

    def get_ranking(self, list_id: str) -> Optional[RankingList]:
        return self._get(RANKINGS_COLLECTION, RankingList, list_id)

    def save_ranking(self, ranking: RankingList) -> RankingList:
        self.store.set(RANKINGS_COLLECTION, ranking.id, to_document(ranking))
        return ranking

    def update_ranking(
        self, list_id: str, mutate: Callable[[RankingList], RankingList]
    ) -> RankingList:
        return self._update(RANKINGS_COLLECTION, RankingList, list_id, mutate)

    def delete_ranking(self, list_id: str) -> None:
        self.store.delete(RANKINGS_COLLECTION, list_id)

    # Subscribers

    def list_subscribers(self) -> list[Subscriber]:
        return self._list(SUBSCRIBERS_COLLECTION, Subscriber)

    def find_subscriber(self, email: str) -> Optional[Subscriber]:
        matches = self.store.query(SUBSCRIBERS_COLLECTION, "email", email)
        if not matches:
            return None
        doc_id, doc = matches[0]
        return from_document(Subscriber, doc_id, doc)

    def save_subscriber(self, subscriber: Subscriber) -> Subscriber:
        self.store.set(SUBSCRIBERS_COLLECTION, subscriber.id, to_document(subscriber))
        return subscriber

    def delete_subscriber(self, subscriber_id: str) -> None:
        self.store.delete(SUBSCRIBERS_COLLECTION, subscriber_id)

    # Comics

    def list_comics(self) -> list[ComicEntry]:
        return self._list(COMICS_COLLECTION, ComicEntry)

    def get_comic(self, comic_id: str) -> Optional[ComicEntry]:
        return self._get(COMICS_COLLECTION, ComicEntry, comic_id)

    def save_comic(self, comic: ComicEntry) -> ComicEntry:
        self.store.set(COMICS_COLLECTION, comic.id, to_document(comic))
        return comic

    def update_comic(
        self, comic_id: str, mutate: Callable[[ComicEntry], ComicEntry]
    ) -> ComicEntry:
        return self._update(COMICS_COLLECTION, ComicEntry, comic_id, mutate)

    def delete_comic(self, comic_id: str) -> None:
        self.store.delete(COMICS_COLLECTION, comic_id)
