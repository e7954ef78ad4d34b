"""
Content vault rules: drafting items, the public feeds and the admin listing.

Feeds are computed in memory over the full collection, the same way the web
client filtered the fetched vault.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, replace
from typing import Iterable, Literal, Optional, Sequence, TypeVar

from dacite import from_dict

from portal.errors import InvalidRequestError, NotFoundError
from portal.repository import DACITE_CONFIG, PortalRepository
from shared.constants import (
    ALL_CATEGORIES_FILTER,
    HOME_FRANCHISE_TRENDING_COUNT,
    HOME_TRENDING_COUNT,
    RELATED_CONTENT_COUNT,
)
from shared.types import ContentType, ItemStatus, VaultItem
from shared.utils import estimate_read_time, get_unique_id, now_iso, parse_date

logger = logging.getLogger(__name__)

T = TypeVar("T")

SortKey = Literal["title", "date", "views", "type", "categories"]
SortOrder = Literal["asc", "desc"]

# Fields that only change through their own operations (views, likes, comments).
ENGAGEMENT_FIELDS = ("views", "likes", "comments", "user_ratings")


@dataclass
class HomeSections:
    hero: list[VaultItem] = field(default_factory=list)
    scroller: list[VaultItem] = field(default_factory=list)
    trending: list[VaultItem] = field(default_factory=list)
    marvel_trending: list[VaultItem] = field(default_factory=list)
    dc_trending: list[VaultItem] = field(default_factory=list)
    main_feed: list[VaultItem] = field(default_factory=list)


@dataclass
class DashboardStats:
    total_items: int
    total_views: int
    total_engagements: int
    average_rating: float
    category_counts: dict[str, int]


def prepare_item(
    fields: dict, existing: Optional[VaultItem] = None
) -> VaultItem:
    """
    Builds a VaultItem from editor input.

    New items get an id, the current date, a read time estimated from the
    content and zeroed engagement. Edits keep the stored engagement fields,
    and fields left out of an edit keep their stored value.
    """
    data = asdict(existing) if existing else {}
    data.update(
        {
            k: v
            for k, v in fields.items()
            if v is not None and k not in ENGAGEMENT_FIELDS and k != "id"
        }
    )
    title = (data.get("title") or "").strip()
    if not title:
        raise InvalidRequestError("Please provide a headline (title).")
    content = data.get("content") or ""
    if not content.strip():
        raise InvalidRequestError("Please provide the item content.")

    data["title"] = title
    data["id"] = existing.id if existing else get_unique_id()
    if not data.get("date"):
        data["date"] = now_iso()
    if not fields.get("read_time") and (
        not data.get("read_time") or fields.get("content") is not None
    ):
        data["read_time"] = estimate_read_time(content)
    data.setdefault("author", "Command HQ")
    data.setdefault("type", ContentType.ARTICLE)
    return from_dict(data_class=VaultItem, data=data, config=DACITE_CONFIG)


def newest_first(items: Iterable[VaultItem]) -> list[VaultItem]:
    return sorted(items, key=lambda i: parse_date(i.date), reverse=True)


def published(items: Iterable[VaultItem]) -> list[VaultItem]:
    return newest_first(i for i in items if i.status == ItemStatus.PUBLISHED)


def engagement_score(item: VaultItem) -> int:
    return (item.views or 0) + (item.likes or 0) * 10


def home_sections(items: Iterable[VaultItem]) -> HomeSections:
    feed = published(items)
    return HomeSections(
        hero=[i for i in feed if i.is_hero],
        scroller=[i for i in feed if i.is_scroller],
        trending=sorted(feed, key=engagement_score, reverse=True)[:HOME_TRENDING_COUNT],
        marvel_trending=[i for i in feed if i.is_marvel_trending][
            :HOME_FRANCHISE_TRENDING_COUNT
        ],
        dc_trending=[i for i in feed if i.is_dc_trending][
            :HOME_FRANCHISE_TRENDING_COUNT
        ],
        main_feed=feed,
    )


def category_items(
    items: Iterable[VaultItem],
    category: str,
    content_type: Optional[ContentType] = None,
) -> list[VaultItem]:
    wanted = category.lower()
    return [
        i
        for i in published(items)
        if any(c.lower() == wanted for c in i.categories)
        and (content_type is None or i.type == content_type)
    ]


def trailer_items(items: Iterable[VaultItem]) -> list[VaultItem]:
    return [
        i for i in published(items) if i.type == ContentType.TRAILER or i.is_video_section
    ]


def review_items(items: Iterable[VaultItem], category: str = "All") -> list[VaultItem]:
    reviews = [i for i in published(items) if i.type == ContentType.REVIEW]
    if category == "All":
        return reviews
    return [r for r in reviews if r.categories and r.categories[0] == category]


def blog_items(items: Iterable[VaultItem]) -> list[VaultItem]:
    return [
        i
        for i in published(items)
        if i.type == ContentType.BLOG or any(c.lower() == "blog" for c in i.categories)
    ]


def _sort_value(item: VaultItem, key: SortKey):
    if key == "date":
        return parse_date(item.date)
    if key == "categories":
        return item.categories[0] if item.categories else ""
    if key == "views":
        return item.views or 0
    return str(getattr(item, key))


def admin_items(
    items: Iterable[VaultItem],
    search: str = "",
    category: str = ALL_CATEGORIES_FILTER,
    sort_key: SortKey = "date",
    order: SortOrder = "desc",
) -> list[VaultItem]:
    """Search by title or author, filter by category and sort for the content table."""
    term = search.lower()
    matches = [
        i
        for i in items
        if (term in i.title.lower() or term in i.author.lower())
        and (category == ALL_CATEGORIES_FILTER or category in i.categories)
    ]
    return sorted(
        matches, key=lambda i: _sort_value(i, sort_key), reverse=(order == "desc")
    )


def related_items(item: VaultItem, items: Iterable[VaultItem]) -> list[VaultItem]:
    scored = []
    for candidate in items:
        if candidate.id == item.id or candidate.status != ItemStatus.PUBLISHED:
            continue
        score = 10 * sum(1 for c in candidate.categories if c in item.categories)
        if candidate.type == item.type:
            score += 5
        scored.append((score, candidate))
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [candidate for _, candidate in scored[:RELATED_CONTENT_COUNT]]


def average_rating(ratings: Sequence[int]) -> Optional[float]:
    if not ratings:
        return None
    return sum(ratings) / len(ratings)


def dashboard_stats(items: Sequence[VaultItem]) -> DashboardStats:
    category_counts: dict[str, int] = {}
    for item in items:
        for category in item.categories:
            category_counts[category] = category_counts.get(category, 0) + 1
    rating_total = sum(average_rating(i.user_ratings) or 0 for i in items)
    return DashboardStats(
        total_items=len(items),
        total_views=sum(i.views or 0 for i in items),
        total_engagements=sum((i.likes or 0) + len(i.comments) for i in items),
        average_rating=round(rating_total / (len(items) or 1), 1),
        category_counts=category_counts,
    )


def paginate(items: Sequence[T], offset: int, limit: int) -> tuple[list[T], int]:
    return list(items[offset : offset + limit]), len(items)


def get_item_or_raise(repo: PortalRepository, item_id: str) -> VaultItem:
    item = repo.get_item(item_id)
    if item is None:
        raise NotFoundError(f"Item {item_id} not found")
    return item


def get_public_item(repo: PortalRepository, item_id: str) -> VaultItem:
    item = get_item_or_raise(repo, item_id)
    if item.status != ItemStatus.PUBLISHED:
        raise NotFoundError(f"Item {item_id} not found")
    return item


def create_item(repo: PortalRepository, fields: dict) -> VaultItem:
    item = prepare_item(fields)
    repo.save_item(item)
    logger.info("Created %s %s (%s)", item.type, item.id, item.title)
    return item


def update_item(repo: PortalRepository, item_id: str, fields: dict) -> VaultItem:
    updated = repo.update_item(item_id, lambda current: prepare_item(fields, current))
    logger.info("Updated item %s", item_id)
    return updated


def delete_items(repo: PortalRepository, item_ids: Iterable[str]) -> int:
    deleted = 0
    for item_id in set(item_ids):
        if repo.get_item(item_id) is None:
            continue
        repo.delete_item(item_id)
        deleted += 1
    logger.info("Deleted %d items", deleted)
    return deleted


def record_view(repo: PortalRepository, item_id: str) -> VaultItem:
    return repo.update_item(
        item_id, lambda item: replace(item, views=(item.views or 0) + 1)
    )


def record_like(repo: PortalRepository, item_id: str) -> VaultItem:
    return repo.update_item(
        item_id, lambda item: replace(item, likes=(item.likes or 0) + 1)
    )
