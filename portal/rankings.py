"""
Curated top-ten lists built from published vault items.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Literal, Optional

from portal.errors import ConflictError, InvalidRequestError, NotFoundError
from portal.repository import PortalRepository
from shared.constants import MAX_RANKING_ITEMS
from shared.types import ItemStatus, RankingEntry, RankingList, RankingType, VaultItem
from shared.utils import get_unique_id

logger = logging.getLogger(__name__)

DESCRIPTION_PREVIEW_LENGTH = 200


@dataclass
class RankedItem:
    rank: int
    item: VaultItem
    description: str


def _renumber(entries: Iterable[RankingEntry]) -> list[RankingEntry]:
    return [replace(e, rank=position) for position, e in enumerate(entries, start=1)]


def _ordered(ranking: RankingList) -> list[RankingEntry]:
    return sorted(ranking.items, key=lambda e: e.rank)


def get_ranking_or_raise(repo: PortalRepository, list_id: str) -> RankingList:
    ranking = repo.get_ranking(list_id)
    if ranking is None:
        raise NotFoundError(f"Ranking list {list_id} not found")
    return ranking


def _check_rankable(repo: PortalRepository, vault_item_id: str) -> None:
    item = repo.get_item(vault_item_id)
    if item is None or item.status != ItemStatus.PUBLISHED:
        raise InvalidRequestError("Only published items can be ranked.")


def save_ranking(
    repo: PortalRepository,
    title: str,
    description: str = "",
    type: Optional[RankingType] = None,
    items: Optional[list[RankingEntry]] = None,
    list_id: Optional[str] = None,
) -> RankingList:
    """
    Creates a list, or replaces the list with `list_id` when given.

    Entries are renumbered by their rank order and capped at the list limit.
    Every entry must point at a distinct published item.
    """
    title = (title or "").strip()
    if not title:
        raise InvalidRequestError("Ranking list needs a title.")
    entries = sorted(items or [], key=lambda e: e.rank)
    if len(entries) > MAX_RANKING_ITEMS:
        raise InvalidRequestError(f"Rank quota reached ({MAX_RANKING_ITEMS} max)")
    seen = set()
    for entry in entries:
        if entry.vault_item_id in seen:
            raise ConflictError(f"Item {entry.vault_item_id} is already ranked.")
        seen.add(entry.vault_item_id)
        _check_rankable(repo, entry.vault_item_id)
    ranking = RankingList(
        id=list_id or get_unique_id(),
        title=title,
        description=description or "",
        type=type or RankingType.BEST,
        items=_renumber(entries),
    )
    repo.save_ranking(ranking)
    logger.info("Saved ranking list %s (%s)", ranking.id, ranking.title)
    return ranking


def add_entry(
    repo: PortalRepository,
    list_id: str,
    vault_item_id: str,
    override_description: Optional[str] = None,
) -> RankingList:
    _check_rankable(repo, vault_item_id)

    def _add(ranking: RankingList) -> RankingList:
        entries = _ordered(ranking)
        if len(entries) >= MAX_RANKING_ITEMS:
            raise InvalidRequestError(f"Rank quota reached ({MAX_RANKING_ITEMS} max)")
        if any(e.vault_item_id == vault_item_id for e in entries):
            raise ConflictError(f"Item {vault_item_id} is already ranked.")
        entry = RankingEntry(
            vault_item_id=vault_item_id,
            rank=len(entries) + 1,
            override_description=override_description,
        )
        return replace(ranking, items=[*entries, entry])

    return repo.update_ranking(list_id, _add)


def remove_entry(repo: PortalRepository, list_id: str, vault_item_id: str) -> RankingList:
    def _remove(ranking: RankingList) -> RankingList:
        entries = _ordered(ranking)
        remaining = [e for e in entries if e.vault_item_id != vault_item_id]
        if len(remaining) == len(entries):
            raise NotFoundError(f"Item {vault_item_id} is not in list {list_id}")
        return replace(ranking, items=_renumber(remaining))

    return repo.update_ranking(list_id, _remove)


def move_entry(
    repo: PortalRepository,
    list_id: str,
    vault_item_id: str,
    direction: Literal["up", "down"],
) -> RankingList:
    """Swaps an entry with its neighbour. Moving past either end is a no-op."""

    def _move(ranking: RankingList) -> RankingList:
        entries = _ordered(ranking)
        index = next(
            (i for i, e in enumerate(entries) if e.vault_item_id == vault_item_id),
            None,
        )
        if index is None:
            raise NotFoundError(f"Item {vault_item_id} is not in list {list_id}")
        target = index - 1 if direction == "up" else index + 1
        if 0 <= target < len(entries):
            entries[index], entries[target] = entries[target], entries[index]
        return replace(ranking, items=_renumber(entries))

    return repo.update_ranking(list_id, _move)


def resolve_ranking(ranking: RankingList, items: Iterable[VaultItem]) -> list[RankedItem]:
    """Joins a list with the vault. Entries pointing at deleted items are skipped."""
    by_id = {item.id: item for item in items}
    resolved = []
    for entry in _ordered(ranking):
        item = by_id.get(entry.vault_item_id)
        if item is None:
            continue
        resolved.append(
            RankedItem(
                rank=entry.rank,
                item=item,
                description=entry.override_description
                or (item.summary or item.content)[:DESCRIPTION_PREVIEW_LENGTH],
            )
        )
    return resolved


def delete_ranking(repo: PortalRepository, list_id: str) -> None:
    get_ranking_or_raise(repo, list_id)
    repo.delete_ranking(list_id)
    logger.info("Deleted ranking list %s", list_id)
