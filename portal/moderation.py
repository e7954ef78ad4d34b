"""
Reader comments: posting, public display and moderation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from portal.errors import InvalidRequestError, NotFoundError
from portal.repository import PortalRepository
from shared.constants import (
    DEFAULT_USER_SCORE,
    MAX_COMMENT_LENGTH,
    MAX_USER_SCORE,
    MIN_USER_SCORE,
)
from shared.types import Comment, VaultItem
from shared.utils import default_avatar, get_unique_id, now_iso, parse_date

logger = logging.getLogger(__name__)


@dataclass
class ModeratedComment:
    """A comment flattened together with the item it belongs to."""

    comment: Comment
    article_id: str
    article_title: str


def build_comment(
    author: str,
    text: str,
    email: Optional[str] = None,
    user_score: Optional[int] = DEFAULT_USER_SCORE,
) -> Comment:
    author = (author or "").strip()
    text = (text or "").strip()
    if not author or not text:
        raise InvalidRequestError("Comment needs an author name and text.")
    if len(text) > MAX_COMMENT_LENGTH:
        raise InvalidRequestError("Comment exceeds max length.")
    if user_score is not None and not MIN_USER_SCORE <= user_score <= MAX_USER_SCORE:
        raise InvalidRequestError(
            f"Score must be between {MIN_USER_SCORE} and {MAX_USER_SCORE}."
        )
    return Comment(
        id=get_unique_id(),
        author=author,
        email=email or None,
        date=now_iso(),
        text=text,
        avatar=default_avatar(author),
        user_score=user_score,
        is_visible=True,
    )


def post_comment(repo: PortalRepository, item_id: str, comment: Comment) -> VaultItem:
    """Appends the comment and its score to the item in a single write."""

    def _append(item: VaultItem) -> VaultItem:
        ratings = list(item.user_ratings)
        if comment.user_score is not None:
            ratings.append(comment.user_score)
        return replace(item, comments=[*item.comments, comment], user_ratings=ratings)

    updated = repo.update_item(item_id, _append)
    logger.info("Comment %s posted on %s", comment.id, item_id)
    return updated


def visible_comments(item: VaultItem) -> list[Comment]:
    return [c for c in item.comments if c.is_visible]


def average_score(item: VaultItem) -> str:
    if not item.user_ratings:
        return "N/A"
    return f"{sum(item.user_ratings) / len(item.user_ratings):.1f}"


def _find_comment(item: VaultItem, comment_id: str) -> Comment:
    for comment in item.comments:
        if comment.id == comment_id:
            return comment
    raise NotFoundError(f"Comment {comment_id} not found on {item.id}")


def toggle_comment_visibility(
    repo: PortalRepository, item_id: str, comment_id: str
) -> VaultItem:
    def _toggle(item: VaultItem) -> VaultItem:
        _find_comment(item, comment_id)
        return replace(
            item,
            comments=[
                replace(c, is_visible=not c.is_visible) if c.id == comment_id else c
                for c in item.comments
            ],
        )

    return repo.update_item(item_id, _toggle)


def delete_comment(repo: PortalRepository, item_id: str, comment_id: str) -> VaultItem:
    """Removes the comment and one matching score from the item's ratings."""

    def _delete(item: VaultItem) -> VaultItem:
        target = _find_comment(item, comment_id)
        ratings = list(item.user_ratings)
        if target.user_score is not None and target.user_score in ratings:
            # Scores are appended with their comment, so drop the latest match.
            last = len(ratings) - 1 - ratings[::-1].index(target.user_score)
            del ratings[last]
        return replace(
            item,
            comments=[c for c in item.comments if c.id != comment_id],
            user_ratings=ratings,
        )

    updated = repo.update_item(item_id, _delete)
    logger.info("Comment %s deleted from %s", comment_id, item_id)
    return updated


def moderation_queue(
    items: Iterable[VaultItem], search: str = ""
) -> list[ModeratedComment]:
    """All comments across the vault, newest first, filtered by author, text, title or email."""
    term = search.lower()
    flattened = [
        ModeratedComment(comment=c, article_id=item.id, article_title=item.title)
        for item in items
        for c in item.comments
    ]
    matches = [
        m
        for m in flattened
        if term in m.comment.author.lower()
        or term in m.comment.text.lower()
        or term in m.article_title.lower()
        or (m.comment.email and term in m.comment.email.lower())
    ]
    return sorted(matches, key=lambda m: parse_date(m.comment.date), reverse=True)
