"""
Comic creator studio, gallery and moderation.

Images are produced by a remote text-to-image endpoint addressed purely by
URL; publishing copies them into our own storage so the comic survives the
generator's cache.
"""

from __future__ import annotations

import logging
import random
import re
import urllib.parse
from dataclasses import dataclass, replace
from typing import Iterable, Literal, Optional

import requests

from portal.errors import InvalidRequestError, NotFoundError
from portal.repository import PortalRepository
from portal.storage import StorageClient
from shared.constants import DEFAULT_COMIC_COVER
from shared.fetch_utils import REQUEST_TIMEOUT, fetch_image_bytes
from shared.types import (
    Character,
    ComicBadge,
    ComicEntry,
    ComicPage,
    ComicPanel,
    ComicStatus,
    ComicType,
    User,
    UserRole,
)
from shared.utils import get_unique_id, now_iso

logger = logging.getLogger(__name__)

IMAGE_GENERATOR_URL = "https://image.pollinations.ai/prompt/{prompt}"
COMIC_STORAGE_PATH = "comics/{author_id}/{name}.jpg"


@dataclass(frozen=True)
class ComicStyle:
    id: str
    name: str
    prompt: str


STYLES = [
    ComicStyle(
        "marvel",
        "Marvel Style",
        "in the style of modern Marvel comic book art, vibrant colors, dynamic action, detailed shading",
    ),
    ComicStyle(
        "dc",
        "DC Style",
        "in the style of DC comics, gritty, dark atmosphere, dramatic lighting, realistic proportions",
    ),
    ComicStyle(
        "manga",
        "Manga",
        "in the style of Japanese manga, black and white, expressive lines, speed lines, high contrast",
    ),
    ComicStyle(
        "noir",
        "Noir",
        "in the style of noir comics, black and white, high contrast, shadowy, mysterious",
    ),
    ComicStyle(
        "watercolor",
        "Watercolor",
        "in the style of watercolor comic art, soft edges, dreamy atmosphere, artistic",
    ),
    ComicStyle(
        "cyberpunk",
        "Cyberpunk",
        "in the style of cyberpunk graphic novel, neon lights, futuristic technology, high tech low life",
    ),
]
STYLES_BY_ID = {style.id: style for style in STYLES}

# Layout id -> panel count
LAYOUTS = {"1x1": 1, "2x2": 4, "3x3": 9}

GalleryFilter = Literal["all", "pending", "approved"]


def get_style(style_id: str) -> ComicStyle:
    style = STYLES_BY_ID.get(style_id)
    if style is None:
        raise InvalidRequestError(f"Unknown comic style {style_id}")
    return style


def blank_page(layout: str = "2x2") -> ComicPage:
    if layout not in LAYOUTS:
        raise InvalidRequestError(f"Unknown layout {layout}")
    return ComicPage(layout=layout, panels=[ComicPanel() for _ in range(LAYOUTS[layout])])


def generate_image_url(prompt: str, width: int = 512, height: int = 512) -> str:
    """Addresses the remote image generator. A random seed gives a fresh image per call."""
    if not prompt:
        return ""
    clean = re.sub(r"\s+", " ", re.sub(r",+", ",", prompt)).strip()
    encoded = urllib.parse.quote(clean, safe="!~*'()")
    query = urllib.parse.urlencode(
        {
            "width": width,
            "height": height,
            "seed": random.randrange(1_000_000),
            "nologo": "true",
        }
    )
    return f"{IMAGE_GENERATOR_URL.format(prompt=encoded)}?{query}"


def character_sheet_prompt(name: str, description: str, style: ComicStyle) -> str:
    return (
        f"Character Sheet for {name}: {description}, {style.prompt}, "
        "full body reference, neutral background"
    )


def create_character(name: str, description: str, style_id: str) -> Character:
    name = (name or "").strip()
    description = (description or "").strip()
    if not name or not description:
        raise InvalidRequestError("Character needs a name and a description.")
    prompt = character_sheet_prompt(name, description, get_style(style_id))
    return Character(
        id=get_unique_id(),
        name=name,
        description=description,
        design_prompt=prompt,
        reference_image=generate_image_url(prompt, 512, 512),
    )


def cover_prompt(
    title: str,
    story_premise: str,
    style: ComicStyle,
    action: str = "",
    environment: str = "",
    characters: Iterable[Character] = (),
) -> str:
    prompt = (
        f'Comic Book Cover for "{title}": {story_premise}, {action}, '
        f"{style.prompt}, detailed masterpiece, 8k resolution"
    )
    if environment:
        prompt += f", setting: {environment}"
    cast = ", ".join(f"{c.name} ({c.description})" for c in characters)
    if cast:
        prompt += f", featuring {cast}"
    return prompt


def panel_prompt(
    panel: ComicPanel,
    page: ComicPage,
    characters: Iterable[Character],
    style: ComicStyle,
) -> str:
    """Prefixes the featured character for consistency and appends the page setting."""
    prompt = panel.prompt
    if panel.character_id:
        character = next((c for c in characters if c.id == panel.character_id), None)
        if character is not None:
            prompt = f"{character.name} ({character.description}), {style.prompt}, {panel.prompt}"
    if page.environment:
        prompt += f", setting: {page.environment}"
    return prompt


def _persist_image(
    storage: StorageClient, url: str, author_id: str, name: str, timeout: int
) -> str:
    """Copies a remote image into storage. Keeps the remote URL if the copy fails."""
    if not url:
        return url
    try:
        data, content_type = fetch_image_bytes(url, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("Could not fetch %s, keeping remote URL: %s", url, e)
        return url
    path = COMIC_STORAGE_PATH.format(author_id=author_id, name=name)
    return storage.upload_bytes(path, data, content_type)


def publish_comic(
    repo: PortalRepository,
    storage: StorageClient,
    author: User,
    title: str,
    pages: list[ComicPage],
    characters: Optional[list[Character]] = None,
    style: str = "marvel",
    story_premise: str = "",
    cover_image: str = "",
    type: ComicType = ComicType.GENERATED,
    pdf_url: Optional[str] = None,
    timeout: int = REQUEST_TIMEOUT,
) -> ComicEntry:
    """
    Saves a finished comic.

    Cover and panel images are copied under `comics/{author_id}/`. Comics by
    admins are approved on publish; everyone else's wait for moderation.
    """
    title = (title or "").strip()
    if not title:
        raise InvalidRequestError("Comic needs a title.")
    get_style(style)
    for page in pages:
        if page.layout not in LAYOUTS:
            raise InvalidRequestError(f"Unknown layout {page.layout}")

    comic_id = get_unique_id()
    cover = _persist_image(
        storage, cover_image, author.id, f"{comic_id}_cover", timeout
    )
    stored_pages = [
        replace(
            page,
            panels=[
                replace(
                    panel,
                    image_url=_persist_image(
                        storage,
                        panel.image_url,
                        author.id,
                        f"{comic_id}_{p}_{i}",
                        timeout,
                    ),
                )
                for i, panel in enumerate(page.panels)
            ],
        )
        for p, page in enumerate(pages)
    ]

    comic = ComicEntry(
        id=comic_id,
        title=title,
        author_id=author.id,
        author_name=author.name,
        created_at=now_iso(),
        status=ComicStatus.APPROVED
        if author.role == UserRole.ADMIN
        else ComicStatus.PENDING,
        is_showcased=False,
        badge=None,
        pages=stored_pages,
        characters=characters or [],
        style=style,
        story_premise=story_premise,
        cover_image=cover or DEFAULT_COMIC_COVER,
        type=type,
        pdf_url=pdf_url,
    )
    repo.save_comic(comic)
    logger.info("Published comic %s by %s (%s)", comic.id, author.email, comic.status)
    return comic


def _newest_first(comics: Iterable[ComicEntry]) -> list[ComicEntry]:
    return sorted(comics, key=lambda c: c.created_at, reverse=True)


def gallery(comics: Iterable[ComicEntry]) -> list[ComicEntry]:
    return _newest_first(c for c in comics if c.status == ComicStatus.APPROVED)


def showcase(comics: Iterable[ComicEntry]) -> list[ComicEntry]:
    return [c for c in gallery(comics) if c.is_showcased]


def admin_comics(
    comics: Iterable[ComicEntry], status_filter: GalleryFilter = "all"
) -> list[ComicEntry]:
    if status_filter == "all":
        return _newest_first(comics)
    return _newest_first(c for c in comics if c.status == status_filter)


def get_comic_or_raise(repo: PortalRepository, comic_id: str) -> ComicEntry:
    comic = repo.get_comic(comic_id)
    if comic is None:
        raise NotFoundError(f"Comic {comic_id} not found")
    return comic


def get_public_comic(repo: PortalRepository, comic_id: str) -> ComicEntry:
    comic = get_comic_or_raise(repo, comic_id)
    if comic.status != ComicStatus.APPROVED:
        raise NotFoundError(f"Comic {comic_id} not found")
    return comic


def clamp_page_index(comic: ComicEntry, index: int) -> int:
    if not comic.pages:
        return 0
    return max(0, min(index, len(comic.pages) - 1))


def set_status(repo: PortalRepository, comic_id: str, status: ComicStatus) -> ComicEntry:
    comic = repo.update_comic(comic_id, lambda c: replace(c, status=status))
    logger.info("Comic %s is now %s", comic_id, status)
    return comic


def toggle_showcase(repo: PortalRepository, comic_id: str) -> ComicEntry:
    return repo.update_comic(
        comic_id, lambda c: replace(c, is_showcased=not c.is_showcased)
    )


def set_badge(
    repo: PortalRepository, comic_id: str, badge: Optional[ComicBadge]
) -> ComicEntry:
    return repo.update_comic(comic_id, lambda c: replace(c, badge=badge))


def delete_comic(repo: PortalRepository, comic_id: str) -> None:
    get_comic_or_raise(repo, comic_id)
    repo.delete_comic(comic_id)
    logger.info("Deleted comic %s", comic_id)
