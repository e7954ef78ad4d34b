"""
Routes for approved staff accounts: the content vault, comment moderation,
ranking editing and the comic creator studio.
"""

from __future__ import annotations

import logging
import re
from typing import Literal, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile

from portal import accounts, comics, content, moderation, rankings
from portal.config import Settings, get_settings
from portal.dependencies import get_current_user, get_repository, get_storage_client
from portal.errors import InvalidRequestError
from portal.repository import PortalRepository
from portal.routes.common import page_response, to_dataclass
from portal.schemas import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    CharacterModel,
    CharacterRequest,
    ComicEntryModel,
    CoverRequest,
    DashboardResponse,
    GeneratedImageResponse,
    ItemDraft,
    ItemPage,
    ModeratedCommentModel,
    PanelRequest,
    PublishComicRequest,
    RankingAddRequest,
    RankingListModel,
    RankingMoveRequest,
    RankingSaveRequest,
    StudioOptionsResponse,
    UploadResponse,
    VaultItemModel,
)
from portal.storage import StorageClient
from shared.constants import ALL_CATEGORIES_FILTER
from shared.types import Character, ComicPage, ComicPanel, RankingEntry, User
from shared.utils import get_unique_id

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])

UPLOAD_PATH = "uploads/{kind}/{name}"


# Content vault


@router.get("/admin/items", response_model=ItemPage)
def admin_list_items(
    search: str = "",
    category: str = ALL_CATEGORIES_FILTER,
    sort: content.SortKey = "date",
    order: content.SortOrder = "desc",
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    repo: PortalRepository = Depends(get_repository),
):
    items = content.admin_items(repo.list_items(), search, category, sort, order)
    return page_response(items, offset, limit)


@router.post("/admin/items", response_model=VaultItemModel, status_code=201)
def create_item(payload: ItemDraft, repo: PortalRepository = Depends(get_repository)):
    return content.create_item(repo, payload.model_dump(exclude_none=True))


@router.get("/admin/items/{item_id}", response_model=VaultItemModel)
def get_item(item_id: str, repo: PortalRepository = Depends(get_repository)):
    return content.get_item_or_raise(repo, item_id)


@router.put("/admin/items/{item_id}", response_model=VaultItemModel)
def update_item(
    item_id: str,
    payload: ItemDraft,
    repo: PortalRepository = Depends(get_repository),
):
    return content.update_item(repo, item_id, payload.model_dump(exclude_none=True))


@router.delete("/admin/items/{item_id}", status_code=204)
def delete_item(item_id: str, repo: PortalRepository = Depends(get_repository)):
    content.get_item_or_raise(repo, item_id)
    content.delete_items(repo, [item_id])
    return Response(status_code=204)


@router.post("/admin/items/bulk-delete", response_model=BulkDeleteResponse)
def bulk_delete(
    payload: BulkDeleteRequest, repo: PortalRepository = Depends(get_repository)
):
    return {"deleted": content.delete_items(repo, payload.ids)}


@router.post("/admin/uploads", response_model=UploadResponse, status_code=201)
async def upload_media(
    file: UploadFile = File(...),
    kind: Literal["image", "video"] = Form("image"),
    storage: StorageClient = Depends(get_storage_client),
    settings: Settings = Depends(get_settings),
):
    content_type = file.content_type or ""
    if not content_type.startswith(f"{kind}/"):
        raise InvalidRequestError(f"Expected a {kind} file")
    data = await file.read()
    if len(data) > settings.max_upload_bytes:
        raise InvalidRequestError("File too large")
    safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", file.filename or "upload")
    path = UPLOAD_PATH.format(kind=kind, name=f"{get_unique_id()}_{safe_name}")
    url = storage.upload_bytes(path, data, content_type)
    logger.info("Uploaded %s (%d bytes)", path, len(data))
    return {"path": path, "url": url}


@router.get("/admin/dashboard", response_model=DashboardResponse)
def dashboard(repo: PortalRepository = Depends(get_repository)):
    stats = content.dashboard_stats(repo.list_items())
    return {
        "total_items": stats.total_items,
        "total_views": stats.total_views,
        "total_engagements": stats.total_engagements,
        "average_rating": stats.average_rating,
        "category_counts": stats.category_counts,
        "pending_users": accounts.pending_count(repo.list_users()),
    }


# Comment moderation


@router.get("/admin/comments", response_model=list[ModeratedCommentModel])
def list_comments(search: str = "", repo: PortalRepository = Depends(get_repository)):
    return moderation.moderation_queue(repo.list_items(), search)


@router.post(
    "/admin/items/{item_id}/comments/{comment_id}/toggle",
    response_model=VaultItemModel,
)
def toggle_comment(
    item_id: str, comment_id: str, repo: PortalRepository = Depends(get_repository)
):
    return moderation.toggle_comment_visibility(repo, item_id, comment_id)


@router.delete(
    "/admin/items/{item_id}/comments/{comment_id}", response_model=VaultItemModel
)
def delete_comment(
    item_id: str, comment_id: str, repo: PortalRepository = Depends(get_repository)
):
    return moderation.delete_comment(repo, item_id, comment_id)


# Rankings


def _entries(payload: RankingSaveRequest) -> list[RankingEntry]:
    return [to_dataclass(RankingEntry, entry) for entry in payload.items]


@router.post("/admin/rankings", response_model=RankingListModel, status_code=201)
def create_ranking(
    payload: RankingSaveRequest, repo: PortalRepository = Depends(get_repository)
):
    return rankings.save_ranking(
        repo, payload.title, payload.description, payload.type, _entries(payload)
    )


@router.put("/admin/rankings/{list_id}", response_model=RankingListModel)
def replace_ranking(
    list_id: str,
    payload: RankingSaveRequest,
    repo: PortalRepository = Depends(get_repository),
):
    rankings.get_ranking_or_raise(repo, list_id)
    return rankings.save_ranking(
        repo,
        payload.title,
        payload.description,
        payload.type,
        _entries(payload),
        list_id=list_id,
    )


@router.delete("/admin/rankings/{list_id}", status_code=204)
def delete_ranking(list_id: str, repo: PortalRepository = Depends(get_repository)):
    rankings.delete_ranking(repo, list_id)
    return Response(status_code=204)


@router.post("/admin/rankings/{list_id}/items", response_model=RankingListModel)
def add_ranking_item(
    list_id: str,
    payload: RankingAddRequest,
    repo: PortalRepository = Depends(get_repository),
):
    rankings.get_ranking_or_raise(repo, list_id)
    return rankings.add_entry(
        repo, list_id, payload.vault_item_id, payload.override_description
    )


@router.delete(
    "/admin/rankings/{list_id}/items/{item_id}", response_model=RankingListModel
)
def remove_ranking_item(
    list_id: str, item_id: str, repo: PortalRepository = Depends(get_repository)
):
    return rankings.remove_entry(repo, list_id, item_id)


@router.post(
    "/admin/rankings/{list_id}/items/{item_id}/move", response_model=RankingListModel
)
def move_ranking_item(
    list_id: str,
    item_id: str,
    payload: RankingMoveRequest,
    repo: PortalRepository = Depends(get_repository),
):
    return rankings.move_entry(repo, list_id, item_id, payload.direction)


# Comic creator studio


@router.get("/studio/options", response_model=StudioOptionsResponse)
def studio_options():
    return {"styles": comics.STYLES, "layouts": comics.LAYOUTS}


@router.post("/studio/characters", response_model=CharacterModel, status_code=201)
def create_character(payload: CharacterRequest):
    return comics.create_character(payload.name, payload.description, payload.style)


@router.post("/studio/cover", response_model=GeneratedImageResponse)
def generate_cover(payload: CoverRequest):
    if not payload.title.strip():
        raise InvalidRequestError("Cover needs a title.")
    prompt = comics.cover_prompt(
        payload.title,
        payload.story_premise,
        comics.get_style(payload.style),
        payload.action,
        payload.environment,
        [to_dataclass(Character, c) for c in payload.characters],
    )
    return {"prompt": prompt, "url": comics.generate_image_url(prompt, 512, 768)}


@router.post("/studio/panel", response_model=GeneratedImageResponse)
def generate_panel(payload: PanelRequest):
    if not payload.panel.prompt.strip():
        raise InvalidRequestError("Panel needs a prompt.")
    prompt = comics.panel_prompt(
        to_dataclass(ComicPanel, payload.panel),
        to_dataclass(ComicPage, payload.page),
        [to_dataclass(Character, c) for c in payload.characters],
        comics.get_style(payload.style),
    )
    return {"prompt": prompt, "url": comics.generate_image_url(prompt)}


@router.post("/studio/comics", response_model=ComicEntryModel, status_code=201)
def publish_comic(
    payload: PublishComicRequest,
    user: User = Depends(get_current_user),
    repo: PortalRepository = Depends(get_repository),
    storage: StorageClient = Depends(get_storage_client),
    settings: Settings = Depends(get_settings),
):
    return comics.publish_comic(
        repo,
        storage,
        user,
        payload.title,
        [to_dataclass(ComicPage, page) for page in payload.pages],
        characters=[to_dataclass(Character, c) for c in payload.characters],
        style=payload.style,
        story_premise=payload.story_premise,
        cover_image=payload.cover_image,
        type=payload.type,
        pdf_url=payload.pdf_url,
        timeout=settings.request_timeout_seconds,
    )
