"""
Reader-facing routes. No authentication.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from fastapi import APIRouter, Depends, Query

from portal import comics, content, moderation, rankings, site
from portal.dependencies import get_repository
from portal.repository import PortalRepository
from portal.routes.common import page_response
from portal.schemas import (
    CategoriesResponse,
    CommentModel,
    CommentRequest,
    ComicEntryModel,
    ComicReaderResponse,
    CounterResponse,
    HomeResponse,
    ItemDetailResponse,
    ItemPage,
    RankingListModel,
    ResolvedRankingResponse,
    SiteSettingsModel,
    SubscribeRequest,
    SubscriberModel,
)
from shared.types import ContentType
from shared.utils import get_youtube_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/home", response_model=HomeResponse)
def home(repo: PortalRepository = Depends(get_repository)):
    return content.home_sections(repo.list_items())


@router.get("/items", response_model=ItemPage)
def feed(
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    repo: PortalRepository = Depends(get_repository),
):
    return page_response(content.published(repo.list_items()), offset, limit)


@router.get("/items/{item_id}", response_model=ItemDetailResponse)
def item_detail(item_id: str, repo: PortalRepository = Depends(get_repository)):
    item = content.get_public_item(repo, item_id)
    return {
        "item": replace(item, comments=moderation.visible_comments(item)),
        "related": content.related_items(item, repo.list_items()),
        "average_score": moderation.average_score(item),
        "youtube_id": get_youtube_id(item.video_url),
    }


@router.post("/items/{item_id}/view", response_model=CounterResponse)
def record_view(item_id: str, repo: PortalRepository = Depends(get_repository)):
    content.get_public_item(repo, item_id)
    item = content.record_view(repo, item_id)
    return {"id": item.id, "views": item.views, "likes": item.likes}


@router.post("/items/{item_id}/like", response_model=CounterResponse)
def record_like(item_id: str, repo: PortalRepository = Depends(get_repository)):
    content.get_public_item(repo, item_id)
    item = content.record_like(repo, item_id)
    return {"id": item.id, "views": item.views, "likes": item.likes}


@router.post("/items/{item_id}/comments", response_model=CommentModel, status_code=201)
def post_comment(
    item_id: str,
    payload: CommentRequest,
    repo: PortalRepository = Depends(get_repository),
):
    content.get_public_item(repo, item_id)
    comment = moderation.build_comment(
        payload.author, payload.text, payload.email, payload.user_score
    )
    moderation.post_comment(repo, item_id, comment)
    return comment


@router.get("/categories", response_model=CategoriesResponse)
def list_categories(repo: PortalRepository = Depends(get_repository)):
    return {"categories": repo.get_categories()}


@router.get("/categories/{category}/items", response_model=ItemPage)
def category_feed(
    category: str,
    type: Optional[ContentType] = None,
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    repo: PortalRepository = Depends(get_repository),
):
    items = content.category_items(repo.list_items(), category, type)
    return page_response(items, offset, limit)


@router.get("/trailers", response_model=ItemPage)
def trailers(
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    repo: PortalRepository = Depends(get_repository),
):
    return page_response(content.trailer_items(repo.list_items()), offset, limit)


@router.get("/reviews", response_model=ItemPage)
def reviews(
    category: str = "All",
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    repo: PortalRepository = Depends(get_repository),
):
    items = content.review_items(repo.list_items(), category)
    return page_response(items, offset, limit)


@router.get("/blog", response_model=ItemPage)
def blog(
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1),
    repo: PortalRepository = Depends(get_repository),
):
    return page_response(content.blog_items(repo.list_items()), offset, limit)


@router.post("/subscribers", response_model=SubscriberModel, status_code=201)
def subscribe(payload: SubscribeRequest, repo: PortalRepository = Depends(get_repository)):
    return site.subscribe(repo, payload.email)


@router.get("/settings", response_model=SiteSettingsModel)
def get_site_settings(repo: PortalRepository = Depends(get_repository)):
    return repo.get_settings()


@router.get("/rankings", response_model=list[RankingListModel])
def list_rankings(repo: PortalRepository = Depends(get_repository)):
    return repo.list_rankings()


@router.get("/rankings/{list_id}", response_model=ResolvedRankingResponse)
def get_ranking(list_id: str, repo: PortalRepository = Depends(get_repository)):
    ranking = rankings.get_ranking_or_raise(repo, list_id)
    return {
        "ranking": ranking,
        "items": rankings.resolve_ranking(ranking, content.published(repo.list_items())),
    }


@router.get("/comics", response_model=list[ComicEntryModel])
def comics_gallery(repo: PortalRepository = Depends(get_repository)):
    return comics.gallery(repo.list_comics())


@router.get("/comics/showcase", response_model=list[ComicEntryModel])
def comics_showcase(repo: PortalRepository = Depends(get_repository)):
    return comics.showcase(repo.list_comics())


@router.get("/comics/{comic_id}", response_model=ComicReaderResponse)
def read_comic(
    comic_id: str,
    page: int = 0,
    repo: PortalRepository = Depends(get_repository),
):
    comic = comics.get_public_comic(repo, comic_id)
    index = comics.clamp_page_index(comic, page)
    return {
        "comic": comic,
        "page_index": index,
        "page": comic.pages[index] if comic.pages else None,
    }
