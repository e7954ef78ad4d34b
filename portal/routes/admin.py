"""
Admin-only routes: user management, taxonomy, site settings, subscribers,
comic moderation and seeding.
"""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Response

from portal import accounts, comics, site
from portal.config import Settings, get_settings
from portal.dependencies import get_repository, require_admin
from portal.repository import PortalRepository
from portal.routes.common import to_dataclass
from portal.schemas import (
    CategoriesResponse,
    CategoryRequest,
    ComicBadgeRequest,
    ComicEntryModel,
    ComicStatusRequest,
    RoleRequest,
    SeedResponse,
    SettingsUpdateRequest,
    SiteSettingsModel,
    SocialLinkRequest,
    SubscriberModel,
    UserModel,
)
from shared.types import SocialLink

router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])


# Users


@router.get("/users", response_model=list[UserModel])
def list_users(
    tab: Literal["ACTIVE", "PENDING"] = "ACTIVE",
    search: str = "",
    repo: PortalRepository = Depends(get_repository),
):
    return accounts.filter_users(repo.list_users(), tab, search)


@router.post("/users/{user_id}/approve", response_model=UserModel)
def approve_user(
    user_id: str, payload: RoleRequest, repo: PortalRepository = Depends(get_repository)
):
    return accounts.approve_user(repo, user_id, payload.role)


@router.post("/users/{user_id}/reject", response_model=UserModel)
def reject_user(user_id: str, repo: PortalRepository = Depends(get_repository)):
    return accounts.reject_user(repo, user_id)


@router.post("/users/{user_id}/revoke", response_model=UserModel)
def revoke_user(
    user_id: str,
    repo: PortalRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    return accounts.revoke_user(repo, user_id, settings.super_admin_email)


@router.put("/users/{user_id}/role", response_model=UserModel)
def change_role(
    user_id: str,
    payload: RoleRequest,
    repo: PortalRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    return accounts.change_role(repo, user_id, payload.role, settings.super_admin_email)


@router.delete("/users/{user_id}", status_code=204)
def delete_user(
    user_id: str,
    repo: PortalRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    accounts.delete_user(repo, user_id, settings.super_admin_email)
    return Response(status_code=204)


# Categories


@router.post("/categories", response_model=CategoriesResponse, status_code=201)
def add_category(
    payload: CategoryRequest, repo: PortalRepository = Depends(get_repository)
):
    return {"categories": site.add_category(repo, payload.name)}


@router.delete("/categories/{name}", response_model=CategoriesResponse)
def delete_category(name: str, repo: PortalRepository = Depends(get_repository)):
    return {"categories": site.delete_category(repo, name)}


# Site settings


@router.put("/settings", response_model=SiteSettingsModel)
def save_settings(
    payload: SettingsUpdateRequest, repo: PortalRepository = Depends(get_repository)
):
    links = (
        [to_dataclass(SocialLink, link) for link in payload.social_links]
        if payload.social_links is not None
        else None
    )
    return site.save_settings(
        repo,
        address=payload.address,
        contact_email=payload.contact_email,
        show_address=payload.show_address,
        social_links=links,
        copyright_year=payload.copyright_year,
    )


@router.post("/settings/social-links", response_model=SiteSettingsModel, status_code=201)
def add_social_link(
    payload: SocialLinkRequest, repo: PortalRepository = Depends(get_repository)
):
    return site.add_social_link(repo, payload.platform, payload.url, payload.icon)


@router.delete("/settings/social-links/{link_id}", response_model=SiteSettingsModel)
def remove_social_link(link_id: str, repo: PortalRepository = Depends(get_repository)):
    return site.remove_social_link(repo, link_id)


# Subscribers


@router.get("/subscribers", response_model=list[SubscriberModel])
def list_subscribers(search: str = "", repo: PortalRepository = Depends(get_repository)):
    return site.search_subscribers(repo.list_subscribers(), search)


@router.delete("/subscribers/{subscriber_id}", status_code=204)
def delete_subscriber(
    subscriber_id: str, repo: PortalRepository = Depends(get_repository)
):
    site.delete_subscriber(repo, subscriber_id)
    return Response(status_code=204)


# Comic moderation


@router.get("/comics", response_model=list[ComicEntryModel])
def list_comics(
    status: comics.GalleryFilter = "all",
    repo: PortalRepository = Depends(get_repository),
):
    return comics.admin_comics(repo.list_comics(), status)


@router.put("/comics/{comic_id}/status", response_model=ComicEntryModel)
def set_comic_status(
    comic_id: str,
    payload: ComicStatusRequest,
    repo: PortalRepository = Depends(get_repository),
):
    return comics.set_status(repo, comic_id, payload.status)


@router.post("/comics/{comic_id}/showcase", response_model=ComicEntryModel)
def toggle_showcase(comic_id: str, repo: PortalRepository = Depends(get_repository)):
    return comics.toggle_showcase(repo, comic_id)


@router.put("/comics/{comic_id}/badge", response_model=ComicEntryModel)
def set_comic_badge(
    comic_id: str,
    payload: ComicBadgeRequest,
    repo: PortalRepository = Depends(get_repository),
):
    return comics.set_badge(repo, comic_id, payload.badge)


@router.delete("/comics/{comic_id}", status_code=204)
def delete_comic(comic_id: str, repo: PortalRepository = Depends(get_repository)):
    comics.delete_comic(repo, comic_id)
    return Response(status_code=204)


# Seeding


@router.post("/seed", response_model=SeedResponse)
def seed(repo: PortalRepository = Depends(get_repository)):
    return {"seeded": site.seed_vault(repo)}
