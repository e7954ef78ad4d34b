"""
Pydantic schemas for the portal API.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from portal.accounts import SignInState
from shared.constants import MAX_COMMENT_LENGTH, MAX_TITLE_LENGTH
from shared.types import (
    ComicBadge,
    ComicStatus,
    ComicType,
    ContentType,
    ItemStatus,
    RankingType,
    UserRole,
)


# Vault content


class CommentModel(BaseModel):
    id: str
    author: str
    date: str
    text: str
    avatar: str
    is_visible: bool = True
    email: Optional[str] = None
    user_score: Optional[int] = None
    replies: list[CommentModel] = []


class VaultItemModel(BaseModel):
    id: str
    type: ContentType
    title: str
    author: str
    date: str
    content: str
    read_time: str
    image_url: str = ""
    categories: list[str] = []
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    summary: Optional[str] = None
    rating: Optional[str] = None
    user_ratings: list[int] = []
    likes: int = 0
    views: int = 0
    comments: list[CommentModel] = []
    status: ItemStatus = ItemStatus.PUBLISHED
    is_hero: bool = False
    is_scroller: bool = False
    is_trending: bool = False
    is_video_section: bool = False
    is_main_feed: bool = False
    is_marvel_trending: bool = False
    is_dc_trending: bool = False


class ItemDraft(BaseModel):
    """Editor input. Omitted fields keep their stored value on update."""

    type: Optional[ContentType] = None
    title: Optional[str] = Field(default=None, max_length=MAX_TITLE_LENGTH)
    author: Optional[str] = None
    date: Optional[str] = None
    content: Optional[str] = None
    read_time: Optional[str] = None
    image_url: Optional[str] = None
    categories: Optional[list[str]] = None
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    summary: Optional[str] = None
    rating: Optional[str] = None
    status: Optional[ItemStatus] = None
    is_hero: Optional[bool] = None
    is_scroller: Optional[bool] = None
    is_trending: Optional[bool] = None
    is_video_section: Optional[bool] = None
    is_main_feed: Optional[bool] = None
    is_marvel_trending: Optional[bool] = None
    is_dc_trending: Optional[bool] = None


class ItemPage(BaseModel):
    items: list[VaultItemModel]
    total: int
    offset: int
    limit: int


class HomeResponse(BaseModel):
    hero: list[VaultItemModel]
    scroller: list[VaultItemModel]
    trending: list[VaultItemModel]
    marvel_trending: list[VaultItemModel]
    dc_trending: list[VaultItemModel]
    main_feed: list[VaultItemModel]


class ItemDetailResponse(BaseModel):
    item: VaultItemModel
    related: list[VaultItemModel]
    average_score: str
    youtube_id: Optional[str] = None


class CounterResponse(BaseModel):
    id: str
    views: int
    likes: int


class BulkDeleteRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    deleted: int


class DashboardResponse(BaseModel):
    total_items: int
    total_views: int
    total_engagements: int
    average_rating: float
    category_counts: dict[str, int]
    pending_users: int


class UploadResponse(BaseModel):
    path: str
    url: str


# Comments


class CommentRequest(BaseModel):
    author: str = Field(..., max_length=120)
    text: str = Field(..., max_length=MAX_COMMENT_LENGTH)
    email: Optional[str] = None
    user_score: Optional[int] = 10


class ModeratedCommentModel(BaseModel):
    comment: CommentModel
    article_id: str
    article_title: str


# Taxonomy, settings, subscribers


class CategoriesResponse(BaseModel):
    categories: list[str]


class CategoryRequest(BaseModel):
    name: str


class SocialLinkModel(BaseModel):
    id: str
    platform: str
    url: str
    icon: str = "link"
    visible: bool = True


class SiteSettingsModel(BaseModel):
    address: str
    contact_email: str
    show_address: bool = True
    social_links: list[SocialLinkModel] = []
    copyright_year: str = ""


class SettingsUpdateRequest(BaseModel):
    address: Optional[str] = None
    contact_email: Optional[str] = None
    show_address: Optional[bool] = None
    social_links: Optional[list[SocialLinkModel]] = None
    copyright_year: Optional[str] = None


class SocialLinkRequest(BaseModel):
    platform: str
    url: str
    icon: str = "link"


class SubscribeRequest(BaseModel):
    email: str = Field(..., max_length=254)


class SubscriberModel(BaseModel):
    id: str
    email: str
    date: str


class SeedResponse(BaseModel):
    seeded: int


# Rankings


class RankingEntryModel(BaseModel):
    vault_item_id: str
    rank: int
    override_description: Optional[str] = None


class RankingListModel(BaseModel):
    id: str
    title: str
    description: str = ""
    type: RankingType = RankingType.BEST
    items: list[RankingEntryModel] = []


class RankingSaveRequest(BaseModel):
    title: str = Field(..., max_length=MAX_TITLE_LENGTH)
    description: str = ""
    type: Optional[RankingType] = None
    items: list[RankingEntryModel] = []


class RankingAddRequest(BaseModel):
    vault_item_id: str
    override_description: Optional[str] = None


class RankingMoveRequest(BaseModel):
    direction: Literal["up", "down"]


class RankedItemModel(BaseModel):
    rank: int
    item: VaultItemModel
    description: str


class ResolvedRankingResponse(BaseModel):
    ranking: RankingListModel
    items: list[RankedItemModel]


# Accounts


class UserModel(BaseModel):
    id: str
    email: str
    name: str
    role: UserRole
    avatar: str
    joined_date: str
    is_verified: bool
    is_approved: bool
    is_rejected: bool
    address: Optional[str] = None
    mobile: Optional[str] = None
    dob: Optional[str] = None


class RegisterRequest(BaseModel):
    name: str = Field(..., max_length=120)
    address: Optional[str] = None
    mobile: Optional[str] = None


class RegisterResponse(BaseModel):
    user: UserModel
    verification_code: Optional[str] = None


class VerifyRequest(BaseModel):
    email: str
    code: str = Field(..., min_length=6, max_length=6)


class SignInResponse(BaseModel):
    state: SignInState
    user: UserModel


class RoleRequest(BaseModel):
    role: UserRole


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    mobile: Optional[str] = None
    dob: Optional[str] = None
    address: Optional[str] = None


# Comics


class CharacterModel(BaseModel):
    id: str
    name: str
    description: str
    design_prompt: str
    reference_image: str


class ComicPanelModel(BaseModel):
    image_url: str = ""
    prompt: str = ""
    character_id: Optional[str] = None
    dialogue: Optional[str] = None


class ComicPageModel(BaseModel):
    layout: Literal["1x1", "2x2", "3x3"]
    panels: list[ComicPanelModel] = []
    environment: Optional[str] = None


class ComicEntryModel(BaseModel):
    id: str
    title: str
    author_id: str
    author_name: str
    created_at: str
    status: ComicStatus
    is_showcased: bool
    badge: Optional[ComicBadge] = None
    pages: list[ComicPageModel] = []
    characters: list[CharacterModel] = []
    style: str
    story_premise: str = ""
    cover_image: str = ""
    type: ComicType = ComicType.GENERATED
    pdf_url: Optional[str] = None


class ComicStyleModel(BaseModel):
    id: str
    name: str
    prompt: str


class StudioOptionsResponse(BaseModel):
    styles: list[ComicStyleModel]
    layouts: dict[str, int]


class CharacterRequest(BaseModel):
    name: str
    description: str
    style: str = "marvel"


class CoverRequest(BaseModel):
    title: str
    story_premise: str = ""
    style: str = "marvel"
    action: str = ""
    environment: str = ""
    characters: list[CharacterModel] = []


class PanelRequest(BaseModel):
    panel: ComicPanelModel
    page: ComicPageModel
    characters: list[CharacterModel] = []
    style: str = "marvel"


class GeneratedImageResponse(BaseModel):
    prompt: str
    url: str


class PublishComicRequest(BaseModel):
    title: str = Field(..., max_length=MAX_TITLE_LENGTH)
    pages: list[ComicPageModel] = []
    characters: list[CharacterModel] = []
    style: str = "marvel"
    story_premise: str = ""
    cover_image: str = ""
    type: ComicType = ComicType.GENERATED
    pdf_url: Optional[str] = None


class ComicStatusRequest(BaseModel):
    status: ComicStatus


class ComicBadgeRequest(BaseModel):
    badge: Optional[ComicBadge] = None


class ComicReaderResponse(BaseModel):
    comic: ComicEntryModel
    page_index: int
    page: Optional[ComicPageModel] = None
