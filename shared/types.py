# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

from enum import StrEnum
from dataclasses import dataclass, field
from typing import List, Optional


class ContentType(StrEnum):
    ARTICLE = "Article"
    TRAILER = "Trailer"
    REVIEW = "Review"
    BLOG = "Blog"


class ItemStatus(StrEnum):
    PUBLISHED = "Published"
    DRAFT = "Draft"
    ARCHIVED = "Archived"


class UserRole(StrEnum):
    ADMIN = "Admin"
    AUTHOR = "Author"
    EDITOR = "Editor"
    GUEST = "Guest"


class RankingType(StrEnum):
    BEST = "Best"
    WORST = "Worst"
    PERSONAL = "Personal"
    TRENDING = "Trending"


class ComicStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ComicBadge(StrEnum):
    FIRST = "1st"
    SECOND = "2nd"
    THIRD = "3rd"


class ComicType(StrEnum):
    GENERATED = "generated"
    UPLOADED = "uploaded"


@dataclass
class Comment:
    id: str
    author: str
    date: str
    text: str
    avatar: str
    is_visible: bool = True
    email: Optional[str] = None
    user_score: Optional[int] = None
    replies: List["Comment"] = field(default_factory=list)


@dataclass
class VaultItem:
    """A published (or draft) piece of content: article, trailer, review or blog post."""

    id: str
    type: ContentType
    title: str
    author: str
    date: str
    content: str
    read_time: str = "1 min read"
    image_url: str = ""
    categories: List[str] = field(default_factory=list)
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    summary: Optional[str] = None
    rating: Optional[str] = None
    user_ratings: List[int] = field(default_factory=list)
    likes: int = 0
    views: int = 0
    comments: List[Comment] = field(default_factory=list)
    status: ItemStatus = ItemStatus.PUBLISHED
    is_hero: bool = False
    is_scroller: bool = False
    is_trending: bool = False
    is_video_section: bool = False
    is_main_feed: bool = False
    is_marvel_trending: bool = False
    is_dc_trending: bool = False


@dataclass
class RankingEntry:
    vault_item_id: str
    rank: int
    override_description: Optional[str] = None


@dataclass
class RankingList:
    id: str
    title: str
    description: str = ""
    type: RankingType = RankingType.BEST
    items: List[RankingEntry] = field(default_factory=list)


@dataclass
class SocialLink:
    id: str
    platform: str
    url: str
    icon: str = "link"
    visible: bool = True


@dataclass
class SiteSettings:
    address: str
    contact_email: str
    show_address: bool = True
    social_links: List[SocialLink] = field(default_factory=list)
    copyright_year: str = ""


@dataclass
class Subscriber:
    id: str
    email: str
    date: str


@dataclass
class User:
    """Profile document kept next to the auth provider's account."""

    id: str
    email: str
    name: str
    role: UserRole
    avatar: str
    joined_date: str
    is_verified: bool = False
    is_approved: bool = False
    is_rejected: bool = False
    address: Optional[str] = None
    mobile: Optional[str] = None
    dob: Optional[str] = None
    verification_code: Optional[str] = None


@dataclass
class Character:
    id: str
    name: str
    description: str
    design_prompt: str
    reference_image: str


@dataclass
class ComicPanel:
    image_url: str = ""
    prompt: str = ""
    character_id: Optional[str] = None
    dialogue: Optional[str] = None


@dataclass
class ComicPage:
    layout: str
    panels: List[ComicPanel] = field(default_factory=list)
    environment: Optional[str] = None


@dataclass
class ComicEntry:
    id: str
    title: str
    author_id: str
    author_name: str
    created_at: str
    status: ComicStatus = ComicStatus.PENDING
    is_showcased: bool = False
    badge: Optional[ComicBadge] = None
    pages: List[ComicPage] = field(default_factory=list)
    characters: List[Character] = field(default_factory=list)
    style: str = "marvel"
    story_premise: str = ""
    cover_image: str = ""
    type: ComicType = ComicType.GENERATED
    pdf_url: Optional[str] = None
