"""
Starter vault content written into an empty deployment.
"""

from __future__ import annotations

import datetime
from typing import Optional

from dacite import from_dict

from portal.repository import DACITE_CONFIG
from shared.types import VaultItem

UNSPLASH = "https://images.unsplash.com/{photo}?auto=format&fit=crop&q=80&w={width}"
YOUTUBE_THUMB = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
YOUTUBE_WATCH = "https://www.youtube.com/watch?v={video_id}"


def _images(photo: str) -> dict:
    return {
        "image_url": UNSPLASH.format(photo=photo, width=1600),
        "thumbnail_url": UNSPLASH.format(photo=photo, width=400),
    }


def _trailer(video_id: str, photo: str) -> dict:
    return {
        "id": video_id,
        "type": "Trailer",
        "image_url": UNSPLASH.format(photo=photo, width=1600),
        "thumbnail_url": YOUTUBE_THUMB.format(video_id=video_id),
        "video_url": YOUTUBE_WATCH.format(video_id=video_id),
        "is_video_section": True,
    }


# (hours before seeding, fields)
SEED_ITEMS = [
    (
        0,
        {
            **_trailer("73_1biulkYk", "photo-1612036782180-6f0b6cd846fe"),
            "title": "Deadpool & Wolverine | Final Trailer",
            "categories": ["Movies", "Marvel", "Trailers"],
            "author": "Marvel Studios",
            "read_time": "3 min read",
            "content": (
                "The ultimate multiversal team-up. Deadpool and Wolverine unite to "
                "save the MCU. This is the official briefing for the high-octane "
                "crossover that breaks the fourth wall and the timeline."
            ),
            "views": 980000,
            "likes": 210000,
            "user_ratings": [10, 10, 10],
            "is_hero": True,
            "is_scroller": True,
            "is_main_feed": True,
            "is_marvel_trending": True,
        },
    ),
    (
        1,
        {
            **_trailer("mqqft2x_Aa4", "photo-1509248961158-e54f6934749c"),
            "title": "The Batman | Main Trailer",
            "categories": ["Movies", "DC", "Trailers"],
            "author": "Warner Bros.",
            "read_time": "2 min read",
            "content": (
                "Vengeance has arrived. Robert Pattinson stars as the Dark Knight in "
                "a gritty, detective-focused exploration of Gotham City's deepest "
                "secrets."
            ),
            "views": 890000,
            "likes": 150000,
            "user_ratings": [10, 10, 9],
            "is_hero": True,
            "is_scroller": True,
            "is_main_feed": True,
            "is_dc_trending": True,
        },
    ),
    (
        2,
        {
            **_trailer("JfVOs4VSpmA", "photo-1635805737707-575885ab0820"),
            "title": "Spider-Man: No Way Home | Teaser",
            "categories": ["Movies", "Marvel", "Trailers"],
            "author": "Sony Pictures",
            "read_time": "3 min read",
            "content": (
                "The multiverse is broken. Peter Parker seeks the help of Doctor "
                "Strange to make the world forget his secret identity, only to "
                "unleash villains from across space and time."
            ),
            "views": 2400000,
            "likes": 450000,
            "user_ratings": [10, 10, 10, 10],
            "is_hero": True,
            "is_main_feed": True,
            "is_marvel_trending": True,
        },
    ),
    (
        3,
        {
            **_images("photo-1534802046520-4f27db7f3ae5"),
            "id": "a-superman-legacy",
            "type": "Article",
            "title": "Superman Legacy: First Look at Corenswet in Suit",
            "categories": ["Movies", "DC"],
            "author": "James Gunn",
            "read_time": "5 min read",
            "video_url": YOUTUBE_WATCH.format(video_id="wAOuSfpHrZw"),
            "content": (
                "The new Man of Steel is getting into peak Kryptonian shape. David "
                "Corenswet has been working tirelessly to embody the hope and "
                "strength of the classic Superman."
            ),
            "views": 45000,
            "likes": 3400,
            "is_main_feed": True,
            "is_dc_trending": True,
            "is_video_section": True,
        },
    ),
    (
        4,
        {
            **_images("photo-1542751110-97427bbecf20"),
            "id": "kYJ7K0M9_Xg",
            "type": "Review",
            "title": "Marvel Rivals | Closed Beta Gameplay Review",
            "categories": ["Games", "Marvel", "Reviews"],
            "author": "Gamer One",
            "read_time": "12 min read",
            "thumbnail_url": YOUTUBE_THUMB.format(video_id="kYJ7K0M9_Xg"),
            "video_url": YOUTUBE_WATCH.format(video_id="kYJ7K0M9_Xg"),
            "content": (
                "NetEase Games strikes gold with Marvel Rivals. We analyze the "
                "team-up mechanics and how the environmental destruction changes "
                "the hero shooter genre."
            ),
            "views": 120000,
            "likes": 15000,
            "user_ratings": [9, 10, 9],
            "is_main_feed": True,
        },
    ),
    (
        24,
        {
            **_images("photo-1626814026160-2237a95fc5a0"),
            "id": "art-xmen-97",
            "type": "Article",
            "title": "X-Men 97: Season 2 Production Leaks",
            "categories": ["Movies", "Marvel"],
            "author": "Nexus Scout",
            "read_time": "8 min read",
            "video_url": YOUTUBE_WATCH.format(video_id="u_Q1foJF5gQ"),
            "content": (
                "Why X-Men 97 succeeded where others failed. It respected the legacy "
                "while pushing the emotional boundaries of animated storytelling."
            ),
            "views": 89000,
            "likes": 6700,
            "is_main_feed": True,
            "is_marvel_trending": True,
            "is_video_section": True,
        },
    ),
    (
        48,
        {
            **_images("photo-1541562232579-512a21360020"),
            "id": "art-joker-2",
            "type": "Review",
            "title": "Joker 2: Folie à Deux Verdict",
            "categories": ["Movies", "DC", "Reviews"],
            "author": "Arkham Guard",
            "read_time": "15 min read",
            "content": (
                "A musical odyssey into madness. Joaquin Phoenix and Lady Gaga "
                "deliver performances that are bound to be controversial."
            ),
            "rating": "7.8",
            "views": 150000,
            "likes": 20000,
            "user_ratings": [7, 8, 7],
            "is_main_feed": True,
            "is_dc_trending": True,
        },
    ),
    (
        96,
        {
            **_images("photo-1611606063065-ee7946f0787a"),
            "id": "art-marvel-villains",
            "type": "Blog",
            "title": "Top 5 Marvel Villains We Still Need to See",
            "categories": ["Blog", "Marvel"],
            "author": "The Watcher",
            "read_time": "10 min read",
            "video_url": YOUTUBE_WATCH.format(video_id="aWzlQ2N6qqg"),
            "content": (
                "From Galactus to Dr. Doom, these are the heavy hitters that need to "
                "debut in the MCU's upcoming phases to keep the stakes at an "
                "all-time high."
            ),
            "views": 34000,
            "likes": 4500,
            "is_main_feed": True,
            "is_video_section": True,
        },
    ),
]


def initial_vault_items(now: Optional[datetime.datetime] = None) -> list[VaultItem]:
    now = now or datetime.datetime.now(datetime.timezone.utc)
    items = []
    for age_hours, fields in SEED_ITEMS:
        data = {
            "status": "Published",
            **fields,
            "date": (now - datetime.timedelta(hours=age_hours)).isoformat(),
        }
        items.append(from_dict(data_class=VaultItem, data=data, config=DACITE_CONFIG))
    return items
