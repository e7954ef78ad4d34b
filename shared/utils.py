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

import math
import re
import uuid
from datetime import datetime, timezone
from urllib.parse import quote

from shared.constants import AVATAR_URL_TEMPLATE, WORDS_PER_MINUTE

YOUTUBE_URL_PATTERN = re.compile(
    r"^.*((youtu.be/)|(v/)|(/u/\w/)|(embed/)|(watch\?))\??v?=?([^#&?]*).*"
)
YOUTUBE_ID_LENGTH = 11


def get_unique_id() -> str:
    return uuid.uuid4().hex


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def parse_date(value: str | None) -> datetime:
    """Parses an ISO date, treating naive values as UTC and garbage as the epoch."""
    if not value:
        return datetime.fromtimestamp(0, tz=timezone.utc)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return datetime.fromtimestamp(0, tz=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def get_youtube_id(url: str | None) -> str | None:
    """Returns the 11 character video id of a YouTube URL, or None."""
    if not url:
        return None
    match = YOUTUBE_URL_PATTERN.match(url)
    if match and len(match.group(7)) == YOUTUBE_ID_LENGTH:
        return match.group(7)
    return None


def estimate_read_time(content: str) -> str:
    word_count = len(content.split())
    minutes = max(1, math.ceil(word_count / WORDS_PER_MINUTE))
    return f"{minutes} min read"


def default_avatar(seed: str) -> str:
    return AVATAR_URL_TEMPLATE.format(seed=quote(seed or "", safe="@."))
