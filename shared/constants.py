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

# Firestore collections
VAULT_COLLECTION = "vault"
USERS_COLLECTION = "users"
RANKINGS_COLLECTION = "rankings"
SUBSCRIBERS_COLLECTION = "subscribers"
COMICS_COLLECTION = "comics"
SETTINGS_COLLECTION = "settings"

# Documents inside SETTINGS_COLLECTION
SITE_SETTINGS_DOC = "site"
CATEGORIES_DOC = "categories"

DEFAULT_CATEGORIES = [
    "Movies",
    "Games",
    "Comics",
    "DC",
    "Marvel",
    "Blog",
    "Reviews",
    "Trailers",
    "Rumors",
    "Indie",
    "Tech",
]

ALL_CATEGORIES_FILTER = "All Sectors"
REVIEW_FILTERS = ["All", "Movies", "Games"]

MAX_RANKING_ITEMS = 10
WORDS_PER_MINUTE = 200
MIN_USER_SCORE = 1
MAX_USER_SCORE = 10
DEFAULT_USER_SCORE = 10

MAX_TITLE_LENGTH = 300
MAX_COMMENT_LENGTH = 2000
MAX_CATEGORY_LENGTH = 64

HOME_TRENDING_COUNT = 5
HOME_FRANCHISE_TRENDING_COUNT = 3
RELATED_CONTENT_COUNT = 3

AVATAR_URL_TEMPLATE = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"
DEFAULT_COMIC_COVER = "https://via.placeholder.com/300"
