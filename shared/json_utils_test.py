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

import unittest

from shared.json_utils import camel_to_snake, convert_keys, snake_to_camel


class JsonUtilsTest(unittest.TestCase):

    def test_camel_to_snake(self):
        self.assertEqual(camel_to_snake("imageUrl"), "image_url")
        self.assertEqual(camel_to_snake("vaultItemId"), "vault_item_id")
        self.assertEqual(camel_to_snake("isMarvelTrending"), "is_marvel_trending")
        self.assertEqual(camel_to_snake("title"), "title")

    def test_snake_to_camel(self):
        self.assertEqual(snake_to_camel("image_url"), "imageUrl")
        self.assertEqual(snake_to_camel("override_description"), "overrideDescription")
        self.assertEqual(snake_to_camel("views"), "views")

    def test_dc_trending_keeps_stored_spelling(self):
        self.assertEqual(snake_to_camel("is_dc_trending"), "isDCTrending")
        self.assertEqual(camel_to_snake("isDCTrending"), "is_dc_trending")

    def test_convert_keys_walks_nested_values(self):
        doc = {
            "readTime": "3 min read",
            "comments": [{"userScore": 9, "isVisible": True, "replies": []}],
        }
        converted = convert_keys(doc, "camel_to_snake")
        self.assertEqual(
            converted,
            {
                "read_time": "3 min read",
                "comments": [{"user_score": 9, "is_visible": True, "replies": []}],
            },
        )
        self.assertEqual(convert_keys(converted, "snake_to_camel"), doc)

    def test_convert_keys_leaves_values_alone(self):
        self.assertEqual(
            convert_keys({"categories": ["someValue"]}, "camel_to_snake"),
            {"categories": ["someValue"]},
        )


if __name__ == "__main__":
    unittest.main()
