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
from unittest.mock import MagicMock, patch

import requests

from shared import fetch_utils


class FetchImageBytesTest(unittest.TestCase):
    @patch("shared.fetch_utils.requests.get")
    def test_returns_body_and_content_type(self, mock_get):
        response = MagicMock()
        response.content = b"\xff\xd8"
        response.headers = {"Content-Type": "image/png; charset=binary"}
        mock_get.return_value = response

        data, content_type = fetch_utils.fetch_image_bytes("https://img.test/a", timeout=5)

        mock_get.assert_called_once_with("https://img.test/a", timeout=5)
        response.raise_for_status.assert_called_once()
        self.assertEqual(data, b"\xff\xd8")
        self.assertEqual(content_type, "image/png")

    @patch("shared.fetch_utils.requests.get")
    def test_defaults_to_jpeg(self, mock_get):
        mock_get.return_value.headers = {}
        mock_get.return_value.content = b""
        _, content_type = fetch_utils.fetch_image_bytes("https://img.test/a")
        self.assertEqual(content_type, "image/jpeg")

    @patch("shared.fetch_utils.requests.get")
    def test_http_errors_propagate(self, mock_get):
        mock_get.return_value.raise_for_status.side_effect = requests.HTTPError("404")
        with self.assertRaises(requests.HTTPError):
            fetch_utils.fetch_image_bytes("https://img.test/missing")


if __name__ == "__main__":
    unittest.main()
