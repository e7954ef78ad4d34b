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

import requests

REQUEST_TIMEOUT = 30  # seconds
DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"


def fetch_image_bytes(url: str, timeout: int = REQUEST_TIMEOUT) -> tuple[bytes, str]:
    """
    Downloads a remote image.

    Args:
        url (str): The image URL.
        timeout (int): Seconds to wait for the remote host.

    Returns:
        tuple[bytes, str]: The body and its content type. Raises
            requests.RequestException if the request fails.
    """
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()

    content_type = response.headers.get("Content-Type", DEFAULT_IMAGE_CONTENT_TYPE)
    return response.content, content_type.split(";")[0].strip()
