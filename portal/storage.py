"""
Storage abstraction for Firebase Storage, S3-compatible buckets and in-memory testing.
"""

from __future__ import annotations

import datetime
import logging
import urllib.parse
from dataclasses import dataclass, field
from typing import Protocol

import boto3
from botocore.config import Config
from firebase_admin import storage as firebase_storage
from google.api_core import exceptions as google_exceptions

logger = logging.getLogger(__name__)


class StorageClient(Protocol):
    """Defines the operations the API needs from object storage."""

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> str:
        """Stores `data` at `path` and returns a URL the browser can load."""
        ...

    def delete(self, path: str) -> None:
        ...

    def presign_get(self, path: str, expires_in: int = 3600) -> str:
        ...


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    base_url: str = "https://example.test/storage"
    stored_objects: dict = field(default_factory=dict)

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> str:
        self.stored_objects[path] = (data, content_type)
        return f"{self.base_url}/{path}"

    def delete(self, path: str) -> None:
        self.stored_objects.pop(path, None)

    def presign_get(self, path: str, expires_in: int = 3600) -> str:
        return f"{self.base_url}/{path}?op=get&expires={expires_in}"

    def get_bytes(self, path: str) -> bytes:
        stored = self.stored_objects.get(path)
        if stored is None:
            raise FileNotFoundError(path)
        return stored[0]


@dataclass
class FirebaseStorageClient:
    """Cloud Storage bucket attached to the Firebase project."""

    bucket_name: str | None = None

    def __post_init__(self):
        self._bucket = firebase_storage.bucket(self.bucket_name)

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> str:
        blob = self._bucket.blob(path)
        blob.upload_from_string(data, content_type=content_type)
        blob.make_public()
        return blob.public_url

    def delete(self, path: str) -> None:
        try:
            self._bucket.blob(path).delete()
        except google_exceptions.NotFound:
            logger.info("Storage object %s already absent", path)

    def presign_get(self, path: str, expires_in: int = 3600) -> str:
        return self._bucket.blob(path).generate_signed_url(
            expiration=datetime.timedelta(seconds=expires_in), method="GET"
        )


@dataclass
class S3StorageClient:
    """
    S3-compatible storage client (AWS, Tencent COS, MinIO).
    """

    bucket: str
    region: str
    endpoint: str
    access_key_id: str
    secret_access_key: str
    # Public or CDN origin for stored objects, e.g. https://cdn.example.com
    public_base_url: str = ""

    def __post_init__(self):
        # Virtual-hosted style addressing works with COS as well as AWS.
        config = Config(
            s3={"addressing_style": "virtual"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint or None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    def upload_bytes(
        self, path: str, data: bytes, content_type: str = "application/octet-stream"
    ) -> str:
        self._client.put_object(
            Bucket=self.bucket,
            Key=path,
            Body=data,
            ContentType=content_type,
        )
        return self.object_url(path)

    def object_url(self, path: str) -> str:
        """Stable URL of a public-read object. Use presign_get for private access."""
        key = urllib.parse.quote(path)
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.endpoint:
            return f"{self.endpoint.rstrip('/')}/{self.bucket}/{key}"
        region = self.region or "us-east-1"
        return f"https://{self.bucket}.s3.{region}.amazonaws.com/{key}"

    def delete(self, path: str) -> None:
        # DeleteObject succeeds for missing keys.
        self._client.delete_object(Bucket=self.bucket, Key=path)

    def presign_get(self, path: str, expires_in: int = 3600) -> str:
        return self._client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": self.bucket, "Key": path},
            ExpiresIn=expires_in,
        )
