import datetime
import unittest
from unittest.mock import MagicMock, patch

from google.api_core import exceptions as google_exceptions

from portal.storage import (
    FirebaseStorageClient,
    InMemoryStorageClient,
    S3StorageClient,
)


class InMemoryStorageTests(unittest.TestCase):
    def test_upload_delete_and_presign(self):
        storage = InMemoryStorageClient()
        url = storage.upload_bytes("uploads/image/a.png", b"data", "image/png")
        self.assertEqual(url, "https://example.test/storage/uploads/image/a.png")
        self.assertEqual(storage.get_bytes("uploads/image/a.png"), b"data")
        self.assertIn("expires=60", storage.presign_get("uploads/image/a.png", 60))

        storage.delete("uploads/image/a.png")
        storage.delete("uploads/image/a.png")
        with self.assertRaises(FileNotFoundError):
            storage.get_bytes("uploads/image/a.png")


class S3StorageTests(unittest.TestCase):
    @patch("portal.storage.boto3.client")
    def test_upload_returns_stable_object_url(self, mock_client_factory):
        client = mock_client_factory.return_value
        storage = S3StorageClient(
            bucket="vault",
            region="ap-shanghai",
            endpoint="https://cos.ap-shanghai.myqcloud.com",
            access_key_id="key",
            secret_access_key="secret",
        )

        url = storage.upload_bytes("comics/a b.jpg", b"img", "image/jpeg")

        self.assertEqual(
            url, "https://cos.ap-shanghai.myqcloud.com/vault/comics/a%20b.jpg"
        )
        self.assertNotIn("X-Amz-Expires", url)
        client.put_object.assert_called_once_with(
            Bucket="vault", Key="comics/a b.jpg", Body=b"img", ContentType="image/jpeg"
        )
        client.generate_presigned_url.assert_not_called()
        _, kwargs = mock_client_factory.call_args
        self.assertEqual(kwargs["endpoint_url"], "https://cos.ap-shanghai.myqcloud.com")

    @patch("portal.storage.boto3.client")
    def test_object_url_prefers_public_base_url(self, _mock_client_factory):
        storage = S3StorageClient(
            "vault", "eu-west-1", "", "key", "secret", public_base_url="https://cdn.test/"
        )
        self.assertEqual(storage.object_url("uploads/x.png"), "https://cdn.test/uploads/x.png")

        aws = S3StorageClient("vault", "eu-west-1", "", "key", "secret")
        self.assertEqual(
            aws.object_url("uploads/x.png"),
            "https://vault.s3.eu-west-1.amazonaws.com/uploads/x.png",
        )

    @patch("portal.storage.boto3.client")
    def test_presign_get_is_short_lived(self, mock_client_factory):
        client = mock_client_factory.return_value
        client.generate_presigned_url.return_value = "https://bucket.test/signed"
        storage = S3StorageClient("vault", "", "", "key", "secret")

        self.assertEqual(storage.presign_get("comics/a.jpg"), "https://bucket.test/signed")
        client.generate_presigned_url.assert_called_once_with(
            ClientMethod="get_object",
            Params={"Bucket": "vault", "Key": "comics/a.jpg"},
            ExpiresIn=3600,
        )

    @patch("portal.storage.boto3.client")
    def test_delete(self, mock_client_factory):
        storage = S3StorageClient("vault", "", "", "key", "secret")
        storage.delete("comics/a.jpg")
        mock_client_factory.return_value.delete_object.assert_called_once_with(
            Bucket="vault", Key="comics/a.jpg"
        )
        _, kwargs = mock_client_factory.call_args
        self.assertIsNone(kwargs["endpoint_url"])


class FirebaseStorageTests(unittest.TestCase):
    def setUp(self):
        patcher = patch("portal.storage.firebase_storage.bucket")
        self.mock_bucket_factory = patcher.start()
        self.addCleanup(patcher.stop)
        self.bucket = self.mock_bucket_factory.return_value
        self.blob = MagicMock()
        self.blob.public_url = "https://storage.googleapis.com/vault/profile_images/u1"
        self.bucket.blob.return_value = self.blob

    def test_upload_makes_blob_public(self):
        storage = FirebaseStorageClient("vault")
        url = storage.upload_bytes("profile_images/u1", b"png", "image/png")

        self.mock_bucket_factory.assert_called_once_with("vault")
        self.bucket.blob.assert_called_once_with("profile_images/u1")
        self.blob.upload_from_string.assert_called_once_with(
            b"png", content_type="image/png"
        )
        self.blob.make_public.assert_called_once()
        self.assertEqual(url, self.blob.public_url)

    def test_delete_missing_blob_is_ignored(self):
        self.blob.delete.side_effect = google_exceptions.NotFound("gone")
        FirebaseStorageClient("vault").delete("profile_images/u1")
        self.blob.delete.assert_called_once()

    def test_presign_get(self):
        self.blob.generate_signed_url.return_value = "https://signed"
        self.assertEqual(
            FirebaseStorageClient("vault").presign_get("a", expires_in=120),
            "https://signed",
        )
        self.blob.generate_signed_url.assert_called_once_with(
            expiration=datetime.timedelta(seconds=120), method="GET"
        )


if __name__ == "__main__":
    unittest.main()
