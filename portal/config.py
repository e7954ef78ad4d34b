"""
Configuration and settings for the portal backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    api_prefix: str = Field(default="/api")
    # Comma-separated origins of the web client; empty allows any origin.
    allowed_origins: str = Field(default="", validation_alias="PORTAL_ALLOWED_ORIGINS")
    log_level: str = Field(default="INFO", validation_alias="PORTAL_LOG_LEVEL")

    # Document store: "memory", "firestore" or "sql"
    store_backend: Literal["memory", "firestore", "sql"] = Field(
        default="memory", validation_alias="PORTAL_STORE_BACKEND"
    )
    database_url: Optional[str] = Field(default=None, validation_alias="DATABASE_URL")

    # Firebase (Firestore, Auth, Cloud Storage)
    firebase_project_id: Optional[str] = Field(
        default=None, validation_alias="FIREBASE_PROJECT_ID"
    )
    firebase_credentials_path: Optional[str] = Field(
        default=None, validation_alias="GOOGLE_APPLICATION_CREDENTIALS"
    )
    firebase_storage_bucket: Optional[str] = Field(
        default=None, validation_alias="FIREBASE_STORAGE_BUCKET"
    )

    # S3-compatible storage, used when no Firebase bucket is configured
    s3_endpoint: Optional[str] = Field(default=None, validation_alias="S3_ENDPOINT")
    s3_region: Optional[str] = Field(default=None, validation_alias="S3_REGION")
    s3_bucket: Optional[str] = Field(default=None, validation_alias="S3_BUCKET")
    s3_public_base_url: Optional[str] = Field(
        default=None, validation_alias="S3_PUBLIC_BASE_URL"
    )
    aws_access_key_id: Optional[str] = Field(
        default=None, validation_alias="AWS_ACCESS_KEY_ID"
    )
    aws_secret_access_key: Optional[str] = Field(
        default=None, validation_alias="AWS_SECRET_ACCESS_KEY"
    )

    # Accounts
    super_admin_email: str = Field(
        default="admin@heroportal.io", validation_alias="PORTAL_SUPER_ADMIN_EMAIL"
    )
    expose_verification_codes: bool = Field(
        default=False, validation_alias="PORTAL_EXPOSE_VERIFICATION_CODES"
    )

    # Development toggles
    use_in_memory_backends: bool = Field(
        default=False, validation_alias="PORTAL_USE_IN_MEMORY_BACKENDS"
    )

    # Listing and outbound requests
    default_page_size: int = Field(default=6, validation_alias="PORTAL_PAGE_SIZE")
    max_page_size: int = Field(default=100, validation_alias="PORTAL_MAX_PAGE_SIZE")
    request_timeout_seconds: int = Field(
        default=30, validation_alias="PORTAL_REQUEST_TIMEOUT"
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024, validation_alias="PORTAL_MAX_UPLOAD_BYTES"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
