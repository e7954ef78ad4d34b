"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
from typing import Optional

import firebase_admin
from fastapi import Depends, Header
from firebase_admin import credentials

from portal.accounts import is_active
from portal.auth import AuthClaims, AuthVerifier, FirebaseAuthVerifier, InMemoryAuthVerifier
from portal.config import get_settings
from portal.db import (
    DocumentStore,
    FirestoreDocumentStore,
    InMemoryDocumentStore,
    SqlDocumentStore,
)
from portal.errors import AuthenticationError, PermissionDeniedError
from portal.repository import PortalRepository
from portal.storage import (
    FirebaseStorageClient,
    InMemoryStorageClient,
    S3StorageClient,
    StorageClient,
)
from shared.types import User, UserRole

logger = logging.getLogger(__name__)

_document_store: DocumentStore | None = None
_repository: PortalRepository | None = None
_storage_client: StorageClient | None = None
_auth_verifier: AuthVerifier | None = None


def _ensure_firebase_app() -> None:
    try:
        firebase_admin.get_app()
    except ValueError:
        _initialize_firebase_app()


def _initialize_firebase_app() -> None:
    settings = get_settings()
    cred = (
        credentials.Certificate(settings.firebase_credentials_path)
        if settings.firebase_credentials_path
        else credentials.ApplicationDefault()
    )
    options = {}
    if settings.firebase_project_id:
        options["projectId"] = settings.firebase_project_id
    if settings.firebase_storage_bucket:
        options["storageBucket"] = settings.firebase_storage_bucket
    firebase_admin.initialize_app(cred, options)
    logger.info("Initialized Firebase app for %s", settings.firebase_project_id)


def _uses_firebase() -> bool:
    settings = get_settings()
    return not settings.use_in_memory_backends and bool(
        settings.firebase_project_id or settings.store_backend == "firestore"
    )


def get_document_store() -> DocumentStore:
    """
    Return a singleton document store so state persists across requests.
    """
    global _document_store
    if _document_store:
        return _document_store

    settings = get_settings()
    if settings.use_in_memory_backends or settings.store_backend == "memory":
        _document_store = InMemoryDocumentStore()
    elif settings.store_backend == "firestore":
        _ensure_firebase_app()
        _document_store = FirestoreDocumentStore()
    elif settings.database_url:
        _document_store = SqlDocumentStore(settings.database_url)
    else:
        logger.warning("PORTAL_STORE_BACKEND=sql without DATABASE_URL; using memory")
        _document_store = InMemoryDocumentStore()
    return _document_store


def get_repository() -> PortalRepository:
    global _repository
    if _repository:
        return _repository
    _repository = PortalRepository(get_document_store())
    return _repository


def uses_in_memory_store() -> bool:
    """True when documents live only in this process and vanish on exit."""
    return isinstance(get_document_store(), InMemoryDocumentStore)


def get_storage_client() -> StorageClient:
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        _storage_client = InMemoryStorageClient()
    elif settings.firebase_storage_bucket:
        _ensure_firebase_app()
        _storage_client = FirebaseStorageClient(settings.firebase_storage_bucket)
    elif settings.s3_bucket:
        _storage_client = S3StorageClient(
            bucket=settings.s3_bucket,
            region=settings.s3_region or "",
            endpoint=settings.s3_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
            public_base_url=settings.s3_public_base_url or "",
        )
    else:
        _storage_client = InMemoryStorageClient()
    return _storage_client


def get_auth_verifier() -> AuthVerifier:
    global _auth_verifier
    if _auth_verifier:
        return _auth_verifier

    if _uses_firebase():
        _ensure_firebase_app()
        _auth_verifier = FirebaseAuthVerifier()
    else:
        _auth_verifier = InMemoryAuthVerifier()
    return _auth_verifier


def get_current_claims(
    authorization: Optional[str] = Header(default=None),
    verifier: AuthVerifier = Depends(get_auth_verifier),
) -> AuthClaims:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Missing bearer token")
    return verifier.verify(token.strip())


def get_current_user(
    claims: AuthClaims = Depends(get_current_claims),
    repo: PortalRepository = Depends(get_repository),
) -> User:
    """The caller's profile. Only approved accounts may use the admin area."""
    user = repo.get_user(claims.uid)
    if user is None:
        raise PermissionDeniedError("No profile for this account")
    if not is_active(user):
        raise PermissionDeniedError("Account is awaiting approval")
    return user


def require_roles(*roles: UserRole):
    def _check(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise PermissionDeniedError(
                f"Requires role {' or '.join(str(r) for r in roles)}"
            )
        return user

    return _check


require_admin = require_roles(UserRole.ADMIN)
