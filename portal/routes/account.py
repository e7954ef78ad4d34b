"""
Sign-up, verification, sign-in resolution and the caller's own profile.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from portal import accounts
from portal.auth import AuthClaims
from portal.config import Settings, get_settings
from portal.dependencies import (
    get_current_claims,
    get_current_user,
    get_repository,
    get_storage_client,
)
from portal.errors import InvalidRequestError
from portal.repository import PortalRepository
from portal.schemas import (
    ProfileUpdateRequest,
    RegisterRequest,
    RegisterResponse,
    SignInResponse,
    UserModel,
    VerifyRequest,
)
from portal.storage import StorageClient
from shared.types import User

router = APIRouter(prefix="/account")


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    payload: RegisterRequest,
    claims: AuthClaims = Depends(get_current_claims),
    repo: PortalRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    user = accounts.register(
        repo,
        claims,
        payload.name,
        settings.super_admin_email,
        address=payload.address,
        mobile=payload.mobile,
    )
    code = user.verification_code if settings.expose_verification_codes else None
    return {"user": user, "verification_code": code}


@router.post("/verify", response_model=UserModel)
def verify(payload: VerifyRequest, repo: PortalRepository = Depends(get_repository)):
    return accounts.verify_code(repo, payload.email, payload.code)


@router.post("/sign-in", response_model=SignInResponse)
def sign_in(
    claims: AuthClaims = Depends(get_current_claims),
    repo: PortalRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
):
    return accounts.resolve_sign_in(repo, claims, settings.super_admin_email)


@router.get("/me", response_model=UserModel)
def me(user: User = Depends(get_current_user)):
    return user


@router.patch("/me", response_model=UserModel)
def update_me(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    repo: PortalRepository = Depends(get_repository),
):
    return accounts.update_profile(repo, user.id, **payload.model_dump())


@router.post("/me/avatar", response_model=UserModel)
async def upload_avatar(
    file: UploadFile = File(...),
    user: User = Depends(get_current_user),
    repo: PortalRepository = Depends(get_repository),
    storage: StorageClient = Depends(get_storage_client),
    settings: Settings = Depends(get_settings),
):
    data = await file.read()
    if len(data) > settings.max_upload_bytes:
        raise InvalidRequestError("File too large")
    return accounts.upload_avatar(
        repo, storage, user.id, data, file.content_type or "application/octet-stream"
    )


@router.delete("/me/avatar", response_model=UserModel)
def reset_avatar(
    user: User = Depends(get_current_user),
    repo: PortalRepository = Depends(get_repository),
    storage: StorageClient = Depends(get_storage_client),
):
    return accounts.reset_avatar(repo, storage, user.id)
