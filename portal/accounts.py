"""
Staff accounts: registration, e-mail verification, approval and profiles.

Credentials live with the auth provider; this module manages the profile
document that decides whether an account may enter the admin area.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Iterable, Literal, Optional

from portal.auth import AuthClaims
from portal.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
    PermissionDeniedError,
)
from portal.repository import PortalRepository
from portal.storage import StorageClient
from shared.types import User, UserRole
from shared.utils import default_avatar, today

logger = logging.getLogger(__name__)

PROFILE_IMAGE_PATH = "profile_images/{user_id}"


class SignInState(StrEnum):
    ACTIVE = "ACTIVE"
    VERIFY = "VERIFY"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


@dataclass
class SignInResult:
    state: SignInState
    user: User


def generate_verification_code() -> str:
    return str(100000 + secrets.randbelow(900000))


def is_super_admin(email: str, super_admin_email: str) -> bool:
    return email.strip().lower() == super_admin_email.strip().lower()


def _super_admin_profile(claims: AuthClaims, name: str | None = None) -> User:
    return User(
        id=claims.uid,
        email=claims.email,
        name=name or claims.name or "Super Admin",
        role=UserRole.ADMIN,
        avatar=claims.picture or default_avatar(claims.email),
        joined_date=today(),
        is_verified=True,
        is_approved=True,
        is_rejected=False,
    )


def register(
    repo: PortalRepository,
    claims: AuthClaims,
    name: str,
    super_admin_email: str,
    address: Optional[str] = None,
    mobile: Optional[str] = None,
) -> User:
    """
    Creates the profile for a freshly signed-up account.

    Regular accounts start as unverified, unapproved Guests holding a
    verification code. The super-admin address is approved as Admin at once.
    """
    if repo.get_user(claims.uid) is not None:
        raise ConflictError("Profile already exists for this account.")
    name = (name or "").strip()
    if not name:
        raise InvalidRequestError("Name is required.")

    if is_super_admin(claims.email, super_admin_email):
        user = _super_admin_profile(claims, name)
    else:
        user = User(
            id=claims.uid,
            email=claims.email,
            name=name,
            address=address or "",
            mobile=mobile or "",
            role=UserRole.GUEST,
            avatar=default_avatar(claims.email),
            joined_date=today(),
            is_verified=claims.email_verified,
            is_approved=False,
            is_rejected=False,
            verification_code=None
            if claims.email_verified
            else generate_verification_code(),
        )
    repo.save_user(user)
    if user.verification_code:
        logger.info("Verification code for %s: %s", user.email, user.verification_code)
    logger.info("Registered %s as %s", user.email, user.role)
    return user


def verify_code(repo: PortalRepository, email: str, code: str) -> User:
    user = repo.find_user_by_email(email.strip().lower())
    if user is None or not user.verification_code or user.verification_code != code:
        raise InvalidRequestError("Invalid verification code.")
    return repo.update_user(
        user.id, lambda u: replace(u, is_verified=True, verification_code=None)
    )


def resolve_sign_in(
    repo: PortalRepository, claims: AuthClaims, super_admin_email: str
) -> SignInResult:
    """
    Decides what a signed-in account may do next.

    The super-admin profile is created or repaired to an approved Admin on
    every sign-in.
    """
    user = repo.get_user(claims.uid)
    if is_super_admin(claims.email, super_admin_email):
        if user is None:
            user = repo.save_user(_super_admin_profile(claims))
        elif not (user.is_approved and user.role == UserRole.ADMIN and user.is_verified):
            user = repo.update_user(
                user.id,
                lambda u: replace(
                    u,
                    role=UserRole.ADMIN,
                    is_approved=True,
                    is_verified=True,
                    is_rejected=False,
                ),
            )
        return SignInResult(state=SignInState.ACTIVE, user=user)

    if user is None:
        raise NotFoundError("User profile not found.")
    if user.is_rejected:
        return SignInResult(state=SignInState.REJECTED, user=user)
    if not user.is_approved:
        if not user.is_verified and claims.email_verified:
            user = repo.update_user(
                user.id, lambda u: replace(u, is_verified=True, verification_code=None)
            )
        state = SignInState.PENDING if user.is_verified else SignInState.VERIFY
        return SignInResult(state=state, user=user)
    return SignInResult(state=SignInState.ACTIVE, user=user)


def _get_user_or_raise(repo: PortalRepository, user_id: str) -> User:
    user = repo.get_user(user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


def approve_user(repo: PortalRepository, user_id: str, role: UserRole) -> User:
    _get_user_or_raise(repo, user_id)
    user = repo.update_user(
        user_id, lambda u: replace(u, is_approved=True, is_rejected=False, role=role)
    )
    logger.info("Approved %s as %s", user.email, role)
    return user


def force_approve_admin(repo: PortalRepository, email: str) -> User:
    """Operator override: makes the account with `email` an approved, verified Admin."""
    user = repo.find_user_by_email(email.strip().lower())
    if user is None:
        raise NotFoundError(f"No profile with e-mail {email}")
    return repo.update_user(
        user.id,
        lambda u: replace(
            u,
            role=UserRole.ADMIN,
            is_approved=True,
            is_rejected=False,
            is_verified=True,
            verification_code=None,
        ),
    )


def reject_user(repo: PortalRepository, user_id: str) -> User:
    _get_user_or_raise(repo, user_id)
    user = repo.update_user(
        user_id, lambda u: replace(u, is_approved=False, is_rejected=True)
    )
    logger.info("Rejected %s", user.email)
    return user


def revoke_user(repo: PortalRepository, user_id: str, super_admin_email: str) -> User:
    target = _get_user_or_raise(repo, user_id)
    if is_super_admin(target.email, super_admin_email):
        raise PermissionDeniedError("Cannot revoke Super Admin access.")
    user = repo.update_user(
        user_id, lambda u: replace(u, is_approved=False, role=UserRole.GUEST)
    )
    logger.info("Revoked %s", user.email)
    return user


def change_role(
    repo: PortalRepository, user_id: str, role: UserRole, super_admin_email: str
) -> User:
    target = _get_user_or_raise(repo, user_id)
    if is_super_admin(target.email, super_admin_email) and role != UserRole.ADMIN:
        raise PermissionDeniedError("Cannot demote the Super Admin.")
    return repo.update_user(user_id, lambda u: replace(u, role=role))


def delete_user(repo: PortalRepository, user_id: str, super_admin_email: str) -> None:
    target = _get_user_or_raise(repo, user_id)
    if is_super_admin(target.email, super_admin_email):
        raise PermissionDeniedError("Cannot delete the Super Admin.")
    repo.delete_user(user_id)
    logger.info("Deleted user %s", target.email)


def is_pending(user: User) -> bool:
    return not user.is_approved and not user.is_rejected and user.is_verified


def is_active(user: User) -> bool:
    return user.is_approved and not user.is_rejected


def filter_users(
    users: Iterable[User],
    tab: Literal["ACTIVE", "PENDING"] = "ACTIVE",
    search: str = "",
) -> list[User]:
    term = search.lower()
    in_tab = is_active if tab == "ACTIVE" else is_pending
    return [
        u
        for u in users
        if in_tab(u) and (term in u.name.lower() or term in u.email.lower())
    ]


def pending_count(users: Iterable[User]) -> int:
    return sum(1 for u in users if is_pending(u))


def update_profile(
    repo: PortalRepository,
    user_id: str,
    name: Optional[str] = None,
    mobile: Optional[str] = None,
    dob: Optional[str] = None,
    address: Optional[str] = None,
) -> User:
    if name is not None and not name.strip():
        raise InvalidRequestError("Name must not be empty.")
    changes = {
        key: value
        for key, value in (
            ("name", name.strip() if name else name),
            ("mobile", mobile),
            ("dob", dob),
            ("address", address),
        )
        if value is not None
    }
    return repo.update_user(user_id, lambda u: replace(u, **changes))


def upload_avatar(
    repo: PortalRepository,
    storage: StorageClient,
    user_id: str,
    data: bytes,
    content_type: str,
) -> User:
    if not content_type.startswith("image/"):
        raise InvalidRequestError("Avatar must be an image.")
    url = storage.upload_bytes(
        PROFILE_IMAGE_PATH.format(user_id=user_id), data, content_type
    )
    return repo.update_user(user_id, lambda u: replace(u, avatar=url))


def reset_avatar(repo: PortalRepository, storage: StorageClient, user_id: str) -> User:
    storage.delete(PROFILE_IMAGE_PATH.format(user_id=user_id))
    return repo.update_user(
        user_id, lambda u: replace(u, avatar=default_avatar(u.email))
    )
