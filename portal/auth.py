"""
Verification of ID tokens issued by the managed auth provider.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

from firebase_admin import auth as firebase_auth

from portal.errors import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass
class AuthClaims:
    uid: str
    email: str
    email_verified: bool = False
    name: Optional[str] = None
    picture: Optional[str] = None


class AuthVerifier(Protocol):
    def verify(self, token: str) -> AuthClaims:
        """Returns the claims of a valid token, raises AuthenticationError otherwise."""
        ...


class FirebaseAuthVerifier:
    """Checks Firebase ID tokens with the Admin SDK."""

    def __init__(self, check_revoked: bool = False):
        self.check_revoked = check_revoked

    def verify(self, token: str) -> AuthClaims:
        try:
            decoded = firebase_auth.verify_id_token(
                token, check_revoked=self.check_revoked
            )
        except firebase_auth.ExpiredIdTokenError as e:
            raise AuthenticationError("ID token expired") from e
        except firebase_auth.RevokedIdTokenError as e:
            raise AuthenticationError("ID token revoked") from e
        except (ValueError, firebase_auth.InvalidIdTokenError) as e:
            raise AuthenticationError(f"Invalid ID token: {e}") from e
        return AuthClaims(
            uid=decoded["uid"],
            email=(decoded.get("email") or "").lower(),
            email_verified=bool(decoded.get("email_verified")),
            name=decoded.get("name"),
            picture=decoded.get("picture"),
        )


@dataclass
class InMemoryAuthVerifier:
    """Static token table for local runs and tests."""

    tokens: dict[str, AuthClaims] = field(default_factory=dict)

    def issue(self, token: str, claims: AuthClaims) -> str:
        self.tokens[token] = claims
        return token

    def verify(self, token: str) -> AuthClaims:
        claims = self.tokens.get(token)
        if claims is None:
            raise AuthenticationError("Invalid ID token")
        return claims
