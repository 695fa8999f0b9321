"""Identity Adapter — resolves the caller's session from a signed JWT.

Invariants:
    - Token read from "Authorization: Bearer <jwt>" first, session cookie second
    - Invalid, expired or email-less tokens resolve to None (treated as no session)
    - Never raises for a bad token; unexpected provider failures propagate (500)
    - Identity is resolved per request and handed to handlers explicitly

Design Decisions:
    - python-jose over a hosted-provider SDK: any issuer that signs JWTs with the
      configured key works, including HS256 tokens minted for local development
    - Audience verified only when configured: locally minted tokens carry no aud
    - Email claim name configurable: hosted providers namespace custom claims
"""

import logging

from fastapi import Depends, Request
from jose import JWTError, jwt

from blogrpc.config import Settings, get_settings
from blogrpc.core.domain_types import SessionIdentity
from blogrpc.core.repository_protocols import IdentityProvider

logger = logging.getLogger(__name__)


class JWTIdentityProvider:
    """IdentityProvider backed by signed JWT session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        audience: str | None = None,
        issuer: str | None = None,
        email_claim: str = "email",
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._audience = audience
        self._issuer = issuer
        self._email_claim = email_claim

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTIdentityProvider":
        return cls(
            secret=settings.auth_jwt_secret,
            algorithm=settings.auth_jwt_algorithm,
            audience=settings.auth_jwt_audience,
            issuer=settings.auth_jwt_issuer,
            email_claim=settings.auth_email_claim,
        )

    async def resolve_session(
        self, token: str | None,
    ) -> SessionIdentity | None:
        """Decode and verify token. Returns None when there is no valid session."""
        if not token:
            return None
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"verify_aud": self._audience is not None},
            )
        except JWTError as e:
            logger.info(f"Rejected session token: {e}")
            return None

        email = claims.get(self._email_claim)
        if not isinstance(email, str) or not email:
            logger.info("Session token carries no email claim")
            return None
        return SessionIdentity(
            email=email, subject=claims.get("sub"), name=claims.get("name"),
        )


def extract_token(
    authorization: str | None, session_cookie: str | None,
) -> str | None:
    """Pick the bearer token if present, else the session cookie."""
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return session_cookie or None


def get_identity_provider() -> IdentityProvider:
    """FastAPI dependency — override in tests to stub identity."""
    return JWTIdentityProvider.from_settings(get_settings())


async def get_session_identity(
    request: Request,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> SessionIdentity | None:
    """FastAPI dependency resolving the caller's session (or None)."""
    token = extract_token(
        request.headers.get("authorization"),
        request.cookies.get(get_settings().session_cookie_name),
    )
    return await provider.resolve_session(token)
