# This file issues and verifies the signed bearer tokens carried by every authenticated request.
# Access tokens identify the caller and its role; refresh tokens can only mint new token pairs.
# Verification checks signature, expiry, issuer and token type, and any failure is an
# AuthenticationError so the request is rejected before storage is touched.

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Literal

import jwt
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, ValidationError

from src.api.api_config import ApiConfig
from src.api.error_handlers import AuthenticationError

logger = logging.getLogger(__name__)

TokenType = Literal["access", "refresh"]


class TokenPayload(BaseModel):
    """Decoded token claims."""

    id: str
    type: str
    email: str | None = None
    token_type: TokenType = "access"
    iss: str
    iat: int
    exp: int


class IssuedTokens(BaseModel):
    access: str
    refresh: str
    expired_at: datetime
    refreshable_until: datetime


class TokenCodec:
    """Signs and verifies tokens with the configured secret and algorithm."""

    def __init__(self, *, config: ApiConfig) -> None:
        self._secret = config.jwt_secret_key
        self._algorithm = config.jwt_algorithm
        self._issuer = config.jwt_issuer
        self._access_ttl = timedelta(seconds=config.access_token_ttl_seconds)
        self._refresh_ttl = timedelta(seconds=config.refresh_token_ttl_seconds)

    def encode(
        self,
        *,
        subject_id: str,
        role_type: str,
        token_type: TokenType,
        expires_at: datetime,
        email: str | None = None,
        issued_at: datetime | None = None,
    ) -> str:
        issued = issued_at or datetime.now(tz=UTC)
        claims: dict[str, object] = {
            "id": subject_id,
            "type": role_type,
            "token_type": token_type,
            "iss": self._issuer,
            "iat": int(issued.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        if email is not None:
            claims["email"] = email
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def issue(self, *, subject_id: str, role_type: str, email: str | None = None) -> IssuedTokens:
        """Mint an access/refresh pair for one subject."""

        now = datetime.now(tz=UTC)
        expired_at = now + self._access_ttl
        refreshable_until = now + self._refresh_ttl
        return IssuedTokens(
            access=self.encode(
                subject_id=subject_id,
                role_type=role_type,
                token_type="access",
                expires_at=expired_at,
                email=email,
                issued_at=now,
            ),
            refresh=self.encode(
                subject_id=subject_id,
                role_type=role_type,
                token_type="refresh",
                expires_at=refreshable_until,
                issued_at=now,
            ),
            expired_at=expired_at,
            refreshable_until=refreshable_until,
        )

    def decode(self, token: str, *, expected_token_type: TokenType = "access") -> TokenPayload:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "iss"]},
            )
        except jwt.ExpiredSignatureError as exc:
            logger.info("Rejected expired %s token", expected_token_type)
            raise AuthenticationError("Token has expired.") from exc
        except jwt.InvalidTokenError as exc:
            logger.info("Rejected invalid %s token: %s", expected_token_type, exc)
            raise AuthenticationError("Invalid token.") from exc

        try:
            payload = TokenPayload.model_validate(claims)
        except ValidationError as exc:
            raise AuthenticationError("Token payload is malformed.") from exc
        if payload.token_type != expected_token_type:
            raise AuthenticationError(f"Expected a {expected_token_type} token.")
        return payload


def jwt_authorize(
    credentials: HTTPAuthorizationCredentials | None, *, codec: TokenCodec
) -> TokenPayload:
    """Decode the bearer credentials of a request into an access-token payload."""

    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError()
    return codec.decode(credentials.credentials, expected_token_type="access")
