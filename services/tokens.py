"""Compact HS256 bearer tokens for authenticating uploads.

Tokens have the usual three segments ``<header>.<claims>.<signature>``, each
URL-safe base64 without padding, signed with the shared secret the remote
store is configured with.
"""

from __future__ import annotations

import time
from typing import Optional

import jwt
from pydantic import BaseModel, ValidationError

ALGORITHM = "HS256"
DEFAULT_ROLE = "sensor_admin"
DEFAULT_VALIDITY_SECONDS = 3600


class TokenError(Exception):
    """Raised when a token cannot be issued or verified."""


class InvalidTokenError(TokenError):
    """Token is malformed or its signature does not match."""


class ExpiredTokenError(TokenError):
    """Token signature is valid but the validity window has passed."""


class TokenClaims(BaseModel):
    role: str
    iat: int
    exp: int


def issue_token(
    secret: str,
    now: Optional[int] = None,
    role: str = DEFAULT_ROLE,
    validity_seconds: int = DEFAULT_VALIDITY_SECONDS,
) -> str:
    """Build a signed token valid from ``now`` for ``validity_seconds``."""
    if validity_seconds <= 0:
        raise TokenError("Token validity must be positive.")

    issued_at = int(time.time()) if now is None else int(now)
    claims = TokenClaims(role=role, iat=issued_at, exp=issued_at + validity_seconds)

    try:
        return jwt.encode(claims.model_dump(), secret, algorithm=ALGORITHM)
    except (TypeError, ValueError, jwt.PyJWTError) as exc:
        raise TokenError(f"Token serialization failed: {exc}") from exc


def verify_token(token: str, secret: str) -> TokenClaims:
    """Check the signature and validity window, returning the claims."""
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise ExpiredTokenError("Token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(f"Invalid token: {exc}") from exc

    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as exc:
        raise InvalidTokenError("Token claims are malformed.") from exc
