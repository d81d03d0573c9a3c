"""
JWT helpers: user access tokens and shared-link access tokens.

User tokens are minted by the identity layer in front of this API; this
module only verifies them. Share tokens are minted here after a visitor
unlocks a shared link and are scoped to that link via ``type="share"``.

RS256 is used when both keys are configured, HS256 with ``jwt_secret``
otherwise.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from config import JWTSettings

SHARE_TOKEN_TYPE = "share"


def _signing_material(settings: JWTSettings) -> tuple[Any, Any, str]:
    if settings.use_rs256:
        # Support keys provided via env with literal \n sequences
        private_key = settings.jwt_private_key.replace("\\n", "\n").encode("utf-8")
        public_key = settings.jwt_public_key.replace("\\n", "\n").encode("utf-8")
        return private_key, public_key, "RS256"
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET must be set when RS256 keys are not provided")
    return settings.jwt_secret, settings.jwt_secret, "HS256"


def _encode(claims: dict[str, Any], settings: JWTSettings, ttl_seconds: int) -> str:
    private_key, _, algorithm = _signing_material(settings)
    now = datetime.now(timezone.utc)
    payload = {
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=ttl_seconds)).timestamp()),
        **claims,
    }
    return jwt.encode(payload, private_key, algorithm=algorithm)


def _decode(token: str, settings: JWTSettings) -> dict[str, Any]:
    _, public_key, algorithm = _signing_material(settings)
    return jwt.decode(
        token,
        public_key,
        algorithms=[algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
    )


def generate_access_jwt(user_id: str, settings: JWTSettings, ttl_seconds: int = 900) -> str:
    return _encode({"sub": str(user_id)}, settings, ttl_seconds)


def verify_access_jwt(token: str, settings: JWTSettings) -> dict[str, Any]:
    """Decode a user access token.

    Raises:
        jwt.InvalidTokenError: on a bad signature, expiry, or a share token
            presented as a user token.
    """
    claims = _decode(token, settings)
    if claims.get("type") == SHARE_TOKEN_TYPE:
        raise jwt.InvalidTokenError("Share tokens cannot access user endpoints")
    return claims


def generate_share_jwt(link_id: str, settings: JWTSettings) -> str:
    return _encode(
        {"sub": link_id, "type": SHARE_TOKEN_TYPE},
        settings,
        settings.share_token_ttl_seconds,
    )


def verify_share_jwt(token: str, link_id: str, settings: JWTSettings) -> dict[str, Any]:
    """Decode a share token and make sure it unlocks *link_id*."""
    claims = _decode(token, settings)
    if claims.get("type") != SHARE_TOKEN_TYPE:
        raise jwt.InvalidTokenError("Not a share token")
    if claims.get("sub") != link_id:
        raise jwt.InvalidTokenError("Share token issued for another link")
    return claims
