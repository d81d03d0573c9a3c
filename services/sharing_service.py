"""
Shared links: owner management plus the public, token-gated location view.

Public flow:
    GET  /api/shared/{id}/info      → is the link usable, does it need a password
    POST /api/shared/{id}/verify    → password check, returns a share token
    GET  /api/shared/{id}/location  → latest point (+ history) for a valid token

Inactive (expired) and unknown links are indistinguishable to visitors: both 404.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

import jwt

from config import JWTSettings, SharingSettings
from errors import AuthenticationError, NotFoundError, ValidationError
from repositories.shared_link_repository import SharedLinkRepository
from repositories.timeline_repository import GpsPointRepository
from schemas.dto.requests.sharing import (
    CreateSharedLinkRequest,
    UpdateSharedLinkRequest,
    VerifySharedLinkRequest,
)
from schemas.dto.responses.sharing import (
    LocationPoint,
    ShareAccessResponse,
    SharedLinkInfoResponse,
    SharedLinkResponse,
    SharedLinksListResponse,
    SharedLocationResponse,
)
from schemas.models.shared_link import SharedLinkDoc
from shared.crypto import hash_password, verify_password
from shared.datetime_utils import ensure_utc, utc_now
from shared.generators import generate_share_link_id
from shared.jwt_utils import generate_share_jwt, verify_share_jwt
from shared.logging import get_logger, should_sample

log = get_logger(__name__)


class SharingService:
    def __init__(
        self,
        links: SharedLinkRepository,
        points: GpsPointRepository,
        sharing_settings: SharingSettings,
        jwt_settings: JWTSettings,
    ) -> None:
        self._links = links
        self._points = points
        self._sharing = sharing_settings
        self._jwt = jwt_settings

    # ── Owner ────────────────────────────────────────────────────────────────

    async def create(self, user_id: str, request: CreateSharedLinkRequest) -> SharedLinkResponse:
        now = utc_now()
        if request.expires_at is not None and ensure_utc(request.expires_at) <= now:
            raise ValidationError("Expiration date must be in the future", field="expires_at")

        await self._check_active_limit(user_id, now)

        link = await self._links.insert(
            SharedLinkDoc(
                id=generate_share_link_id(),
                owner_id=user_id,
                name=request.name,
                password=hash_password(request.password) if request.password else None,
                expires_at=request.expires_at,
                show_history=request.show_history,
                created_at=now,
            )
        )
        log.info(
            "shared_link_created",
            user_id=user_id,
            link_id=link.id,
            has_password=link.has_password,
            expires_at=link.expires_at.isoformat() if link.expires_at else None,
        )
        return SharedLinkResponse.from_doc(link, now)

    async def list_links(self, user_id: str) -> SharedLinksListResponse:
        now = utc_now()
        links = [SharedLinkResponse.from_doc(d, now) for d in await self._links.list_for_owner(user_id)]
        return SharedLinksListResponse(
            links=links,
            active_count=sum(1 for link in links if link.is_active),
            max_links=self._sharing.max_shared_links,
        )

    async def update(
        self, user_id: str, link_id: str, request: UpdateSharedLinkRequest
    ) -> SharedLinkResponse:
        now = utc_now()
        link = await self._links.get(link_id)
        if link is None or link.owner_id != user_id:
            raise NotFoundError(f"Shared link {link_id} not found")

        sent = request.model_fields_set
        fields: dict = {}
        if "name" in sent and request.name is not None:
            fields["name"] = request.name
        if "show_history" in sent and request.show_history is not None:
            fields["show_history"] = request.show_history
        if "expires_at" in sent:
            if request.expires_at is not None and ensure_utc(request.expires_at) <= now:
                raise ValidationError("Expiration date must be in the future", field="expires_at")
            fields["expires_at"] = request.expires_at
            # Extending an expired link makes it count against the limit again
            if not link.is_active(now):
                await self._check_active_limit(user_id, now)
        if "password" in sent:
            fields["password"] = hash_password(request.password) if request.password else None

        if not fields:
            return SharedLinkResponse.from_doc(link, now)

        doc = await self._links.update(user_id, link_id, fields)
        if doc is None:
            raise NotFoundError(f"Shared link {link_id} not found")

        log.info("shared_link_updated", user_id=user_id, link_id=link_id, fields=sorted(fields))
        return SharedLinkResponse.from_doc(doc, now)

    async def delete(self, user_id: str, link_id: str) -> None:
        if not await self._links.delete(user_id, link_id):
            raise NotFoundError(f"Shared link {link_id} not found")
        log.info("shared_link_deleted", user_id=user_id, link_id=link_id)

    async def _check_active_limit(self, user_id: str, now: datetime) -> None:
        active = await self._links.count_active(user_id, now)
        if active >= self._sharing.max_shared_links:
            raise ValidationError(
                f"Maximum number of active shared links ({self._sharing.max_shared_links}) reached"
            )

    # ── Public ───────────────────────────────────────────────────────────────

    async def _active_link(self, link_id: str) -> SharedLinkDoc:
        link = await self._links.get(link_id)
        if link is None or not link.is_active():
            raise NotFoundError("Shared link not found or expired")
        return link

    async def info(self, link_id: str) -> SharedLinkInfoResponse:
        link = await self._active_link(link_id)
        return SharedLinkInfoResponse(
            id=link.id,
            name=link.name,
            has_password=link.has_password,
            expires_at=link.expires_at,
            show_history=link.show_history,
            is_active=True,
        )

    async def verify(self, link_id: str, request: VerifySharedLinkRequest) -> ShareAccessResponse:
        link = await self._active_link(link_id)
        if link.has_password and not (
            request.password and verify_password(request.password, link.password)
        ):
            log.warning("shared_link_verify_failed", link_id=link_id)
            raise AuthenticationError("Invalid password")

        return ShareAccessResponse(
            access_token=generate_share_jwt(link.id, self._jwt),
            expires_in=self._jwt.share_token_ttl_seconds,
        )

    async def location(self, link_id: str, token: Optional[str]) -> SharedLocationResponse:
        link = await self._active_link(link_id)
        if not token:
            raise AuthenticationError("Share access token required")
        try:
            verify_share_jwt(token, link.id, self._jwt)
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid or expired share token") from e

        latest = await self._points.latest(link.owner_id)
        history = None
        if link.show_history:
            since = utc_now() - timedelta(hours=self._sharing.share_history_hours)
            history = [LocationPoint.from_doc(p) for p in await self._points.since(link.owner_id, since)]

        await self._links.increment_views(link.id)
        if should_sample("shared_location_view"):
            log.info("shared_location_viewed", link_id=link.id, with_history=history is not None)

        return SharedLocationResponse(
            name=link.name,
            current=LocationPoint.from_doc(latest) if latest else None,
            history=history,
        )
