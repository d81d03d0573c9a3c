"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain async functions
used with FastAPI's Depends() system. Shared clients (MongoDB, Redis, the
geocoding provider registry) live on app.state and are created in the
lifespan handler; services are cheap wrappers built per request.
"""

from __future__ import annotations

from typing import Optional

import jwt
from fastapi import Depends, Request

from config import AppSettings
from errors import AuthenticationError
from infrastructure.cache.insight_cache import InsightCache
from repositories.favorite_repository import FavoriteRepository
from repositories.geocoding_repository import GeocodingRepository
from repositories.shared_link_repository import SharedLinkRepository
from repositories.timeline_repository import GpsPointRepository, TimelineRepository
from services.favorite_service import FavoriteService
from services.geocoding_service import GeocodingService
from services.insight_service import InsightService
from services.sharing_service import SharingService
from services.timeline_service import TimelineService
from shared.jwt_utils import verify_access_jwt


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


async def get_db(request: Request):
    """Return the async MongoDB database from app.state."""
    return request.app.state.db


async def get_redis(request: Request):
    """Return the async Redis client from app.state (may be None if not configured)."""
    return request.app.state.redis


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_bearer_token(request: Request) -> Optional[str]:
    """Raw bearer token, or None; used by the share-token gated endpoints."""
    return _bearer_token(request)


async def get_current_user_id(
    request: Request, settings: AppSettings = Depends(get_settings)
) -> str:
    token = _bearer_token(request)
    if token is None:
        raise AuthenticationError("Authentication required")
    try:
        claims = verify_access_jwt(token, settings.jwt)
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Invalid or expired token") from e
    user_id = claims.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid or expired token")
    return str(user_id)


# ── Services ─────────────────────────────────────────────────────────────────


async def get_geocoding_service(
    request: Request,
    db=Depends(get_db),
    settings: AppSettings = Depends(get_settings),
) -> GeocodingService:
    return GeocodingService(
        GeocodingRepository(db),
        request.app.state.geocoding_registry,
        tolerance_meters=settings.geocoding.geocoding_tolerance_meters,
    )


async def get_favorite_service(
    db=Depends(get_db),
    geocoding: GeocodingService = Depends(get_geocoding_service),
) -> FavoriteService:
    return FavoriteService(FavoriteRepository(db), geocoding)


async def get_sharing_service(
    db=Depends(get_db),
    settings: AppSettings = Depends(get_settings),
) -> SharingService:
    return SharingService(
        SharedLinkRepository(db),
        GpsPointRepository(db),
        settings.sharing,
        settings.jwt,
    )


async def get_insight_service(
    db=Depends(get_db),
    redis=Depends(get_redis),
    settings: AppSettings = Depends(get_settings),
) -> InsightService:
    return InsightService(
        TimelineRepository(db),
        InsightCache(redis, ttl_seconds=settings.redis.redis_ttl_seconds),
    )


async def get_timeline_service(db=Depends(get_db)) -> TimelineService:
    return TimelineService(TimelineRepository(db))
