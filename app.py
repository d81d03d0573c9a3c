"""
FastAPI application factory.
create_app() is the single entry point for building the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import redis.asyncio as aioredis
import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.asynchronous.mongo_client import AsyncMongoClient

from config import AppSettings, RedisSettings
from errors import register_error_handlers
from infrastructure.geocoding.registry import GeocodingProviderRegistry
from repositories.indexes import ensure_indexes
from routes.favorite_routes import router as favorite_router
from routes.geocoding_routes import router as geocoding_router
from routes.health_routes import router as health_router
from routes.insight_routes import router as insight_router
from routes.sharing_routes import owner_router as share_links_router
from routes.sharing_routes import public_router as shared_router
from routes.timeline_routes import router as timeline_router
from shared.logging import get_logger, setup_logging

log = get_logger(__name__)

ROUTERS = (
    health_router,
    geocoding_router,
    favorite_router,
    insight_router,
    timeline_router,
    share_links_router,
    shared_router,
)


def _connect_redis(settings: RedisSettings) -> Optional[aioredis.Redis]:
    # Without Redis, journey insights are recomputed on every request
    if not settings.redis_uri:
        return None
    return aioredis.from_url(settings.redis_uri, encoding="utf-8", decode_responses=True)


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Create and return a fully configured FastAPI application."""
    if settings is None:
        settings = AppSettings()

    setup_logging(settings.logging, env=settings.env)

    # Sentry first so startup failures are reported too
    if settings.sentry.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry.sentry_dsn,
            environment=settings.env,
            send_default_pii=settings.sentry.sentry_send_pii,
            traces_sample_rate=settings.sentry.sentry_traces_sample_rate,
            profiles_sample_rate=settings.sentry.sentry_profile_sample_rate,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Timeline timestamps are compared against aware UTC datetimes
        mongo_client: AsyncMongoClient = AsyncMongoClient(
            settings.db.mongodb_uri, tz_aware=True
        )
        app.state.settings = settings
        app.state.mongo_client = mongo_client
        app.state.db = mongo_client[settings.db.db_name]
        await ensure_indexes(app.state.db)

        app.state.redis = _connect_redis(settings.redis)
        registry = GeocodingProviderRegistry.from_settings(settings.geocoding)
        app.state.geocoding_registry = registry
        log.info(
            "app_started",
            env=settings.env,
            redis=app.state.redis is not None,
            geocoding_providers=[p.name for p in registry.enabled_providers()],
        )

        yield

        await registry.aclose()
        await mongo_client.close()
        if app.state.redis is not None:
            await app.state.redis.aclose()
        log.info("app_stopped")

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url=settings.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    return app
