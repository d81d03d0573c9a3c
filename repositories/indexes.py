"""MongoDB index definitions, applied once at startup."""

from __future__ import annotations

from pymongo import ASCENDING, DESCENDING, GEOSPHERE

from repositories.favorite_repository import COLLECTION as FAVORITES
from repositories.geocoding_repository import COLLECTION as REVERSE_GEOCODING
from repositories.shared_link_repository import COLLECTION as SHARED_LINKS
from repositories.timeline_repository import (
    DATA_GAPS_COLLECTION,
    GPS_POINTS_COLLECTION,
    STAYS_COLLECTION,
    TRIPS_COLLECTION,
)
from shared.logging import get_logger

log = get_logger(__name__)


async def ensure_indexes(db) -> None:
    await db[FAVORITES].create_index([("owner_id", ASCENDING), ("created_at", ASCENDING)])

    await db[REVERSE_GEOCODING].create_index([("request_coordinates", GEOSPHERE)])
    await db[REVERSE_GEOCODING].create_index([("provider_name", ASCENDING)])
    await db[REVERSE_GEOCODING].create_index([("last_accessed_at", DESCENDING)])

    await db[SHARED_LINKS].create_index([("owner_id", ASCENDING), ("created_at", DESCENDING)])

    for collection in (STAYS_COLLECTION, TRIPS_COLLECTION, GPS_POINTS_COLLECTION):
        await db[collection].create_index([("owner_id", ASCENDING), ("timestamp", ASCENDING)])
    await db[DATA_GAPS_COLLECTION].create_index([("owner_id", ASCENDING), ("start_time", ASCENDING)])

    log.info("mongodb_indexes_ensured")
