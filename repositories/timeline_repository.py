"""Read-only access to timeline segments and raw GPS points."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pymongo import ASCENDING, DESCENDING

from schemas.models.timeline import DataGapDoc, GpsPointDoc, StayDoc, TripDoc

STAYS_COLLECTION = "timeline_stays"
TRIPS_COLLECTION = "timeline_trips"
DATA_GAPS_COLLECTION = "timeline_data_gaps"
GPS_POINTS_COLLECTION = "gps_points"


def _range_filter(
    owner_id: str,
    field: str,
    start: Optional[datetime],
    end: Optional[datetime],
) -> dict[str, Any]:
    query: dict[str, Any] = {"owner_id": owner_id}
    bounds: dict[str, Any] = {}
    if start is not None:
        bounds["$gte"] = start
    if end is not None:
        bounds["$lte"] = end
    if bounds:
        query[field] = bounds
    return query


class TimelineRepository:
    def __init__(self, db) -> None:
        self._stays = db[STAYS_COLLECTION]
        self._trips = db[TRIPS_COLLECTION]
        self._gaps = db[DATA_GAPS_COLLECTION]

    async def stays(
        self,
        owner_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[StayDoc]:
        cursor = self._stays.find(_range_filter(owner_id, "timestamp", start, end)).sort(
            "timestamp", ASCENDING
        )
        return [StayDoc.from_mongo(doc) async for doc in cursor]

    async def trips(
        self,
        owner_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[TripDoc]:
        cursor = self._trips.find(_range_filter(owner_id, "timestamp", start, end)).sort(
            "timestamp", ASCENDING
        )
        return [TripDoc.from_mongo(doc) async for doc in cursor]

    async def data_gaps(
        self,
        owner_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[DataGapDoc]:
        cursor = self._gaps.find(_range_filter(owner_id, "start_time", start, end)).sort(
            "start_time", ASCENDING
        )
        return [DataGapDoc.from_mongo(doc) async for doc in cursor]


class GpsPointRepository:
    def __init__(self, db) -> None:
        self._col = db[GPS_POINTS_COLLECTION]

    async def latest(self, owner_id: str) -> Optional[GpsPointDoc]:
        doc = await self._col.find_one({"owner_id": owner_id}, sort=[("timestamp", DESCENDING)])
        return GpsPointDoc.from_mongo(doc)

    async def since(self, owner_id: str, since: datetime) -> list[GpsPointDoc]:
        cursor = self._col.find(_range_filter(owner_id, "timestamp", since, None)).sort(
            "timestamp", ASCENDING
        )
        return [GpsPointDoc.from_mongo(doc) async for doc in cursor]
