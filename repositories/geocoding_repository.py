"""Reverse geocoding persistence (``reverse_geocoding`` collection).

``request_coordinates`` carries a 2dsphere index (see repositories.indexes)
so nearby lookups can reuse a stored result instead of calling a provider.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, AsyncIterator, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument

from schemas.models.geocoding import ReverseGeocodingDoc

COLLECTION = "reverse_geocoding"


def build_list_filter(
    provider_name: Optional[str], search_text: Optional[str]
) -> dict[str, Any]:
    """Exact provider match plus a case-insensitive search over name, city and country."""
    query: dict[str, Any] = {}
    if provider_name:
        query["provider_name"] = provider_name
    if search_text:
        pattern = {"$regex": re.escape(search_text), "$options": "i"}
        query["$or"] = [
            {"display_name": pattern},
            {"city": pattern},
            {"country": pattern},
        ]
    return query


class GeocodingRepository:
    def __init__(self, db) -> None:
        self._col = db[COLLECTION]

    async def find_page(
        self,
        query: dict[str, Any],
        sort_field: str,
        ascending: bool,
        skip: int,
        limit: int,
    ) -> list[ReverseGeocodingDoc]:
        direction = ASCENDING if ascending else DESCENDING
        cursor = (
            self._col.find(query)
            # _id as a tiebreaker keeps pages stable when sort values repeat
            .sort([(sort_field, direction), ("_id", direction)])
            .skip(skip)
            .limit(limit)
        )
        return [ReverseGeocodingDoc.from_mongo(doc) async for doc in cursor]

    async def count(self, query: dict[str, Any]) -> int:
        return await self._col.count_documents(query)

    async def get(self, geocoding_id: ObjectId) -> Optional[ReverseGeocodingDoc]:
        return ReverseGeocodingDoc.from_mongo(await self._col.find_one({"_id": geocoding_id}))

    async def update_fields(
        self, geocoding_id: ObjectId, fields: dict[str, Any]
    ) -> Optional[ReverseGeocodingDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": geocoding_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return ReverseGeocodingDoc.from_mongo(doc)

    async def find_near(
        self, point: dict[str, Any], max_distance_meters: float
    ) -> Optional[ReverseGeocodingDoc]:
        doc = await self._col.find_one(
            {
                "request_coordinates": {
                    "$nearSphere": {
                        "$geometry": point,
                        "$maxDistance": max_distance_meters,
                    }
                }
            }
        )
        return ReverseGeocodingDoc.from_mongo(doc)

    async def touch(self, geocoding_id: ObjectId, accessed_at: datetime) -> None:
        await self._col.update_one(
            {"_id": geocoding_id}, {"$set": {"last_accessed_at": accessed_at}}
        )

    async def insert(self, result: ReverseGeocodingDoc) -> ReverseGeocodingDoc:
        inserted = await self._col.insert_one(result.to_mongo())
        return result.model_copy(update={"id": inserted.inserted_id})

    async def iter_by_ids(self, ids: list[ObjectId]) -> AsyncIterator[ReverseGeocodingDoc]:
        async for doc in self._col.find({"_id": {"$in": ids}}):
            yield ReverseGeocodingDoc.from_mongo(doc)

    async def iter_all(self) -> AsyncIterator[ReverseGeocodingDoc]:
        async for doc in self._col.find({}):
            yield ReverseGeocodingDoc.from_mongo(doc)

    async def distinct_providers(self) -> list[str]:
        return sorted(await self._col.distinct("provider_name"))
