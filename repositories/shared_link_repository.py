"""Shared link persistence (``shared_links`` collection)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pymongo import DESCENDING, ReturnDocument

from schemas.models.shared_link import SharedLinkDoc

COLLECTION = "shared_links"


def _active_filter(now: datetime) -> dict[str, Any]:
    return {"$or": [{"expires_at": None}, {"expires_at": {"$gt": now}}]}


class SharedLinkRepository:
    def __init__(self, db) -> None:
        self._col = db[COLLECTION]

    async def insert(self, link: SharedLinkDoc) -> SharedLinkDoc:
        await self._col.insert_one(link.to_mongo())
        return link

    async def get(self, link_id: str) -> Optional[SharedLinkDoc]:
        return SharedLinkDoc.from_mongo(await self._col.find_one({"_id": link_id}))

    async def list_for_owner(self, owner_id: str) -> list[SharedLinkDoc]:
        cursor = self._col.find({"owner_id": owner_id}).sort("created_at", DESCENDING)
        return [SharedLinkDoc.from_mongo(doc) async for doc in cursor]

    async def count_active(self, owner_id: str, now: datetime) -> int:
        return await self._col.count_documents({"owner_id": owner_id, **_active_filter(now)})

    async def update(
        self,
        owner_id: str,
        link_id: str,
        set_fields: dict[str, Any],
    ) -> Optional[SharedLinkDoc]:
        doc = await self._col.find_one_and_update(
            {"_id": link_id, "owner_id": owner_id},
            {"$set": set_fields},
            return_document=ReturnDocument.AFTER,
        )
        return SharedLinkDoc.from_mongo(doc)

    async def delete(self, owner_id: str, link_id: str) -> bool:
        result = await self._col.delete_one({"_id": link_id, "owner_id": owner_id})
        return result.deleted_count > 0

    async def increment_views(self, link_id: str) -> None:
        await self._col.update_one({"_id": link_id}, {"$inc": {"view_count": 1}})
