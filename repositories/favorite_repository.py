"""Favorites persistence (``favorites`` collection).

Every query is scoped by ``owner_id`` so one user can never read or modify
another user's favorites, even with a guessed id.
"""

from __future__ import annotations

from bson import ObjectId
from pymongo import ASCENDING

from schemas.models.favorite import FavoriteDoc

COLLECTION = "favorites"


class FavoriteRepository:
    def __init__(self, db) -> None:
        self._col = db[COLLECTION]

    async def list_for_owner(self, owner_id: str) -> list[FavoriteDoc]:
        cursor = self._col.find({"owner_id": owner_id}).sort("created_at", ASCENDING)
        return [FavoriteDoc.from_mongo(doc) async for doc in cursor]

    async def insert(self, favorite: FavoriteDoc) -> FavoriteDoc:
        result = await self._col.insert_one(favorite.to_mongo())
        return favorite.model_copy(update={"id": result.inserted_id})

    async def update_name(self, owner_id: str, favorite_id: ObjectId, name: str) -> bool:
        result = await self._col.update_one(
            {"_id": favorite_id, "owner_id": owner_id}, {"$set": {"name": name}}
        )
        return result.matched_count > 0

    async def delete(self, owner_id: str, favorite_id: ObjectId) -> bool:
        result = await self._col.delete_one({"_id": favorite_id, "owner_id": owner_id})
        return result.deleted_count > 0
