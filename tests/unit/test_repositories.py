"""Unit tests for repository query construction (collections are mocked)."""

import re
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from bson import ObjectId

from repositories.geocoding_repository import GeocodingRepository, build_list_filter
from repositories.shared_link_repository import SharedLinkRepository
from repositories.timeline_repository import TimelineRepository
from shared.geo import make_point

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


class _Cursor:
    """Minimal async cursor supporting the chained calls repositories use."""

    def __init__(self, docs):
        self._docs = list(docs)
        self.sort_args = None

    def sort(self, *args):
        self.sort_args = args
        return self

    def skip(self, n):
        self.skip_n = n
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def __aiter__(self):
        return self._gen()

    async def _gen(self):
        for doc in self._docs:
            yield doc


def _db(collection) -> MagicMock:
    db = MagicMock()
    db.__getitem__.return_value = collection
    return db


class TestBuildListFilter:
    def test_empty(self):
        assert build_list_filter(None, None) == {}

    def test_provider_exact(self):
        assert build_list_filter("Nominatim", None) == {"provider_name": "Nominatim"}

    def test_search_is_escaped_and_case_insensitive(self):
        query = build_list_filter(None, "St. (Main)")
        pattern = {"$regex": re.escape("St. (Main)"), "$options": "i"}
        assert query["$or"] == [
            {"display_name": pattern},
            {"city": pattern},
            {"country": pattern},
        ]


class TestGeocodingRepository:
    async def test_find_near_uses_near_sphere(self):
        col = MagicMock()
        col.find_one = AsyncMock(return_value=None)
        repo = GeocodingRepository(_db(col))

        assert await repo.find_near(make_point(1, 2), 15) is None

        query = col.find_one.call_args.args[0]
        near = query["request_coordinates"]["$nearSphere"]
        assert near == {"$geometry": make_point(1, 2), "$maxDistance": 15}

    async def test_find_page_sorts_with_id_tiebreak(self):
        doc = {
            "_id": ObjectId(),
            "provider_name": "Nominatim",
            "display_name": "X",
            "request_coordinates": make_point(1, 2),
            "created_at": NOW,
            "last_accessed_at": NOW,
        }
        cursor = _Cursor([doc])
        col = MagicMock()
        col.find.return_value = cursor
        repo = GeocodingRepository(_db(col))

        result = await repo.find_page({}, "city", ascending=False, skip=50, limit=25)

        assert cursor.sort_args == ([("city", -1), ("_id", -1)],)
        assert (cursor.skip_n, cursor.limit_n) == (50, 25)
        assert result[0].display_name == "X"

    async def test_distinct_providers_sorted(self):
        col = MagicMock()
        col.distinct = AsyncMock(return_value=["Nominatim", "GoogleMaps"])
        assert await GeocodingRepository(_db(col)).distinct_providers() == ["GoogleMaps", "Nominatim"]


class TestSharedLinkRepository:
    async def test_count_active_filters_expiry(self):
        col = MagicMock()
        col.count_documents = AsyncMock(return_value=3)
        assert await SharedLinkRepository(_db(col)).count_active("u1", NOW) == 3
        query = col.count_documents.call_args.args[0]
        assert query["owner_id"] == "u1"
        assert {"expires_at": None} in query["$or"]
        assert {"expires_at": {"$gt": NOW}} in query["$or"]

    async def test_update_is_owner_scoped(self):
        col = MagicMock()
        col.find_one_and_update = AsyncMock(return_value=None)
        await SharedLinkRepository(_db(col)).update("u1", "link", {"name": "x"})
        assert col.find_one_and_update.call_args.args[0] == {"_id": "link", "owner_id": "u1"}


class TestTimelineRepository:
    async def test_stays_range_filter(self):
        cursor = _Cursor([])
        col = MagicMock()
        col.find.return_value = cursor
        repo = TimelineRepository(_db(col))

        await repo.stays("u1", NOW, None)

        assert col.find.call_args.args[0] == {"owner_id": "u1", "timestamp": {"$gte": NOW}}

    async def test_no_range_is_owner_only(self):
        cursor = _Cursor([])
        col = MagicMock()
        col.find.return_value = cursor
        await TimelineRepository(_db(col)).data_gaps("u1")
        assert col.find.call_args.args[0] == {"owner_id": "u1"}
