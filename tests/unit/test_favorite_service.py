"""Unit tests for FavoriteService."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from errors import GeocodingError, NotFoundError
from schemas.dto.requests.favorite import (
    AddAreaFavoriteRequest,
    AddPointFavoriteRequest,
    BoundsQuery,
    EditFavoriteRequest,
)
from schemas.models.favorite import FavoriteDoc
from services.favorite_service import FavoriteService

USER = "user-1"
NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _point(name, lat, lon, **extra) -> FavoriteDoc:
    return FavoriteDoc(_id=ObjectId(), owner_id=USER, name=name, type="POINT", created_at=NOW, lat=lat, lon=lon, **extra)


def _area(name) -> FavoriteDoc:
    return FavoriteDoc(
        _id=ObjectId(),
        owner_id=USER,
        name=name,
        type="AREA",
        created_at=NOW,
        north_east_lat=2,
        north_east_lon=2,
        south_west_lat=1,
        south_west_lon=1,
    )


def _repo(docs=None) -> MagicMock:
    repo = MagicMock()
    repo.list_for_owner = AsyncMock(return_value=docs or [])
    repo.insert = AsyncMock(side_effect=lambda doc: doc.model_copy(update={"id": ObjectId()}))
    repo.update_name = AsyncMock(return_value=True)
    repo.delete = AsyncMock(return_value=True)
    return repo


class TestGetFavorites:
    async def test_splits_points_and_areas(self):
        service = FavoriteService(_repo([_point("Home", 50, 30), _area("Park")]))
        result = await service.get_favorites(USER)
        assert [p.name for p in result.points] == ["Home"]
        assert [a.name for a in result.areas] == ["Park"]

    @pytest.mark.parametrize(
        "term, points, areas",
        [
            ("", ["Home", "Office"], ["Home park"]),
            (None, ["Home", "Office"], ["Home park"]),
            ("HOME", ["Home"], ["Home park"]),
            ("off", ["Office"], []),
            ("zzz", [], []),
        ],
        ids=["empty", "none", "case_insensitive", "points_only", "no_match"],
    )
    async def test_search(self, term, points, areas):
        service = FavoriteService(_repo([_point("Home", 1, 1), _point("Office", 2, 2), _area("Home park")]))
        result = await service.get_favorites(USER, term)
        assert [p.name for p in result.points] == points
        assert [a.name for a in result.areas] == areas

    async def test_points_in_bounds(self):
        docs = [_point("In", 50.0, 30.0), _point("Edge", 51.0, 31.0), _point("Out", 52.0, 30.0)]
        service = FavoriteService(_repo(docs))
        bounds = BoundsQuery(north_east_lat=51, north_east_lon=31, south_west_lat=49, south_west_lon=29)
        result = await service.get_points_in_bounds(USER, bounds)
        assert [p.name for p in result] == ["In", "Edge"]


class TestAddFavorites:
    async def test_add_point_fills_city_and_country(self):
        geocoding = MagicMock()
        geocoding.resolve = AsyncMock(return_value=MagicMock(city="Kyiv", country="Ukraine"))
        repo = _repo()
        service = FavoriteService(repo, geocoding)

        result = await service.add_point(USER, AddPointFavoriteRequest(name="Home", lat=50.45, lon=30.52))

        geocoding.resolve.assert_awaited_once_with(30.52, 50.45)
        stored = repo.insert.call_args.args[0]
        assert stored.owner_id == USER
        assert stored.type == "POINT"
        assert (result.city, result.country) == ("Kyiv", "Ukraine")
        assert result.id

    async def test_add_point_tolerates_geocoding_failure(self):
        geocoding = MagicMock()
        geocoding.resolve = AsyncMock(side_effect=GeocodingError("All geocoding providers failed"))
        service = FavoriteService(_repo(), geocoding)
        result = await service.add_point(USER, AddPointFavoriteRequest(name="Home", lat=1, lon=2))
        assert result.city is None
        assert result.name == "Home"

    async def test_add_point_without_geocoding(self):
        result = await FavoriteService(_repo()).add_point(USER, AddPointFavoriteRequest(name="X", lat=1, lon=2))
        assert result.type == "POINT"

    async def test_add_area(self):
        repo = _repo()
        request = AddAreaFavoriteRequest(
            name="Park", north_east_lat=2, north_east_lon=2, south_west_lat=1, south_west_lon=1
        )
        result = await FavoriteService(repo).add_area(USER, request)
        assert result.type == "AREA"
        assert repo.insert.call_args.args[0].south_west_lat == 1


class TestEditAndDelete:
    async def test_edit_renames(self):
        repo = _repo()
        fav_id = str(ObjectId())
        await FavoriteService(repo).edit(USER, fav_id, EditFavoriteRequest(name="New"))
        repo.update_name.assert_awaited_once_with(USER, ObjectId(fav_id), "New")

    async def test_edit_missing_is_not_found(self):
        repo = _repo()
        repo.update_name.return_value = False
        with pytest.raises(NotFoundError):
            await FavoriteService(repo).edit(USER, str(ObjectId()), EditFavoriteRequest(name="New"))

    @pytest.mark.parametrize("bad_id", ["42", "not-an-object-id"])
    async def test_invalid_id_is_not_found(self, bad_id):
        repo = _repo()
        with pytest.raises(NotFoundError):
            await FavoriteService(repo).delete(USER, bad_id)
        repo.delete.assert_not_called()

    async def test_delete_foreign_is_not_found(self):
        repo = _repo()
        repo.delete.return_value = False
        with pytest.raises(NotFoundError):
            await FavoriteService(repo).delete(USER, str(ObjectId()))
