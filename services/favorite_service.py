"""Favorites service: CRUD plus the name search and bounding-box queries."""

from __future__ import annotations

from typing import Optional

from bson import ObjectId

from errors import AppError, NotFoundError
from repositories.favorite_repository import FavoriteRepository
from schemas.dto.requests.favorite import (
    AddAreaFavoriteRequest,
    AddPointFavoriteRequest,
    BoundsQuery,
    EditFavoriteRequest,
)
from schemas.dto.responses.favorite import (
    FavoriteAreaResponse,
    FavoritePointResponse,
    FavoritesResponse,
)
from schemas.models.base import parse_object_id
from schemas.models.favorite import FavoriteDoc
from services.geocoding_service import GeocodingService
from shared.datetime_utils import utc_now
from shared.geo import in_bounds
from shared.logging import get_logger

log = get_logger(__name__)


def search_favorites(favorites: FavoritesResponse, term: Optional[str]) -> FavoritesResponse:
    """Case-insensitive name filter over points and areas; blank returns everything."""
    if not term:
        return favorites
    needle = term.lower()
    return FavoritesResponse(
        points=[p for p in favorites.points if needle in p.name.lower()],
        areas=[a for a in favorites.areas if needle in a.name.lower()],
    )


def points_in_bounds(
    points: list[FavoritePointResponse], bounds: BoundsQuery
) -> list[FavoritePointResponse]:
    return [
        p
        for p in points
        if in_bounds(
            p.lat,
            p.lon,
            bounds.north_east_lat,
            bounds.north_east_lon,
            bounds.south_west_lat,
            bounds.south_west_lon,
        )
    ]


class FavoriteService:
    def __init__(
        self,
        repository: FavoriteRepository,
        geocoding: Optional[GeocodingService] = None,
    ) -> None:
        self._repo = repository
        self._geocoding = geocoding

    @staticmethod
    def _require_id(favorite_id: str) -> ObjectId:
        oid = parse_object_id(favorite_id)
        if oid is None:
            raise NotFoundError(f"Favorite {favorite_id} not found")
        return oid

    async def get_favorites(self, user_id: str, search: Optional[str] = None) -> FavoritesResponse:
        docs = await self._repo.list_for_owner(user_id)
        favorites = FavoritesResponse(
            points=[FavoritePointResponse.from_doc(d) for d in docs if d.type == "POINT"],
            areas=[FavoriteAreaResponse.from_doc(d) for d in docs if d.type == "AREA"],
        )
        return search_favorites(favorites, search)

    async def get_points_in_bounds(
        self, user_id: str, bounds: BoundsQuery
    ) -> list[FavoritePointResponse]:
        favorites = await self.get_favorites(user_id)
        return points_in_bounds(favorites.points, bounds)

    async def add_point(self, user_id: str, request: AddPointFavoriteRequest) -> FavoritePointResponse:
        city = country = None
        if self._geocoding is not None:
            # A geocoding outage must not block saving the favorite itself
            try:
                location = await self._geocoding.resolve(request.lon, request.lat)
                city, country = location.city, location.country
            except AppError as e:
                log.warning(
                    "favorite_geocoding_failed",
                    user_id=user_id,
                    error=e.message,
                )

        doc = await self._repo.insert(
            FavoriteDoc(
                owner_id=user_id,
                name=request.name,
                type="POINT",
                created_at=utc_now(),
                lat=request.lat,
                lon=request.lon,
                city=city,
                country=country,
            )
        )
        log.info("favorite_created", user_id=user_id, favorite_id=str(doc.id), favorite_type="POINT")
        return FavoritePointResponse.from_doc(doc)

    async def add_area(self, user_id: str, request: AddAreaFavoriteRequest) -> FavoriteAreaResponse:
        doc = await self._repo.insert(
            FavoriteDoc(
                owner_id=user_id,
                name=request.name,
                type="AREA",
                created_at=utc_now(),
                north_east_lat=request.north_east_lat,
                north_east_lon=request.north_east_lon,
                south_west_lat=request.south_west_lat,
                south_west_lon=request.south_west_lon,
            )
        )
        log.info("favorite_created", user_id=user_id, favorite_id=str(doc.id), favorite_type="AREA")
        return FavoriteAreaResponse.from_doc(doc)

    async def edit(self, user_id: str, favorite_id: str, request: EditFavoriteRequest) -> None:
        oid = self._require_id(favorite_id)
        if not await self._repo.update_name(user_id, oid, request.name):
            raise NotFoundError(f"Favorite {favorite_id} not found")
        log.info("favorite_renamed", user_id=user_id, favorite_id=favorite_id)

    async def delete(self, user_id: str, favorite_id: str) -> None:
        oid = self._require_id(favorite_id)
        if not await self._repo.delete(user_id, oid):
            raise NotFoundError(f"Favorite {favorite_id} not found")
        log.info("favorite_deleted", user_id=user_id, favorite_id=favorite_id)
