"""
Favorite locations of the authenticated user.

GET    /api/favorites                   - points and areas (optional ?search=)
GET    /api/favorites/points/in-bounds  - points inside a map viewport
POST   /api/favorites/point             - add a point (201)
POST   /api/favorites/area              - add an area (201)
PUT    /api/favorites/{id}              - rename
DELETE /api/favorites/{id}              - delete (204)
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response

from dependencies import get_current_user_id, get_favorite_service
from schemas.dto.requests.favorite import (
    AddAreaFavoriteRequest,
    AddPointFavoriteRequest,
    BoundsQuery,
    EditFavoriteRequest,
)
from schemas.dto.responses.common import error_responses
from schemas.dto.responses.favorite import (
    FavoriteAreaResponse,
    FavoritePointResponse,
    FavoritesResponse,
)
from services.favorite_service import FavoriteService

router = APIRouter(
    prefix="/api/favorites", tags=["favorites"], responses=error_responses(401, 404)
)


@router.get("", response_model=FavoritesResponse)
async def get_favorites(
    search: Optional[str] = None,
    user_id: str = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service),
) -> FavoritesResponse:
    return await service.get_favorites(user_id, search)


@router.get("/points/in-bounds", response_model=list[FavoritePointResponse])
async def get_points_in_bounds(
    bounds: Annotated[BoundsQuery, Query()],
    user_id: str = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service),
) -> list[FavoritePointResponse]:
    return await service.get_points_in_bounds(user_id, bounds)


@router.post("/point", status_code=201, response_model=FavoritePointResponse)
async def add_point(
    body: AddPointFavoriteRequest,
    user_id: str = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service),
) -> FavoritePointResponse:
    return await service.add_point(user_id, body)


@router.post("/area", status_code=201, response_model=FavoriteAreaResponse)
async def add_area(
    body: AddAreaFavoriteRequest,
    user_id: str = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service),
) -> FavoriteAreaResponse:
    return await service.add_area(user_id, body)


@router.put("/{favorite_id}")
async def edit_favorite(
    favorite_id: str,
    body: EditFavoriteRequest,
    user_id: str = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service),
) -> Response:
    await service.edit(user_id, favorite_id, body)
    return Response(status_code=200)


@router.delete("/{favorite_id}", status_code=204)
async def delete_favorite(
    favorite_id: str,
    user_id: str = Depends(get_current_user_id),
    service: FavoriteService = Depends(get_favorite_service),
) -> Response:
    await service.delete(user_id, favorite_id)
    return Response(status_code=204)
