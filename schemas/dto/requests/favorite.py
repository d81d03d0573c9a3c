"""
Request DTOs for favorite endpoints.

EditFavoriteRequest     - PUT  /api/favorites/{id}
AddPointFavoriteRequest - POST /api/favorites/point
AddAreaFavoriteRequest  - POST /api/favorites/area
"""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, Field, model_validator

from schemas.dto.base import CamelModel

MAX_FAVORITE_NAME_LENGTH = 100


def _validate_favorite_name(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("Favorite name cannot be empty")
    if len(value) > MAX_FAVORITE_NAME_LENGTH:
        raise ValueError(
            f"Favorite name cannot exceed {MAX_FAVORITE_NAME_LENGTH} characters"
        )
    return value


FavoriteName = Annotated[str, AfterValidator(_validate_favorite_name)]
Latitude = Annotated[float, Field(ge=-90, le=90)]
Longitude = Annotated[float, Field(ge=-180, le=180)]


class EditFavoriteRequest(CamelModel):
    name: FavoriteName


class AddPointFavoriteRequest(CamelModel):
    name: FavoriteName
    lat: Latitude
    lon: Longitude


class AddAreaFavoriteRequest(CamelModel):
    """Rectangular area given by its north-east and south-west corners."""

    name: FavoriteName
    north_east_lat: Latitude
    north_east_lon: Longitude
    south_west_lat: Latitude
    south_west_lon: Longitude

    @model_validator(mode="after")
    def _check_corners(self) -> "AddAreaFavoriteRequest":
        if self.north_east_lat < self.south_west_lat:
            raise ValueError("northEastLat must not be south of southWestLat")
        return self


class BoundsQuery(CamelModel):
    """Query parameters for GET /api/favorites/points/in-bounds."""

    north_east_lat: Latitude
    north_east_lon: Longitude
    south_west_lat: Latitude
    south_west_lon: Longitude
