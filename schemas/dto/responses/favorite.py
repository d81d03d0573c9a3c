"""
Response DTOs for favorite endpoints.

FavoritePointResponse / FavoriteAreaResponse - single favorites
FavoritesResponse - GET /api/favorites  ``{"points": [...], "areas": [...]}``
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from schemas.dto.base import CamelModel
from schemas.models.favorite import FavoriteDoc


class FavoritePointResponse(CamelModel):
    id: str
    name: str
    lat: float
    lon: float
    city: Optional[str] = None
    country: Optional[str] = None
    type: Literal["POINT"] = "POINT"

    @classmethod
    def from_doc(cls, doc: FavoriteDoc) -> "FavoritePointResponse":
        return cls(
            id=str(doc.id),
            name=doc.name,
            lat=doc.lat,
            lon=doc.lon,
            city=doc.city,
            country=doc.country,
        )


class FavoriteAreaResponse(CamelModel):
    id: str
    name: str
    north_east_lat: float
    north_east_lon: float
    south_west_lat: float
    south_west_lon: float
    type: Literal["AREA"] = "AREA"

    @classmethod
    def from_doc(cls, doc: FavoriteDoc) -> "FavoriteAreaResponse":
        return cls(
            id=str(doc.id),
            name=doc.name,
            north_east_lat=doc.north_east_lat,
            north_east_lon=doc.north_east_lon,
            south_west_lat=doc.south_west_lat,
            south_west_lon=doc.south_west_lon,
        )


class FavoritesResponse(CamelModel):
    points: list[FavoritePointResponse] = Field(default_factory=list)
    areas: list[FavoriteAreaResponse] = Field(default_factory=list)
