"""
Favorite document model (``favorites`` collection).

One collection holds both kinds of favorite; ``type`` tells them apart.
POINT documents carry ``lat``/``lon``; AREA documents carry the two corners
of their bounding box.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from schemas.models.base import OwnedDocument

FavoriteType = Literal["POINT", "AREA"]


class FavoriteDoc(OwnedDocument):
    name: str
    type: FavoriteType
    created_at: datetime

    # POINT
    lat: Optional[float] = None
    lon: Optional[float] = None
    city: Optional[str] = None
    country: Optional[str] = None

    # AREA
    north_east_lat: Optional[float] = None
    north_east_lon: Optional[float] = None
    south_west_lat: Optional[float] = None
    south_west_lon: Optional[float] = None
