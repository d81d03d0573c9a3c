"""
Reverse geocoding document model (``reverse_geocoding`` collection).

Results are cached globally: a point geocoded for one user is reused for any
request falling within the configured tolerance of ``request_coordinates``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from schemas.models.base import MongoBaseModel


class ReverseGeocodingDoc(MongoBaseModel):
    provider_name: str
    display_name: str
    city: Optional[str] = None
    country: Optional[str] = None
    # GeoJSON Point / Polygon dicts
    request_coordinates: dict[str, Any]
    result_coordinates: Optional[dict[str, Any]] = None
    bounding_box: Optional[dict[str, Any]] = None
    created_at: datetime
    last_accessed_at: datetime
