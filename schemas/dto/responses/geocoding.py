"""
Response DTOs for reverse geocoding management endpoints.

ReverseGeocodingResponse  - one stored result (GET/PUT /api/geocoding/{id})
GeocodingListResponse     - GET /api/geocoding  ``{"data": [...], "pagination": {...}}``
GeocodingProviderResponse - GET /api/geocoding/providers
ReconcileResultResponse   - POST /api/geocoding/reconcile
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.dto.base import CamelModel
from schemas.dto.responses.common import PaginationMeta
from schemas.models.geocoding import ReverseGeocodingDoc
from shared.geo import point_lon_lat


class ReverseGeocodingResponse(CamelModel):
    id: str
    provider_name: str
    display_name: str
    city: Optional[str] = None
    country: Optional[str] = None
    request_latitude: Optional[float] = None
    request_longitude: Optional[float] = None
    result_latitude: Optional[float] = None
    result_longitude: Optional[float] = None
    created_at: datetime
    last_accessed_at: datetime

    @classmethod
    def from_doc(cls, doc: ReverseGeocodingDoc) -> "ReverseGeocodingResponse":
        request = point_lon_lat(doc.request_coordinates)
        result = point_lon_lat(doc.result_coordinates)
        return cls(
            id=str(doc.id),
            provider_name=doc.provider_name,
            display_name=doc.display_name,
            city=doc.city,
            country=doc.country,
            request_longitude=request[0] if request else None,
            request_latitude=request[1] if request else None,
            result_longitude=result[0] if result else None,
            result_latitude=result[1] if result else None,
            created_at=doc.created_at,
            last_accessed_at=doc.last_accessed_at,
        )


class GeocodingListResponse(CamelModel):
    data: list[ReverseGeocodingResponse]
    pagination: PaginationMeta


class GeocodingProviderResponse(CamelModel):
    name: str
    display_name: str
    enabled: bool
    is_primary: bool


class ReconcileFailure(CamelModel):
    geocoding_id: str
    message: str


class ReconcileResultResponse(CamelModel):
    total_processed: int = 0
    success_count: int = 0
    failed_count: int = 0
    errors: list[ReconcileFailure] = Field(default_factory=list)
