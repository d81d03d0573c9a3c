"""
Request DTOs for reverse geocoding management endpoints.

GeocodingListQuery            - GET  /api/geocoding  (query parameters)
ReverseGeocodingUpdateRequest - PUT  /api/geocoding/{id}
ReconcileRequest              - POST /api/geocoding/reconcile
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator, model_validator

from schemas.dto.base import CamelModel

# API sort field → document field
SORT_FIELDS = {
    "lastAccessedAt": "last_accessed_at",
    "createdAt": "created_at",
    "displayName": "display_name",
    "city": "city",
    "country": "country",
    "providerName": "provider_name",
}
DEFAULT_SORT_FIELD = "lastAccessedAt"


class GeocodingListQuery(CamelModel):
    provider_name: Optional[str] = None
    search_text: Optional[str] = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=50, ge=1, le=500)
    sort_field: str = DEFAULT_SORT_FIELD
    sort_order: str = "desc"

    @field_validator("sort_field", mode="after")
    @classmethod
    def _validate_sort_field(cls, v: str) -> str:
        return v if v in SORT_FIELDS else DEFAULT_SORT_FIELD

    @field_validator("sort_order", mode="after")
    @classmethod
    def _normalise_sort_order(cls, v: str) -> str:
        return "asc" if v.strip().lower() in ("asc", "ascending", "1") else "desc"

    @field_validator("provider_name", "search_text", mode="after")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class ReverseGeocodingUpdateRequest(CamelModel):
    display_name: str = Field(min_length=1, max_length=1000)
    city: Optional[str] = Field(default=None, max_length=200)
    country: Optional[str] = Field(default=None, max_length=200)

    @field_validator("display_name", mode="after")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Display name cannot be empty")
        return v


class ReconcileRequest(CamelModel):
    """Re-geocode stored results with *provider_name*.

    Either list explicit ``geocodingIds`` or set ``reconcileAll``.
    """

    provider_name: str = Field(min_length=1)
    geocoding_ids: list[str] = Field(default_factory=list)
    reconcile_all: bool = False

    @model_validator(mode="after")
    def _require_selection(self) -> "ReconcileRequest":
        if not self.reconcile_all and not self.geocoding_ids:
            raise ValueError("Provide geocodingIds or set reconcileAll")
        return self
