"""
Response DTOs for shared link endpoints (snake_case on the wire).

SharedLinkResponse      - owner view of one link
SharedLinksListResponse - GET  /api/share-links
SharedLinkInfoResponse  - GET  /api/shared/{link_id}/info (public)
ShareAccessResponse     - POST /api/shared/{link_id}/verify
SharedLocationResponse  - GET  /api/shared/{link_id}/location
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.models.shared_link import SharedLinkDoc
from schemas.models.timeline import GpsPointDoc


class SharedLinkResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    expires_at: Optional[datetime] = None
    has_password: bool
    show_history: bool
    is_active: bool
    created_at: datetime
    view_count: int = 0

    @classmethod
    def from_doc(
        cls, doc: SharedLinkDoc, now: Optional[datetime] = None
    ) -> "SharedLinkResponse":
        return cls(
            id=str(doc.id),
            name=doc.name,
            expires_at=doc.expires_at,
            has_password=doc.has_password,
            show_history=doc.show_history,
            is_active=doc.is_active(now),
            created_at=doc.created_at,
            view_count=doc.view_count,
        )


class SharedLinksListResponse(BaseModel):
    links: list[SharedLinkResponse]
    active_count: int
    max_links: int


class SharedLinkInfoResponse(BaseModel):
    id: str
    name: str
    has_password: bool
    expires_at: Optional[datetime] = None
    show_history: bool
    is_active: bool


class ShareAccessResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int


class LocationPoint(BaseModel):
    latitude: float
    longitude: float
    timestamp: datetime
    accuracy: Optional[float] = None
    altitude: Optional[float] = None
    velocity: Optional[float] = None
    battery: Optional[float] = None

    @classmethod
    def from_doc(cls, doc: GpsPointDoc) -> "LocationPoint":
        return cls(
            latitude=doc.latitude,
            longitude=doc.longitude,
            timestamp=doc.timestamp,
            accuracy=doc.accuracy,
            altitude=doc.altitude,
            velocity=doc.velocity,
            battery=doc.battery,
        )


class SharedLocationResponse(BaseModel):
    name: str
    current: Optional[LocationPoint] = None
    # Only populated when the owner enabled show_history
    history: Optional[list[LocationPoint]] = None
