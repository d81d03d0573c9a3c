"""
Response DTOs for timeline table endpoints.

The derived fields (``endTime``, ``origin``, ``destination``, ``duration``)
are filled in by services.timeline_filters before filtering.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from schemas.dto.base import CamelModel


class StayResponse(CamelModel):
    id: str
    timestamp: datetime
    stay_duration: int
    latitude: float
    longitude: float
    location_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    end_time: Optional[datetime] = None


class TripResponse(CamelModel):
    id: str
    timestamp: datetime
    trip_duration: int
    distance_meters: float = 0.0
    movement_type: str = "UNKNOWN"
    start_latitude: Optional[float] = None
    start_longitude: Optional[float] = None
    end_latitude: Optional[float] = None
    end_longitude: Optional[float] = None
    end_time: Optional[datetime] = None
    origin: Optional[StayResponse] = None
    destination: Optional[StayResponse] = None


class DataGapResponse(CamelModel):
    id: str
    start_time: datetime
    end_time: datetime
    duration: Optional[int] = None
