"""
Timeline and GPS document models.

These collections are written by the tracking/timeline pipeline; this
service only reads them.

  StayDoc     → timeline_stays
  TripDoc     → timeline_trips
  DataGapDoc  → timeline_data_gaps
  GpsPointDoc → gps_points
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from schemas.models.base import OwnedDocument


class StayDoc(OwnedDocument):
    timestamp: datetime
    stay_duration: int  # seconds
    latitude: float
    longitude: float
    location_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class TripDoc(OwnedDocument):
    timestamp: datetime
    trip_duration: int  # seconds
    distance_meters: float = 0.0
    movement_type: str = "UNKNOWN"
    start_latitude: Optional[float] = None
    start_longitude: Optional[float] = None
    end_latitude: Optional[float] = None
    end_longitude: Optional[float] = None


class DataGapDoc(OwnedDocument):
    start_time: datetime
    end_time: datetime


class GpsPointDoc(OwnedDocument):
    timestamp: datetime
    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    altitude: Optional[float] = None
    velocity: Optional[float] = None
    battery: Optional[float] = None
