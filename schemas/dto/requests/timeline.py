"""
Query DTOs for timeline table endpoints.

StaysQuery    - GET /api/timeline/stays
TripsQuery    - GET /api/timeline/trips
DataGapsQuery - GET /api/timeline/data-gaps

Filter values are option keys (``short``/``medium``/``long``) resolved by
services.timeline_filters; unknown keys leave the list unfiltered.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import model_validator

from schemas.dto.base import CamelModel


class TimelineRangeQuery(CamelModel):
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @model_validator(mode="after")
    def _check_range(self) -> "TimelineRangeQuery":
        if self.start_time and self.end_time and self.start_time > self.end_time:
            raise ValueError("startTime must not be after endTime")
        return self


class StaysQuery(TimelineRangeQuery):
    search: Optional[str] = None
    duration: Optional[str] = None


class TripsQuery(TimelineRangeQuery):
    search: Optional[str] = None
    transport_mode: Optional[str] = None
    distance: Optional[str] = None


class DataGapsQuery(TimelineRangeQuery):
    duration: Optional[str] = None
