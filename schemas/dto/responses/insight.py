"""
Response DTO for GET /api/journey-insights.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from schemas.dto.base import CamelModel


class CountryVisit(CamelModel):
    name: str
    visits: int


class CityVisit(CamelModel):
    name: str
    country: Optional[str] = None
    visits: int


class GeographicInsights(CamelModel):
    countries: list[CountryVisit] = Field(default_factory=list)
    cities: list[CityVisit] = Field(default_factory=list)


class TimePatterns(CamelModel):
    most_active_month: Optional[str] = None
    busiest_day_of_week: Optional[str] = None
    most_active_time: Optional[str] = None  # morning | afternoon | evening | night


class DistanceTraveled(CamelModel):
    """Kilometres travelled, split by movement type."""

    total: float = 0.0
    by_car: float = 0.0
    by_walk: float = 0.0


class Badge(CamelModel):
    id: str
    title: str
    description: str
    earned: bool
    current: float
    target: float
    progress: int  # 0–100


class JourneyInsightsResponse(CamelModel):
    geographic: GeographicInsights
    time_patterns: TimePatterns
    distance_traveled: DistanceTraveled
    achievements: list[Badge] = Field(default_factory=list)
