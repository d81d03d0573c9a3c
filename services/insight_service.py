"""
Journey insights: aggregate statistics over a user's stays and trips.

Results are cached per user in Redis (see infrastructure.cache.insight_cache)
because the computation reads the user's whole timeline.
"""

from __future__ import annotations

import calendar
from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Callable, Optional

from infrastructure.cache.insight_cache import InsightCache
from repositories.timeline_repository import TimelineRepository
from schemas.dto.responses.insight import (
    Badge,
    CityVisit,
    CountryVisit,
    DistanceTraveled,
    GeographicInsights,
    JourneyInsightsResponse,
    TimePatterns,
)
from schemas.models.timeline import StayDoc, TripDoc
from shared.datetime_utils import ensure_utc
from shared.logging import get_logger

log = get_logger(__name__)

CAR_MOVEMENT = "CAR"
WALK_MOVEMENT = "WALK"


def time_of_day(hour: int) -> str:
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    return "night"


@dataclass(frozen=True)
class BadgeRule:
    id: str
    title: str
    description: str
    target: float
    metric: Callable[[GeographicInsights, DistanceTraveled], float]


BADGE_RULES: tuple[BadgeRule, ...] = (
    BadgeRule("first_country", "Explorer", "Visit your first country", 1, lambda g, d: len(g.countries)),
    BadgeRule("world_traveler", "World Traveler", "Visit 5 countries", 5, lambda g, d: len(g.countries)),
    BadgeRule("globe_trotter", "Globe Trotter", "Visit 10 countries", 10, lambda g, d: len(g.countries)),
    BadgeRule("city_hopper", "City Hopper", "Visit 10 cities", 10, lambda g, d: len(g.cities)),
    BadgeRule("urban_nomad", "Urban Nomad", "Visit 50 cities", 50, lambda g, d: len(g.cities)),
    BadgeRule("road_warrior", "Road Warrior", "Drive 1,000 km", 1000, lambda g, d: d.by_car),
    BadgeRule("marathon_walker", "Marathon Walker", "Walk 42 km", 42, lambda g, d: d.by_walk),
    BadgeRule(
        "around_the_world",
        "Around the World",
        "Travel 40,075 km, the length of the equator",
        40075,
        lambda g, d: d.total,
    ),
)


def compute_geographic(stays: list[StayDoc]) -> GeographicInsights:
    countries: Counter[str] = Counter()
    cities: Counter[tuple[str, Optional[str]]] = Counter()
    for stay in stays:
        if stay.country:
            countries[stay.country] += 1
        if stay.city:
            cities[(stay.city, stay.country)] += 1
    return GeographicInsights(
        countries=[
            CountryVisit(name=name, visits=visits)
            for name, visits in sorted(countries.items(), key=lambda kv: (-kv[1], kv[0]))
        ],
        cities=[
            CityVisit(name=city, country=country, visits=visits)
            for (city, country), visits in sorted(
                cities.items(), key=lambda kv: (-kv[1], kv[0][0])
            )
        ],
    )


def _busiest(totals: dict[str, float]) -> Optional[str]:
    # Ties resolve to the first key inserted
    return max(totals, key=totals.__getitem__) if totals else None


def compute_time_patterns(trips: list[TripDoc]) -> TimePatterns:
    """Busiest month, weekday and time of day, weighted by trip distance."""
    by_month: dict[str, float] = defaultdict(float)
    by_weekday: dict[str, float] = defaultdict(float)
    by_time: dict[str, float] = defaultdict(float)
    for trip in sorted(trips, key=lambda t: ensure_utc(t.timestamp)):
        if not trip.distance_meters:
            continue
        ts = ensure_utc(trip.timestamp)
        by_month[calendar.month_name[ts.month]] += trip.distance_meters
        by_weekday[calendar.day_name[ts.weekday()]] += trip.distance_meters
        by_time[time_of_day(ts.hour)] += trip.distance_meters
    return TimePatterns(
        most_active_month=_busiest(by_month),
        busiest_day_of_week=_busiest(by_weekday),
        most_active_time=_busiest(by_time),
    )


def compute_distance(trips: list[TripDoc]) -> DistanceTraveled:
    total = car = walk = 0.0
    for trip in trips:
        meters = trip.distance_meters or 0.0
        total += meters
        if trip.movement_type == CAR_MOVEMENT:
            car += meters
        elif trip.movement_type == WALK_MOVEMENT:
            walk += meters
    return DistanceTraveled(
        total=round(total / 1000, 2),
        by_car=round(car / 1000, 2),
        by_walk=round(walk / 1000, 2),
    )


def compute_badges(geographic: GeographicInsights, distance: DistanceTraveled) -> list[Badge]:
    badges = []
    for rule in BADGE_RULES:
        current = float(rule.metric(geographic, distance))
        badges.append(
            Badge(
                id=rule.id,
                title=rule.title,
                description=rule.description,
                earned=current >= rule.target,
                current=current,
                target=rule.target,
                progress=min(100, int(current / rule.target * 100)),
            )
        )
    return badges


def build_insights(stays: list[StayDoc], trips: list[TripDoc]) -> JourneyInsightsResponse:
    geographic = compute_geographic(stays)
    distance = compute_distance(trips)
    return JourneyInsightsResponse(
        geographic=geographic,
        time_patterns=compute_time_patterns(trips),
        distance_traveled=distance,
        achievements=compute_badges(geographic, distance),
    )


class InsightService:
    def __init__(self, repository: TimelineRepository, cache: InsightCache) -> None:
        self._repo = repository
        self._cache = cache

    async def get_journey_insights(self, user_id: str) -> JourneyInsightsResponse:
        cached = await self._cache.get(user_id)
        if cached is not None:
            return cached

        stays = await self._repo.stays(user_id)
        trips = await self._repo.trips(user_id)
        insights = build_insights(stays, trips)
        log.info(
            "journey_insights_computed",
            user_id=user_id,
            stays=len(stays),
            trips=len(trips),
        )
        await self._cache.set(user_id, insights)
        return insights
