"""Unit tests for journey insights and the insight cache."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.cache.insight_cache import InsightCache
from schemas.dto.responses.insight import DistanceTraveled, GeographicInsights
from schemas.models.timeline import StayDoc, TripDoc
from services.insight_service import (
    InsightService,
    build_insights,
    compute_badges,
    compute_distance,
    compute_geographic,
    compute_time_patterns,
    time_of_day,
)

USER = "user-1"


def _stay(city, country, ts=datetime(2024, 3, 1, tzinfo=timezone.utc)) -> StayDoc:
    return StayDoc(
        owner_id=USER, timestamp=ts, stay_duration=3600, latitude=0, longitude=0, city=city, country=country
    )


def _trip(ts: datetime, meters: float, mode: str = "CAR") -> TripDoc:
    return TripDoc(owner_id=USER, timestamp=ts, trip_duration=600, distance_meters=meters, movement_type=mode)


def _fake_redis(get_returns=None):
    """Return a mock async Redis client."""
    r = AsyncMock()
    r.get.return_value = get_returns
    r.setex.return_value = True
    return r


class TestGeographic:
    def test_counts_sorted_by_visits(self):
        stays = [
            _stay("Kyiv", "Ukraine"),
            _stay("Lviv", "Ukraine"),
            _stay("Kyiv", "Ukraine"),
            _stay("Warsaw", "Poland"),
            _stay(None, None),
        ]
        geo = compute_geographic(stays)
        assert [(c.name, c.visits) for c in geo.countries] == [("Ukraine", 3), ("Poland", 1)]
        assert [(c.name, c.visits) for c in geo.cities] == [("Kyiv", 2), ("Lviv", 1), ("Warsaw", 1)]
        assert geo.cities[0].country == "Ukraine"


class TestTimePatterns:
    @pytest.mark.parametrize(
        "hour, expected",
        [(5, "morning"), (11, "morning"), (12, "afternoon"), (17, "evening"), (21, "night"), (2, "night")],
    )
    def test_time_of_day(self, hour, expected):
        assert time_of_day(hour) == expected

    def test_weighted_by_distance(self):
        trips = [
            _trip(datetime(2024, 7, 6, 8, tzinfo=timezone.utc), 50_000),  # Saturday morning
            _trip(datetime(2024, 1, 8, 19, tzinfo=timezone.utc), 1_000),  # Monday evening
            _trip(datetime(2024, 1, 9, 19, tzinfo=timezone.utc), 1_000),  # Tuesday evening
        ]
        patterns = compute_time_patterns(trips)
        assert patterns.most_active_month == "July"
        assert patterns.busiest_day_of_week == "Saturday"
        assert patterns.most_active_time == "morning"

    def test_no_trips(self):
        patterns = compute_time_patterns([])
        assert patterns.most_active_month is None
        assert patterns.busiest_day_of_week is None


def test_distance_in_km_by_mode():
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    distance = compute_distance([_trip(ts, 12_500, "CAR"), _trip(ts, 2_250, "WALK"), _trip(ts, 5_000, "BICYCLE")])
    assert distance.total == 19.75
    assert distance.by_car == 12.5
    assert distance.by_walk == 2.25


class TestBadges:
    def test_progress_and_earned(self):
        geographic = GeographicInsights.model_validate(
            {"countries": [{"name": f"C{i}", "visits": 1} for i in range(5)]}
        )
        badges = {b.id: b for b in compute_badges(geographic, DistanceTraveled(total=100, by_car=500, by_walk=0))}

        assert badges["world_traveler"].earned is True
        assert badges["world_traveler"].progress == 100
        assert badges["globe_trotter"].earned is False
        assert badges["globe_trotter"].progress == 50
        assert badges["road_warrior"].progress == 50
        assert badges["marathon_walker"].current == 0
        assert badges["marathon_walker"].progress == 0

    def test_progress_capped_at_100(self):
        badges = compute_badges(GeographicInsights(), DistanceTraveled(total=10**6, by_car=10**6, by_walk=10**6))
        assert all(0 <= b.progress <= 100 for b in badges)
        assert {b.id for b in badges if b.earned} == {"road_warrior", "marathon_walker", "around_the_world"}

    def test_progress_truncates_to_whole_percent(self):
        badges = {b.id: b for b in compute_badges(GeographicInsights(), DistanceTraveled(by_walk=41))}
        assert badges["marathon_walker"].progress == 97
        assert badges["marathon_walker"].earned is False


def test_build_insights_serialises_camel_case():
    insights = build_insights([_stay("Kyiv", "Ukraine")], [])
    dumped = insights.model_dump(by_alias=True)
    assert set(dumped) == {"geographic", "timePatterns", "distanceTraveled", "achievements"}
    assert dumped["distanceTraveled"] == {"total": 0.0, "byCar": 0.0, "byWalk": 0.0}


class TestInsightService:
    def _repo(self):
        repo = MagicMock()
        repo.stays = AsyncMock(return_value=[_stay("Kyiv", "Ukraine")])
        repo.trips = AsyncMock(return_value=[])
        return repo

    async def test_computes_and_caches(self):
        repo, redis = self._repo(), _fake_redis()
        service = InsightService(repo, InsightCache(redis, ttl_seconds=600))

        result = await service.get_journey_insights(USER)

        assert result.geographic.countries[0].name == "Ukraine"
        key, ttl, payload = redis.setex.call_args.args
        assert key == "journey_insights:user-1"
        assert ttl == 600
        assert '"timePatterns"' in payload

    async def test_cache_hit_skips_repository(self):
        cached = build_insights([_stay("Paris", "France")], [])
        repo = self._repo()
        service = InsightService(repo, InsightCache(_fake_redis(cached.model_dump_json(by_alias=True))))

        result = await service.get_journey_insights(USER)

        assert result.geographic.countries[0].name == "France"
        repo.stays.assert_not_called()

    async def test_works_without_redis(self):
        result = await InsightService(self._repo(), InsightCache(None)).get_journey_insights(USER)
        assert result.geographic.cities[0].name == "Kyiv"


class TestInsightCache:
    async def test_redis_error_is_a_miss(self):
        redis = _fake_redis()
        redis.get.side_effect = ConnectionError("redis down")
        assert await InsightCache(redis).get(USER) is None

    async def test_set_error_is_swallowed_and_logged(self):
        redis = _fake_redis()
        redis.setex.side_effect = ConnectionError("redis down")
        await InsightCache(redis).set(USER, build_insights([], []))

    async def test_corrupt_entry_is_a_miss(self):
        assert await InsightCache(_fake_redis("{not json")).get(USER) is None

