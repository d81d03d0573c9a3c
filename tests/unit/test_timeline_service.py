"""Unit tests for TimelineService."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

from bson import ObjectId

from schemas.dto.requests.timeline import DataGapsQuery, StaysQuery, TripsQuery
from schemas.models.timeline import DataGapDoc, StayDoc, TripDoc
from services.timeline_service import TimelineService

USER = "user-1"
T0 = datetime(2024, 6, 1, 8, tzinfo=timezone.utc)


def _stay(hours, name, duration=3600) -> StayDoc:
    return StayDoc(
        _id=ObjectId(),
        owner_id=USER,
        timestamp=T0 + timedelta(hours=hours),
        stay_duration=duration,
        latitude=50,
        longitude=30,
        location_name=name,
    )


def _repo(stays=(), trips=(), gaps=()) -> MagicMock:
    repo = MagicMock()
    repo.stays = AsyncMock(return_value=list(stays))
    repo.trips = AsyncMock(return_value=list(trips))
    repo.data_gaps = AsyncMock(return_value=list(gaps))
    return repo


async def test_list_stays_filters_and_adds_end_time():
    service = TimelineService(_repo(stays=[_stay(0, "Home"), _stay(3, "Office")]))
    result = await service.list_stays(USER, StaysQuery(search="home"))
    assert [s.location_name for s in result] == ["Home"]
    assert result[0].end_time == T0 + timedelta(hours=1)


async def test_list_trips_widens_stay_window():
    trip = TripDoc(_id=ObjectId(), owner_id=USER, timestamp=T0, trip_duration=1800, distance_meters=4000)
    repo = _repo(stays=[_stay(-3, "Home"), _stay(1, "Office")], trips=[trip])
    query = TripsQuery(startTime=T0, endTime=T0 + timedelta(hours=2))

    [result] = await TimelineService(repo).list_trips(USER, query)

    assert repo.stays.call_args.args == (USER, T0 - timedelta(days=1), T0 + timedelta(hours=2) + timedelta(days=1))
    assert result.origin.location_name == "Home"
    assert result.destination.location_name == "Office"
    dumped = result.model_dump(by_alias=True)
    assert dumped["origin"]["locationName"] == "Home"


async def test_list_data_gaps_duration():
    gap = DataGapDoc(_id=ObjectId(), owner_id=USER, start_time=T0, end_time=T0 + timedelta(hours=7))
    [result] = await TimelineService(_repo(gaps=[gap])).list_data_gaps(USER, DataGapsQuery(duration="long"))
    assert result.duration == 7 * 3600
