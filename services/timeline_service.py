"""Timeline table service: load stored segments, then filter them."""

from __future__ import annotations

from datetime import timedelta

from repositories.timeline_repository import TimelineRepository
from schemas.dto.requests.timeline import DataGapsQuery, StaysQuery, TripsQuery
from schemas.dto.responses.timeline import DataGapResponse, StayResponse, TripResponse
from schemas.models.timeline import DataGapDoc, StayDoc, TripDoc
from services import timeline_filters

# Stays fetched around a trip window so edge trips still get origin/destination
_STAY_LOOKAROUND = timedelta(days=1)


def _stay_item(doc: StayDoc) -> dict:
    return StayResponse(
        id=str(doc.id),
        timestamp=doc.timestamp,
        stay_duration=doc.stay_duration,
        latitude=doc.latitude,
        longitude=doc.longitude,
        location_name=doc.location_name,
        address=doc.address,
        city=doc.city,
        country=doc.country,
    ).model_dump(by_alias=True)


def _trip_item(doc: TripDoc) -> dict:
    return TripResponse(
        id=str(doc.id),
        timestamp=doc.timestamp,
        trip_duration=doc.trip_duration,
        distance_meters=doc.distance_meters,
        movement_type=doc.movement_type,
        start_latitude=doc.start_latitude,
        start_longitude=doc.start_longitude,
        end_latitude=doc.end_latitude,
        end_longitude=doc.end_longitude,
    ).model_dump(by_alias=True, exclude={"origin", "destination", "end_time"})


def _gap_item(doc: DataGapDoc) -> dict:
    return DataGapResponse(
        id=str(doc.id), start_time=doc.start_time, end_time=doc.end_time
    ).model_dump(by_alias=True)


class TimelineService:
    def __init__(self, repository: TimelineRepository) -> None:
        self._repo = repository

    async def list_stays(self, user_id: str, query: StaysQuery) -> list[StayResponse]:
        docs = await self._repo.stays(user_id, query.start_time, query.end_time)
        items = timeline_filters.filter_stays(
            [_stay_item(d) for d in docs], search=query.search, duration=query.duration
        )
        return [StayResponse.model_validate(item) for item in items]

    async def list_trips(self, user_id: str, query: TripsQuery) -> list[TripResponse]:
        trips = await self._repo.trips(user_id, query.start_time, query.end_time)
        stays = await self._repo.stays(
            user_id,
            query.start_time - _STAY_LOOKAROUND if query.start_time else None,
            query.end_time + _STAY_LOOKAROUND if query.end_time else None,
        )
        items = timeline_filters.filter_trips(
            [_trip_item(d) for d in trips],
            [_stay_item(d) for d in stays],
            search=query.search,
            transport_mode=query.transport_mode,
            distance=query.distance,
        )
        return [TripResponse.model_validate(item) for item in items]

    async def list_data_gaps(self, user_id: str, query: DataGapsQuery) -> list[DataGapResponse]:
        docs = await self._repo.data_gaps(user_id, query.start_time, query.end_time)
        items = timeline_filters.filter_data_gaps(
            [_gap_item(d) for d in docs], duration=query.duration
        )
        return [DataGapResponse.model_validate(item) for item in items]
