"""
Timeline tables with server-side filtering.

GET /api/timeline/stays      - ?startTime&endTime&search&duration
GET /api/timeline/trips      - ?startTime&endTime&search&transportMode&distance
GET /api/timeline/data-gaps  - ?startTime&endTime&duration
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from dependencies import get_current_user_id, get_timeline_service
from schemas.dto.requests.timeline import DataGapsQuery, StaysQuery, TripsQuery
from schemas.dto.responses.common import error_responses
from schemas.dto.responses.timeline import DataGapResponse, StayResponse, TripResponse
from services.timeline_service import TimelineService

router = APIRouter(prefix="/api/timeline", tags=["timeline"], responses=error_responses(401))


@router.get("/stays", response_model=list[StayResponse])
async def list_stays(
    query: Annotated[StaysQuery, Query()],
    user_id: str = Depends(get_current_user_id),
    service: TimelineService = Depends(get_timeline_service),
) -> list[StayResponse]:
    return await service.list_stays(user_id, query)


@router.get("/trips", response_model=list[TripResponse])
async def list_trips(
    query: Annotated[TripsQuery, Query()],
    user_id: str = Depends(get_current_user_id),
    service: TimelineService = Depends(get_timeline_service),
) -> list[TripResponse]:
    return await service.list_trips(user_id, query)


@router.get("/data-gaps", response_model=list[DataGapResponse])
async def list_data_gaps(
    query: Annotated[DataGapsQuery, Query()],
    user_id: str = Depends(get_current_user_id),
    service: TimelineService = Depends(get_timeline_service),
) -> list[DataGapResponse]:
    return await service.list_data_gaps(user_id, query)
