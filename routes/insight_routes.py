"""GET /api/journey-insights: statistics for the authenticated user."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from dependencies import get_current_user_id, get_insight_service
from schemas.dto.responses.common import error_responses
from schemas.dto.responses.insight import JourneyInsightsResponse
from services.insight_service import InsightService

router = APIRouter(
    prefix="/api/journey-insights", tags=["insights"], responses=error_responses(401)
)


@router.get("", response_model=JourneyInsightsResponse)
async def get_journey_insights(
    user_id: str = Depends(get_current_user_id),
    service: InsightService = Depends(get_insight_service),
) -> JourneyInsightsResponse:
    return await service.get_journey_insights(user_id)
