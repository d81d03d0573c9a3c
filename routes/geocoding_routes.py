"""
Reverse geocoding management endpoints.

GET  /api/geocoding                      - paginated, filterable list
GET  /api/geocoding/providers            - enabled providers
GET  /api/geocoding/providers/available  - provider names present in storage
GET  /api/geocoding/{id}                 - single result
PUT  /api/geocoding/{id}                 - edit display name / city / country
POST /api/geocoding/reconcile            - re-geocode with another provider

Static paths are declared before ``/{geocoding_id}`` so they are not captured
as ids.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from dependencies import get_current_user_id, get_geocoding_service
from schemas.dto.requests.geocoding import (
    GeocodingListQuery,
    ReconcileRequest,
    ReverseGeocodingUpdateRequest,
)
from schemas.dto.responses.common import error_responses
from schemas.dto.responses.geocoding import (
    GeocodingListResponse,
    GeocodingProviderResponse,
    ReconcileResultResponse,
    ReverseGeocodingResponse,
)
from services.geocoding_service import GeocodingService

router = APIRouter(
    prefix="/api/geocoding",
    tags=["geocoding"],
    dependencies=[Depends(get_current_user_id)],
    responses=error_responses(400, 401, 404, 502),
)


@router.get("", response_model=GeocodingListResponse)
async def list_geocoding_results(
    query: Annotated[GeocodingListQuery, Query()],
    service: GeocodingService = Depends(get_geocoding_service),
) -> GeocodingListResponse:
    return await service.list_results(query)


@router.get("/providers", response_model=list[GeocodingProviderResponse])
async def list_enabled_providers(
    service: GeocodingService = Depends(get_geocoding_service),
) -> list[GeocodingProviderResponse]:
    return service.enabled_providers()


@router.get("/providers/available", response_model=list[str])
async def list_providers_with_data(
    service: GeocodingService = Depends(get_geocoding_service),
) -> list[str]:
    return await service.providers_with_data()


@router.post("/reconcile", response_model=ReconcileResultResponse)
async def reconcile_geocoding_results(
    body: ReconcileRequest,
    service: GeocodingService = Depends(get_geocoding_service),
) -> ReconcileResultResponse:
    return await service.reconcile(body)


@router.get("/{geocoding_id}", response_model=ReverseGeocodingResponse)
async def get_geocoding_result(
    geocoding_id: str,
    service: GeocodingService = Depends(get_geocoding_service),
) -> ReverseGeocodingResponse:
    return await service.get_result(geocoding_id)


@router.put("/{geocoding_id}", response_model=ReverseGeocodingResponse)
async def update_geocoding_result(
    geocoding_id: str,
    body: ReverseGeocodingUpdateRequest,
    service: GeocodingService = Depends(get_geocoding_service),
) -> ReverseGeocodingResponse:
    return await service.update_result(geocoding_id, body)
