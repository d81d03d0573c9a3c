"""
Reverse geocoding management.

Lists, edits and reconciles the stored reverse geocoding results, and resolves
new points through the provider registry. Stored results are shared by all
users: ``resolve`` reuses any record whose request point lies within the
configured tolerance before calling a provider.
"""

from __future__ import annotations

import math
from typing import AsyncIterator, Optional

from errors import AppError, NotFoundError, ValidationError
from infrastructure.geocoding.models import GeocodingResult
from infrastructure.geocoding.registry import GeocodingProviderRegistry
from repositories.geocoding_repository import GeocodingRepository, build_list_filter
from schemas.dto.requests.geocoding import (
    SORT_FIELDS,
    GeocodingListQuery,
    ReconcileRequest,
    ReverseGeocodingUpdateRequest,
)
from schemas.dto.responses.common import PaginationMeta
from schemas.dto.responses.geocoding import (
    GeocodingListResponse,
    GeocodingProviderResponse,
    ReconcileFailure,
    ReconcileResultResponse,
    ReverseGeocodingResponse,
)
from schemas.models.base import parse_object_id
from schemas.models.geocoding import ReverseGeocodingDoc
from shared.datetime_utils import utc_now
from shared.geo import make_point
from shared.logging import get_logger, should_sample

log = get_logger(__name__)


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total > 0 else 0


def _result_fields(result: GeocodingResult) -> dict:
    return {
        "provider_name": result.provider_name,
        "display_name": result.formatted_display_name,
        "city": result.city,
        "country": result.country,
        "result_coordinates": result.result_coordinates,
        "bounding_box": result.bounding_box,
    }


class GeocodingService:
    def __init__(
        self,
        repository: GeocodingRepository,
        registry: GeocodingProviderRegistry,
        tolerance_meters: float = 15.0,
    ) -> None:
        self._repo = repository
        self._registry = registry
        self._tolerance_meters = tolerance_meters

    async def list_results(self, query: GeocodingListQuery) -> GeocodingListResponse:
        mongo_filter = build_list_filter(query.provider_name, query.search_text)
        total = await self._repo.count(mongo_filter)
        docs = await self._repo.find_page(
            mongo_filter,
            sort_field=SORT_FIELDS[query.sort_field],
            ascending=query.sort_order == "asc",
            skip=(query.page - 1) * query.limit,
            limit=query.limit,
        )
        return GeocodingListResponse(
            data=[ReverseGeocodingResponse.from_doc(d) for d in docs],
            pagination=PaginationMeta(
                page=query.page,
                limit=query.limit,
                total=total,
                total_pages=total_pages(total, query.limit),
            ),
        )

    async def get_result(self, geocoding_id: str) -> ReverseGeocodingResponse:
        oid = parse_object_id(geocoding_id)
        doc = await self._repo.get(oid) if oid is not None else None
        if doc is None:
            raise NotFoundError(f"Geocoding result {geocoding_id} not found")
        return ReverseGeocodingResponse.from_doc(doc)

    async def update_result(
        self, geocoding_id: str, request: ReverseGeocodingUpdateRequest
    ) -> ReverseGeocodingResponse:
        oid = parse_object_id(geocoding_id)
        if oid is None:
            raise NotFoundError(f"Geocoding result {geocoding_id} not found")
        try:
            doc = await self._repo.update_fields(
                oid,
                {
                    "display_name": request.display_name.strip(),
                    "city": request.city,
                    "country": request.country,
                },
            )
        except Exception as e:
            log.error("geocoding_update_failed", geocoding_id=geocoding_id, error=str(e))
            raise AppError("Failed to update geocoding result") from e
        if doc is None:
            raise NotFoundError(f"Geocoding result {geocoding_id} not found")
        log.info("geocoding_result_updated", geocoding_id=geocoding_id)
        return ReverseGeocodingResponse.from_doc(doc)

    def _selected(self, request: ReconcileRequest) -> AsyncIterator[ReverseGeocodingDoc]:
        if request.reconcile_all:
            return self._repo.iter_all()
        ids = [oid for oid in map(parse_object_id, request.geocoding_ids) if oid is not None]
        return self._repo.iter_by_ids(ids)

    async def reconcile(self, request: ReconcileRequest) -> ReconcileResultResponse:
        """Re-geocode the selected results with one provider.

        Per-record provider failures are collected in ``errors``; anything
        else aborts the run with a 500.
        """
        provider = self._registry.get(request.provider_name)
        if provider is None:
            raise ValidationError(
                f"Geocoding provider '{request.provider_name}' is not enabled",
                field="providerName",
            )

        log.info(
            "geocoding_reconcile_started",
            provider=provider.name,
            reconcile_all=request.reconcile_all,
            requested=len(request.geocoding_ids),
        )
        result = ReconcileResultResponse()
        seen: set[str] = set()
        try:
            async for doc in self._selected(request):
                seen.add(str(doc.id))
                result.total_processed += 1
                lon, lat = doc.request_coordinates["coordinates"]
                try:
                    fresh = await provider.reverse_geocode(lon, lat)
                except AppError as e:
                    result.failed_count += 1
                    result.errors.append(ReconcileFailure(geocoding_id=str(doc.id), message=e.message))
                    continue
                await self._repo.update_fields(doc.id, _result_fields(fresh))
                result.success_count += 1
        except Exception as e:
            log.error("geocoding_reconcile_failed", provider=provider.name, error=str(e))
            raise AppError(f"Reconciliation failed: {e}") from e

        if not request.reconcile_all:
            # Malformed or unknown ids are reported instead of silently skipped
            for geocoding_id in dict.fromkeys(request.geocoding_ids):
                oid = parse_object_id(geocoding_id)
                if oid is not None and str(oid) in seen:
                    continue
                result.total_processed += 1
                result.failed_count += 1
                result.errors.append(
                    ReconcileFailure(
                        geocoding_id=geocoding_id,
                        message=f"Geocoding result {geocoding_id} not found",
                    )
                )

        log.info(
            "geocoding_reconcile_finished",
            provider=provider.name,
            total=result.total_processed,
            succeeded=result.success_count,
            failed=result.failed_count,
        )
        return result

    def enabled_providers(self) -> list[GeocodingProviderResponse]:
        return [
            GeocodingProviderResponse(
                name=p.name,
                display_name=p.display_name,
                enabled=True,
                is_primary=self._registry.is_primary(p.name),
            )
            for p in self._registry.enabled_providers()
        ]

    async def providers_with_data(self) -> list[str]:
        return await self._repo.distinct_providers()

    async def resolve(self, lon: float, lat: float) -> ReverseGeocodingResponse:
        point = make_point(lon, lat)
        now = utc_now()

        cached = await self._repo.find_near(point, self._tolerance_meters)
        if cached is not None:
            await self._repo.touch(cached.id, now)
            if should_sample("geocoding_cache_hit"):
                log.info("geocoding_cache_hit", geocoding_id=str(cached.id), provider=cached.provider_name)
            return ReverseGeocodingResponse.from_doc(cached.model_copy(update={"last_accessed_at": now}))

        fresh = await self._registry.reverse_geocode(lon, lat)
        doc = await self._repo.insert(
            ReverseGeocodingDoc(
                request_coordinates=point,
                created_at=now,
                last_accessed_at=now,
                **_result_fields(fresh),
            )
        )
        log.info("geocoding_result_stored", geocoding_id=str(doc.id), provider=doc.provider_name)
        return ReverseGeocodingResponse.from_doc(doc)
