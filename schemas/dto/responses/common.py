"""
Common response DTOs shared across multiple endpoints.

ErrorResponse    - standard error shape from AppError.to_dict(); error_responses() documents it per router
HealthResponse   - GET /health
PaginationMeta   - pagination block of paginated list responses
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from schemas.dto.base import CamelModel


class ErrorResponse(BaseModel):
    """Standard error JSON body produced by the AppError exception handler."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    code: str
    field: Optional[str] = None
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    checks: dict[str, str]


class PaginationMeta(CamelModel):
    """Pagination metadata: ``totalPages = ceil(total / limit)``."""

    page: int
    limit: int
    total: int
    total_pages: int


def error_responses(*status_codes: int) -> dict[int, dict[str, Any]]:
    """OpenAPI ``responses`` entries declaring the AppError body for *status_codes*."""
    return {code: {"model": ErrorResponse} for code in status_codes}
