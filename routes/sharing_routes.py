"""
Shared link endpoints (snake_case JSON).

Owner (authenticated):
    POST   /api/share-links
    GET    /api/share-links
    PUT    /api/share-links/{link_id}
    DELETE /api/share-links/{link_id}

Public:
    GET  /api/shared/{link_id}/info
    POST /api/shared/{link_id}/verify
    GET  /api/shared/{link_id}/location   (Authorization: Bearer <share token>)
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response

from dependencies import get_bearer_token, get_current_user_id, get_sharing_service
from schemas.dto.requests.sharing import (
    CreateSharedLinkRequest,
    UpdateSharedLinkRequest,
    VerifySharedLinkRequest,
)
from schemas.dto.responses.common import error_responses
from schemas.dto.responses.sharing import (
    ShareAccessResponse,
    SharedLinkInfoResponse,
    SharedLinkResponse,
    SharedLinksListResponse,
    SharedLocationResponse,
)
from services.sharing_service import SharingService

owner_router = APIRouter(
    prefix="/api/share-links", tags=["sharing"], responses=error_responses(400, 401, 404)
)
public_router = APIRouter(
    prefix="/api/shared", tags=["sharing"], responses=error_responses(401, 404)
)


@owner_router.post("", status_code=201, response_model=SharedLinkResponse)
async def create_shared_link(
    body: CreateSharedLinkRequest,
    user_id: str = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
) -> SharedLinkResponse:
    return await service.create(user_id, body)


@owner_router.get("", response_model=SharedLinksListResponse)
async def list_shared_links(
    user_id: str = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
) -> SharedLinksListResponse:
    return await service.list_links(user_id)


@owner_router.put("/{link_id}", response_model=SharedLinkResponse)
async def update_shared_link(
    link_id: str,
    body: UpdateSharedLinkRequest,
    user_id: str = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
) -> SharedLinkResponse:
    return await service.update(user_id, link_id, body)


@owner_router.delete("/{link_id}", status_code=204)
async def delete_shared_link(
    link_id: str,
    user_id: str = Depends(get_current_user_id),
    service: SharingService = Depends(get_sharing_service),
) -> Response:
    await service.delete(user_id, link_id)
    return Response(status_code=204)


@public_router.get("/{link_id}/info", response_model=SharedLinkInfoResponse)
async def get_shared_link_info(
    link_id: str,
    service: SharingService = Depends(get_sharing_service),
) -> SharedLinkInfoResponse:
    return await service.info(link_id)


@public_router.post("/{link_id}/verify", response_model=ShareAccessResponse)
async def verify_shared_link(
    link_id: str,
    body: VerifySharedLinkRequest,
    service: SharingService = Depends(get_sharing_service),
) -> ShareAccessResponse:
    return await service.verify(link_id, body)


@public_router.get("/{link_id}/location", response_model=SharedLocationResponse)
async def get_shared_location(
    link_id: str,
    token: Optional[str] = Depends(get_bearer_token),
    service: SharingService = Depends(get_sharing_service),
) -> SharedLocationResponse:
    return await service.location(link_id, token)
