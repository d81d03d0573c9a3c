"""
Request DTOs for shared link endpoints.

Shared link JSON keys are snake_case on the wire, unlike the camelCase
used by the rest of the API.

CreateSharedLinkRequest - POST  /api/share-links
UpdateSharedLinkRequest - PUT   /api/share-links/{link_id}
VerifySharedLinkRequest - POST  /api/shared/{link_id}/verify
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

MAX_SHARE_PASSWORD_LENGTH = 128


class CreateSharedLinkRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="Shared Location", min_length=1, max_length=100)
    expires_at: Optional[datetime] = None
    password: Optional[str] = Field(
        default=None, min_length=1, max_length=MAX_SHARE_PASSWORD_LENGTH
    )
    show_history: bool = False


class UpdateSharedLinkRequest(BaseModel):
    """Partial update; only fields present in the body are applied.

    Send ``"password": null`` to remove protection and
    ``"expires_at": null`` to make the link permanent.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    expires_at: Optional[datetime] = None
    password: Optional[str] = Field(
        default=None, min_length=1, max_length=MAX_SHARE_PASSWORD_LENGTH
    )
    show_history: Optional[bool] = None


class VerifySharedLinkRequest(BaseModel):
    password: Optional[str] = Field(default=None, max_length=MAX_SHARE_PASSWORD_LENGTH)
