"""
Shared link document model (``shared_links`` collection).

Key differences from the other documents:
- `_id` is a UUID4 string, because it is published in share URLs.
- `password` stores an argon2 hash (None when the link is open).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from schemas.models.base import OwnedDocument
from shared.datetime_utils import ensure_utc, utc_now


class SharedLinkDoc(OwnedDocument):
    # _id is the public link id: override base type
    id: Optional[Any] = Field(default=None, alias="_id")

    name: str
    password: Optional[str] = None
    expires_at: Optional[datetime] = None
    show_history: bool = False
    created_at: datetime
    view_count: int = 0

    @property
    def has_password(self) -> bool:
        return bool(self.password)

    def is_active(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return True
        return ensure_utc(self.expires_at) > (now or utc_now())
