"""
Base classes for GeoPulse MongoDB documents.

Every collection stores its primary key in ``_id``. Most ids are ObjectIds
(favorites, geocoding results, timeline segments); shared links override the
field with a UUID string. Everything except the global geocoding cache is
scoped to a user through ``owner_id``.
"""

from __future__ import annotations

from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, GetCoreSchemaHandler
from pydantic_core import core_schema


class PyObjectId(ObjectId):
    """ObjectId accepted from BSON or its 24-char hex form, serialised as a string."""

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.to_string_ser_schema(),
        )

    @classmethod
    def _coerce(cls, value: Any) -> ObjectId:
        oid = parse_object_id(value)
        if oid is None:
            raise ValueError(f"Invalid ObjectId: {value!r}")
        return oid


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Return an ObjectId for *value*, or None when it is not a valid id.

    Path parameters go through here so a malformed id reads as "not found"
    instead of a validation error.
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class MongoBaseModel(BaseModel):
    """Document model with ``_id`` exposed as ``id``."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")

    def to_mongo(self) -> dict:
        """Dump with Mongo field names; an unset ``_id`` is left for the server to assign."""
        doc = self.model_dump(by_alias=True)
        if doc.get("_id") is None:
            doc.pop("_id", None)
        return doc

    @classmethod
    def from_mongo(cls, doc: Optional[dict]) -> Optional["MongoBaseModel"]:
        if doc is None:
            return None
        return cls.model_validate(doc)


class OwnedDocument(MongoBaseModel):
    """Document belonging to one user; every query on it filters by ``owner_id``."""

    owner_id: str
