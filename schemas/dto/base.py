"""
Base DTO for the camelCase JSON contract used by the web frontend.

Python attribute names stay snake_case; aliases are generated in camelCase.
``populate_by_name`` lets services build DTOs with snake_case keywords.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
