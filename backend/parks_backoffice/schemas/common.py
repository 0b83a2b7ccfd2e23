"""Shared Schemas — ORM-readable base model and pagination envelope.

Design Decisions:
    - from_attributes on the base: routes return ORM rows and FastAPI validates them
      against the response_model directly
    - Update schemas are all-optional and applied with model_dump(exclude_unset=True),
      so omitted fields are untouched and explicit nulls clear a column
"""

import math

from pydantic import BaseModel, ConfigDict


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


def pagination_meta(page: int, limit: int, total: int) -> PaginationMeta:
    return PaginationMeta(
        page=page, limit=limit, total=total,
        total_pages=math.ceil(total / limit) if limit else 0,
    )


class RequestModel(BaseModel):
    """Request bodies store enum members as their plain string values."""
    model_config = ConfigDict(use_enum_values=True)
