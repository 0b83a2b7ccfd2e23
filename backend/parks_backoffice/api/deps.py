"""Route Dependencies — row lookup, pagination parameters and permission guards.

Invariants:
    - get_or_404 raises ResourceNotFoundError (404 envelope via global handler)
    - require_permission is a no-op unless settings.enforce_permissions is on
    - With enforcement on: missing X-User-Id -> 401, missing permission -> 403

Design Decisions:
    - Caller identity is an upstream-authenticated header, not a session: login
      flows are handled by the gateway in front of this API
    - Settings injected via Depends(get_settings) so tests can override enforcement
"""

import logging
from dataclasses import dataclass
from typing import TypeVar

from fastapi import Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.config import Settings, get_settings
from parks_backoffice.core.errors import (
    AuthenticationRequiredError, PermissionDeniedError, ResourceNotFoundError,
)
from parks_backoffice.infrastructure.database import get_db
from parks_backoffice.services.role_service import effective_access

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


async def get_or_404(
    db: AsyncSession, model: type[ModelT], row_id: int, label: str | None = None,
) -> ModelT:
    row = await db.get(model, row_id)
    if row is None:
        raise ResourceNotFoundError(label or model.__name__, row_id)
    return row


@dataclass
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    settings: Settings = Depends(get_settings),
) -> PageParams:
    size = min(limit or settings.default_page_size, settings.max_page_size)
    return PageParams(page=page, limit=size)


def caller_id(x_user_id: int | None = Header(None)) -> int | None:
    """Optional caller identity, used for audit attribution."""
    return x_user_id


def require_permission(permission: str):
    """Dependency factory guarding a route with a dotted permission key."""

    async def guard(
        x_user_id: int | None = Header(None),
        settings: Settings = Depends(get_settings),
        db: AsyncSession = Depends(get_db),
    ) -> int | None:
        if not settings.enforce_permissions:
            return x_user_id
        if x_user_id is None:
            raise AuthenticationRequiredError()
        access = await effective_access(db, x_user_id)
        if not access.allows(permission):
            logger.warning(
                f"Permission {permission} denied",
                extra={"user_id": x_user_id},
            )
            raise PermissionDeniedError(permission)
        return x_user_id

    return guard


def apply_update(row, changes: dict) -> None:
    """Copy partial-update fields onto a row; nulls for NOT NULL columns are ignored."""
    columns = row.__table__.columns
    for field, value in changes.items():
        if value is None and field in columns and not columns[field].nullable:
            continue
        setattr(row, field, value)
