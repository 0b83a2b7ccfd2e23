"""Role Service — effective permissions and role levels of a user.

Invariants:
    - Only active assignments of active roles that have not expired count
    - Effective permissions are the OR-merge of every counting role's tree
"""

from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.core.permissions import (
    is_assignment_active, merge_permissions, has_permission,
)
from parks_backoffice.models.role import Role, UserRole


@dataclass
class EffectiveAccess:
    roles: list[Role] = field(default_factory=list)
    permissions: dict = field(default_factory=dict)

    @property
    def levels(self) -> list[int]:
        return [r.level for r in self.roles]

    def allows(self, key: str) -> bool:
        return has_permission(self.permissions, key)


async def active_roles(db: AsyncSession, user_id: int) -> list[Role]:
    result = await db.execute(
        select(Role, UserRole)
        .join(UserRole, UserRole.role_id == Role.id)
        .where(UserRole.user_id == user_id, Role.is_active.is_(True))
        .order_by(Role.level, Role.id),
    )
    return [
        role for role, assignment in result.all()
        if is_assignment_active(assignment.is_active, assignment.expires_at)
    ]


async def effective_access(db: AsyncSession, user_id: int) -> EffectiveAccess:
    roles = await active_roles(db, user_id)
    return EffectiveAccess(
        roles=roles,
        permissions=merge_permissions(*(r.permissions for r in roles)),
    )
