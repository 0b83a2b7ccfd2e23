"""Roles & Users — role catalogue, directory users, role assignments and permission queries.

Invariants:
    - Role slugs, usernames and user emails are unique (409)
    - A user holds a given role at most once; re-assigning an inactive assignment revives it
    - At most one primary role per user
    - Mutations are guarded by require_permission (no-op unless enforcement is on)
    - With enforcement on, a caller cannot grant a role above their own authority level

Design Decisions:
    - Level 1 is the highest authority; lower numbers outrank higher ones
    - Roles still assigned to users cannot be deleted; deactivate them instead
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import apply_update, get_or_404, require_permission
from parks_backoffice.config import Settings, get_settings
from parks_backoffice.core.errors import (
    BusinessRuleError, ConflictError, InvalidInputError, PermissionDeniedError,
    ResourceNotFoundError,
)
from parks_backoffice.core.permissions import has_role_level, is_assignment_active
from parks_backoffice.db.base import utcnow
from parks_backoffice.infrastructure.database import atomic, get_db
from parks_backoffice.models.park import Municipality
from parks_backoffice.models.role import Role, User, UserRole
from parks_backoffice.schemas.role import (
    EffectivePermissions, PermissionCheck, RoleAssignmentCreate,
    RoleAssignmentResponse, RoleCreate, RoleResponse, RoleUpdate, UserCreate,
    UserResponse,
)
from parks_backoffice.services.role_service import effective_access

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["roles"])

MANAGE_ROLES = "roles.manage"
ASSIGN_ROLES = "users.assign_roles"
MANAGE_USERS = "users.manage"


async def _ensure_free(
    db: AsyncSession, model, field: str, value: str, label: str,
) -> None:
    query = select(model.id).where(getattr(model, field) == value)
    if (await db.execute(query.limit(1))).first():
        raise ConflictError(f"{label} '{value}' already exists", field)


# ─── Roles ───────────────────────────────────────────────────────

@router.get("/roles", response_model=list[RoleResponse])
async def list_roles(
    include_inactive: bool = False, db: AsyncSession = Depends(get_db),
):
    query = select(Role).order_by(Role.level, Role.name)
    if not include_inactive:
        query = query.where(Role.is_active.is_(True))
    return (await db.execute(query)).scalars().all()


@router.get("/roles/{role_id}", response_model=RoleResponse)
async def get_role(role_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Role, role_id)


@router.post(
    "/roles", response_model=RoleResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(MANAGE_ROLES))],
)
async def create_role(body: RoleCreate, db: AsyncSession = Depends(get_db)):
    await _ensure_free(db, Role, "slug", body.slug, "Role")
    role = Role(**body.model_dump())
    db.add(role)
    await db.commit()
    await db.refresh(role)
    logger.info(f"Role {role.slug} created (level {role.level})")
    return role


@router.put(
    "/roles/{role_id}", response_model=RoleResponse,
    dependencies=[Depends(require_permission(MANAGE_ROLES))],
)
async def update_role(
    role_id: int, body: RoleUpdate, db: AsyncSession = Depends(get_db),
):
    role = await get_or_404(db, Role, role_id)
    apply_update(role, body.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(role)
    return role


@router.delete(
    "/roles/{role_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(MANAGE_ROLES))],
)
async def delete_role(role_id: int, db: AsyncSession = Depends(get_db)):
    role = await get_or_404(db, Role, role_id)
    holders = await db.scalar(
        select(func.count(UserRole.id)).where(UserRole.role_id == role_id),
    )
    if holders:
        raise BusinessRuleError(
            f"Role {role.slug} is assigned to {holders} user(s)", code="ROLE_IN_USE",
        )
    await db.delete(role)
    await db.commit()


# ─── Users ───────────────────────────────────────────────────────

@router.get("/users", response_model=list[UserResponse])
async def list_users(
    municipality_id: int | None = None,
    search: str | None = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    query = select(User).order_by(User.username)
    if municipality_id is not None:
        query = query.where(User.municipality_id == municipality_id)
    if search:
        query = query.where(User.username.ilike(f"%{search}%") | User.full_name.ilike(f"%{search}%"))
    return (await db.execute(query)).scalars().all()


@router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, User, user_id)


@router.post(
    "/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(MANAGE_USERS))],
)
async def create_user(body: UserCreate, db: AsyncSession = Depends(get_db)):
    await _ensure_free(db, User, "username", body.username, "Username")
    await _ensure_free(db, User, "email", body.email, "Email")
    if body.municipality_id is not None and await db.get(Municipality, body.municipality_id) is None:
        raise InvalidInputError(
            f"Municipality {body.municipality_id} does not exist", "municipality_id",
        )
    user = User(**body.model_dump())
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


# ─── Role Assignments ────────────────────────────────────────────

def _assignment_response(assignment: UserRole, role: Role) -> RoleAssignmentResponse:
    return RoleAssignmentResponse(
        role_id=role.id,
        role_name=role.name,
        role_slug=role.slug,
        level=role.level,
        is_primary=assignment.is_primary,
        is_active=is_assignment_active(assignment.is_active, assignment.expires_at),
        assigned_at=assignment.assigned_at,
        expires_at=assignment.expires_at,
    )


@router.get("/users/{user_id}/roles", response_model=list[RoleAssignmentResponse])
async def list_user_roles(user_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, User, user_id)
    result = await db.execute(
        select(UserRole, Role)
        .join(Role, Role.id == UserRole.role_id)
        .where(UserRole.user_id == user_id)
        .order_by(Role.level, Role.id),
    )
    return [_assignment_response(a, r) for a, r in result.all()]


@router.post(
    "/users/{user_id}/roles", response_model=RoleAssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_role(
    user_id: int,
    body: RoleAssignmentCreate,
    caller: int | None = Depends(require_permission(ASSIGN_ROLES)),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    await get_or_404(db, User, user_id)
    role = await db.get(Role, body.role_id)
    if role is None or not role.is_active:
        raise InvalidInputError(f"Role {body.role_id} does not exist or is inactive", "role_id")
    if settings.enforce_permissions:
        access = await effective_access(db, caller)
        if not has_role_level(access.levels, role.level):
            raise PermissionDeniedError(f"level {role.level} role assignment")

    result = await db.execute(
        select(UserRole).where(UserRole.user_id == user_id, UserRole.role_id == role.id),
    )
    assignment = result.scalar_one_or_none()
    if assignment is not None and is_assignment_active(
        assignment.is_active, assignment.expires_at,
    ):
        raise ConflictError(f"User already holds role {role.slug}", "role_id")

    async with atomic(db):
        if body.is_primary:
            await db.execute(
                update(UserRole).where(UserRole.user_id == user_id).values(is_primary=False),
            )
        if assignment is None:
            assignment = UserRole(user_id=user_id, role_id=role.id)
            db.add(assignment)
        assignment.is_active = True
        assignment.is_primary = body.is_primary
        assignment.expires_at = body.expires_at
        assignment.assigned_by = caller
        assignment.assigned_at = utcnow()
        await db.flush()
    await db.refresh(assignment)
    logger.info(f"Role {role.slug} assigned", extra={"user_id": user_id})
    return _assignment_response(assignment, role)


@router.delete(
    "/users/{user_id}/roles/{role_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission(ASSIGN_ROLES))],
)
async def remove_role(user_id: int, role_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(UserRole).where(UserRole.user_id == user_id, UserRole.role_id == role_id),
    )
    assignment = result.scalar_one_or_none()
    if assignment is None:
        raise ResourceNotFoundError("UserRole", f"{user_id}/{role_id}")
    await db.delete(assignment)
    await db.commit()
    logger.info(f"Role {role_id} removed", extra={"user_id": user_id})


# ─── Permissions ─────────────────────────────────────────────────

@router.get("/users/{user_id}/permissions", response_model=EffectivePermissions)
async def user_permissions(user_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, User, user_id)
    access = await effective_access(db, user_id)
    return EffectivePermissions(
        user_id=user_id,
        roles=[r.slug for r in access.roles],
        highest_level=min(access.levels, default=None),
        permissions=access.permissions,
    )


@router.get("/users/{user_id}/permissions/check", response_model=PermissionCheck)
async def check_permission(
    user_id: int,
    permission: str = Query(min_length=1, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    await get_or_404(db, User, user_id)
    access = await effective_access(db, user_id)
    return PermissionCheck(
        user_id=user_id, permission=permission, allowed=access.allows(permission),
    )
