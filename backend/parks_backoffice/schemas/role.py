"""Role Schemas — roles, directory users, role assignments and permission checks.

Invariants:
    - Role.permissions leaves must be booleans (nested dicts of bools)
    - Slugs are lowercase kebab/snake identifiers
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from parks_backoffice.schemas.common import ORMModel, RequestModel


def _check_permission_tree(tree: Any, path: str = "") -> None:
    if not isinstance(tree, dict):
        raise ValueError(f"permissions{path} must be an object")
    for key, value in tree.items():
        if isinstance(value, dict):
            _check_permission_tree(value, f"{path}.{key}")
        elif not isinstance(value, bool):
            raise ValueError(f"permissions{path}.{key} must be true, false or an object")


class RoleCreate(RequestModel):
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(pattern=r"^[a-z0-9][a-z0-9_-]*$", max_length=100)
    description: str | None = None
    level: int = Field(5, ge=1, le=10)
    color: str | None = Field(None, max_length=20)
    permissions: dict[str, Any] = {}
    is_active: bool = True

    @field_validator("permissions")
    @classmethod
    def check_permissions(cls, v: dict) -> dict:
        _check_permission_tree(v)
        return v


class RoleUpdate(RequestModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    level: int | None = Field(None, ge=1, le=10)
    color: str | None = Field(None, max_length=20)
    permissions: dict[str, Any] | None = None
    is_active: bool | None = None

    @field_validator("permissions")
    @classmethod
    def check_permissions(cls, v: dict | None) -> dict | None:
        if v is not None:
            _check_permission_tree(v)
        return v


class RoleResponse(ORMModel):
    id: int
    name: str
    slug: str
    description: str | None
    level: int
    color: str | None
    permissions: dict[str, Any]
    is_active: bool


class UserCreate(RequestModel):
    username: str = Field(min_length=3, max_length=100)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=200)
    full_name: str | None = Field(None, max_length=200)
    municipality_id: int | None = None
    is_active: bool = True


class UserResponse(ORMModel):
    id: int
    username: str
    email: str
    full_name: str | None
    municipality_id: int | None
    is_active: bool
    created_at: datetime


class RoleAssignmentCreate(RequestModel):
    role_id: int
    is_primary: bool = False
    expires_at: datetime | None = None


class RoleAssignmentResponse(BaseModel):
    role_id: int
    role_name: str
    role_slug: str
    level: int
    is_primary: bool
    is_active: bool
    assigned_at: datetime
    expires_at: datetime | None


class EffectivePermissions(BaseModel):
    user_id: int
    roles: list[str]
    highest_level: int | None
    permissions: dict[str, Any]


class PermissionCheck(BaseModel):
    user_id: int
    permission: str
    allowed: bool
