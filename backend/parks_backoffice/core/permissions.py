"""Permission Trees — merging role permission blobs and resolving dotted permission keys.

Invariants:
    - A permission tree is a nested dict whose leaves are booleans
    - True at any level grants everything below it
    - "all": True at the root (or inside a module) grants everything at that level
    - Unknown keys and non-dict, non-True values deny
    - Lower role level = more authority (1 is the super administrator)

Design Decisions:
    - Keys accept "." or ":" separators ("parks.edit" == "parks:edit") so route guards
      and stored role blobs can use either spelling
    - Merge is an OR: combining roles can only add permissions, never remove them
"""

import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

_SEPARATORS = re.compile(r"[.:]")


def merge_permissions(*trees: Mapping[str, Any] | None) -> dict:
    """Deep-merge permission trees; True beats anything, dicts merge recursively."""
    merged: dict = {}
    for tree in trees:
        if not tree:
            continue
        for key, value in tree.items():
            current = merged.get(key)
            if current is True or value is True:
                merged[key] = True
            elif isinstance(value, Mapping):
                base = current if isinstance(current, dict) else None
                merged[key] = merge_permissions(base, value)
            elif key not in merged:
                merged[key] = value
    return merged


def has_permission(permissions: Mapping[str, Any] | None, key: str) -> bool:
    if not permissions or not key:
        return False
    node: Any = permissions
    for part in _SEPARATORS.split(key):
        if not isinstance(node, Mapping):
            return False
        if node.get("all") is True:
            return True
        if part not in node:
            return False
        node = node[part]
        if node is True:
            return True
    return False


def has_role_level(levels: Iterable[int], required_level: int) -> bool:
    """True if any of the caller's role levels is at least as privileged as required."""
    return any(level <= required_level for level in levels)


def is_assignment_active(
    is_active: bool, expires_at: datetime | None, now: datetime | None = None,
) -> bool:
    """A user-role assignment counts while flagged active and not yet expired.

    Naive timestamps (SQLite round-trips) are read as UTC.
    """
    if not is_active:
        return False
    if expires_at is None:
        return True
    now = now or datetime.now(timezone.utc)
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at > now
