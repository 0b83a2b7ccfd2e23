"""Permission tree tests — merging role blobs, key resolution, levels and expiry."""

from datetime import datetime, timedelta, timezone

from parks_backoffice.core.permissions import (
    has_permission, has_role_level, is_assignment_active, merge_permissions,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


# --- merge_permissions --------------------------------------------------------

def test_merge_combines_sibling_keys():
    merged = merge_permissions({"parks": {"view": True}}, {"parks": {"edit": True}})
    assert merged == {"parks": {"view": True, "edit": True}}


def test_merge_true_beats_nested_tree():
    assert merge_permissions({"parks": {"view": True}}, {"parks": True}) == {"parks": True}
    assert merge_permissions({"parks": True}, {"parks": {"view": False}}) == {"parks": True}


def test_merge_grant_overrides_denial():
    assert merge_permissions({"assets": False}, {"assets": True}) == {"assets": True}


def test_merge_skips_empty_trees():
    assert merge_permissions(None, {}, {"events": {"view": True}}) == {
        "events": {"view": True},
    }


def test_merge_does_not_mutate_inputs():
    first = {"parks": {"view": True}}
    merge_permissions(first, {"parks": {"edit": True}})
    assert first == {"parks": {"view": True}}


# --- has_permission -----------------------------------------------------------

def test_leaf_true_grants():
    assert has_permission({"parks": {"edit": True}}, "parks.edit")


def test_colon_separator_is_accepted():
    assert has_permission({"parks": {"edit": True}}, "parks:edit")


def test_true_module_grants_everything_below():
    assert has_permission({"parks": True}, "parks.delete")


def test_root_all_grants_everything():
    assert has_permission({"all": True}, "roles.manage")


def test_module_all_grants_module_actions():
    perms = {"assets": {"all": True}}
    assert has_permission(perms, "assets.delete")
    assert not has_permission(perms, "parks.view")


def test_false_unknown_and_partial_keys_deny():
    perms = {"parks": {"view": False, "edit": True}}
    assert not has_permission(perms, "parks.view")
    assert not has_permission(perms, "parks.delete")
    assert not has_permission(perms, "parks")
    assert not has_permission(None, "parks.view")
    assert not has_permission(perms, "")


# --- levels and expiry --------------------------------------------------------

def test_lower_level_outranks_higher():
    assert has_role_level([1], 3)
    assert has_role_level([5, 3], 3)
    assert not has_role_level([4], 3)
    assert not has_role_level([], 10)


def test_assignment_without_expiry_is_active():
    assert is_assignment_active(True, None, NOW)


def test_inactive_assignment_never_counts():
    assert not is_assignment_active(False, NOW + timedelta(days=1), NOW)


def test_expired_assignment_is_inactive():
    assert not is_assignment_active(True, NOW - timedelta(seconds=1), NOW)
    assert is_assignment_active(True, NOW + timedelta(days=1), NOW)


def test_naive_expiry_is_read_as_utc():
    naive = datetime(2024, 6, 1, 11, 0)
    assert not is_assignment_active(True, naive, NOW)
