"""Unit tests for PermissionSet lookup and mutation."""

import pytest

from neo_permissions.core.exceptions import InvalidPathError
from neo_permissions.core.value_objects import Permission, PermissionPath


class TestPermissionSetAssignment:
    """Test storing and replacing entries."""

    def test_assign_returns_previous_value(self, permission_set):
        """Test assigning over an existing path returns what was there."""
        assert permission_set.assign("a.b: first") is None

        old_value = permission_set.assign("-a.b")

        assert old_value == Permission(permits=True, argument="first")
        assert permission_set.negates_permission_exactly("a.b")
        assert len(permission_set) == 1

    def test_assign_is_idempotent(self, permission_set):
        """Test assigning the same permission twice keeps one entry."""
        permission_set.assign("a.b")
        permission_set.assign("a.b")

        assert len(permission_set) == 1
        assert permission_set.has_permission_exactly("a.b")

    def test_plain_and_wildcard_entries_coexist(self, permission_set):
        """Test a.b and a.b.* are stored separately."""
        permission_set.assign("a.b")
        permission_set.assign("-a.b.*")

        assert len(permission_set) == 2
        assert "a.b" in permission_set
        assert "a.b.*" in permission_set

    def test_assign_negating(self, permission_set):
        """Test an explicit negation can be stored from a path."""
        permission_set.assign("a")
        permission_set.assign_negating(PermissionPath.parse("a.b"))

        assert not permission_set.has_permission("a.b.c")
        assert permission_set.has_permission("a.c")

    def test_malformed_permission_leaves_set_untouched(self, permission_set):
        """Test a parse failure stores nothing."""
        with pytest.raises(InvalidPathError):
            permission_set.assign("a..b")

        assert permission_set.is_empty()


class TestPermissionSetRevocation:
    """Test removing entries."""

    def test_revoke_returns_removed_value(self, permission_set):
        """Test revoking returns the entry and empties the set."""
        permission_set.assign("a.b: arg")

        removed = permission_set.revoke("a.b")

        assert removed == Permission(permits=True, argument="arg")
        assert permission_set.is_empty()

    def test_revoke_ignores_negation_and_argument(self, permission_set):
        """Test the revoked path is matched by identity only."""
        permission_set.assign("-a.b")

        assert permission_set.revoke("a.b: whatever") is not None
        assert permission_set.is_empty()

    def test_revoke_absent_is_noop(self, permission_set):
        """Test revoking a missing path returns None and changes nothing."""
        permission_set.assign("a")

        assert permission_set.revoke("a.b") is None
        assert permission_set.revoke("a.*") is None
        assert len(permission_set) == 1

    def test_assign_then_revoke_round_trip(self, permission_set):
        """Test assigning and revoking the same path restores the prior state."""
        permission_set.assign("x")
        before = permission_set.get_permissions_as_strings(include_args=True)

        permission_set.assign("y.z: arg")
        permission_set.revoke("y.z")

        assert permission_set.get_permissions_as_strings(include_args=True) == before


class TestPermissionSetLookup:
    """Test most-specific-match resolution within one set."""

    def test_grant_covers_descendants(self, permission_set):
        """Test a plain grant applies to itself and below only."""
        permission_set.assign("a.b")

        assert permission_set.has_permission("a.b")
        assert permission_set.has_permission("a.b.c.d")
        assert not permission_set.has_permission("a")
        assert not permission_set.has_permission("a.c")

    def test_wildcard_grant_excludes_itself(self, permission_set):
        """Test a.b.* does not grant a.b."""
        permission_set.assign("a.b.*")

        assert not permission_set.has_permission("a.b")
        assert permission_set.has_permission("a.b.c")

    def test_root_wildcard(self, permission_set):
        """Test * grants everything."""
        permission_set.assign("*")

        assert permission_set.has_permission("anything")
        assert permission_set.has_permission("anything.at.all")

    def test_deeper_negation_wins(self, permission_set):
        """Test a more specific negation overrides a broader grant."""
        permission_set.assign("a")
        permission_set.assign("-a.b")

        assert permission_set.has_permission("a")
        assert not permission_set.has_permission("a.b")
        assert not permission_set.has_permission("a.b.c")
        assert permission_set.negates_permission("a.b.c")
        assert permission_set.has_permission("a.c")

    def test_wildcard_beats_plain_on_same_ancestor(self, permission_set):
        """Test a.b.* outranks a.b for paths under a.b, but not for a.b itself."""
        permission_set.assign("a.b")
        permission_set.assign("-a.b.*")

        assert permission_set.has_permission("a.b")
        assert not permission_set.has_permission("a.b.c")

    def test_match_rank(self, permission_set):
        """Test ranks distinguish exact entries from covering ancestors."""
        permission_set.assign("a.b")

        exact = permission_set.get_most_relevant("a.b")
        inherited = permission_set.get_most_relevant("a.b.c")

        assert exact.rank == (2, 1)
        assert inherited.rank == (2, 0)
        assert inherited.path == PermissionPath.parse("a.b")
        assert permission_set.get_most_relevant("z") is None

    def test_no_match_is_not_a_negation(self, permission_set):
        """Test absence is reported as no information."""
        assert permission_set.get_permission("a") is None
        assert not permission_set.has_permission("a")
        assert not permission_set.negates_permission("a")

    def test_argument_of_winning_entry(self, permission_set):
        """Test the argument travels with the covering grant."""
        permission_set.assign("a.b: hello")
        permission_set.assign("-a.b.secret: nope")

        assert permission_set.get_permission_arg("a.b.c") == "hello"
        assert permission_set.get_permission_arg("a.b.secret") is None

    def test_sub_permissions(self, permission_set):
        """Test detection of grants beneath a path."""
        permission_set.assign("a.b.c")
        permission_set.assign("-x.y")

        assert not permission_set.has_permission("a.b")
        assert permission_set.has_permission_or_any_under("a.b")
        assert permission_set.has_permission_or_any_under("a")
        assert not permission_set.has_permission_or_any_under("x")
        assert not permission_set.has_permission_or_any_under("q")


class TestPermissionSetInspection:
    """Test listing entries."""

    def test_entries_are_ordered(self, permission_set):
        """Test strings come back ordered by path."""
        for permission in ["b", "a.*", "-a.c: x", "a"]:
            permission_set.assign(permission)

        assert permission_set.get_permissions_as_strings() == ["a", "a.*", "-a.c", "b"]
        assert permission_set.get_permissions_as_strings(include_args=True) == ["a", "a.*", "-a.c: x", "b"]
        assert [str(path) for path in permission_set] == ["a", "a.*", "a.c", "b"]

    def test_contains_ignores_non_paths(self, permission_set):
        """Test membership checks tolerate unrelated objects."""
        permission_set.assign("a")

        assert "a" in permission_set
        assert 3 not in permission_set
