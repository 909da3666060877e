"""Permission set.

Per-owner collection of granted and negated permission paths with
most-specific-match lookup.
"""

from typing import Dict, Iterator, List, Optional, Tuple, Union

from ..core.value_objects import (
    NEGATING,
    ParsedPermission,
    Permission,
    PermissionMatch,
    PermissionPath,
    parse_permission,
    parse_query,
)


PathLike = Union[str, PermissionPath]


class PermissionSet:
    """Permissions held by a single user, group, or the default set.

    Entries are keyed by path identity, so "a.b" and "a.b.*" are separate
    entries that can coexist with different permissions.
    """

    def __init__(self):
        self._entries: Dict[PermissionPath, Permission] = {}

    # Mutators

    def assign(self, permission: str) -> Optional[Permission]:
        """Store a permission, replacing whatever was at that exact path.

        Args:
            permission: Permission string, e.g. "-a.b.*" or "a.b: arg"

        Returns:
            The permission previously at that path, or None

        Raises:
            InvalidPathError: If the permission string is malformed
        """
        parsed = parse_permission(permission)
        return self.set(parsed)

    def set(self, parsed: ParsedPermission) -> Optional[Permission]:
        """Store an already-parsed permission."""
        new_value = Permission(permits=not parsed.negates, argument=parsed.argument)
        old_value = self._entries.get(parsed.path)
        self._entries[parsed.path] = new_value
        return old_value

    def assign_negating(self, path: PathLike) -> Optional[Permission]:
        """Store an explicit negation at the given path."""
        path = self._as_path(path)
        old_value = self._entries.get(path)
        self._entries[path] = NEGATING
        return old_value

    def revoke(self, permission: PathLike) -> Optional[Permission]:
        """Remove the entry at the exact path; negation markers and arguments are ignored.

        Returns:
            The removed permission, or None when nothing was there
        """
        path = self._as_path(permission)
        return self._entries.pop(path, None)

    def clear(self) -> None:
        self._entries.clear()

    # Lookups

    def get_most_relevant(self, query: PathLike) -> Optional[PermissionMatch]:
        """Find the most specific entry covering the queried path.

        The exact plain entry is checked first, then each ancestor from the
        deepest up, where a wildcard entry beats a plain entry at the same
        ancestor.

        Args:
            query: Plain path being checked

        Returns:
            The winning match, or None when no entry covers the path
        """
        query = parse_query(query) if isinstance(query, str) else query
        segments = query.segments

        exact = self._entries.get(PermissionPath(segments))
        if exact is not None:
            return PermissionMatch(PermissionPath(segments), exact, (len(segments), 1))

        for depth in range(len(segments) - 1, -1, -1):
            ancestor = segments[:depth]

            wildcard_path = PermissionPath(ancestor, True)
            found = self._entries.get(wildcard_path)
            if found is not None:
                return PermissionMatch(wildcard_path, found, (depth, 1))

            if depth:
                plain_path = PermissionPath(ancestor)
                found = self._entries.get(plain_path)
                if found is not None:
                    return PermissionMatch(plain_path, found, (depth, 0))

        return None

    def get_permission(self, query: PathLike) -> Optional[Permission]:
        match = self.get_most_relevant(query)
        return match.permission if match else None

    def has_permission(self, query: PathLike) -> bool:
        match = self.get_most_relevant(query)
        return match is not None and match.permits

    def negates_permission(self, query: PathLike) -> bool:
        match = self.get_most_relevant(query)
        return match is not None and match.negates

    def get_permission_arg(self, query: PathLike) -> Optional[str]:
        """Get the argument of the winning entry when it permits."""
        match = self.get_most_relevant(query)
        if match is None or match.negates:
            return None
        return match.argument

    def has_permission_exactly(self, permission: PathLike) -> bool:
        """Whether a permitting entry is stored at exactly this path."""
        found = self._entries.get(self._as_path(permission))
        return found is not None and found.permits

    def negates_permission_exactly(self, permission: PathLike) -> bool:
        """Whether a negating entry is stored at exactly this path."""
        found = self._entries.get(self._as_path(permission))
        return found is not None and found.negates

    def has_any_permitting_at_or_under(self, query: PathLike) -> bool:
        """Whether any permitting entry sits at or below the queried path."""
        query = self._as_path(query).as_plain()
        return any(
            permission.permits and path.is_at_or_under(query)
            for path, permission in self._entries.items()
        )

    def has_any_at_or_under(self, query: PathLike) -> bool:
        """Whether any entry, permitting or negating, sits at or below the queried path."""
        query = self._as_path(query).as_plain()
        return any(path.is_at_or_under(query) for path in self._entries)

    def has_permission_or_any_under(self, query: PathLike) -> bool:
        """Whether the path is permitted, or anything beneath it is."""
        return self.has_permission(query) or self.has_any_permitting_at_or_under(query)

    # Inspection

    def entries(self) -> List[Tuple[PermissionPath, Permission]]:
        """Get all entries ordered by path segments."""
        return sorted(self._entries.items(), key=lambda item: (item[0].segments, item[0].is_wildcard))

    def get_permissions_as_strings(self, include_args: bool = False) -> List[str]:
        return [permission.describe(path, include_args) for path, permission in self.entries()]

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PermissionPath]:
        return iter(path for path, _ in self.entries())

    def __contains__(self, permission: object) -> bool:
        if not isinstance(permission, (str, PermissionPath)):
            return False
        return self._as_path(permission) in self._entries

    def __repr__(self) -> str:
        return f"PermissionSet({self.get_permissions_as_strings(include_args=True)!r})"

    @staticmethod
    def _as_path(permission: PathLike) -> PermissionPath:
        if isinstance(permission, PermissionPath):
            return permission
        return parse_permission(permission).path
