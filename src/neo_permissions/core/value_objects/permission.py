"""Permission value objects.

ONLY the stored permission and lookup results - what a permission set holds
at a path, and what a lookup found.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .permission_path import ARGUMENT_DELIMITER, NEGATION_PREFIX, PermissionPath


@dataclass(frozen=True)
class Permission:
    """A permission stored at a path: a grant or a negation, with an optional argument."""

    permits: bool = True
    argument: Optional[str] = None

    @property
    def negates(self) -> bool:
        """Whether this permission denies rather than grants."""
        return not self.permits

    @property
    def has_argument(self) -> bool:
        return self.argument is not None

    def describe(self, path: PermissionPath, include_argument: bool = True) -> str:
        """Render this permission at the given path in permission syntax."""
        text = f"{NEGATION_PREFIX if self.negates else ''}{path}"
        if include_argument and self.argument is not None:
            text = f"{text}{ARGUMENT_DELIMITER} {self.argument}"
        return text


PERMITTING = Permission(permits=True)
NEGATING = Permission(permits=False)


@dataclass(frozen=True)
class PermissionMatch:
    """Result of looking a path up in a permission set.

    ``rank`` orders matches by specificity: the number of matched segments
    first, then whether the entry addresses the queried position explicitly
    (a plain entry at the queried path or a wildcard entry on an ancestor)
    rather than covering it implicitly as an ancestor.
    """

    path: PermissionPath
    permission: Permission
    rank: Tuple[int, int]

    @property
    def permits(self) -> bool:
        return self.permission.permits

    @property
    def negates(self) -> bool:
        return self.permission.negates

    @property
    def argument(self) -> Optional[str]:
        return self.permission.argument

    def is_more_relevant_than(self, other: Optional["PermissionMatch"]) -> bool:
        """Whether this match strictly outranks another (ties keep the other)."""
        return other is None or self.rank > other.rank
