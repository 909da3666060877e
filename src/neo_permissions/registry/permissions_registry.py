"""Permissions registry.

The orchestrating core: owns the permission sets of users, groups and the
default set, owns the membership graphs, and resolves permission queries
across direct grants, transitive group membership and defaults.

Resolution picks the most specific matching entry across every source the
subject can reach. Sources are consulted in a fixed order (own set, then groups
in breadth-first membership order) and an equally specific match found later
never replaces an earlier one, so direct entries beat inherited ones at equal
specificity. For users the default set is a fallback only: it is consulted
when neither the user's own set nor any reachable group covers the permission.

No locking happens here; see ThreadsafePermissionsRegistry.
"""

import logging
from typing import (
    Callable,
    Dict,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Optional,
    TypeVar,
)

from ..core.exceptions import (
    GroupMissingPermissionError,
    InvalidOperationError,
    PermissionNotDefaultError,
    UserMissingPermissionError,
)
from ..core.value_objects import (
    Permission,
    PermissionMatch,
    PermissionPath,
    PermissionStatus,
    parse_permission,
    parse_query,
)
from .membership_graph import MembershipGraph
from .permission_set import PermissionSet

logger = logging.getLogger(__name__)

ID = TypeVar("ID", bound=Hashable)


class PermissionsRegistry(Generic[ID]):
    """In-memory registry of user, group and default permissions.

    User ids are opaque hashable values converted to and from strings with
    the supplied converters; group ids are any hashable value. Entities are
    created by assignment only and dropped once their last permission or
    membership is revoked.
    """

    def __init__(
        self,
        id_to_string: Callable[[ID], str] = str,
        id_from_string: Callable[[str], ID] = str,
        validate_ids: bool = False,
    ):
        """Initialize an empty registry.

        Args:
            id_to_string: Converts a user id to its canonical string
            id_from_string: Converts a canonical string back to a user id
            validate_ids: Reject user ids the converters cannot round-trip
        """
        self.id_to_string = id_to_string
        self.id_from_string = id_from_string
        self.validate_ids = validate_ids

        self._user_permissions: Dict[ID, PermissionSet] = {}
        self._group_permissions: Dict[Hashable, PermissionSet] = {}
        self._default_permissions = PermissionSet()

        self._user_groups: MembershipGraph = MembershipGraph()
        self._group_groups: MembershipGraph = MembershipGraph()
        self._default_groups: Dict[Hashable, None] = {}

    # Permission assignment

    def assign_user_permission(self, user_id: ID, permission: str) -> Optional[Permission]:
        """Grant (or negate, with a leading "-") a permission directly to a user.

        Returns:
            The permission previously stored at that exact path, or None
        """
        self._check_user_id(user_id)
        parsed = parse_permission(permission)
        old_value = self._user_permissions.setdefault(user_id, PermissionSet()).set(parsed)
        logger.debug(f"Assigned '{parsed}' to user {self._describe_user(user_id)}")
        return old_value

    def assign_group_permission(self, group_id: Hashable, permission: str) -> Optional[Permission]:
        self._check_group_id(group_id)
        parsed = parse_permission(permission)
        old_value = self._group_permissions.setdefault(group_id, PermissionSet()).set(parsed)
        logger.debug(f"Assigned '{parsed}' to group {group_id}")
        return old_value

    def assign_default_permission(self, permission: str) -> Optional[Permission]:
        parsed = parse_permission(permission)
        old_value = self._default_permissions.set(parsed)
        logger.debug(f"Assigned default permission '{parsed}'")
        return old_value

    def assign_user_permissions(self, user_id: ID, permissions: Iterable[str]) -> None:
        for permission in self._parse_all(permissions):
            self.assign_user_permission(user_id, permission)

    def assign_group_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> None:
        for permission in self._parse_all(permissions):
            self.assign_group_permission(group_id, permission)

    def assign_default_permissions(self, permissions: Iterable[str]) -> None:
        for permission in self._parse_all(permissions):
            self.assign_default_permission(permission)

    # Permission revocation

    def revoke_user_permission(self, user_id: ID, permission: str) -> Optional[Permission]:
        """Remove the entry at the exact path from a user.

        Revoking something the user does not have is a no-op.

        Returns:
            The removed permission, or None
        """
        self._check_user_id(user_id)
        path = parse_permission(permission).path
        removed = self._revoke_from(self._user_permissions, user_id, path)
        logger.debug(
            f"Revoked '{path}' from user {self._describe_user(user_id)}"
            if removed is not None
            else f"User {self._describe_user(user_id)} has no '{path}' to revoke"
        )
        return removed

    def revoke_group_permission(self, group_id: Hashable, permission: str) -> Optional[Permission]:
        self._check_group_id(group_id)
        path = parse_permission(permission).path
        removed = self._revoke_from(self._group_permissions, group_id, path)
        logger.debug(
            f"Revoked '{path}' from group {group_id}"
            if removed is not None
            else f"Group {group_id} has no '{path}' to revoke"
        )
        return removed

    def revoke_default_permission(self, permission: str) -> Optional[Permission]:
        path = parse_permission(permission).path
        removed = self._default_permissions.revoke(path)
        logger.debug(f"Revoked default permission '{path}' (present: {removed is not None})")
        return removed

    def revoke_all_user_permissions(self, user_id: ID) -> None:
        self._check_user_id(user_id)
        self._user_permissions.pop(user_id, None)

    def revoke_all_group_permissions(self, group_id: Hashable) -> None:
        self._check_group_id(group_id)
        self._group_permissions.pop(group_id, None)

    def revoke_all_default_permissions(self) -> None:
        self._default_permissions.clear()

    # Group assignment

    def assign_group_to_user(self, user_id: ID, group_id: Hashable) -> None:
        """Make a user a direct member of a group, creating both as needed."""
        self._check_user_id(user_id)
        self._check_group_id(group_id)
        if self._user_groups.add_edge(user_id, group_id):
            logger.debug(f"Assigned group {group_id} to user {self._describe_user(user_id)}")

    def assign_group_to_group(self, group_id: Hashable, parent_group_id: Hashable) -> None:
        """Make a group a direct member of another group.

        Cycles are tolerated; resolution visits each group once.
        """
        self._check_group_id(group_id)
        self._check_group_id(parent_group_id)
        if self._group_groups.add_edge(group_id, parent_group_id):
            logger.debug(f"Assigned group {parent_group_id} to group {group_id}")

    def assign_default_group(self, group_id: Hashable) -> None:
        """Make every user an implicit member of a group."""
        self._check_group_id(group_id)
        if group_id not in self._default_groups:
            self._default_groups[group_id] = None
            logger.debug(f"Assigned default group {group_id}")

    def assign_groups_to_user(self, user_id: ID, group_ids: Iterable[Hashable]) -> None:
        for group_id in group_ids:
            self.assign_group_to_user(user_id, group_id)

    def assign_groups_to_group(self, group_id: Hashable, parent_group_ids: Iterable[Hashable]) -> None:
        for parent_group_id in parent_group_ids:
            self.assign_group_to_group(group_id, parent_group_id)

    def assign_default_groups(self, group_ids: Iterable[Hashable]) -> None:
        for group_id in group_ids:
            self.assign_default_group(group_id)

    # Group revocation

    def revoke_group_from_user(self, user_id: ID, group_id: Hashable) -> bool:
        """Remove a direct membership; returns whether one was removed."""
        self._check_user_id(user_id)
        self._check_group_id(group_id)
        return self._user_groups.remove_edge(user_id, group_id)

    def revoke_group_from_group(self, group_id: Hashable, parent_group_id: Hashable) -> bool:
        self._check_group_id(group_id)
        self._check_group_id(parent_group_id)
        return self._group_groups.remove_edge(group_id, parent_group_id)

    def revoke_default_group(self, group_id: Hashable) -> bool:
        self._check_group_id(group_id)
        if group_id not in self._default_groups:
            return False
        del self._default_groups[group_id]
        return True

    def revoke_all_groups_from_user(self, user_id: ID) -> None:
        self._check_user_id(user_id)
        self._user_groups.remove_member(user_id)

    def revoke_all_groups_from_group(self, group_id: Hashable) -> None:
        self._check_group_id(group_id)
        self._group_groups.remove_member(group_id)

    def revoke_all_default_groups(self) -> None:
        self._default_groups.clear()

    def clear(self) -> None:
        """Reset the registry: no users, groups, default permissions or default groups."""
        self._user_permissions.clear()
        self._group_permissions.clear()
        self._default_permissions.clear()
        self._user_groups.clear()
        self._group_groups.clear()
        self._default_groups.clear()
        logger.info("Permissions registry cleared")

    # Permission queries

    def user_has_permission(self, user_id: ID, permission: str) -> bool:
        """Check whether a user holds a permission.

        Considers the user's own entries, every group the user reaches
        (including default groups), then the default permissions.
        """
        match = self._resolve_for_user(user_id, permission)
        return match is not None and match.permits

    def group_has_permission(self, group_id: Hashable, permission: str) -> bool:
        """Check whether a group holds a permission through itself or its parent groups."""
        match = self._resolve_for_group(group_id, permission)
        return match is not None and match.permits

    def is_default_permission(self, permission: str) -> bool:
        match = self._resolve(self._default_sources(), permission)
        return match is not None and match.permits

    def get_user_permission_arg(self, user_id: ID, permission: str) -> Optional[str]:
        """Get the argument attached to the permission the user holds, if any."""
        return self._argument_of(self._resolve_for_user(user_id, permission))

    def get_group_permission_arg(self, group_id: Hashable, permission: str) -> Optional[str]:
        return self._argument_of(self._resolve_for_group(group_id, permission))

    def get_default_permission_arg(self, permission: str) -> Optional[str]:
        return self._argument_of(self._resolve(self._default_sources(), permission))

    def get_user_permission_status(self, user_id: ID, permission: str) -> PermissionStatus:
        return self._status_of(permission, self._resolve_for_user(user_id, permission))

    def get_group_permission_status(self, group_id: Hashable, permission: str) -> PermissionStatus:
        return self._status_of(permission, self._resolve_for_group(group_id, permission))

    def get_default_permission_status(self, permission: str) -> PermissionStatus:
        return self._status_of(permission, self._resolve(self._default_sources(), permission))

    def get_user_permission_statuses(
        self, user_id: ID, permissions: Iterable[str]
    ) -> Dict[str, PermissionStatus]:
        return {p: self.get_user_permission_status(user_id, p) for p in permissions}

    def get_group_permission_statuses(
        self, group_id: Hashable, permissions: Iterable[str]
    ) -> Dict[str, PermissionStatus]:
        return {p: self.get_group_permission_status(group_id, p) for p in permissions}

    def get_default_permission_statuses(self, permissions: Iterable[str]) -> Dict[str, PermissionStatus]:
        return {p: self.get_default_permission_status(p) for p in permissions}

    def user_has_all_permissions(self, user_id: ID, permissions: Iterable[str]) -> bool:
        return all(self.user_has_permission(user_id, p) for p in permissions)

    def user_has_any_permissions(self, user_id: ID, permissions: Iterable[str]) -> bool:
        return any(self.user_has_permission(user_id, p) for p in permissions)

    def group_has_all_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> bool:
        return all(self.group_has_permission(group_id, p) for p in permissions)

    def group_has_any_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> bool:
        return any(self.group_has_permission(group_id, p) for p in permissions)

    def are_all_default_permissions(self, permissions: Iterable[str]) -> bool:
        return all(self.is_default_permission(p) for p in permissions)

    def any_are_default_permissions(self, permissions: Iterable[str]) -> bool:
        return any(self.is_default_permission(p) for p in permissions)

    def user_has_any_sub_permission_of(self, user_id: ID, permission: str) -> bool:
        """Whether the user holds the permission, or any permission beneath it."""
        self._check_user_id(user_id)
        sources = list(self._user_sources(user_id))
        query = parse_query(permission)
        covered = self._resolve(sources, permission) is not None
        if not covered and not any(s.has_any_at_or_under(query) for s in sources):
            sources = [self._default_permissions]
        return self._has_any_sub_permission(sources, permission)

    def group_has_any_sub_permission_of(self, group_id: Hashable, permission: str) -> bool:
        self._check_group_id(group_id)
        return self._has_any_sub_permission(list(self._group_sources(group_id)), permission)

    def is_or_any_sub_permission_of_is_default(self, permission: str) -> bool:
        return self._has_any_sub_permission(list(self._default_sources()), permission)

    def assert_user_has_permission(self, user_id: ID, permission: str) -> None:
        """Raise UserMissingPermissionError unless the user holds the permission."""
        if not self.user_has_permission(user_id, permission):
            raise UserMissingPermissionError(self._describe_user(user_id), permission)

    def assert_group_has_permission(self, group_id: Hashable, permission: str) -> None:
        if not self.group_has_permission(group_id, permission):
            raise GroupMissingPermissionError(group_id, permission)

    def assert_is_default_permission(self, permission: str) -> None:
        if not self.is_default_permission(permission):
            raise PermissionNotDefaultError(permission)

    # Group queries

    def user_has_group(self, user_id: ID, group_id: Hashable) -> bool:
        """Whether the user belongs to the group directly, transitively, or by default."""
        self._check_user_id(user_id)
        self._check_group_id(group_id)
        return group_id in self._groups_reachable_by_user(user_id)

    def group_extends_from_group(self, group_id: Hashable, parent_group_id: Hashable) -> bool:
        self._check_group_id(group_id)
        self._check_group_id(parent_group_id)
        return parent_group_id in self._group_groups.get_all_groups_of(group_id)

    def is_default_group(self, group_id: Hashable) -> bool:
        """Whether every user reaches the group through the default groups."""
        self._check_group_id(group_id)
        return group_id in self._group_groups.expand(self._default_groups)

    def get_groups_of_user(self, user_id: ID) -> List[Hashable]:
        self._check_user_id(user_id)
        return self._user_groups.get_groups_of(user_id)

    def get_groups_of_group(self, group_id: Hashable) -> List[Hashable]:
        self._check_group_id(group_id)
        return self._group_groups.get_groups_of(group_id)

    def get_default_groups(self) -> List[Hashable]:
        return list(self._default_groups)

    def get_all_groups_of_user(self, user_id: ID) -> List[Hashable]:
        """Every group the user reaches, in resolution order."""
        self._check_user_id(user_id)
        return self._groups_reachable_by_user(user_id)

    def get_all_groups_of_group(self, group_id: Hashable) -> List[Hashable]:
        self._check_group_id(group_id)
        return self._group_groups.get_all_groups_of(group_id)

    # Listing

    def get_user_permissions(self, user_id: ID) -> List[str]:
        self._check_user_id(user_id)
        return self._strings_of(self._user_permissions.get(user_id), include_args=False)

    def get_user_permissions_with_args(self, user_id: ID) -> List[str]:
        self._check_user_id(user_id)
        return self._strings_of(self._user_permissions.get(user_id), include_args=True)

    def get_group_permissions(self, group_id: Hashable) -> List[str]:
        self._check_group_id(group_id)
        return self._strings_of(self._group_permissions.get(group_id), include_args=False)

    def get_group_permissions_with_args(self, group_id: Hashable) -> List[str]:
        self._check_group_id(group_id)
        return self._strings_of(self._group_permissions.get(group_id), include_args=True)

    def get_default_permissions(self) -> List[str]:
        return self._default_permissions.get_permissions_as_strings(include_args=False)

    def get_default_permissions_with_args(self) -> List[str]:
        return self._default_permissions.get_permissions_as_strings(include_args=True)

    def get_users(self) -> List[ID]:
        """Every user with permissions or group memberships."""
        users = dict.fromkeys(self._user_permissions)
        users.update(dict.fromkeys(self._user_groups.members()))
        return list(users)

    def get_group_names(self) -> List[Hashable]:
        """Every group that holds permissions, has parents, or is referenced."""
        groups = dict.fromkeys(self._group_permissions)
        groups.update(dict.fromkeys(self._group_groups.members()))
        groups.update(dict.fromkeys(self._group_groups.referenced_groups()))
        groups.update(dict.fromkeys(self._user_groups.referenced_groups()))
        groups.update(self._default_groups)
        return list(groups)

    # Internals

    def _resolve_for_user(self, user_id: ID, permission: str) -> Optional[PermissionMatch]:
        self._check_user_id(user_id)
        match = self._resolve(self._user_sources(user_id), permission)
        if match is None:
            match = self._default_permissions.get_most_relevant(parse_query(permission))
        return match

    def _resolve_for_group(self, group_id: Hashable, permission: str) -> Optional[PermissionMatch]:
        self._check_group_id(group_id)
        return self._resolve(self._group_sources(group_id), permission)

    @staticmethod
    def _resolve(sources: Iterable[PermissionSet], permission: str) -> Optional[PermissionMatch]:
        query = parse_query(permission)
        best: Optional[PermissionMatch] = None

        for permission_set in sources:
            match = permission_set.get_most_relevant(query)
            if match is not None and match.is_more_relevant_than(best):
                best = match

        return best

    def _user_sources(self, user_id: ID) -> Iterator[PermissionSet]:
        own = self._user_permissions.get(user_id)
        if own is not None:
            yield own

        yield from self._sets_of(self._groups_reachable_by_user(user_id))

    def _group_sources(self, group_id: Hashable) -> Iterator[PermissionSet]:
        own = self._group_permissions.get(group_id)
        if own is not None:
            yield own

        yield from self._sets_of(self._group_groups.get_all_groups_of(group_id))

    def _default_sources(self) -> Iterator[PermissionSet]:
        yield self._default_permissions
        yield from self._sets_of(self._group_groups.expand(self._default_groups))

    def _sets_of(self, group_ids: Iterable[Hashable]) -> Iterator[PermissionSet]:
        for group_id in group_ids:
            permission_set = self._group_permissions.get(group_id)
            if permission_set is not None:
                yield permission_set

    def _groups_reachable_by_user(self, user_id: ID) -> List[Hashable]:
        roots = [*self._user_groups.get_groups_of(user_id), *self._default_groups]
        return self._group_groups.expand(roots)

    def _has_any_sub_permission(self, sources: List[PermissionSet], permission: str) -> bool:
        query = parse_query(permission)
        match = self._resolve(sources, permission)
        if match is not None and match.permits:
            return True
        return any(s.has_any_permitting_at_or_under(query) for s in sources)

    @staticmethod
    def _revoke_from(
        owners: Dict[Hashable, PermissionSet], owner_id: Hashable, path: PermissionPath
    ) -> Optional[Permission]:
        permission_set = owners.get(owner_id)
        if permission_set is None:
            return None

        removed = permission_set.revoke(path)
        if permission_set.is_empty():
            del owners[owner_id]
        return removed

    @staticmethod
    def _parse_all(permissions: Iterable[str]) -> List[str]:
        # Validate every permission before the first one is stored
        permissions = list(permissions)
        for permission in permissions:
            parse_permission(permission)
        return permissions

    @staticmethod
    def _argument_of(match: Optional[PermissionMatch]) -> Optional[str]:
        if match is None or match.negates:
            return None
        return match.argument

    @staticmethod
    def _status_of(permission: str, match: Optional[PermissionMatch]) -> PermissionStatus:
        has_permission = match is not None and match.permits
        return PermissionStatus(
            permission=permission,
            has_permission=has_permission,
            argument=match.argument if has_permission else None,
        )

    @staticmethod
    def _strings_of(permission_set: Optional[PermissionSet], include_args: bool) -> List[str]:
        if permission_set is None:
            return []
        return permission_set.get_permissions_as_strings(include_args=include_args)

    def _describe_user(self, user_id: ID) -> str:
        return self.id_to_string(user_id)

    def _check_user_id(self, user_id: ID) -> None:
        self._check_hashable(user_id, "user")

        if self.validate_ids:
            try:
                round_tripped = self.id_from_string(self.id_to_string(user_id))
            except (TypeError, ValueError) as e:
                raise InvalidOperationError(
                    f"User id {user_id!r} cannot be converted to and from a string: {e}",
                    details={"user_id": repr(user_id)},
                ) from e

            if round_tripped != user_id:
                raise InvalidOperationError(
                    f"User id {user_id!r} does not survive string conversion (got {round_tripped!r})",
                    details={"user_id": repr(user_id)},
                )

    def _check_group_id(self, group_id: Hashable) -> None:
        self._check_hashable(group_id, "group")

    @staticmethod
    def _check_hashable(value: Hashable, kind: str) -> None:
        if value is None:
            raise InvalidOperationError(f"A {kind} id must not be None", details={"kind": kind})

        try:
            hash(value)
        except TypeError as e:
            raise InvalidOperationError(
                f"A {kind} id must be hashable, got {type(value).__name__}",
                details={"kind": kind},
            ) from e
