"""Group membership graph.

Directed relation from members (users or groups) to the groups they belong
to, with cycle-safe transitive resolution.
"""

import logging
from collections import deque
from typing import Dict, Generic, Hashable, Iterable, List, TypeVar

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Hashable)
G = TypeVar("G", bound=Hashable)


class MembershipGraph(Generic[M, G]):
    """Membership edges kept in insertion order.

    Traversal is breadth-first over edges in the order they were added,
    which is what fixes the tie-break order between groups during
    permission resolution.
    """

    def __init__(self):
        # dict values are unused; dicts keep insertion order where sets do not
        self._edges: Dict[M, Dict[G, None]] = {}

    def add_edge(self, member: M, group: G) -> bool:
        """Record that ``member`` belongs to ``group``.

        Returns:
            True if the edge is new
        """
        groups = self._edges.setdefault(member, {})
        if group in groups:
            return False
        groups[group] = None
        return True

    def remove_edge(self, member: M, group: G) -> bool:
        """Remove a membership edge; members left without edges are dropped.

        Returns:
            True if an edge was removed
        """
        groups = self._edges.get(member)
        if groups is None or group not in groups:
            return False

        del groups[group]
        if not groups:
            del self._edges[member]
        return True

    def remove_member(self, member: M) -> List[G]:
        """Drop every edge from ``member``.

        Returns:
            The groups the member was removed from, in insertion order
        """
        return list(self._edges.pop(member, {}))

    def get_groups_of(self, member: M) -> List[G]:
        """Direct memberships only."""
        return list(self._edges.get(member, ()))

    def expand(self, roots: Iterable[G]) -> List[G]:
        """Breadth-first closure over the graph starting from ``roots``.

        Each group appears once, in the order first reached; the roots
        themselves come first.
        """
        visited: Dict[G, None] = {}
        queue = deque()

        for root in roots:
            if root not in visited:
                visited[root] = None
                queue.append(root)

        while queue:
            current = queue.popleft()
            for parent in self._edges.get(current, ()):
                if parent in visited:
                    logger.debug(f"Membership of '{parent}' already visited, skipping")
                    continue
                visited[parent] = None
                queue.append(parent)

        return list(visited)

    def get_all_groups_of(self, member: M, extra_roots: Iterable[G] = ()) -> List[G]:
        """Transitive memberships of ``member``.

        Args:
            member: Member whose groups are resolved
            extra_roots: Additional starting groups (e.g. default groups),
                traversed after the member's own groups

        Returns:
            Every reachable group once, excluding the member itself
        """
        roots = [*self.get_groups_of(member), *extra_roots]
        return [group for group in self.expand(roots) if group != member]

    def has_edge(self, member: M, group: G) -> bool:
        return group in self._edges.get(member, ())

    def has_member(self, member: M) -> bool:
        return member in self._edges

    def members(self) -> List[M]:
        return list(self._edges)

    def referenced_groups(self) -> List[G]:
        """Every group that appears as the target of an edge, first reference first."""
        referenced: Dict[G, None] = {}
        for groups in self._edges.values():
            referenced.update(groups)
        return list(referenced)

    def clear(self) -> None:
        self._edges.clear()

    def __len__(self) -> int:
        return sum(len(groups) for groups in self._edges.values())
