"""Permission path value object.

ONLY path parsing and comparison - immutable dot-separated permission paths
with wildcard support, plus parsing of the full permission syntax
(negation prefix and trailing argument).

Supported syntax:
- Plain paths: "first.second" covers itself and every descendant
- Descendant wildcards: "first.second.*" covers only the descendants
- Root wildcard: "*" covers every path
- Negations: "-first.second" denies instead of granting
- Arguments: "first.second: some argument" attaches a free-form string
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..exceptions import InvalidPathError


SEPARATOR = "."
WILDCARD = "*"
NEGATION_PREFIX = "-"
ARGUMENT_DELIMITER = ":"


@dataclass(frozen=True)
class PermissionPath:
    """Immutable permission path.

    Identity is the segment tuple plus the wildcard flag; negation and
    argument belong to the permission stored at a path, not to the path.
    The root wildcard ``*`` is a wildcard path with no segments.
    """

    segments: Tuple[str, ...]
    is_wildcard: bool = False

    def __post_init__(self):
        """Validate path on creation."""
        if not self.segments and not self.is_wildcard:
            raise InvalidPathError("", "permission path must not be empty")

        for segment in self.segments:
            if not segment:
                raise InvalidPathError(
                    SEPARATOR.join(self.segments), "permission path contains an empty segment"
                )

    @classmethod
    def parse(cls, text: str) -> "PermissionPath":
        """Parse a bare permission path (no negation, no argument).

        Args:
            text: Path string such as "first.second" or "first.second.*"

        Returns:
            Parsed PermissionPath

        Raises:
            InvalidPathError: If the text is not a valid path
        """
        if not isinstance(text, str):
            raise InvalidPathError(text, "permission must be a string")

        stripped = text.strip()
        offset = text.find(stripped) if stripped else 0

        if ARGUMENT_DELIMITER in stripped:
            raise InvalidPathError(
                text, "arguments are not allowed here", offset + stripped.index(ARGUMENT_DELIMITER)
            )

        return cls._parse_path(text, stripped, offset)

    @classmethod
    def root(cls) -> "PermissionPath":
        """Get the root wildcard path, covering every permission."""
        return cls((), True)

    @classmethod
    def _parse_path(cls, source_text: str, path_text: str, offset: int) -> "PermissionPath":
        if not path_text:
            raise InvalidPathError(source_text, "permission path must not be empty", offset)

        if path_text == WILDCARD:
            return cls.root()

        is_wildcard = False
        if path_text.endswith(SEPARATOR + WILDCARD):
            is_wildcard = True
            path_text = path_text[:-2]

        if WILDCARD in path_text:
            raise InvalidPathError(
                source_text,
                "permissions cannot be arbitrarily wildcarded",
                offset + path_text.index(WILDCARD),
            )

        if NEGATION_PREFIX in path_text:
            raise InvalidPathError(
                source_text,
                "permission negations must be at the start of the permission",
                offset + path_text.index(NEGATION_PREFIX),
            )

        segments = tuple(path_text.split(SEPARATOR))
        for index, segment in enumerate(segments):
            if not segment:
                position = offset + sum(len(s) + 1 for s in segments[:index])
                raise InvalidPathError(source_text, "permission path contains an empty segment", position)

        return cls(segments, is_wildcard)

    @property
    def depth(self) -> int:
        """Number of segments in the path."""
        return len(self.segments)

    @property
    def is_root(self) -> bool:
        """Whether this is the root wildcard."""
        return self.is_wildcard and not self.segments

    @property
    def parent(self) -> Optional["PermissionPath"]:
        """Get the plain path one level up, or None at the top level."""
        if len(self.segments) <= 1:
            return None
        return PermissionPath(self.segments[:-1])

    def as_plain(self) -> "PermissionPath":
        """Get the non-wildcard path with the same segments."""
        return PermissionPath(self.segments) if self.is_wildcard else self

    def covers(self, other: "PermissionPath") -> bool:
        """Check whether a grant at this path applies to the other path.

        A plain path covers itself and its descendants; a wildcard path
        covers only strict descendants of its segments.

        Args:
            other: Path being checked

        Returns:
            True if this path covers the other
        """
        if self.is_wildcard:
            return self.is_ancestor_of(other)

        return other.segments[:len(self.segments)] == self.segments

    def is_ancestor_of(self, other: "PermissionPath") -> bool:
        """Check whether this path's segments are a strict prefix of the other's."""
        return (
            len(self.segments) < len(other.segments)
            and other.segments[:len(self.segments)] == self.segments
        )

    def is_at_or_under(self, other: "PermissionPath") -> bool:
        """Check whether this path sits at or below the other path's segments."""
        return self.segments[:len(other.segments)] == other.segments

    def sort_key(self) -> Tuple[int, bool, Tuple[str, ...]]:
        """Key ordering paths by specificity, then wildcard flag, then segments."""
        return len(self.segments), self.is_wildcard, self.segments

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, PermissionPath):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        if self.is_root:
            return WILDCARD

        joined = SEPARATOR.join(self.segments)
        return f"{joined}{SEPARATOR}{WILDCARD}" if self.is_wildcard else joined


@dataclass(frozen=True)
class ParsedPermission:
    """A permission string broken into path, negation flag and argument."""

    path: PermissionPath
    negates: bool = False
    argument: Optional[str] = None

    def __str__(self) -> str:
        text = f"{NEGATION_PREFIX if self.negates else ''}{self.path}"
        if self.argument is not None:
            text = f"{text}{ARGUMENT_DELIMITER} {self.argument}"
        return text


def parse_permission(text: str) -> ParsedPermission:
    """Parse a full permission string.

    Args:
        text: Permission such as "-first.second.*" or "first.second: arg"

    Returns:
        ParsedPermission with path, negation flag and argument

    Raises:
        InvalidPathError: If the path part is malformed
    """
    if not isinstance(text, str):
        raise InvalidPathError(text, "permission must be a string")

    path_part, delimiter, argument_part = text.partition(ARGUMENT_DELIMITER)
    argument = argument_part.strip() if delimiter else None

    path_text = path_part.strip()
    offset = path_part.find(path_text) if path_text else 0

    negates = path_text.startswith(NEGATION_PREFIX)
    if negates:
        path_text = path_text[len(NEGATION_PREFIX):]
        offset += len(NEGATION_PREFIX)

    path = PermissionPath._parse_path(text, path_text, offset)
    return ParsedPermission(path=path, negates=negates, argument=argument)


def parse_query(text: str) -> PermissionPath:
    """Parse a path being queried; wildcards cannot be queried.

    Raises:
        InvalidPathError: If the text is malformed or a wildcard
    """
    path = PermissionPath.parse(text)
    if path.is_wildcard:
        raise InvalidPathError(text, "wildcard paths cannot be queried")
    return path
