"""Permission status value object."""

from dataclasses import dataclass
from typing import Optional

from ..exceptions import MissingPermissionError


@dataclass(frozen=True)
class PermissionStatus:
    """Outcome of a permission query: whether it is held and its argument."""

    permission: str
    has_permission: bool
    argument: Optional[str] = None

    @property
    def has_argument(self) -> bool:
        return self.argument is not None

    def assert_has_permission(self) -> None:
        """Raise if the permission is not held.

        Raises:
            MissingPermissionError: If ``has_permission`` is False
        """
        if not self.has_permission:
            raise MissingPermissionError(self.permission)

    def __str__(self) -> str:
        result = f"{'has    ' if self.has_permission else 'has not'}: {self.permission}"
        if self.argument is not None:
            result += " - (with arg)" if "\n" in self.argument else f": {self.argument}"
        return result
