"""Item path model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from shapir.errors import InvalidArgumentError


class PathKind(str, Enum):
    """How an item is addressed."""

    HOME = "home"
    FAVORITES = "favorites"
    ALL_SHARED = "allshared"
    CONNECTORS = "connectors"
    BOX = "box"
    TOP = "top"
    ID = "id"
    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    PARENT = "parent"


_ALIASES: frozenset[PathKind] = frozenset(
    {
        PathKind.HOME,
        PathKind.FAVORITES,
        PathKind.ALL_SHARED,
        PathKind.CONNECTORS,
        PathKind.BOX,
        PathKind.TOP,
    }
)


@dataclass(slots=True, frozen=True)
class Path:
    """
    Location of an item.

    Build values with the constructors (`Path.home()`, `Path.by_id(...)`,
    `Path.absolute(...)`, ...) rather than directly.
    """

    kind: PathKind
    item_id: Optional[str] = None
    path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind in (PathKind.ID, PathKind.RELATIVE, PathKind.PARENT):
            _require(self.item_id, "item_id", self.kind)
        if self.kind in (PathKind.ABSOLUTE, PathKind.RELATIVE):
            _require(self.path, "path", self.kind)

    @classmethod
    def home(cls) -> Path:
        return cls(PathKind.HOME)

    @classmethod
    def favorites(cls) -> Path:
        return cls(PathKind.FAVORITES)

    @classmethod
    def all_shared(cls) -> Path:
        return cls(PathKind.ALL_SHARED)

    @classmethod
    def connectors(cls) -> Path:
        return cls(PathKind.CONNECTORS)

    @classmethod
    def box(cls) -> Path:
        return cls(PathKind.BOX)

    @classmethod
    def top(cls) -> Path:
        return cls(PathKind.TOP)

    @classmethod
    def by_id(cls, item_id: str) -> Path:
        return cls(PathKind.ID, item_id=item_id)

    @classmethod
    def absolute(cls, path: str) -> Path:
        return cls(PathKind.ABSOLUTE, path=path)

    @classmethod
    def relative(cls, item_id: str, path: str) -> Path:
        return cls(PathKind.RELATIVE, item_id=item_id, path=path)

    @classmethod
    def parent(cls, item_id: str) -> Path:
        return cls(PathKind.PARENT, item_id=item_id)

    @property
    def addressable(self) -> bool:
        """True if sub-resources (e.g. /Children) can be appended directly."""
        return self.kind in _ALIASES or self.kind is PathKind.ID

    def entity(self, segment: Optional[str] = None) -> tuple[str, list[tuple[str, str]]]:
        """
        Return the entity URI (relative to the API endpoint) and its query pairs.

        Raises:
            InvalidArgumentError: if `segment` is given for a path that must be
                resolved to an id first.
        """
        if segment and not self.addressable:
            raise InvalidArgumentError(
                f"Path of kind '{self.kind.value}' must be resolved before adding '{segment}'",
                details={"kind": self.kind.value, "segment": segment},
            )
        suffix = segment or ""

        if self.kind in _ALIASES:
            return f"Items({self.kind.value}){suffix}", []
        if self.kind is PathKind.ID:
            return f"Items({self.item_id}){suffix}", []
        if self.kind is PathKind.ABSOLUTE:
            return "Items/ByPath", [("path", str(self.path))]
        if self.kind is PathKind.RELATIVE:
            return f"Items({self.item_id})/ByPath", [("path", str(self.path))]
        return f"Items({self.item_id})/Parent", []

    def __str__(self) -> str:
        if self.kind is PathKind.ABSOLUTE:
            return str(self.path)
        if self.kind is PathKind.RELATIVE:
            return f"{self.item_id}:{self.path}"
        if self.kind is PathKind.ID:
            return str(self.item_id)
        if self.kind is PathKind.PARENT:
            return f"parent({self.item_id})"
        return self.kind.value


def _require(value: Optional[str], field_name: str, kind: PathKind) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(
            f"Path of kind '{kind.value}' requires a non-empty {field_name}",
            details={"kind": kind.value, "field": field_name},
        )
