"""Dotted key paths into a configuration tree.

A :class:`KeyPath` addresses a location inside nested tables and arrays, for
example ``child.value_5`` or ``servers.0.host``. Components made only of
digits are array indices, everything else is a table key.

Example:
    >>> path = KeyPath.parse("child.values.1")
    >>> tree = {}
    >>> path.insert_into(tree, "x")
    >>> tree
    {'child': {'values': [None, 'x']}}
    >>> path.render()
    'child.values.1'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from toml_env.exceptions import InvalidKeyPathError

SEPARATOR = "."


@dataclass(frozen=True)
class Field:
    """A table key."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Index:
    """A position in an array."""

    position: int

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError(f"Array index must not be negative, got {self.position}")

    def __str__(self) -> str:
        return str(self.position)


Segment = Union[Field, Index]


def _is_index(component: str) -> bool:
    # "01" stays a key so that rendering gives back the same string
    return (
        component.isascii()
        and component.isdigit()
        and (component == "0" or not component.startswith("0"))
    )


def segment_from_str(component: str) -> Segment:
    """Turn one path component into an Index (all digits) or a Field."""
    if _is_index(component):
        return Index(int(component))
    return Field(component)


class KeyPath:
    """Immutable, non-empty sequence of :class:`Field` / :class:`Index` segments."""

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[Segment]) -> None:
        segments = tuple(segments)
        if not segments:
            raise InvalidKeyPathError("Key path must have at least one segment", details={"path": ""})
        self._segments: Tuple[Segment, ...] = segments

    @classmethod
    def parse(cls, s: str) -> "KeyPath":
        """Parse ``key.key.0`` style strings.

        Raises:
            InvalidKeyPathError: When ``s`` is empty or has an empty component
                (leading, trailing or doubled dot).
        """
        if not s:
            raise InvalidKeyPathError("Unable to parse an empty key path", details={"path": s})

        components = s.split(SEPARATOR)
        if any(not component for component in components):
            raise InvalidKeyPathError(
                f"Unable to parse path {s!r} into a key path: empty component",
                details={"path": s},
            )
        return cls(segment_from_str(component) for component in components)

    @classmethod
    def from_segments(cls, components: Iterable[str]) -> "KeyPath":
        """Build a path from components that were already split apart."""
        return cls(segment_from_str(component) for component in components)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    def render(self) -> str:
        return SEPARATOR.join(str(segment) for segment in self._segments)

    def insert_into(self, tree: Dict[str, Any], value: Any) -> None:
        """Set ``value`` at this path inside ``tree``, creating containers on the way.

        Intermediate tables are created for keys and arrays (padded with
        ``None``) for indices. An existing scalar on the way is replaced. An
        index that meets an existing table is used as the string key of that
        table instead, and a key that meets an existing array turns the array
        into a table keyed by position.
        """
        container: Union[Dict[str, Any], List[Any]] = tree
        for segment, following in zip(self._segments, self._segments[1:]):
            container = _descend(container, segment, following)
        _assign(container, self._segments[-1], value)

    def resolve(self, tree: Any) -> Optional[Any]:
        """Return the value at this path, or None when any step is missing."""
        current = tree
        for segment in self._segments:
            if isinstance(current, dict):
                key = str(segment)
                if key not in current:
                    return None
                current = current[key]
            elif isinstance(current, list) and isinstance(segment, Index):
                if segment.position >= len(current):
                    return None
                current = current[segment.position]
            else:
                return None
        return current

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"KeyPath({self.render()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyPath):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)


def _pad(array: List[Any], position: int) -> None:
    if len(array) <= position:
        array.extend([None] * (position + 1 - len(array)))


def _fits(child: Any, following: Segment) -> bool:
    if isinstance(following, Field):
        return isinstance(child, dict)
    return isinstance(child, (list, dict))


def _replacement(child: Any, following: Segment) -> Union[Dict[str, Any], List[Any]]:
    if isinstance(following, Index):
        return []
    if isinstance(child, list):
        # Keep the items under their positions as string keys.
        return {str(position): item for position, item in enumerate(child) if item is not None}
    return {}


def _descend(
    container: Union[Dict[str, Any], List[Any]], segment: Segment, following: Segment
) -> Union[Dict[str, Any], List[Any]]:
    if isinstance(container, list) and isinstance(segment, Index):
        _pad(container, segment.position)
        child = container[segment.position]
        if not _fits(child, following):
            child = _replacement(child, following)
            container[segment.position] = child
        return child

    # A list only ever gets created for an Index segment, so this is a table.
    key = str(segment)
    child = container.get(key)  # type: ignore[union-attr]
    if not _fits(child, following):
        child = _replacement(child, following)
        container[key] = child  # type: ignore[index]
    return child


def _assign(container: Union[Dict[str, Any], List[Any]], segment: Segment, value: Any) -> None:
    if isinstance(container, list) and isinstance(segment, Index):
        _pad(container, segment.position)
        container[segment.position] = value
    else:
        container[str(segment)] = value  # type: ignore[index]


def parse_key_path(path: Union[str, KeyPath]) -> KeyPath:
    """Accept either an already-built KeyPath or its string form."""
    if isinstance(path, KeyPath):
        return path
    return KeyPath.parse(path)


__all__ = ["Field", "Index", "Segment", "KeyPath", "segment_from_str", "parse_key_path"]
