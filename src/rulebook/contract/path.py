"""Dot-notation key paths into nested input data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class KeyPath:
    """
    A path to a value in nested input.

    Examples:
        age
        address.street
    """
    segments: tuple[str, ...]

    def __str__(self) -> str:
        return self.to_dot()

    def __len__(self) -> int:
        return len(self.segments)

    def __bool__(self) -> bool:
        return len(self.segments) > 0

    @property
    def last(self) -> str | None:
        """Final segment of the path."""
        return self.segments[-1] if self.segments else None

    @property
    def parent(self) -> KeyPath | None:
        """Parent path, or None if at root."""
        if len(self.segments) <= 1:
            return None
        return KeyPath(self.segments[:-1])

    def child(self, segment: str) -> KeyPath:
        """Create a child path."""
        return KeyPath(self.segments + (segment,))

    def includes(self, other: KeyPath) -> bool:
        """True if other equals this path or is one of its ancestors."""
        if len(other.segments) > len(self.segments):
            return False
        return self.segments[:len(other.segments)] == other.segments

    def to_dot(self) -> str:
        return ".".join(self.segments)

    def value_in(self, data: Any, default: Any = None) -> Any:
        """Look the path up in nested mappings."""
        current = data
        for segment in self.segments:
            if not isinstance(current, dict) or segment not in current:
                return default
            current = current[segment]
        return current

    @classmethod
    def root(cls) -> KeyPath:
        """The root path (empty)."""
        return cls(())

    @classmethod
    def coerce(cls, value: PathLike) -> KeyPath:
        """Build a path from "a.b", ("a", "b") or an existing KeyPath."""
        if isinstance(value, KeyPath):
            return value
        if value is None:
            return cls.root()
        if isinstance(value, str):
            return cls(tuple(s for s in value.split(".") if s))
        return cls(tuple(str(s) for s in value))


PathLike = Union[KeyPath, str, tuple, list, None]
