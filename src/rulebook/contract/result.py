"""Validation results and error messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from .path import KeyPath, PathLike
from .schema import SchemaResult


@dataclass(frozen=True)
class Message:
    """An error message attached to a key path (root path = base error)."""
    text: str
    path: KeyPath = field(default_factory=KeyPath.root)
    predicate: str | None = None

    @classmethod
    def at(cls, text: str, path: PathLike = None, predicate: str | None = None) -> Message:
        return cls(text=text, path=KeyPath.coerce(path), predicate=predicate)

    @property
    def base(self) -> bool:
        return not self.path


# (own texts, children by segment)
_Node = tuple[list[str], dict[str, "_Node"]]


def _render(node: _Node) -> Any:
    texts, children = node
    nested = {key: _render(child) for key, child in children.items()}
    if not nested:
        return list(texts)
    if not texts:
        return nested
    return [*texts, nested]


class MessageSet:
    """Ordered collection of messages, addressable by key path."""

    def __init__(self, messages: list[Message] | None = None):
        self._messages: list[Message] = list(messages or [])

    def add(self, message: Message) -> None:
        self._messages.append(message)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __getitem__(self, key: PathLike) -> list[str]:
        """Message texts for exactly this path; None selects base errors."""
        path = KeyPath.coerce(key)
        return [message.text for message in self._messages if message.path == path]

    def filter(self, key: PathLike) -> list[Message]:
        """Messages at path or beneath it."""
        path = KeyPath.coerce(key)
        return [message for message in self._messages if message.path.includes(path)]

    def to_dict(self) -> dict[Any, Any]:
        """
        Nested mapping of key -> list of texts.

        Base errors are listed under the None key. A key with messages of
        its own and beneath it maps to its texts followed by a mapping of
        the nested keys: {"address": ["is invalid", {"street": [...]}]}
        """
        root: _Node = ([], {})
        for message in self._messages:
            node = root
            for segment in message.path.segments:
                node = node[1].setdefault(segment, ([], {}))
            node[0].append(message.text)

        base, children = root
        output: dict[Any, Any] = {None: base} if base else {}
        output.update((key, _render(child)) for key, child in children.items())
        return output

    def __repr__(self) -> str:
        return f"MessageSet({self.to_dict()!r})"


class Result:
    """Outcome of running a contract: checked values plus errors."""

    def __init__(
        self,
        values: dict[str, Any],
        errors: MessageSet | None = None,
        schema_result: SchemaResult | None = None,
    ):
        self.values = values
        self.errors = errors if errors is not None else MessageSet()
        self.schema_result = schema_result

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def failure(self) -> bool:
        return not self.success

    def error(self, key: PathLike) -> bool:
        """True if the schema or any rule reported an error for key."""
        path = KeyPath.coerce(key)
        if not path:
            return bool(self.errors[None])
        if self.schema_result is not None and self.schema_result.error(path):
            return True
        return bool(self.errors.filter(path))

    def add_error(self, message: Message) -> None:
        self.errors.add(message)

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def to_dict(self) -> dict[str, Any]:
        return dict(self.values)

    def __repr__(self) -> str:
        return f"<Result {self.values!r} errors={self.errors.to_dict()!r}>"
