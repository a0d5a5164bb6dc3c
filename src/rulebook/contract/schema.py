"""Key-presence and type checking schema.

The schema only checks; it never coerces. Each key runs its checks in
order and stops at the first failure, so a key reports at most one
low-level failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from . import predicates
from .path import KeyPath


# Name under which a predicate receives its argument (and the message token)
ARG_NAMES: dict[str, str] = {
    "size": "size",
    "included_in": "list",
    "format": "regex",
}


def _check(name: str, arg: Any) -> tuple[str, dict[str, Any]]:
    if arg is True:
        return name, {}
    return name, {ARG_NAMES.get(name, "num"): arg}


@dataclass(frozen=True)
class Failure:
    """A predicate that failed for the value at path."""
    path: KeyPath
    predicate: str
    args: dict[str, Any] = field(default_factory=dict)
    value: Any = None

    @property
    def tokens(self) -> dict[str, Any]:
        """Message options for resolving this failure."""
        return predicates.predicate_tokens(self.predicate, self.value, self.args)


@dataclass(frozen=True)
class Key:
    """
    Definition of one input key.

    Checks run in order: filled, type, then the remaining checks.
    """
    name: str
    required: bool = True
    type: str | None = None
    checks: tuple[tuple[str, dict[str, Any]], ...] = ()
    schema: Schema | None = None

    @classmethod
    def define(
        cls,
        name: str,
        type: str | None = None,
        *,
        required: bool = True,
        schema: Schema | None = None,
        **checks: Any,
    ) -> Key:
        """
        Build a key from keyword checks.

        Examples:
            Key.define("age", "int", filled=True, gte=18)
            Key.define("name", "str", size=range(2, 65))
            Key.define("address", "dict", schema=Schema.of(...))
        """
        if type is not None and type not in predicates.TYPE_PREDICATES:
            raise ValueError(f"Unknown type '{type}' for key '{name}'")
        ordered: list[tuple[str, dict[str, Any]]] = []
        if checks.pop("filled", False):
            ordered.append(("filled", {}))
        for check_name, arg in checks.items():
            predicates.get(check_name)
            ordered.append(_check(check_name, arg))
        return cls(name=name, required=required, type=type, checks=tuple(ordered), schema=schema)

    def _run(self, value: Any) -> tuple[str, dict[str, Any]] | None:
        checks = list(self.checks)
        if self.type is not None:
            # Type runs after filled but before value checks
            position = 1 if checks and checks[0][0] == "filled" else 0
            checks.insert(position, (self.type, {}))
        for name, args in checks:
            if not predicates.check(name, value, args):
                return name, args
        return None


def required(name: str, type: str | None = None, **checks: Any) -> Key:
    return Key.define(name, type, required=True, **checks)


def optional(name: str, type: str | None = None, **checks: Any) -> Key:
    return Key.define(name, type, required=False, **checks)


@dataclass(frozen=True)
class SchemaResult:
    """Checked values plus low-level failures."""
    values: dict[str, Any]
    failures: tuple[Failure, ...] = ()

    @property
    def success(self) -> bool:
        return not self.failures

    def failed_paths(self) -> set[KeyPath]:
        return {failure.path for failure in self.failures}

    def error(self, path: KeyPath) -> bool:
        """True if the schema failed at path or anywhere beneath it."""
        return any(failure.path.includes(path) for failure in self.failures)


@dataclass(frozen=True)
class Schema:
    """Ordered set of key definitions."""
    keys: tuple[Key, ...] = ()

    @classmethod
    def of(cls, *keys: Key) -> Schema:
        names = [key.name for key in keys]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Duplicate schema keys: {sorted(duplicates)}")
        return cls(keys=tuple(keys))

    def key_map(self, prefix: KeyPath | None = None) -> list[KeyPath]:
        """Every defined path, nested keys included, in definition order."""
        prefix = prefix or KeyPath.root()
        paths: list[KeyPath] = []
        for key in self.keys:
            path = prefix.child(key.name)
            paths.append(path)
            if key.schema is not None:
                paths.extend(key.schema.key_map(path))
        return paths

    def to_dot_notation(self) -> list[str]:
        return [path.to_dot() for path in self.key_map()]

    def call(self, data: dict[str, Any]) -> SchemaResult:
        values, failures = self._apply(data, KeyPath.root())
        return SchemaResult(values=values, failures=tuple(failures))

    __call__ = call

    def _apply(self, data: dict[str, Any], prefix: KeyPath) -> tuple[dict[str, Any], list[Failure]]:
        values: dict[str, Any] = {}
        failures: list[Failure] = []

        for key in self.keys:
            path = prefix.child(key.name)
            if key.name not in data:
                if key.required:
                    failures.append(Failure(path=path, predicate="key"))
                continue

            value = data[key.name]
            values[key.name] = value

            failed = key._run(value)
            if failed is not None:
                name, args = failed
                failures.append(Failure(path=path, predicate=name, args=args, value=value))
                continue

            if key.schema is not None and isinstance(value, dict):
                nested_values, nested_failures = key.schema._apply(value, path)
                values[key.name] = nested_values
                failures.extend(nested_failures)

        return values, failures
