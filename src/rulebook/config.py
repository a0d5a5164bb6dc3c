"""Configuration for rulebook contracts and message resolution."""

from __future__ import annotations

import builtins
import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


DEFAULT_PATH = str(Path(__file__).parent / "data" / "errors.yaml")

DEFAULT_LOOKUP_OPTIONS: tuple[str, ...] = ("root", "predicate", "rule", "val_type", "arg_type")

# Ordered most specific -> least specific; first string hit wins
DEFAULT_LOOKUP_PATHS: tuple[str, ...] = (
    "%{root}.rules.%{rule}.%{predicate}.arg.%{arg_type}",
    "%{root}.rules.%{rule}.%{predicate}",
    "%{root}.%{predicate}.%{message_type}",
    "%{root}.%{predicate}.value.%{rule}.arg.%{arg_type}",
    "%{root}.%{predicate}.value.%{rule}",
    "%{root}.%{predicate}.value.%{val_type}.arg.%{arg_type}",
    "%{root}.%{predicate}.value.%{val_type}",
    "%{root}.%{predicate}.arg.%{arg_type}",
    "%{root}.%{predicate}",
)

ClassifierTable = tuple[tuple[type, str], ...]


def _resolve_type(name: str | type) -> type:
    """Map a builtin type name (as written in YAML/JSON) to the type."""
    if isinstance(name, type):
        return name
    value = getattr(builtins, name, None)
    if not isinstance(value, type):
        raise ValueError(f"Unknown type name in classifier table: {name!r}")
    return value


def _classifier_table(data: Any) -> ClassifierTable:
    """Accept a mapping or a sequence of pairs and return an ordered table."""
    items = data.items() if isinstance(data, dict) else data
    return tuple((_resolve_type(key), str(label)) for key, label in items)


@dataclass(frozen=True)
class MessagesConfig:
    """
    Message resolution settings.

    Frozen so that equal settings hash equally; the hash is the identity
    used to share catalogs and cache partitions between resolvers.
    """
    # Catalog sources, later ones override earlier ones
    paths: tuple[str, ...] = (DEFAULT_PATH,)

    # Namespace root; %{locale} is filled in at catalog lookup time
    root: str = "%{locale}.errors"
    default_locale: str = "en"

    lookup_options: tuple[str, ...] = DEFAULT_LOOKUP_OPTIONS
    lookup_paths: tuple[str, ...] = DEFAULT_LOOKUP_PATHS

    arg_type_default: str = "default"
    val_type_default: str = "default"

    arg_types: ClassifierTable = ((range, "range"),)
    val_types: ClassifierTable = ((range, "range"), (str, "string"))

    def replace(self, **changes: Any) -> MessagesConfig:
        """Return a copy with the given settings changed."""
        return dataclasses.replace(self, **changes)

    @property
    def identity(self) -> int:
        return hash(self)

    @classmethod
    def from_dict(cls, data: dict) -> MessagesConfig:
        """Create config from dictionary."""
        kwargs: dict[str, Any] = {}
        for key in ("root", "default_locale", "arg_type_default", "val_type_default"):
            if key in data:
                kwargs[key] = str(data[key])
        for key in ("paths", "lookup_options", "lookup_paths"):
            if key in data:
                kwargs[key] = tuple(str(item) for item in data[key])
        for key in ("arg_types", "val_types"):
            if key in data:
                kwargs[key] = _classifier_table(data[key])
        return cls(**kwargs)


@dataclass
class ContractConfig:
    """Settings for a contract definition.

    Mutable while a definition is being assembled; derived definitions get a
    deep copy so changes never leak back to the parent.
    """
    messages: MessagesConfig = field(default_factory=MessagesConfig)

    # Locale passed to message lookups (None = catalog default)
    locale: str | None = None

    # Prefix failure messages with the rule label ("age must be ...")
    full_messages: bool = False

    # Scope message lookups under "<root>.<namespace>"
    messages_namespace: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> ContractConfig:
        """Create config from dictionary."""
        return cls(
            messages=MessagesConfig.from_dict(data.get("messages", {})),
            locale=data.get("locale"),
            full_messages=bool(data.get("full_messages", False)),
            messages_namespace=data.get("messages_namespace"),
        )

    @classmethod
    def from_yaml(cls, path: str) -> ContractConfig:
        """Load config from YAML file."""
        import yaml
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str) -> ContractConfig:
        """Load config from JSON file."""
        import json
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)
