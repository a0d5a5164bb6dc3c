"""Contract definitions - schema, rules and message settings in one place.

A ContractDefinition is an explicit registry built once per contract type.
Child definitions are derived from a parent: they start with a deep copy of
the parent's config and a copy of its rules, so nothing done to the child
reaches the parent.

Flow of a contract call:
1. The schema checks key presence and types (no coercion)
2. Schema failures become messages via the message resolver
3. Rules run for keys whose schema checks passed
4. Everything is collected into a Result
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable

from ..config import ContractConfig
from ..errors import DuplicateSchemaError, InvalidKeysError, MissingMessageError
from ..messages.resolver import MessageResolver
from .path import KeyPath
from .result import Message, MessageSet, Result
from .rule import Rule, RuleContext
from .schema import Key, Schema


logger = logging.getLogger(__name__)

RuleKey = Any  # "a.b", ("a", "b"), or ("a", ["b", "c"]) for sibling keys


def expand_keys(keys: tuple[RuleKey, ...]) -> list[tuple[RuleKey, KeyPath]]:
    """
    Pair each rule key with its path(s).

    A key whose last element is a list names several sibling keys:
    ("address", ["street", "city"]) -> address.street, address.city
    """
    expanded: list[tuple[RuleKey, KeyPath]] = []
    for key in keys:
        if isinstance(key, tuple) and key and isinstance(key[-1], list):
            for last in key[-1]:
                path_key = (*key[:-1], last)
                expanded.append((path_key, KeyPath.coerce(path_key)))
        else:
            expanded.append((key, KeyPath.coerce(key)))
    return expanded


class ContractDefinition:
    """
    Registry of a contract's schema, rules and configuration.

    Example:
        user = ContractDefinition("UserContract")
        user.define_schema(required("email", "str", filled=True), required("age", "int"))

        @user.rule("age")
        def adult(ctx):
            if ctx.value < 18:
                ctx.failure(predicate="gte", num=18)

        result = user.build()({"email": "jane@doe.org", "age": 17})
    """

    def __init__(
        self,
        name: str,
        config: ContractConfig | None = None,
        parent: ContractDefinition | None = None,
    ):
        self.name = name
        self.parent = parent
        self.config = config or ContractConfig()
        self._schema: Schema | None = None
        self._rules: list[Rule] = list(parent.rules) if parent else []
        self._messages: MessageResolver | None = None

    def derive(self, name: str) -> ContractDefinition:
        """Child definition with a deep copy of this one's config and rules."""
        return ContractDefinition(name, copy.deepcopy(self.config), parent=self)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def schema(self) -> Schema | None:
        """Own schema merged over the parent's (own keys win by name)."""
        inherited = self.parent.schema if self.parent else None
        if self._schema is None:
            return inherited
        if inherited is None:
            return self._schema
        own_names = {key.name for key in self._schema.keys}
        keys = [key for key in inherited.keys if key.name not in own_names]
        return Schema(keys=tuple(keys) + self._schema.keys)

    def define_schema(self, *keys: Key | Schema) -> Schema:
        """
        Set this definition's schema. May only be called once.

        Raises:
            DuplicateSchemaError: If a schema has already been defined
        """
        if self._schema is not None:
            raise DuplicateSchemaError(f"Schema has already been defined for {self.name}")
        if len(keys) == 1 and isinstance(keys[0], Schema):
            self._schema = keys[0]
        else:
            self._schema = Schema.of(*keys)
        logger.debug(f"{self.name}: schema defined with keys {self._schema.to_dot_notation()}")
        return self._schema

    def rule(self, *keys: RuleKey) -> Callable[[Callable[[RuleContext], Any]], Callable[[RuleContext], Any]]:
        """
        Register the decorated function as a rule for keys.

        Raises:
            InvalidKeysError: If a schema exists and does not define a key
        """
        expanded = expand_keys(keys)
        if self.schema is not None:
            self._ensure_valid_keys(expanded)

        def decorator(fn: Callable[[RuleContext], Any]) -> Callable[[RuleContext], Any]:
            self._rules.append(Rule(keys=tuple(path for _, path in expanded), fn=fn))
            return fn

        return decorator

    def _ensure_valid_keys(self, expanded: list[tuple[RuleKey, KeyPath]]) -> None:
        valid_paths = self.schema.key_map()
        invalid_keys = [
            key for key, path in expanded
            if not any(valid.includes(path) for valid in valid_paths)
        ]
        if invalid_keys:
            raise InvalidKeysError(
                f"{self.name}.rule specifies keys that are not defined by the schema: {invalid_keys!r}"
            )

    @property
    def messages(self) -> MessageResolver:
        """Resolver for this definition's message settings (built once)."""
        if self._messages is None:
            resolver = MessageResolver(self.config.messages)
            if self.config.messages_namespace:
                resolver = resolver.namespaced(self.config.messages_namespace)
            self._messages = resolver
        return self._messages

    def build(self, **options: Any) -> Contract:
        return Contract(self, **options)


class Contract:
    """A callable validator built from a ContractDefinition."""

    def __init__(
        self,
        definition: ContractDefinition,
        *,
        locale: str | None = None,
        messages: MessageResolver | None = None,
    ):
        self.definition = definition
        self.locale = locale or definition.config.locale
        self.messages = messages or definition.messages

    def message_for(
        self,
        predicate: str,
        path: KeyPath,
        tokens: dict[str, Any] | None = None,
        rule: str | None = None,
    ) -> str:
        """
        Resolve the message for a failed predicate at path.

        Raises:
            MissingMessageError: If no template is configured
        """
        options: dict[str, Any] = dict(tokens or {})
        options["path"] = path.segments
        if rule is not None:
            options.setdefault("rule", rule)
        if self.locale is not None:
            options.setdefault("locale", self.locale)

        text = self.messages.resolve(predicate, options)
        if text is None:
            raise MissingMessageError(predicate, path.to_dot() or None)

        if self.definition.config.full_messages and options.get("rule"):
            label = self.messages.resolve_rule(options["rule"], options) or options["rule"]
            text = f"{label} {text}"
        return text

    def __call__(self, data: dict[str, Any]) -> Result:
        schema = self.definition.schema
        if schema is not None:
            schema_result = schema.call(data)
            values = schema_result.values
            failures = schema_result.failures
            failed = schema_result.failed_paths()
        else:
            schema_result = None
            values = dict(data)
            failures = ()
            failed = set()

        errors = MessageSet()
        for failure in failures:
            text = self.message_for(failure.predicate, failure.path, failure.tokens, rule=failure.path.last)
            errors.add(Message(text=text, path=failure.path, predicate=failure.predicate))

        for rule in self.definition.rules:
            if not rule.applies(failed):
                logger.debug(f"{self.definition.name}: skipping rule '{rule.name}' after schema failure")
                continue
            context = RuleContext(rule, values, self)
            rule.fn(context)
            for message in context.messages:
                errors.add(message)

        logger.debug(f"{self.definition.name}: {len(errors)} error(s)")
        return Result(values, errors, schema_result)
