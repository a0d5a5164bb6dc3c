"""Business rules evaluated after the schema passes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .path import KeyPath, PathLike
from .result import Message

if TYPE_CHECKING:
    from .contract import Contract


@dataclass(frozen=True)
class Rule:
    """
    A rule function bound to zero or more key paths.

    The function receives a RuleContext. Rules with no keys apply to the
    whole input and report base errors by default.
    """
    keys: tuple[KeyPath, ...]
    fn: Callable[[RuleContext], Any]

    @property
    def name(self) -> str:
        return self.keys[0].last if self.keys else "base"

    def applies(self, failed: set[KeyPath]) -> bool:
        """A rule is skipped when any of its keys already failed."""
        return not any(
            failed_path.includes(key) or key.includes(failed_path)
            for key in self.keys
            for failed_path in failed
        )


class RuleContext:
    """What a rule function sees while it runs."""

    def __init__(self, rule: Rule, values: dict[str, Any], contract: Contract):
        self.rule = rule
        self.values = values
        self.contract = contract
        self.messages: list[Message] = []

    @property
    def path(self) -> KeyPath:
        return self.rule.keys[0] if self.rule.keys else KeyPath.root()

    @property
    def key_name(self) -> str | None:
        return self.path.last

    @property
    def value(self) -> Any:
        """Value at the rule's first key."""
        return self.path.value_in(self.values)

    def failure(
        self,
        text: str | None = None,
        *,
        predicate: str | None = None,
        path: PathLike = ...,
        **tokens: Any,
    ) -> None:
        """
        Record a failure for the rule's key (or path, if given).

        Either pass literal text, or a predicate name whose message is
        resolved from the catalog with tokens as interpolation options.
        """
        target = self.path if path is ... else KeyPath.coerce(path)
        if text is None:
            if predicate is None:
                raise ValueError("failure() needs either text or a predicate")
            text = self.contract.message_for(predicate, target, tokens, rule=self.rule.name)
        self.messages.append(Message(text=text, path=target, predicate=predicate))
