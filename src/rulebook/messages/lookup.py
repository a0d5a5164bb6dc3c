"""Candidate lookup-path generation and type classification."""

from __future__ import annotations

from typing import Any, Mapping

from ..config import ClassifierTable
from .template import expand


def classify(raw: Any, table: ClassifierTable, default: str) -> str:
    """
    Map a type (or a value, via its type) to a short label.

    The table is tested in order with issubclass, so list more specific
    types first. Anything unmatched, including None, gets the default.
    """
    if raw is None:
        return default
    kind = raw if isinstance(raw, type) else type(raw)
    for candidate, label in table:
        if issubclass(kind, candidate):
            return label
    return default


class LookupPathGenerator:
    """Expands configured path templates into catalog keys."""

    def __init__(self, templates: tuple[str, ...]):
        self.templates = templates

    def generate(self, tokens: Mapping[str, Any]) -> list[str]:
        """
        Expand every template against tokens, preserving template order.

        Duplicate results are kept; a template referencing a missing token
        raises TemplateError rather than being skipped.
        """
        return [expand(template, tokens) for template in self.templates]
