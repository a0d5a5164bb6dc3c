"""%{name} placeholder expansion shared by path templates and messages."""

from __future__ import annotations

import re
from typing import Any, Mapping

from ..errors import TemplateError


PLACEHOLDER_PATTERN = re.compile(r"%\{([A-Za-z_][A-Za-z0-9_]*)\}")


def placeholders(template: str) -> list[str]:
    """Token names referenced by a template, in order of appearance."""
    return PLACEHOLDER_PATTERN.findall(template)


def expand(template: str, tokens: Mapping[str, Any]) -> str:
    """
    Substitute every %{name} in template with str(tokens[name]).

    Substitution is a single pass: placeholders that appear inside a
    substituted value are left as-is.

    Raises:
        TemplateError: If a placeholder has no matching token
    """
    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        if name not in tokens:
            raise TemplateError(template, name)
        return str(tokens[name])

    return PLACEHOLDER_PATTERN.sub(_substitute, template)
