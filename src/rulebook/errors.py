"""Exception hierarchy for rulebook."""

from __future__ import annotations


class RulebookError(Exception):
    """Base class for all rulebook errors."""
    pass


class CatalogLoadError(RulebookError):
    """Raised when a message catalog source is missing or malformed."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class TemplateError(RulebookError, KeyError):
    """Raised when a template references a token that was not supplied."""

    def __init__(self, template: str, token: str):
        super().__init__(f"Template {template!r} references unknown token '{token}'")
        self.template = template
        self.token = token

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class MissingMessageError(RulebookError):
    """Raised when a predicate failure has no configured message."""

    def __init__(self, predicate: str, path: str | None = None):
        where = f" (at {path})" if path else ""
        super().__init__(f"No message configured for predicate '{predicate}'{where}")
        self.predicate = predicate
        self.path = path


class InvalidKeysError(RulebookError):
    """Raised when a rule references keys the schema does not define."""
    pass


class DuplicateSchemaError(RulebookError):
    """Raised when a contract definition receives a second schema."""
    pass
