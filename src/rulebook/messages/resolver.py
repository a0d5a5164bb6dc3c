"""Message resolution - picks the most specific template for a failure.

Flow:
1. Caller asks for a message for a predicate (plus options such as rule,
   locale, arg_type and interpolation values)
2. Resolver checks the process-wide cache for the matching template
3. On a miss it expands the configured lookup paths and walks them in
   order; the first catalog entry holding a string wins
4. The template is expanded against the call's tokens and returned
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Mapping

from ..config import MessagesConfig
from .cache import ResolutionCache, cache_key, partition
from .catalog import MessageCatalog, catalog_for
from .lookup import LookupPathGenerator, classify
from .template import expand


logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_TYPE = "failure"


class MessageResolver:
    """
    Resolves predicate and rule names to message strings.

    Stateless per call; the catalog and the cache partition are shared by
    every resolver with the same identity (configuration, root, catalog).
    """

    def __init__(
        self,
        config: MessagesConfig | None = None,
        catalog: MessageCatalog | None = None,
    ):
        self.config = config or MessagesConfig()
        self.catalog = catalog or catalog_for(self.config)
        self.paths = LookupPathGenerator(self.config.lookup_paths)

    @property
    def root(self) -> str:
        return self.config.root

    @property
    def default_locale(self) -> str:
        return self.config.default_locale

    @property
    def identity(self) -> Hashable:
        return (self.config, self.root, self.catalog)

    @property
    def cache(self) -> ResolutionCache:
        return partition(self.identity)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageResolver):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(root={self.root!r})"

    def resolve(self, predicate: str, options: Mapping[str, Any] | None = None, **extra: Any) -> str | None:
        """
        Resolve the message for a failed predicate.

        Args:
            predicate: Predicate name, e.g. "gte" or "filled"
            options: Lookup and interpolation options (rule, locale,
                arg_type, val_type, message_type, path, num, ...)

        Returns:
            The expanded message, or None when no template matches

        Raises:
            TemplateError: If a path or message template references a
                token that is not available
        """
        opts = {**(options or {}), **extra}
        template = self.cache.fetch_or_store(
            cache_key(predicate, opts),
            lambda: self._find_template(predicate, opts),
        )
        if template is None:
            return None
        return expand(template, self.tokens(predicate, opts))

    __call__ = resolve

    def resolve_rule(self, name: str, options: Mapping[str, Any] | None = None, **extra: Any) -> str | None:
        """Rule label stored at "<locale>.rules.<name>", or None."""
        opts = {**(options or {}), **extra}
        value = self.catalog.get(f"%{{locale}}.rules.{name}", opts.get("locale"))
        return value if isinstance(value, str) else None

    def tokens(self, predicate: str, options: Mapping[str, Any]) -> dict[str, Any]:
        """Full token mapping for a lookup: options plus derived tokens."""
        config = self.config
        tokens = dict(options)
        tokens.update(
            root=self.root,
            predicate=predicate,
            arg_type=classify(options.get("arg_type"), config.arg_types, config.arg_type_default),
            val_type=classify(options.get("val_type"), config.val_types, config.val_type_default),
            message_type=options.get("message_type") or DEFAULT_MESSAGE_TYPE,
        )
        if tokens.get("rule") is None:
            tokens["rule"] = predicate
        return tokens

    def lookup(self, predicate: str, options: Mapping[str, Any] | None = None) -> tuple[str | None, dict[str, Any]]:
        """
        Find the first candidate path holding a string template.

        Returns:
            (matched path or None, options minus the lookup token names)
        """
        options = options or {}
        tokens = self.tokens(predicate, options)
        extra = {key: value for key, value in options.items() if key not in self.config.lookup_options}
        locale = options.get("locale")

        for path in self.candidates(tokens):
            if self.catalog.key_exists(path, locale) and isinstance(self.catalog.get(path, locale), str):
                return path, extra

        logger.debug(f"No message for predicate '{predicate}' (rule={tokens['rule']}, locale={locale})")
        return None, extra

    def lookup_paths(self, predicate: str, options: Mapping[str, Any] | None = None) -> list[str]:
        """Candidate paths for a lookup, most specific first."""
        return self.candidates(self.tokens(predicate, options or {}))

    def candidates(self, tokens: Mapping[str, Any]) -> list[str]:
        return self.paths.generate(tokens)

    def _find_template(self, predicate: str, options: Mapping[str, Any]) -> str | None:
        path, _ = self.lookup(predicate, options)
        if path is None:
            return None
        return self.catalog.get(path, options.get("locale"))

    def namespaced(self, namespace: str) -> NamespacedResolver:
        """Resolver scoped under "<root>.<namespace>", sharing this one's catalog."""
        return NamespacedResolver(namespace, self)


class NamespacedResolver(MessageResolver):
    """
    Delegates to a parent resolver with the root extended by a namespace.

    Candidates under "<root>.<namespace>" are tried first, then the
    parent's own candidates, so anything not overridden in the namespace
    still resolves.
    """

    def __init__(self, namespace: str, parent: MessageResolver):
        self.namespace = namespace
        self.parent = parent
        self.config = parent.config
        self.catalog = parent.catalog
        self.paths = parent.paths

    @property
    def root(self) -> str:
        return f"{self.parent.root}.{self.namespace}"

    def candidates(self, tokens: Mapping[str, Any]) -> list[str]:
        scoped = self.paths.generate(tokens)
        return scoped + self.parent.candidates({**tokens, "root": self.parent.root})
