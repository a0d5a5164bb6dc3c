"""Message catalog - immutable, lazily-loaded tree of message templates."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from ..config import MessagesConfig
from .loader import CatalogLoader, load_messages


logger = logging.getLogger(__name__)

LOCALE_PLACEHOLDER = "%{locale}"


def _freeze(data: Any) -> Any:
    """Wrap nested dicts in read-only proxies."""
    if isinstance(data, dict):
        return MappingProxyType({key: _freeze(value) for key, value in data.items()})
    if isinstance(data, list):
        return tuple(_freeze(item) for item in data)
    return data


def _flatten(tree: Mapping[str, Any], prefix: str = "") -> Iterator[tuple[str, Any]]:
    """Yield (dot.path, value) for every node, mappings included."""
    for key, value in tree.items():
        path = f"{prefix}.{key}" if prefix else key
        yield path, value
        if isinstance(value, Mapping):
            yield from _flatten(value, path)


class MessageCatalog:
    """
    Hierarchical store of message templates addressed by dot paths.

    Sources are loaded and deep-merged on first access, exactly once, even
    under concurrent first use. The merged tree is read-only afterwards.

    Paths may contain %{locale}; it is filled with the locale passed to
    the lookup, or the default locale.
    """

    def __init__(
        self,
        sources: tuple[str | Path, ...] = (),
        *,
        default_locale: str = "en",
        loader: CatalogLoader | None = None,
        data: dict[str, Any] | None = None,
    ):
        self.sources = tuple(sources)
        self.default_locale = default_locale
        self._loader = loader or CatalogLoader()
        self._data = data
        self._tree: Mapping[str, Any] | None = None
        self._index: dict[str, Any] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: MessagesConfig) -> MessageCatalog:
        return cls(config.paths, default_locale=config.default_locale)

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_locale: str = "en") -> MessageCatalog:
        """Build a catalog from an in-memory tree (no file sources)."""
        return cls(default_locale=default_locale, data=load_messages(data))

    @property
    def loaded(self) -> bool:
        return self._tree is not None

    def _ensure_loaded(self) -> None:
        if self._tree is not None:
            return
        with self._lock:
            if self._tree is not None:
                return
            if self._data is not None:
                merged = self._data
            else:
                merged = self._loader.load_sources(self.sources)
            tree = _freeze(merged)
            # Build the index before publishing the tree so readers that
            # pass the fast-path check always see a complete index
            self._index = dict(_flatten(tree))
            self._tree = tree
            logger.info(f"Message catalog ready: {len(self._index)} keys")

    def _key(self, path: str, locale: str | None) -> str:
        if LOCALE_PLACEHOLDER in path:
            return path.replace(LOCALE_PLACEHOLDER, locale or self.default_locale)
        return path

    def get(self, path: str, locale: str | None = None) -> Any | None:
        """Value at path (a template string or a nested mapping), or None."""
        self._ensure_loaded()
        return self._index.get(self._key(path, locale))

    def key_exists(self, path: str, locale: str | None = None) -> bool:
        """Check if a path exists in the catalog."""
        self._ensure_loaded()
        return self._key(path, locale) in self._index

    def keys(self) -> list[str]:
        """All dot paths, nested mappings included."""
        self._ensure_loaded()
        return list(self._index)

    @property
    def tree(self) -> Mapping[str, Any]:
        self._ensure_loaded()
        return self._tree

    def __contains__(self, path: str) -> bool:
        return self.key_exists(path)


_catalogs: dict[MessagesConfig, MessageCatalog] = {}
_catalogs_lock = threading.Lock()


def catalog_for(config: MessagesConfig) -> MessageCatalog:
    """
    Process-wide catalog for a configuration.

    Equal configurations share one catalog instance (and so one load).
    """
    catalog = _catalogs.get(config)
    if catalog is not None:
        return catalog
    with _catalogs_lock:
        catalog = _catalogs.get(config)
        if catalog is None:
            catalog = MessageCatalog.from_config(config)
            _catalogs[config] = catalog
            logger.debug(f"Registered message catalog for config {config.identity:x}")
        return catalog
