"""Catalog loader - loads message templates from YAML/JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

from ..errors import CatalogLoadError


logger = logging.getLogger(__name__)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Merge override into a copy of base.

    Nested mappings merge recursively; any other value in override
    replaces the value at the same key in base.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _normalize(data: Any) -> Any:
    """Stringify mapping keys (YAML may produce ints/bools) recursively."""
    if isinstance(data, dict):
        return {str(key): _normalize(value) for key, value in data.items()}
    return data


class CatalogLoader:
    """
    Loads message catalogs from YAML or JSON files.

    File format:
    ```yaml
    en:
      errors:
        filled: "must be filled"
        gte: "must be greater than or equal to %{num}"
        size:
          arg:
            default: "size must be %{size}"
            range: "size must be within %{size_left} - %{size_right}"
      rules:
        age: "Age"
    ```
    """

    def load_file(self, path: str | Path) -> dict[str, Any]:
        """Load a single catalog document."""
        path = Path(path)

        if not path.exists():
            raise CatalogLoadError(f"Catalog file not found: {path}", source=str(path))

        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as exc:
            raise CatalogLoadError(f"Cannot read catalog {path}: {exc}", source=str(path)) from exc

        if data is None:
            logger.warning(f"Catalog file is empty: {path}")
            return {}

        if not isinstance(data, dict):
            raise CatalogLoadError(
                f"Catalog {path} must contain a mapping, got {type(data).__name__}",
                source=str(path),
            )

        logger.debug(f"Loaded catalog file: {path}")
        return _normalize(data)

    def load_directory(self, directory: str | Path) -> dict[str, Any]:
        """
        Load every YAML/JSON file in a directory.

        Files are loaded in alphabetical order. Later files override
        earlier definitions.
        """
        directory = Path(directory)

        if not directory.is_dir():
            raise CatalogLoadError(f"Not a directory: {directory}", source=str(directory))

        files = sorted(directory.glob("*.yaml")) + sorted(directory.glob("*.yml")) + sorted(directory.glob("*.json"))

        merged: dict[str, Any] = {}
        for file_path in files:
            logger.info(f"Loading catalog file: {file_path}")
            merged = deep_merge(merged, self.load_file(file_path))
        return merged

    def load_sources(self, sources: Iterable[str | Path]) -> dict[str, Any]:
        """Load and deep-merge sources in order (files or directories)."""
        merged: dict[str, Any] = {}
        count = 0
        for source in sources:
            path = Path(source)
            data = self.load_directory(path) if path.is_dir() else self.load_file(path)
            merged = deep_merge(merged, data)
            count += 1
        logger.info(f"Loaded message catalog from {count} source(s)")
        return merged


def load_messages(source: str | Path | dict) -> dict[str, Any]:
    """
    Convenience function to load a catalog tree.

    Args:
        source: File path, directory path, or dictionary

    Returns:
        The merged catalog tree
    """
    if isinstance(source, dict):
        return _normalize(source)
    return CatalogLoader().load_sources([source])
