"""Shared test fixtures for rulebook tests."""

import pytest

from rulebook.config import MessagesConfig
from rulebook.messages import cache as resolution_cache
from rulebook.messages.catalog import MessageCatalog
from rulebook.messages.resolver import MessageResolver


# =============================================================================
# Catalog Fixtures
# =============================================================================

CATALOG_DATA = {
    "en": {
        "errors": {
            "filled": "must be filled",
            "gte": "must be greater than or equal to %{num}",
            "size": {
                "arg": {
                    "default": "size must be %{size}",
                    "range": "size must be within %{size_left} - %{size_right}",
                },
                "value": {
                    "string": {
                        "arg": {"default": "length must be %{size}"},
                    },
                },
            },
            "format": {
                "failure": "is in invalid format",
                "hint": "use the format %{regex}",
            },
            "nested": {"deeper": "never picked for a bare lookup"},
            "rules": {
                "age": {"gte": "must be an adult (%{num}+)"},
            },
        },
        "rules": {"email": "E-mail"},
    },
    "pl": {
        "errors": {"filled": "nie może być pusty"},
    },
}


@pytest.fixture
def catalog_data() -> dict:
    return CATALOG_DATA


@pytest.fixture
def catalog(catalog_data) -> MessageCatalog:
    """In-memory catalog for testing."""
    return MessageCatalog.from_dict(catalog_data)


@pytest.fixture
def config() -> MessagesConfig:
    """Default message configuration."""
    return MessagesConfig()


@pytest.fixture
def resolver(config, catalog) -> MessageResolver:
    return MessageResolver(config, catalog)


@pytest.fixture
def write_yaml(tmp_path):
    """Write a YAML document into tmp_path and return its path."""
    import yaml

    def _write(name: str, data) -> str:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, allow_unicode=True), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture(autouse=True)
def reset_cache():
    """Start every test with empty resolution caches."""
    resolution_cache.clear_all()
    yield
    resolution_cache.clear_all()
