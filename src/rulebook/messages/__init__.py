"""Message catalog and resolution engine."""

from .cache import ResolutionCache
from .catalog import MessageCatalog, catalog_for
from .loader import CatalogLoader, load_messages
from .lookup import LookupPathGenerator, classify
from .resolver import MessageResolver, NamespacedResolver

__all__ = [
    "CatalogLoader",
    "LookupPathGenerator",
    "MessageCatalog",
    "MessageResolver",
    "NamespacedResolver",
    "ResolutionCache",
    "catalog_for",
    "classify",
    "load_messages",
]
