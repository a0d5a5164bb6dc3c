"""
Rulebook - Rule-based Data Validation

A validation layer providing:
- Schema checks for key presence and value types
- Business rules evaluated against checked values
- Message resolution from a hierarchical, locale-aware catalog
- Per-process caching of resolved message templates
"""

from .config import ContractConfig, MessagesConfig
from .contract import Contract, ContractDefinition, Key, Result, Schema
from .messages import MessageCatalog, MessageResolver

__version__ = "0.1.0"

__all__ = [
    "Contract",
    "ContractConfig",
    "ContractDefinition",
    "Key",
    "MessageCatalog",
    "MessageResolver",
    "MessagesConfig",
    "Result",
    "Schema",
]
