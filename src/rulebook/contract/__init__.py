"""Contracts: schema checks, business rules and validation results."""

from .contract import Contract, ContractDefinition
from .path import KeyPath
from .result import Message, MessageSet, Result
from .rule import Rule, RuleContext
from .schema import Failure, Key, Schema, SchemaResult, optional, required

__all__ = [
    "Contract",
    "ContractDefinition",
    "Failure",
    "Key",
    "KeyPath",
    "Message",
    "MessageSet",
    "Result",
    "Rule",
    "RuleContext",
    "Schema",
    "SchemaResult",
    "optional",
    "required",
]
