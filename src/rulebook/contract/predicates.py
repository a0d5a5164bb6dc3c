"""Named predicates used by schemas and rules."""

from __future__ import annotations

import functools
import re
from typing import Any, Callable


PREDICATES: dict[str, Callable[..., bool]] = {}

TYPE_PREDICATES: dict[str, type | tuple[type, ...]] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "dict": dict,
    "list": list,
}


def predicate(name: str) -> Callable[[Callable[..., bool]], Callable[..., bool]]:
    """Register a predicate under name."""
    def decorator(fn: Callable[..., bool]) -> Callable[..., bool]:
        PREDICATES[name] = fn
        return fn
    return decorator


def _type_check(kind: type | tuple[type, ...]) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        # bool is an int subclass; only the bool predicate accepts it
        if isinstance(value, bool) and kind is not bool:
            return False
        return isinstance(value, kind)
    return check


for _name, _kind in TYPE_PREDICATES.items():
    PREDICATES[_name] = _type_check(_kind)


def _rejects_type_errors(fn: Callable[..., bool]) -> Callable[..., bool]:
    """A value the check cannot be applied to (e.g. "abc" >= 18) fails it."""
    @functools.wraps(fn)
    def wrapper(value: Any, *args: Any, **kwargs: Any) -> bool:
        try:
            return fn(value, *args, **kwargs)
        except TypeError:
            return False
    return wrapper


@predicate("filled")
def filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, dict, tuple, set)):
        return len(value) > 0
    return True


@predicate("gt")
@_rejects_type_errors
def gt(value: Any, num: Any) -> bool:
    return value > num


@predicate("gte")
@_rejects_type_errors
def gte(value: Any, num: Any) -> bool:
    return value >= num


@predicate("lt")
@_rejects_type_errors
def lt(value: Any, num: Any) -> bool:
    return value < num


@predicate("lte")
@_rejects_type_errors
def lte(value: Any, num: Any) -> bool:
    return value <= num


@predicate("size")
@_rejects_type_errors
def size(value: Any, size: int | range) -> bool:
    if isinstance(size, range):
        return len(value) in size
    return len(value) == size


@predicate("min_size")
@_rejects_type_errors
def min_size(value: Any, num: int) -> bool:
    return len(value) >= num


@predicate("max_size")
@_rejects_type_errors
def max_size(value: Any, num: int) -> bool:
    return len(value) <= num


@predicate("included_in")
@_rejects_type_errors
def included_in(value: Any, list: Any) -> bool:
    return value in list


@predicate("format")
def format_(value: Any, regex: str | re.Pattern) -> bool:
    return isinstance(value, str) and re.search(regex, value) is not None


def get(name: str) -> Callable[..., bool]:
    """Look up a predicate, raising KeyError for unknown names."""
    try:
        return PREDICATES[name]
    except KeyError:
        raise KeyError(f"Unknown predicate '{name}'") from None


def check(name: str, value: Any, args: dict[str, Any] | None = None) -> bool:
    """Apply a named predicate to value."""
    return get(name)(value, **(args or {}))


def predicate_tokens(name: str, value: Any, args: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Message options for a failed predicate.

    The argument and value types drive catalog lookup (e.g. a range
    argument selects the "range" variant); list arguments are rendered
    comma-separated for interpolation.
    """
    tokens: dict[str, Any] = {}
    args = args or {}
    for key, arg in args.items():
        if isinstance(arg, range):
            tokens[f"{key}_left"] = arg.start
            tokens[f"{key}_right"] = arg.stop - 1
        if isinstance(arg, (list, tuple, set, frozenset)):
            tokens[key] = ", ".join(str(item) for item in arg)
        elif isinstance(arg, re.Pattern):
            tokens[key] = arg.pattern
        else:
            tokens[key] = arg
    if args:
        tokens["arg_type"] = type(next(iter(args.values())))
    tokens["val_type"] = type(value)
    return tokens
