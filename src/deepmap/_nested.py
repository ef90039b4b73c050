"""
Conversion between nested mappings and DeepMap.

A nested mapping such as {"model": {"name": "llama"}} corresponds to the
entry ("model", "name") -> "llama". Non-empty mappings are descended into;
any other value, an empty mapping included, is a leaf.

The reverse direction only works when no valued path has descendants,
since a dict key cannot hold both a value and a sub-mapping.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import deepmap._core as _core
import deepmap._types as _types


class NestingConflictError(ValueError):
    """Raised when a DeepMap cannot be represented as a nested dict."""

    def __init__(self, path: _types.KeyPath, message: str) -> None:
        self.path = path
        super().__init__(f"Cannot nest value at {path!r}: {message}")


def flatten(
    data: _abc.Mapping[_typing.Any, _typing.Any],
    prefix: _types.KeyPath = (),
) -> _typing.Iterator[tuple[_types.KeyPath, _typing.Any]]:
    """
    Yield (path, value) for every leaf of a nested mapping, in mapping order.

    Example:
        >>> list(flatten({"a": {"b": 1}, "c": 2}))
        [(('a', 'b'), 1), (('c',), 2)]
    """
    for key, value in data.items():
        path = (*prefix, key)
        if isinstance(value, _abc.Mapping) and value:
            yield from flatten(value, path)
        else:
            yield path, value


def from_nested(data: _abc.Mapping[_typing.Any, _typing.Any]) -> _core.DeepMap[_typing.Any, _typing.Any]:
    """
    Build a DeepMap from a nested mapping.

    Raises:
        TypeError: If data is not a mapping.
    """
    if not isinstance(data, _abc.Mapping):
        raise TypeError(f"Expected a mapping, got {type(data).__name__}")
    return _core.DeepMap(flatten(data))


def to_nested(deep_map: _core.DeepMap[_typing.Any, _typing.Any]) -> dict[_typing.Any, _typing.Any]:
    """
    Convert a DeepMap back into nested dicts.

    Built from the pre-order entries, so an ancestor's value is always
    placed before any of its descendants arrive. Leaf values are returned
    as-is (not copied).

    Raises:
        NestingConflictError: If the root path holds a value, or a valued
            path also has descendants.
    """
    result: dict[_typing.Any, _typing.Any] = {}
    # ids of the dicts created here, as opposed to mapping values stored as leaves
    branches = {id(result)}

    for path, value in deep_map.entries():
        if not path:
            raise NestingConflictError((), "the root path holds a value")

        cursor = result
        for depth, token in enumerate(path[:-1], start=1):
            child = cursor.get(token, _types.MISSING)
            if child is _types.MISSING:
                child = cursor[token] = {}
                branches.add(id(child))
            elif id(child) not in branches:
                raise NestingConflictError(path[:depth], "path holds a value and has descendants")
            cursor = child
        cursor[path[-1]] = value

    return result
