"""
Type aliases and sentinels for DeepMap.

- KeyPath: Tuple of tokens addressing a node (the empty tuple is the root)
- MISSING: Marks a node that holds no value, so None remains storable
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

# Example: ("config", "model", "name") addresses config -> model -> name
KeyPath: _typing.TypeAlias = tuple[_abc.Hashable, ...]


# Helper function to reconstruct MISSING singleton during unpickle
def _get_missing_singleton() -> _MissingType:
    """Return the MISSING singleton. Called by pickle to reconstruct."""
    return MISSING


class _MissingType:
    """Sentinel type marking the absence of a value on a node."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple[_typing.Callable[[], _MissingType], tuple[()]]:
        """Pickle support: ensure singleton is preserved."""
        return (_get_missing_singleton, ())


MISSING = _MissingType()
