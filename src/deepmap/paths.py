"""
Key path helpers.

A key path is any ordered, finite, non-string iterable of hashable tokens.
DeepMap normalises every path to a tuple on entry, so callers may pass
lists, tuples or generators interchangeably.

Dotted notation is a convenience for string tokens only:
    >>> split_path("model.name")
    ('model', 'name')
    >>> join_path(("model", "name"))
    'model.name'
"""

from __future__ import annotations

import typing as _typing

import deepmap._types as _types
import deepmap.config as config


class InvalidKeyPathError(TypeError):
    """Raised when a value cannot be used as a key path."""

    pass


def as_key_path(path: _typing.Iterable[_typing.Any]) -> _types.KeyPath:
    """
    Normalise a key path to a tuple.

    Strings and bytes are rejected instead of being split into characters:
    a bare token is never promoted to a one-element path.

    Raises:
        InvalidKeyPathError: If path is a str/bytes or is not iterable.
    """
    if isinstance(path, tuple):
        return path
    if isinstance(path, (str, bytes, bytearray)):
        raise InvalidKeyPathError(
            f"Key path must be a sequence of tokens, got {type(path).__name__} "
            f"{path!r} (wrap a single token as ({path!r},))"
        )
    try:
        return tuple(path)
    except TypeError:
        raise InvalidKeyPathError(
            f"Key path must be iterable, got {type(path).__name__}"
        ) from None


def _resolve_separator(separator: str | None) -> str:
    if separator is None:
        separator = config.get_settings().path_separator
    if not separator:
        raise ValueError("Path separator must not be empty")
    return separator


def split_path(text: str, separator: str | None = None) -> tuple[str, ...]:
    """
    Split dotted notation into a key path.

    The empty string is the empty path (the root).

    Args:
        text: Dotted path, e.g. "model.name".
        separator: Token separator. Defaults to Settings.path_separator.
    """
    separator = _resolve_separator(separator)
    if not text:
        return ()
    return tuple(text.split(separator))


def join_path(
    path: _typing.Iterable[_typing.Any],
    separator: str | None = None,
) -> str:
    """
    Render a key path in dotted notation.

    Tokens are converted with str(). The result only round-trips through
    split_path when every token is a string.

    Raises:
        ValueError: If a token's text contains the separator, or the path is
            a single empty token (it would render like the root path).
    """
    separator = _resolve_separator(separator)
    parts = []
    for token in as_key_path(path):
        text = str(token)
        if separator in text:
            raise ValueError(
                f"Token {token!r} contains the path separator {separator!r}"
            )
        parts.append(text)
    if parts == [""]:
        raise ValueError("A single empty token renders the same as the root path")
    return separator.join(parts)
