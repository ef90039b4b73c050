"""
YAML loading and dumping for DeepMap.

Documents are nested mappings; each leaf becomes one entry keyed by the
path of mapping keys leading to it (see deepmap._nested).

Example:
    >>> dm = load('''
    ... model:
    ...   name: llama
    ...   size: 7b
    ... ''')
    >>> dm[("model", "size")]
    '7b'
"""

from __future__ import annotations

import collections.abc as _abc
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import deepmap._core as _core
import deepmap._nested as _nested
import deepmap.config as config

_logger = _logging.getLogger(__name__)


class YamlDocumentError(ValueError):
    """Raised when a YAML document's top level is not a mapping."""

    pass


def load(stream: str | bytes | _typing.IO[_typing.Any]) -> _core.DeepMap[_typing.Any, _typing.Any]:
    """
    Load a YAML document into a DeepMap.

    Uses yaml.safe_load, so only plain YAML types are constructed.
    An empty document yields an empty DeepMap.

    Raises:
        YamlDocumentError: If the document is not a mapping.
        yaml.YAMLError: If the YAML is malformed.
    """
    data = _yaml.safe_load(stream)
    if data is None:
        return _core.DeepMap()
    if not isinstance(data, _abc.Mapping):
        raise YamlDocumentError(
            f"Expected a mapping at the top of the document, got {type(data).__name__}"
        )

    result = _nested.from_nested(data)
    _logger.debug("Loaded %d entries from YAML", len(result))
    return result


def load_file(path: str | _os.PathLike[str]) -> _core.DeepMap[_typing.Any, _typing.Any]:
    """Load a UTF-8 YAML file into a DeepMap."""
    path = _pathlib.Path(path)
    _logger.debug("Loading YAML file %s", path)
    with path.open(encoding="utf-8") as f:
        return load(f)


def dump(
    deep_map: _core.DeepMap[_typing.Any, _typing.Any],
    stream: _typing.IO[str] | None = None,
    *,
    settings: config.Settings | None = None,
) -> str | None:
    """
    Dump a DeepMap as a nested YAML document.

    Args:
        deep_map: The map to dump.
        stream: Where to write. If None, the document is returned.
        settings: Formatting options. Defaults to get_settings().

    Returns:
        The YAML text if stream is None, otherwise None.

    Raises:
        NestingConflictError: If the map has no nested representation.
        yaml.representer.RepresenterError: If a value isn't a plain YAML type.
    """
    if settings is None:
        settings = config.get_settings()

    data = _nested.to_nested(deep_map)
    _logger.debug("Dumping %d top-level keys to YAML", len(data))
    return _typing.cast(
        "str | None",
        _yaml.safe_dump(
            data,
            stream,
            default_flow_style=False,
            sort_keys=settings.yaml_sort_keys,
            indent=settings.yaml_indent,
            allow_unicode=settings.yaml_allow_unicode,
        ),
    )
