"""
deepmap - hierarchical key-path maps

A DeepMap associates sequences of tokens ("key paths") with values and
stores them as a trie, so entries sharing a prefix share structure.

Example:
    >>> import deepmap
    >>> dm = deepmap.DeepMap()
    >>> dm.set(("model", "name"), "llama")
    DeepMap({('model', 'name'): 'llama'})
    >>> dm.has(("model",))
    False
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("deepmap")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from deepmap._core import DeepMap  # noqa: E402
from deepmap._nested import NestingConflictError, flatten, from_nested, to_nested  # noqa: E402
from deepmap._types import MISSING, KeyPath  # noqa: E402
from deepmap._yaml import YamlDocumentError  # noqa: E402
from deepmap._yaml import dump as dump_yaml  # noqa: E402
from deepmap._yaml import load as load_yaml  # noqa: E402
from deepmap._yaml import load_file as load_yaml_file  # noqa: E402
from deepmap.config import Settings, get_settings  # noqa: E402
from deepmap.paths import InvalidKeyPathError, as_key_path, join_path, split_path  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "MISSING",
    "DeepMap",
    "InvalidKeyPathError",
    "KeyPath",
    "NestingConflictError",
    "Settings",
    "YamlDocumentError",
    "as_key_path",
    "dump_yaml",
    "flatten",
    "from_nested",
    "get_settings",
    "join_path",
    "load_yaml",
    "load_yaml_file",
    "split_path",
    "to_nested",
]
