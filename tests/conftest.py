"""
Shared pytest fixtures for deepmap tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import typing as _typing
import unittest.mock as _mock

import pytest as _pytest

import deepmap as deepmap
import deepmap.config as config

# =============================================================================
# Environment isolation
# =============================================================================


def clean_env() -> dict[str, str]:
    """Return environment dict with every DEEPMAP_* variable removed."""
    return {k: v for k, v in _os.environ.items() if not k.startswith("DEEPMAP_")}


@_pytest.fixture(autouse=True)
def isolated_settings() -> _typing.Iterator[None]:
    """Run each test without DEEPMAP_* env vars and with a fresh settings cache."""
    with _mock.patch.dict(_os.environ, clean_env(), clear=True):
        config.get_settings.cache_clear()
        yield
    config.get_settings.cache_clear()


# =============================================================================
# DeepMap fixtures
# =============================================================================


@_pytest.fixture
def empty_map() -> deepmap.DeepMap[str, str]:
    """Freshly constructed DeepMap."""
    return deepmap.DeepMap()


@_pytest.fixture
def chain_map() -> deepmap.DeepMap[str, str]:
    """Root, child and grandchild all set: (), ("x",), ("x", "y")."""
    return deepmap.DeepMap([((), "a"), (("x",), "b"), (("x", "y"), "c")])


@_pytest.fixture
def branching_map() -> deepmap.DeepMap[str, int]:
    """Two branches under "a" plus an unrelated top-level key.

    a
    ├── b = 1
    │   └── c = 2
    └── d
        └── e = 3
    f = 4
    """
    return deepmap.DeepMap(
        [
            (("a", "b"), 1),
            (("a", "b", "c"), 2),
            (("a", "d", "e"), 3),
            (("f",), 4),
        ]
    )
