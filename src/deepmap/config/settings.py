"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with DEEPMAP_ prefix
3. .env file named by DEEPMAP_ENV_FILE (if present)
4. Field defaults (lowest precedence)

Example:
    DEEPMAP_PATH_SEPARATOR=/
    DEEPMAP_YAML_SORT_KEYS=true
"""

import functools as _functools
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import deepmap.constants as constants


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    DEEPMAP_ENV_FILE names the file explicitly. If it is set but the file
    doesn't exist, nothing is loaded rather than falling back silently.
    Without it, settings come from the environment only.

    Called once, when Settings is defined.
    """
    if env_file := _os.environ.get(f"{constants.ENV_PREFIX}ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    deepmap configuration settings.

    All settings can be overridden via environment variables with the
    DEEPMAP_ prefix, e.g. DEEPMAP_YAML_INDENT=4.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing issues without
        .env interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    # =========================================================================
    # Key paths
    # =========================================================================

    path_separator: str = _pydantic.Field(
        default=constants.DEFAULT_PATH_SEPARATOR,
        min_length=1,
        description="Separator for dotted key paths (split_path/join_path)",
    )

    # =========================================================================
    # YAML output
    # =========================================================================

    yaml_sort_keys: bool = _pydantic.Field(
        default=False,
        description="Sort mapping keys when dumping (default keeps insertion order)",
    )

    yaml_indent: int = _pydantic.Field(
        default=constants.DEFAULT_YAML_INDENT,
        ge=constants.MIN_YAML_INDENT,
        le=constants.MAX_YAML_INDENT,
        description="Indentation width for dumped YAML",
    )

    yaml_allow_unicode: bool = _pydantic.Field(
        default=True,
        description="Emit non-ASCII characters as-is instead of escaping them",
    )


@_functools.cache
def get_settings() -> Settings:
    """
    Return the process-wide Settings instance.

    The instance is built on first call. Use get_settings.cache_clear()
    to pick up changes to DEEPMAP_* setting variables (tests do this
    between cases). DEEPMAP_ENV_FILE is not re-read: the .env file is
    chosen once, when this module is imported. Pass _env_file to
    Settings to load a different file.
    """
    return Settings()
