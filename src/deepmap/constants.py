"""
Shared constants for deepmap.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

ENV_PREFIX = "DEEPMAP_"
"""Prefix for environment variables read by Settings."""

DEFAULT_PATH_SEPARATOR = "."
"""Separator used by split_path/join_path for dotted key paths."""

# YAML output defaults
DEFAULT_YAML_INDENT = 2
"""Default indentation for dumped YAML documents."""

MIN_YAML_INDENT = 2
MAX_YAML_INDENT = 9
"""PyYAML ignores indents outside this range, so Settings rejects them."""
