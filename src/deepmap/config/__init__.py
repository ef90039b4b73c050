"""
Configuration module for deepmap.

Uses pydantic-settings for environment variable loading.
"""

from deepmap.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
