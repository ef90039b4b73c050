"""Tests for configuration settings."""

import os as _os
import pathlib as _pathlib
import unittest.mock as _mock

import pydantic as _pydantic
import pytest as _pytest

import deepmap.config as config
import deepmap.config.settings as settings_module


class TestSettingsDefaults:
    """Test Settings default values when environment is clean."""

    def test_default_path_separator(self) -> None:
        """Dotted paths use '.' by default."""
        assert config.Settings.construct_without_dotenv().path_separator == "."

    def test_default_yaml_options(self) -> None:
        """YAML output keeps insertion order, 2-space indent and raw unicode."""
        settings = config.Settings.construct_without_dotenv()

        assert settings.yaml_sort_keys is False
        assert settings.yaml_indent == 2
        assert settings.yaml_allow_unicode is True


class TestSettingsEnvironment:
    """Test DEEPMAP_* environment overrides."""

    def test_env_overrides(self) -> None:
        """Environment variables override defaults."""
        env = {
            "DEEPMAP_PATH_SEPARATOR": "/",
            "DEEPMAP_YAML_SORT_KEYS": "true",
            "DEEPMAP_YAML_INDENT": "4",
            "DEEPMAP_YAML_ALLOW_UNICODE": "false",
        }
        with _mock.patch.dict(_os.environ, env):
            settings = config.Settings.construct_without_dotenv()

        assert settings.path_separator == "/"
        assert settings.yaml_sort_keys is True
        assert settings.yaml_indent == 4
        assert settings.yaml_allow_unicode is False

    def test_constructor_beats_environment(self) -> None:
        """Constructor arguments take precedence."""
        with _mock.patch.dict(_os.environ, {"DEEPMAP_PATH_SEPARATOR": "/"}):
            settings = config.Settings.construct_without_dotenv(path_separator=":")

        assert settings.path_separator == ":"

    def test_unknown_env_vars_ignored(self) -> None:
        """Unrelated DEEPMAP_* variables don't break loading."""
        with _mock.patch.dict(_os.environ, {"DEEPMAP_SOMETHING_ELSE": "x"}):
            settings = config.Settings.construct_without_dotenv()

        assert settings.path_separator == "."

    def test_dotenv_file(self, tmp_path: _pathlib.Path) -> None:
        """An explicit env file is read when passed."""
        env_file = tmp_path / ".env"
        env_file.write_text("DEEPMAP_YAML_INDENT=3\n", encoding="utf-8")

        settings = config.Settings(_env_file=env_file)  # type: ignore[call-arg]

        assert settings.yaml_indent == 3


class TestEnvFileSelection:
    """Test how DEEPMAP_ENV_FILE picks the .env file."""

    def test_unset(self) -> None:
        """No file is loaded without DEEPMAP_ENV_FILE."""
        assert settings_module._get_env_file() is None

    def test_existing_file(self, tmp_path: _pathlib.Path) -> None:
        """An existing file is selected."""
        env_file = tmp_path / "custom.env"
        env_file.write_text("DEEPMAP_PATH_SEPARATOR=/\n", encoding="utf-8")

        with _mock.patch.dict(_os.environ, {"DEEPMAP_ENV_FILE": str(env_file)}):
            selected = settings_module._get_env_file()

        assert selected == str(env_file)
        settings = config.Settings(_env_file=selected)  # type: ignore[call-arg]
        assert settings.path_separator == "/"

    def test_missing_file(self, tmp_path: _pathlib.Path) -> None:
        """A path that doesn't exist selects nothing."""
        with _mock.patch.dict(_os.environ, {"DEEPMAP_ENV_FILE": str(tmp_path / "absent.env")}):
            assert settings_module._get_env_file() is None


class TestSettingsValidation:
    """Test value validation."""

    def test_empty_separator_rejected(self) -> None:
        """The separator can't be empty."""
        with _pytest.raises(_pydantic.ValidationError):
            config.Settings.construct_without_dotenv(path_separator="")

    @_pytest.mark.parametrize("indent", [0, 1, 10])
    def test_indent_range(self, indent: int) -> None:
        """Indents PyYAML would ignore are rejected."""
        with _pytest.raises(_pydantic.ValidationError):
            config.Settings.construct_without_dotenv(yaml_indent=indent)

    def test_invalid_env_value(self) -> None:
        """Non-numeric indents from the environment fail validation."""
        with _mock.patch.dict(_os.environ, {"DEEPMAP_YAML_INDENT": "wide"}):
            with _pytest.raises(_pydantic.ValidationError):
                config.Settings.construct_without_dotenv()


class TestGetSettings:
    """Test the cached settings accessor."""

    def test_cached(self) -> None:
        """Repeated calls return the same instance."""
        assert config.get_settings() is config.get_settings()

    def test_cache_clear_rereads_environment(self) -> None:
        """cache_clear() picks up environment changes."""
        first = config.get_settings()
        with _mock.patch.dict(_os.environ, {"DEEPMAP_YAML_INDENT": "6"}):
            config.get_settings.cache_clear()
            second = config.get_settings()

        assert second is not first
        assert second.yaml_indent == 6
