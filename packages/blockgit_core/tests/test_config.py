"""Tests for the settings and logging configuration module.

Covers:
    - Environment file loading
    - Settings defaults and environment overrides
    - Logging configuration
"""
from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from blockgit_core.config import Settings
from blockgit_core.config import _load_env_file
from blockgit_core.config import configure_logging
from blockgit_core.config import load_settings

SETTING_VARS = (
    "BLOCKGIT_STATE_DIR",
    "BLOCKGIT_DEFAULT_BRANCH",
    "BLOCKGIT_LOG_LEVEL",
    "BLOCKGIT_HOST",
    "BLOCKGIT_PORT",
)


# ---- Fixtures -----------------------------------------------------------------------------------------------


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no BLOCKGIT_* variables and an empty working directory."""
    for name in SETTING_VARS:
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---- _load_env_file Tests -----------------------------------------------------------------------------------


class TestLoadEnvFile:
    """Tests for _load_env_file function."""

    def test_explicit_path(self, tmp_path):
        """Test loading from explicit path."""
        env_file = tmp_path / "custom.env"
        env_file.write_text("BLOCKGIT_PORT=6000\n")

        with patch("blockgit_core.config.load_dotenv") as mock_load:
            _load_env_file(env_file)
            mock_load.assert_called_once_with(env_file, override=True)

    def test_explicit_path_not_exists(self, tmp_path):
        """Test a missing explicit path loads nothing."""
        with patch("blockgit_core.config.load_dotenv") as mock_load:
            _load_env_file(tmp_path / "missing.env")
            mock_load.assert_not_called()

    def test_cwd_env(self, clean_env):
        """Test .env in the working directory is found."""
        env_file = clean_env / ".env"
        env_file.write_text("BLOCKGIT_HOST=0.0.0.0\n")

        with patch("blockgit_core.config.load_dotenv") as mock_load:
            _load_env_file()
            mock_load.assert_called_once_with(env_file, override=True)

    def test_parent_env(self, clean_env, monkeypatch):
        """Test .env in a parent directory is found."""
        env_file = clean_env / ".env"
        env_file.write_text("BLOCKGIT_HOST=0.0.0.0\n")
        nested = clean_env / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)

        with patch("blockgit_core.config.load_dotenv") as mock_load:
            _load_env_file()
            mock_load.assert_called_once_with(env_file, override=True)


# ---- load_settings Tests ------------------------------------------------------------------------------------


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_defaults(self, clean_env):
        """Test settings without any environment."""
        settings = load_settings()

        assert settings == Settings()
        assert settings.state_dir == ".blockgit"
        assert settings.default_branch == "default"
        assert settings.port == 5000

    def test_environment_overrides(self, clean_env, monkeypatch):
        """Test each setting reads its environment variable."""
        monkeypatch.setenv("BLOCKGIT_STATE_DIR", ".state")
        monkeypatch.setenv("BLOCKGIT_DEFAULT_BRANCH", "main")
        monkeypatch.setenv("BLOCKGIT_LOG_LEVEL", "debug")
        monkeypatch.setenv("BLOCKGIT_HOST", "0.0.0.0")
        monkeypatch.setenv("BLOCKGIT_PORT", "8080")

        settings = load_settings()

        assert settings.state_dir == ".state"
        assert settings.default_branch == "main"
        assert settings.log_level == "DEBUG"
        assert settings.host == "0.0.0.0"
        assert settings.port == 8080

    def test_env_file_values(self, clean_env):
        """Test values from a .env file are applied."""
        env_file = clean_env / "settings.env"
        env_file.write_text("BLOCKGIT_DEFAULT_BRANCH=trunk\nBLOCKGIT_PORT=7000\n")

        settings = load_settings(env_file)

        assert settings.default_branch == "trunk"
        assert settings.port == 7000

    def test_invalid_port(self, clean_env, monkeypatch):
        """Test a non-numeric port is rejected."""
        monkeypatch.setenv("BLOCKGIT_PORT", "http")

        with pytest.raises(ValueError, match="Invalid BLOCKGIT_PORT"):
            load_settings()


# ---- configure_logging Tests --------------------------------------------------------------------------------


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_sets_package_level(self):
        """Test the package logger receives the requested level."""
        configure_logging("debug")

        assert logging.getLogger("blockgit_core").level == logging.DEBUG

    def test_unknown_level_falls_back(self):
        """Test unknown level names fall back to WARNING."""
        configure_logging("chatty")

        assert logging.getLogger("blockgit_core").level == logging.WARNING
