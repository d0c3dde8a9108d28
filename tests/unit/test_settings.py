"""Tests for configuration settings."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from tradejournal.config.settings import DEFAULT_DATA_DIR, Settings


class TestSettings:
    """Tests for Settings model."""

    def test_default_settings(self) -> None:
        """Test default settings values."""
        # Clear env vars and disable .env file reading
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.host == "127.0.0.1"
        assert settings.port == 3000
        assert settings.cors_origins == ["*"]
        assert settings.frontend_dir is None
        assert settings.log_level == "INFO"

    def test_trades_path_defaults_to_data_dir(self) -> None:
        """Test the document lives in the data directory by default."""
        with patch.dict(os.environ, {"DATA_DIR": "/srv/journal"}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.trades_path == Path("/srv/journal/trades.json")
        assert settings.logs_path == Path("/srv/journal/logs")

    def test_trades_path_override(self) -> None:
        """Test an explicit data file wins."""
        env = {"DATA_DIR": "/srv/journal", "DATA_FILE": "/tmp/other.json"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.trades_path == Path("/tmp/other.json")

    def test_server_settings_from_env(self) -> None:
        """Test loading server settings from environment."""
        env = {
            "HOST": "0.0.0.0",
            "PORT": "8080",
            "CORS_ORIGINS": '["http://localhost:5173"]',
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.host == "0.0.0.0"
        assert settings.port == 8080
        assert settings.cors_origins == ["http://localhost:5173"]

    def test_index_path(self) -> None:
        """Test the front-end entry document path."""
        with patch.dict(os.environ, {"FRONTEND_DIR": "/srv/web"}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.index_path == Path("/srv/web/index.html")
