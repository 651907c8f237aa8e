"""Tests for Settings."""

import os
from unittest.mock import patch

import pytest

from tickerfeed.config import Settings


class TestSettings:
    """Environment-driven configuration."""

    def test_defaults_when_env_empty(self):
        """Test that an empty environment yields the defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()

        assert settings == Settings()
        assert settings.tick_interval == 2.0
        assert settings.sweep_interval == 30.0
        assert settings.port == 3001
        assert settings.simulator_seed is None

    def test_reads_values(self):
        env = {
            "TICKERFEED_HOST": "127.0.0.1",
            "TICKERFEED_PORT": "8080",
            "TICK_INTERVAL": "0.5",
            "SWEEP_INTERVAL": "10",
            "SEND_TIMEOUT": "1.5",
            "SIMULATOR_SEED": "7",
            "LOG_LEVEL": "debug",
        }
        settings = Settings.from_env(env)

        assert settings.host == "127.0.0.1"
        assert settings.port == 8080
        assert settings.tick_interval == 0.5
        assert settings.sweep_interval == 10.0
        assert settings.send_timeout == 1.5
        assert settings.simulator_seed == 7
        assert settings.log_level == "DEBUG"

    def test_whitespace_treated_as_unset(self):
        """Test that whitespace-only values fall back to defaults."""
        settings = Settings.from_env({"TICK_INTERVAL": "   ", "TICKERFEED_HOST": " "})
        assert settings.tick_interval == 2.0
        assert settings.host == "0.0.0.0"

    @pytest.mark.parametrize("value", ["0", "-1", "fast"])
    def test_invalid_interval_rejected(self, value):
        with pytest.raises(ValueError, match="TICK_INTERVAL"):
            Settings.from_env({"TICK_INTERVAL": value})

    def test_invalid_port_rejected(self):
        with pytest.raises(ValueError, match="TICKERFEED_PORT"):
            Settings.from_env({"TICKERFEED_PORT": "http"})
