"""Tests for thumbcraft.core.config - configuration management.

Tests cover:
- Default values for all configuration fields.
- Environment variable overrides via the THUMBCRAFT_ prefix.
- Pydantic validation constraints (port range, delay, log level).
"""

from __future__ import annotations

import logging

import pytest

from thumbcraft.core.config import ThumbcraftConfig, configure_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove THUMBCRAFT_ variables that could leak in from the shell."""
    for name in (
        "THUMBCRAFT_IMAGE_HOST_URL",
        "THUMBCRAFT_IMAGE_BACKEND_MODEL",
        "THUMBCRAFT_REQUEST_DELAY_SECONDS",
        "THUMBCRAFT_GENERATIONS_LEFT",
        "THUMBCRAFT_SERVER_HOST",
        "THUMBCRAFT_SERVER_PORT",
        "THUMBCRAFT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigDefaults:
    """Verify that ThumbcraftConfig provides sensible defaults."""

    def test_default_image_host(self):
        cfg = ThumbcraftConfig(_env_file=None)
        assert cfg.image_host_url == "https://image.pollinations.ai/prompt"
        assert cfg.image_backend_model == "flux"

    def test_default_delay(self):
        """Default pacing delay should be 75 ms."""
        assert ThumbcraftConfig(_env_file=None).request_delay_seconds == 0.075

    def test_default_generations_left(self):
        assert ThumbcraftConfig(_env_file=None).generations_left == 999

    def test_default_server(self):
        cfg = ThumbcraftConfig(_env_file=None)
        assert cfg.server_host == "0.0.0.0"
        assert cfg.server_port == 5000
        assert cfg.log_level == "INFO"


class TestConfigEnvironment:
    """Verify environment variable overrides."""

    def test_port_from_env(self, monkeypatch):
        monkeypatch.setenv("THUMBCRAFT_SERVER_PORT", "8080")
        assert ThumbcraftConfig(_env_file=None).server_port == 8080

    def test_env_is_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("thumbcraft_image_backend_model", "turbo")
        assert ThumbcraftConfig(_env_file=None).image_backend_model == "turbo"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("THUMBCRAFT_REQUEST_DELAY_SECONDS=0.5\n")
        assert ThumbcraftConfig(_env_file=env_file).request_delay_seconds == 0.5


class TestConfigValidation:
    """Verify Pydantic validation constraints on config fields."""

    @pytest.mark.parametrize("port", [80, 70000])
    def test_invalid_port(self, port):
        with pytest.raises(Exception):
            ThumbcraftConfig(_env_file=None, server_port=port)

    def test_negative_delay_rejected(self):
        with pytest.raises(Exception):
            ThumbcraftConfig(_env_file=None, request_delay_seconds=-1)

    def test_invalid_log_level(self):
        with pytest.raises(Exception):
            ThumbcraftConfig(_env_file=None, log_level="LOUD")


class TestConfigureLogging:
    """Verify the logging setup helper."""

    def test_sets_root_level(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", logging.WARNING)
        configure_logging("DEBUG")
        assert root.level == logging.DEBUG
        assert root.handlers
