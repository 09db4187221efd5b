"""Configuration management for Thumbcraft.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the THUMBCRAFT_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (THUMBCRAFT_* prefix)
2. .env file in the project root
3. Default values defined in ThumbcraftConfig

Example .env file:
    THUMBCRAFT_IMAGE_HOST_URL=https://image.pollinations.ai/prompt
    THUMBCRAFT_REQUEST_DELAY_SECONDS=0.05
    THUMBCRAFT_SERVER_PORT=8080
    THUMBCRAFT_LOG_LEVEL=DEBUG

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The application factory uses it unless a different instance is passed in,
which is how the test suite builds apps with zero pacing delay.

Usage Example
-------------
    from thumbcraft.core.config import config

    print(config.image_host_url)
    print(config.server_port)
"""

import logging
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ThumbcraftConfig(BaseSettings):
    """Main configuration for Thumbcraft.

    Attributes
    ----------
    Image Host Settings:
        image_host_url : str
            Base URL of the external image-generation host. The sanitised
            prompt is appended as a path segment.
        image_backend_model : str
            Value of the ``model`` query parameter sent to the host.
        request_delay_seconds : float
            Pause between composed URLs so clients do not hammer the host.

    Usage Settings:
        generations_left : int
            Constant reported by ``GET /api/usage/{date}``. Generations are
            unlimited, so this is informational only.

    Server Settings:
        server_host : str
            Bind address for uvicorn.
        server_port : int
            Port for uvicorn (1024-65535).
        log_level : str
            Root logging level applied by :func:`configure_logging`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="THUMBCRAFT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Image host settings
    image_host_url: str = Field(
        default="https://image.pollinations.ai/prompt",
        description="Base URL of the public image-generation host",
    )
    image_backend_model: str = Field(
        default="flux",
        description="Backend model requested from the image host",
    )
    request_delay_seconds: float = Field(
        default=0.075,
        description="Delay between composed images (pacing for the external host)",
        ge=0.0,
    )

    # Usage settings
    generations_left: int = Field(
        default=999,
        description="Reported remaining generations (unlimited policy)",
        ge=0,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=5000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level for the application",
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the server process.

    Args:
        level: Name of the logging level (e.g. ``"INFO"``).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Global configuration instance
config = ThumbcraftConfig()
