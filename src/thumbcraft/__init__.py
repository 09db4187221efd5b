"""Thumbcraft - prompt-driven thumbnail generation front end."""

__version__ = "1.0.0"

from thumbcraft.core.config import ThumbcraftConfig, config

__all__ = [
    "ThumbcraftConfig",
    "config",
]
