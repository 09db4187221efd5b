"""Shared pytest fixtures for Thumbcraft tests."""

from __future__ import annotations

import random
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from thumbcraft.api.main import create_app
from thumbcraft.api.store import GenerationStore
from thumbcraft.core.composer import ImageComposer
from thumbcraft.core.config import ThumbcraftConfig


@pytest.fixture
def test_config() -> ThumbcraftConfig:
    """Create a test configuration with no pacing delay.

    Returns:
        ThumbcraftConfig instance for testing (``.env`` files ignored)
    """
    return ThumbcraftConfig(
        _env_file=None,
        image_host_url="https://image.pollinations.ai/prompt",
        image_backend_model="flux",
        request_delay_seconds=0.0,
        generations_left=999,
    )


@pytest.fixture
def composer(test_config: ThumbcraftConfig) -> ImageComposer:
    """Create a composer with a seeded random source.

    Args:
        test_config: Configuration from fixture

    Returns:
        ImageComposer whose seeds and scores are reproducible
    """
    return ImageComposer(test_config, rng=random.Random(42))


@pytest.fixture
def store() -> GenerationStore:
    """Create an empty, isolated store."""
    return GenerationStore()


@pytest.fixture
def test_app(test_config: ThumbcraftConfig) -> FastAPI:
    """Create an application instance with its own store."""
    return create_app(test_config)


@pytest.fixture
def test_client(test_app: FastAPI) -> Generator[TestClient, None, None]:
    """Yield a TestClient bound to a fresh application.

    Yields:
        TestClient for issuing HTTP requests against ``test_app``
    """
    with TestClient(test_app) as client:
        yield client


@pytest.fixture
def generate_payload() -> dict:
    """Valid ``POST /api/generate-thumbnail`` payload.

    Returns:
        Payload dict; tests copy and override fields as needed
    """
    return {
        "prompt": "A beautiful mountain landscape at sunset",
        "style": "photorealistic",
        "aspectRatio": "16:9",
        "imageCount": 3,
    }
