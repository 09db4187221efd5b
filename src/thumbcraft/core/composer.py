"""Image URL composition against the external image host.

The composer never renders or downloads anything. For each requested image
it builds a GET URL on the public image host (prompt, size, seed and a few
fixed flags) that the browser loads directly, and attaches a display label
and a quality score to it.

URL Shape
---------
::

    {image_host_url}/{encoded prompt}?width=W&height=H&seed=S&nologo=true
        &model={image_backend_model}&safe=true&t=T

``t`` is a cache-busting timestamp in milliseconds that grows by 150 per
image so that two URLs in one batch are never identical, even on a seed
collision.

Usage
-----
::

    composer = ImageComposer(config)
    result = composer.generate(
        prompt="A mountain lake",
        style="photorealistic",
        aspect_ratio="16:9",
        model=ModelIdentifier.SDXL,
        reasoning="...",
        image_count=3,
    )
"""

from __future__ import annotations

import logging
import math
import random
import re
import time
from urllib.parse import quote, urlencode

from thumbcraft.core.config import ThumbcraftConfig
from thumbcraft.core.models import GenerationResult, ImageDescriptor, ModelIdentifier

logger = logging.getLogger(__name__)

MIN_IMAGE_COUNT = 1
MAX_IMAGE_COUNT = 20
MAX_PROMPT_LENGTH = 250

DIMENSIONS: dict[str, tuple[int, int]] = {
    "16:9": (1200, 675),
    "1:1": (1000, 1000),
    "4:3": (1200, 900),
}
DEFAULT_DIMENSIONS = DIMENSIONS["16:9"]

STYLE_SUFFIXES: dict[str, str] = {
    "photorealistic": "photorealistic, high quality",
    "artistic": "artistic style, creative",
    "typography": "text design, clean typography",
    "abstract": "abstract art, modern design",
}
DEFAULT_STYLE_SUFFIX = "professional quality"

_DISALLOWED_CHARS = re.compile(r"[^\w\s,.-]", re.ASCII)
_WHITESPACE_RUN = re.compile(r"\s+")

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def get_dimensions(aspect_ratio: str) -> tuple[int, int]:
    """Return ``(width, height)`` for an aspect ratio, defaulting to 16:9."""
    return DIMENSIONS.get(aspect_ratio, DEFAULT_DIMENSIONS)


def sanitize_prompt(prompt: str, style: str) -> str:
    """Clean a prompt for URL use and append the style enhancement.

    Characters other than word characters, whitespace, commas, periods and
    hyphens become spaces; whitespace runs collapse to one space; the result
    is trimmed and cut to 250 characters before the style suffix is added.

    Args:
        prompt: Raw user prompt.
        style: Style name; unknown styles get a generic suffix.

    Returns:
        The enhanced prompt text.
    """
    cleaned = _DISALLOWED_CHARS.sub(" ", prompt)
    cleaned = _WHITESPACE_RUN.sub(" ", cleaned).strip()[:MAX_PROMPT_LENGTH]
    suffix = STYLE_SUFFIXES.get(style.lower(), DEFAULT_STYLE_SUFFIX)
    return f"{cleaned}, {suffix}"


def round_half_up(value: float) -> int:
    """Round *value* to the nearest integer, with halves rounded up."""
    return math.floor(value + 0.5)


def aggregate_quality_score(images: list[ImageDescriptor]) -> int:
    """Return the mean quality score of a batch, rounded half up.

    Raises:
        ValueError: If *images* is empty.
    """
    if not images:
        raise ValueError("cannot score an empty batch")
    mean = sum(image.quality_score for image in images) / len(images)
    return round_half_up(mean)


class ImageComposer:
    """Build batches of :class:`ImageDescriptor` for the external host.

    The composer is stateless apart from its configuration, so one instance
    can serve concurrent requests.

    Args:
        config: Application configuration (host URL, backend model, pacing).
        rng: Optional random source; tests pass a seeded ``random.Random``.
    """

    def __init__(self, config: ThumbcraftConfig, rng: random.Random | None = None):
        self.config = config
        self._rng = rng or random.Random()

    def build_url(self, prompt: str, width: int, height: int, seed: int, timestamp: int) -> str:
        """Return the image host URL for one image."""
        query = urlencode(
            {
                "width": width,
                "height": height,
                "seed": seed,
                "nologo": "true",
                "model": self.config.image_backend_model,
                "safe": "true",
                "t": timestamp,
            }
        )
        encoded_prompt = quote(prompt, safe=_URI_COMPONENT_SAFE)
        return f"{self.config.image_host_url.rstrip('/')}/{encoded_prompt}?{query}"

    def generate(
        self,
        prompt: str,
        style: str,
        aspect_ratio: str,
        model: ModelIdentifier,
        reasoning: str,
        image_count: int = 5,
    ) -> GenerationResult:
        """Compose ``image_count`` image descriptors.

        Args:
            prompt: Raw user prompt.
            style: Style name used for the prompt suffix.
            aspect_ratio: Aspect ratio used for the pixel dimensions.
            model: Model tag used for the display labels.
            reasoning: Selector reasoning, passed through to the result.
            image_count: Number of images (1-20).

        Returns:
            A :class:`GenerationResult` with exactly ``image_count`` images.

        Raises:
            ValueError: If ``image_count`` is outside 1-20.
        """
        if not MIN_IMAGE_COUNT <= image_count <= MAX_IMAGE_COUNT:
            raise ValueError(
                f"image_count must be between {MIN_IMAGE_COUNT} and {MAX_IMAGE_COUNT}, "
                f"got {image_count}"
            )

        start = time.monotonic()
        width, height = get_dimensions(aspect_ratio)
        clean_prompt = sanitize_prompt(prompt, style)
        base_time_ms = int(time.time() * 1000)
        delay = self.config.request_delay_seconds

        images: list[ImageDescriptor] = []
        for i in range(image_count):
            seed = self._rng.randrange(999999) + i * 1234
            timestamp = base_time_ms + i * 150
            images.append(
                ImageDescriptor(
                    url=self.build_url(clean_prompt, width, height, seed, timestamp),
                    model=f"{model.value} v{i + 1}",
                    quality_score=round(self._rng.uniform(8.0, 10.0), 1),
                )
            )

            # Pace URL creation so the browser does not fire the whole batch
            # at the host in the same instant.
            if delay and i < image_count - 1:
                time.sleep(delay)

        generation_time = round_half_up(time.monotonic() - start)
        logger.debug(f"Composed {image_count} image URLs at {width}x{height}")

        return GenerationResult(
            images=images,
            generation_time=generation_time,
            selected_model=model,
            reasoning=reasoning,
        )
