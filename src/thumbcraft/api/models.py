"""Pydantic request and response models for the Thumbcraft API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for automatic request validation, serialisation, and OpenAPI
documentation generation.  Field names travel as camelCase on the wire.

Models
------
GenerateThumbnailRequest
    Payload for ``POST /api/generate-thumbnail``.
GenerateThumbnailResponse
    Composed batch plus the id of the persisted record.
AnalyzePromptRequest
    Payload for ``POST /api/analyze-prompt``.
UsageResponse
    Body of ``GET /api/usage/{date}``.
VariationRequest / VariationResponse
    Payload and body of ``POST /api/create-variation``.
"""

from __future__ import annotations

from pydantic import Field, field_validator

from thumbcraft.core.composer import MAX_IMAGE_COUNT, MIN_IMAGE_COUNT
from thumbcraft.core.models import AspectRatio, CamelModel, GenerationResult, Style


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


class GenerateThumbnailRequest(CamelModel):
    """Request body for the ``POST /api/generate-thumbnail`` endpoint.

    Attributes:
        prompt: Free-text description of the image.  Must contain at least
            one non-whitespace character.
        style: One of the supported :class:`Style` values.
        aspect_ratio: One of the supported :class:`AspectRatio` values.
        image_count: Number of images to compose (1-20, default 5).
    """

    prompt: str = Field(..., description="Text prompt describing the image.")
    style: Style = Field(..., description="Visual style (e.g. 'photorealistic').")
    aspect_ratio: AspectRatio = Field(..., description="Aspect ratio (e.g. '16:9').")
    image_count: int = Field(
        default=5,
        strict=True,
        ge=MIN_IMAGE_COUNT,
        le=MAX_IMAGE_COUNT,
        description="Number of images to generate (1-20).",
    )

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        return _require_text(value)


class GenerateThumbnailResponse(GenerationResult):
    """Response body for ``POST /api/generate-thumbnail``."""

    id: str


class AnalyzePromptRequest(CamelModel):
    """Request body for ``POST /api/analyze-prompt``.

    Style and aspect ratio are free text here: the selector works on any
    string, so the preview is not limited to the form's options.
    """

    prompt: str
    style: str
    aspect_ratio: str

    @field_validator("prompt", "style", "aspect_ratio")
    @classmethod
    def fields_not_blank(cls, value: str) -> str:
        return _require_text(value)


class UsageResponse(CamelModel):
    """Response body for ``GET /api/usage/{date}``."""

    generations_left: int
    generation_count: int


class VariationRequest(CamelModel):
    """Request body for ``POST /api/create-variation``.

    Attributes:
        image_url: URL of the image to vary.
        variation_type: Kind of variation requested (default ``"style"``).
        prompt: Optional prompt to steer the variation.
    """

    image_url: str
    variation_type: str = "style"
    prompt: str = "high quality image"

    @field_validator("image_url")
    @classmethod
    def image_url_not_blank(cls, value: str) -> str:
        return _require_text(value)


class VariationResponse(CamelModel):
    """Response body for ``POST /api/create-variation``."""

    id: str
    original_url: str
    variation_url: str
    variation_type: str
    model: str
    processing_time: float
