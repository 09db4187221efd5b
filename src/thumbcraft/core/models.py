"""Domain types shared by the selector, composer, store and API layer.

All records are Pydantic models whose JSON field names are camelCase
(``selectedModel``, ``generationTime`` ...) to match the wire format the
frontend expects, while Python code uses snake_case attribute names.
Either spelling is accepted on input.

Enumerations
------------
ModelIdentifier
    The three display/routing tags a generation can be attributed to.
Style
    Visual styles offered by the generation form.
AspectRatio
    Supported output aspect ratios.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ModelIdentifier(str, Enum):
    """Model tags chosen by the selector."""

    STABLE_DIFFUSION = "stable-diffusion"
    FLUX = "flux"
    SDXL = "sdxl"


class Style(str, Enum):
    """Visual styles accepted by ``POST /api/generate-thumbnail``."""

    PHOTOREALISTIC = "photorealistic"
    ARTISTIC = "artistic"
    TYPOGRAPHY = "typography"
    ABSTRACT = "abstract"


class AspectRatio(str, Enum):
    """Aspect ratios accepted by ``POST /api/generate-thumbnail``."""

    WIDESCREEN = "16:9"
    SQUARE = "1:1"
    STANDARD = "4:3"


class CamelModel(BaseModel):
    """Base model serialising snake_case attributes as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )


class ModelSelection(CamelModel):
    """Outcome of the keyword selector for a single request.

    Attributes:
        selected_model: The chosen model tag.
        reasoning: Human-readable explanation of the choice.
        confidence: Fixed confidence attached to the matching rule (0-1).
    """

    selected_model: ModelIdentifier
    reasoning: str
    confidence: float = Field(..., ge=0.0, le=1.0)


class ImageDescriptor(CamelModel):
    """One composed image: where to load it and how it is labelled."""

    model_config = ConfigDict(frozen=True)

    url: str
    model: str
    quality_score: float = Field(..., ge=1.0, le=10.0)


class GenerationResult(CamelModel):
    """Composer output for a whole batch."""

    images: list[ImageDescriptor]
    generation_time: int = Field(..., ge=0, description="Elapsed seconds, rounded.")
    selected_model: ModelIdentifier
    reasoning: str


class GenerationRequest(CamelModel):
    """Persisted record of a successful generation call.

    Records are immutable once created by the store.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    prompt: str
    style: Style
    aspect_ratio: AspectRatio
    selected_model: ModelIdentifier
    model_reasoning: str | None = None
    generated_images: list[ImageDescriptor] = Field(default_factory=list)
    generation_time: int = Field(default=0, ge=0)
    quality_score: int | None = Field(default=None, ge=1, le=10)
    created_at: datetime


class DailyUsage(CamelModel):
    """Per-IP, per-day generation counter.

    ``(ip_address, date)`` is unique within a store.
    """

    id: str
    ip_address: str
    date: str
    generation_count: int = Field(default=0, ge=0)
    created_at: datetime
