"""Tests for thumbcraft.api.models - Pydantic request/response models.

Tests cover:
- Required field validation on GenerateThumbnailRequest.
- Enumerated style and aspect ratio values.
- imageCount bounds and default.
- camelCase wire names on both input and output.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from thumbcraft.api.models import (
    AnalyzePromptRequest,
    GenerateThumbnailRequest,
    UsageResponse,
    VariationRequest,
)
from thumbcraft.core.models import AspectRatio, Style


class TestGenerateThumbnailRequest:
    """Test GenerateThumbnailRequest Pydantic model."""

    def test_valid_minimal_request(self):
        req = GenerateThumbnailRequest.model_validate(
            {"prompt": "A lake", "style": "artistic", "aspectRatio": "1:1"}
        )
        assert req.style is Style.ARTISTIC
        assert req.aspect_ratio is AspectRatio.SQUARE
        assert req.image_count == 5  # Default value.

    def test_snake_case_names_accepted(self):
        req = GenerateThumbnailRequest(
            prompt="A lake", style="abstract", aspect_ratio="4:3", image_count=2
        )
        assert req.image_count == 2

    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    def test_blank_prompt_rejected(self, prompt):
        with pytest.raises(ValidationError) as exc_info:
            GenerateThumbnailRequest.model_validate(
                {"prompt": prompt, "style": "artistic", "aspectRatio": "1:1"}
            )
        assert exc_info.value.errors()[0]["loc"] == ("prompt",)

    def test_unknown_style_rejected(self):
        with pytest.raises(ValidationError):
            GenerateThumbnailRequest.model_validate(
                {"prompt": "A lake", "style": "vaporwave", "aspectRatio": "1:1"}
            )

    def test_unknown_aspect_ratio_rejected(self):
        with pytest.raises(ValidationError):
            GenerateThumbnailRequest.model_validate(
                {"prompt": "A lake", "style": "artistic", "aspectRatio": "21:9"}
            )

    @pytest.mark.parametrize("count", [0, 21])
    def test_image_count_out_of_range(self, count):
        with pytest.raises(ValidationError):
            GenerateThumbnailRequest.model_validate(
                {"prompt": "A lake", "style": "artistic", "aspectRatio": "1:1", "imageCount": count}
            )

    @pytest.mark.parametrize("count", [True, "5", 2.5, 3.0])
    def test_non_integer_image_count_rejected(self, count):
        with pytest.raises(ValidationError) as exc_info:
            GenerateThumbnailRequest.model_validate(
                {"prompt": "A lake", "style": "artistic", "aspectRatio": "1:1", "imageCount": count}
            )
        assert exc_info.value.errors()[0]["loc"] == ("imageCount",)

    @pytest.mark.parametrize("count", [1, 20])
    def test_image_count_bounds_inclusive(self, count):
        req = GenerateThumbnailRequest.model_validate(
            {"prompt": "A lake", "style": "artistic", "aspectRatio": "1:1", "imageCount": count}
        )
        assert req.image_count == count


class TestOtherRequests:
    """Test the smaller request models."""

    def test_variation_defaults(self):
        req = VariationRequest.model_validate({"imageUrl": "https://example.com/a.png"})
        assert req.variation_type == "style"
        assert req.prompt == "high quality image"

    def test_variation_requires_url(self):
        with pytest.raises(ValidationError):
            VariationRequest.model_validate({})
        with pytest.raises(ValidationError):
            VariationRequest.model_validate({"imageUrl": " "})

    def test_analyze_accepts_free_text_style(self):
        req = AnalyzePromptRequest.model_validate(
            {"prompt": "A lake", "style": "vaporwave", "aspectRatio": "21:9"}
        )
        assert req.style == "vaporwave"

    def test_analyze_requires_all_fields(self):
        with pytest.raises(ValidationError):
            AnalyzePromptRequest.model_validate({"prompt": "A lake", "style": ""})


class TestSerialisation:
    """Responses should serialise with camelCase keys."""

    def test_usage_response_aliases(self):
        body = UsageResponse(generations_left=999, generation_count=3).model_dump(by_alias=True)
        assert body == {"generationsLeft": 999, "generationCount": 3}
