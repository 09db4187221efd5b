"""Rule-based model selection.

The selector maps a prompt and style onto one of three model tags using
ordered keyword rules. Rules are checked top to bottom and the first rule
whose keywords appear (as substrings) in either the lower-cased style or the
lower-cased prompt wins. Categories overlap ("abstract" is both artistic and
a style name), so the order is part of the observable behaviour.

Rule Table
----------
=====  ===================================================  ==================  ==========
Order  Keywords                                             Model               Confidence
=====  ===================================================  ==================  ==========
1      artistic, art, creative, abstract, painting,          flux                0.90
       illustration
2      photorealistic, photo, realistic, portrait,           sdxl                0.85
       landscape
3      typography, text, logo, tech, geometric               stable-diffusion    0.80
4      (fallback)                                            stable-diffusion    0.75
=====  ===================================================  ==================  ==========
"""

from __future__ import annotations

from dataclasses import dataclass

from thumbcraft.core.models import ModelIdentifier, ModelSelection


@dataclass(frozen=True)
class SelectionRule:
    """A keyword rule and the selection it produces when matched."""

    keywords: tuple[str, ...]
    model: ModelIdentifier
    reasoning: str
    confidence: float

    def matches(self, prompt: str, style: str) -> bool:
        return any(keyword in style or keyword in prompt for keyword in self.keywords)


SELECTION_RULES: tuple[SelectionRule, ...] = (
    SelectionRule(
        keywords=("artistic", "art", "creative", "abstract", "painting", "illustration"),
        model=ModelIdentifier.FLUX,
        reasoning="Selected Flux for its excellent artistic and creative capabilities",
        confidence=0.9,
    ),
    SelectionRule(
        keywords=("photorealistic", "photo", "realistic", "portrait", "landscape"),
        model=ModelIdentifier.SDXL,
        reasoning="Selected SDXL for high-quality photorealistic results",
        confidence=0.85,
    ),
    SelectionRule(
        keywords=("typography", "text", "logo", "tech", "geometric"),
        model=ModelIdentifier.STABLE_DIFFUSION,
        reasoning="Selected Stable Diffusion for technical and text-focused content",
        confidence=0.8,
    ),
)

MODEL_CATALOGUE: dict[ModelIdentifier, dict[str, str]] = {
    ModelIdentifier.STABLE_DIFFUSION: {
        "label": "Stable Diffusion",
        "description": "Reliable and versatile model for all types of thumbnails.",
    },
    ModelIdentifier.FLUX: {
        "label": "Flux",
        "description": "Excellent for artistic and creative content with unique aesthetic appeal.",
    },
    ModelIdentifier.SDXL: {
        "label": "SDXL",
        "description": "High-quality model perfect for detailed and photorealistic thumbnails.",
    },
}

DEFAULT_SELECTION = SelectionRule(
    keywords=(),
    model=ModelIdentifier.STABLE_DIFFUSION,
    reasoning="Selected Stable Diffusion as the most reliable option for general content",
    confidence=0.75,
)


def select_model(prompt: str, style: str, aspect_ratio: str) -> ModelSelection:
    """Pick a model tag for a prompt/style pair.

    Args:
        prompt: Free-text user prompt.
        style: Style name (any string; matched case-insensitively).
        aspect_ratio: Requested aspect ratio. Accepted for interface
            stability; it does not influence the choice.

    Returns:
        The :class:`ModelSelection` of the first matching rule, or the
        fallback selection when nothing matches.
    """
    lower_prompt = prompt.lower()
    lower_style = style.lower()

    rule = next(
        (r for r in SELECTION_RULES if r.matches(lower_prompt, lower_style)),
        DEFAULT_SELECTION,
    )
    return ModelSelection(
        selected_model=rule.model,
        reasoning=rule.reasoning,
        confidence=rule.confidence,
    )
