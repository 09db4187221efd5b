"""Core functionality for thumbnail generation.

- **config**: Environment-based settings (``THUMBCRAFT_`` prefix)
- **models**: Enumerations and records shared across layers
- **selector**: Keyword rules that pick a model tag for a prompt
- **composer**: Builds image URLs against the external image host

Usage Example
-------------
    from thumbcraft.core import ImageComposer, config, select_model

    selection = select_model("A neon logo", "typography", "1:1")
    result = ImageComposer(config).generate(
        "A neon logo",
        "typography",
        "1:1",
        selection.selected_model,
        selection.reasoning,
        image_count=2,
    )
"""

from thumbcraft.core.composer import ImageComposer
from thumbcraft.core.config import ThumbcraftConfig, config
from thumbcraft.core.selector import select_model

__all__ = [
    "ImageComposer",
    "ThumbcraftConfig",
    "config",
    "select_model",
]
