# Business logic services

from imagebot.services.image_provider import (
    ASPECT_RATIOS,
    IMAGE_SIZES,
    MODEL_CHOICES,
    GeneratedImage,
    GeminiImageProvider,
    ImageProvider,
    OpenAIImageProvider,
    create_image_provider,
)
from imagebot.services.prompt_tracker import PromptTracker

__all__ = [
    "ASPECT_RATIOS",
    "IMAGE_SIZES",
    "MODEL_CHOICES",
    "GeneratedImage",
    "GeminiImageProvider",
    "ImageProvider",
    "OpenAIImageProvider",
    "create_image_provider",
    "PromptTracker",
]
