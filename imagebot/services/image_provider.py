"""Image provider service for AI image generation."""

import base64
import logging
import mimetypes
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx
from google import genai
from google.genai import types
from openai import AsyncOpenAI

from imagebot.config import config

logger = logging.getLogger(__name__)


@dataclass
class GeneratedImage:
    """Image bytes produced by a provider."""

    data: bytes
    mime_type: str
    extension: str


class ImageProvider(ABC):
    """Abstract base class for image generation providers.

    ``generate`` returns None when the backend answered without an image and
    raises on transport or API errors.
    """

    name: str = ""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the provider is configured. Does not touch the network."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        aspect_ratio: str = "1:1",
        image_size: str = "1K",
        model: str = "high-quality",
    ) -> Optional[GeneratedImage]:
        pass


# Values accepted for the user's image preferences
ASPECT_RATIOS = ("1:1", "16:9", "9:16", "4:3", "3:4")
IMAGE_SIZES = ("1K", "2K")
MODEL_CHOICES = ("fast", "high-quality")

GEMINI_MODELS = {
    "fast": "gemini-2.5-flash-image",
    "high-quality": "gemini-3-pro-image-preview",
}

OPENAI_MODELS = {
    "fast": "gpt-image-1",
    "high-quality": "gpt-image-1.5",
}

# OpenAI image models only render these three canvases
OPENAI_SIZES = {
    "1:1": "1024x1024",
    "16:9": "1536x1024",
    "4:3": "1536x1024",
    "9:16": "1024x1536",
    "3:4": "1024x1536",
}

OPENAI_QUALITY = {
    "1K": "medium",
    "2K": "high",
}


def extension_for(mime_type: str) -> str:
    """File extension (without dot) for a MIME type, png when unknown."""
    extension = mimetypes.guess_extension(mime_type or "")
    return extension.lstrip(".") if extension else "png"


class GeminiImageProvider(ImageProvider):
    """Google Gemini implementation of ImageProvider."""

    name = "gemini"

    def __init__(self, api_key: str):
        self.api_key = api_key
        self.client = genai.Client(api_key=api_key) if api_key else None
        if self.client is None:
            logger.warning("GEMINI_API_KEY not set - image generation will be unavailable")

    def is_available(self) -> bool:
        return self.client is not None

    async def generate(
        self,
        prompt: str,
        aspect_ratio: str = "1:1",
        image_size: str = "1K",
        model: str = "high-quality",
    ) -> Optional[GeneratedImage]:
        """
        Generate an image with a Gemini image model.

        The response is streamed and the first inline image part is returned.
        """
        if self.client is None:
            raise RuntimeError("Gemini API key not configured")

        use_model = GEMINI_MODELS.get(model, GEMINI_MODELS["high-quality"])
        logger.info(
            f"Generating image with model {use_model} ({aspect_ratio}, {image_size}), "
            f"prompt: {prompt[:100]}..."
        )

        generate_config = types.GenerateContentConfig(
            response_modalities=["IMAGE", "TEXT"],
            image_config=types.ImageConfig(
                aspect_ratio=aspect_ratio,
                image_size=image_size,
            ),
            tools=[types.Tool(google_search=types.GoogleSearch())],
        )
        contents = [
            types.Content(role="user", parts=[types.Part.from_text(text=prompt)]),
        ]

        try:
            stream = await self.client.aio.models.generate_content_stream(
                model=use_model,
                contents=contents,
                config=generate_config,
            )
            async for chunk in stream:
                if not (chunk and chunk.candidates and chunk.candidates[0].content):
                    continue

                for part in chunk.candidates[0].content.parts or []:
                    inline = getattr(part, "inline_data", None)
                    if inline is None or not inline.data:
                        continue

                    mime_type = inline.mime_type or "image/png"
                    data = inline.data
                    if isinstance(data, str):
                        data = base64.b64decode(data)

                    logger.info(f"Image generated successfully ({mime_type}, {len(data)} bytes)")
                    return GeneratedImage(
                        data=data,
                        mime_type=mime_type,
                        extension=extension_for(mime_type),
                    )
        except Exception as e:
            logger.error(f"Image generation failed: {e}")
            raise

        logger.warning("Gemini returned no image in response")
        return None


class OpenAIImageProvider(ImageProvider):
    """OpenAI Images API implementation of ImageProvider."""

    name = "openai"

    def __init__(self, api_key: str):
        self.api_key = api_key
        self.client = AsyncOpenAI(api_key=api_key) if api_key else None
        if self.client is None:
            logger.warning("OPENAI_API_KEY not set - image generation will be unavailable")

    def is_available(self) -> bool:
        return self.client is not None

    async def generate(
        self,
        prompt: str,
        aspect_ratio: str = "1:1",
        image_size: str = "1K",
        model: str = "high-quality",
    ) -> Optional[GeneratedImage]:
        """
        Generate an image using OpenAI Images API.
        GPT image models always return base64.
        """
        if self.client is None:
            raise RuntimeError("OpenAI API key not configured")

        use_model = OPENAI_MODELS.get(model, OPENAI_MODELS["high-quality"])
        logger.info(f"Generating image with model {use_model}, prompt: {prompt[:100]}...")

        try:
            response = await self.client.images.generate(
                model=use_model,
                prompt=prompt,
                n=1,
                quality=OPENAI_QUALITY.get(image_size, "auto"),
                size=OPENAI_SIZES.get(aspect_ratio, "auto"),
            )

            image_data = response.data[0] if response.data else None

            if image_data is not None and getattr(image_data, "b64_json", None):
                logger.info("Image generated successfully (base64)")
                return GeneratedImage(
                    data=base64.b64decode(image_data.b64_json),
                    mime_type="image/png",
                    extension="png",
                )
            # DALL-E models may return URL
            elif image_data is not None and getattr(image_data, "url", None):
                async with httpx.AsyncClient() as http_client:
                    img_response = await http_client.get(image_data.url)
                    img_response.raise_for_status()
                mime_type = img_response.headers.get("content-type", "image/png").split(";")[0]
                logger.info("Image generated successfully (URL)")
                return GeneratedImage(
                    data=img_response.content,
                    mime_type=mime_type,
                    extension=extension_for(mime_type),
                )
        except Exception as e:
            logger.error(f"Image generation failed: {e}")
            raise

        logger.error("OpenAI returned empty response")
        return None


PROVIDERS = {
    GeminiImageProvider.name: lambda: GeminiImageProvider(config.gemini_api_key),
    OpenAIImageProvider.name: lambda: OpenAIImageProvider(config.openai_api_key),
}


def create_image_provider(name: Optional[str] = None) -> ImageProvider:
    """Build the provider selected by IMAGE_PROVIDER (or ``name``)."""
    provider_name = (name or config.image_provider or "gemini").lower()
    factory = PROVIDERS.get(provider_name)
    if factory is None:
        raise ValueError(
            f"Unknown IMAGE_PROVIDER {provider_name!r}, expected one of: {', '.join(PROVIDERS)}"
        )
    return factory()
