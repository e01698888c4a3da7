"""
Spoiled reference images: shows the user what a spoiled version of the
identified food looks like, via Google's Imagen models.
"""

import base64
import logging
from functools import lru_cache

from freshness_checker.config import get_settings
from freshness_checker.services.errors import AINotConfiguredError

logger = logging.getLogger(__name__)


def to_data_url(image_bytes: bytes, mime_type: str = "image/jpeg") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(image_bytes).decode('ascii')}"


class SpoiledImageGenerator:
    def __init__(self):
        settings = get_settings()
        self.model = settings.IMAGEN_MODEL
        self.api_key = settings.GEMINI_API_KEY
        self.count = settings.SPOILED_IMAGE_COUNT
        self._client = None

    @property
    def client(self):
        if self._client is None and self.api_key:
            from google import genai
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(self, food_name: str) -> list[str]:
        """Generate example photos of spoiled food_name as JPEG data URLs."""
        if not self.client:
            raise AINotConfiguredError("Gemini API key not configured")
        from google.genai import types

        response = await self.client.aio.models.generate_images(
            model=self.model,
            prompt=(
                f"A realistic, high-quality photo of a spoiled {food_name}. "
                "Focus on the signs of spoilage like mold, discoloration, or wilting."
            ),
            config=types.GenerateImagesConfig(
                number_of_images=self.count,
                output_mime_type="image/jpeg",
                aspect_ratio="1:1",
            ),
        )
        images = [
            to_data_url(img.image.image_bytes)
            for img in (response.generated_images or [])
            if img.image and img.image.image_bytes
        ]
        logger.info(f"Generated {len(images)} spoiled reference images for {food_name}")
        return images


@lru_cache
def get_spoiled_image_generator() -> SpoiledImageGenerator:
    return SpoiledImageGenerator()
