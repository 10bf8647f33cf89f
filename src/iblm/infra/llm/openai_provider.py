"""OpenAI content provider for iblm.

This module provides the OpenAI implementation of the content generation
interface: JSON-mode chat completions for card batches and the images
API for illustrations.
"""

from typing import Any, Self

from openai import AsyncOpenAI

from iblm.config import LLMSettings
from iblm.interfaces.content import ContentGeneratorInterface
from iblm.logging import get_logger
from iblm.models.content import ChildProfile, ContentSkeleton
from iblm.models.recommendation import ContentRecommendation
from iblm.services.prompts import (
    BATCH_SYSTEM_PROMPT,
    build_batch_prompt,
    parse_batch_response,
)

__all__ = [
    "OpenAIProvider",
]

logger = get_logger(__name__)


class OpenAIProvider(ContentGeneratorInterface):
    """OpenAI implementation of the content generation interface."""

    config_class = LLMSettings

    def __init__(self, settings: LLMSettings) -> None:
        """Initialize OpenAI provider.

        Args:
            settings: LLM configuration settings
        """
        self._settings = settings
        api_key = settings.api_key.get_secret_value() if settings.api_key else None
        self._client = AsyncOpenAI(api_key=api_key)
        self._model = settings.model
        self._image_model = settings.image_model
        self._image_size = settings.image_size

    @classmethod
    async def from_config(cls, config: LLMSettings) -> Self:
        """Factory method for IBLMSession instantiation."""
        return cls(config)

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for custom config dict."""
        return cls(LLMSettings(**config))

    async def close(self) -> None:
        await self._client.close()

    async def generate_content_batch(
        self,
        seed_topic: str,
        profile: ChildProfile | None,
        recommendation: ContentRecommendation,
        count: int = 3,
    ) -> list[ContentSkeleton]:
        """Generate a batch of cards with a JSON-mode completion."""
        user_prompt = build_batch_prompt(seed_topic, profile, recommendation, count)
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": BATCH_SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
                temperature=0.8,
            )
        except Exception as e:
            logger.warning("content_batch_generation_failed", error=str(e))
            return []

        content = response.choices[0].message.content or "{}"
        return parse_batch_response(content, count)

    async def generate_asset(self, prompt: str) -> str | None:
        """Generate an illustration and return it as a URL or data URI."""
        try:
            response = await self._client.images.generate(
                model=self._image_model,
                prompt=prompt,
                size=self._image_size,  # type: ignore[arg-type]
                n=1,
            )
        except Exception as e:
            logger.warning("asset_generation_failed", model=self._image_model, error=str(e))
            return None

        if not response.data:
            return None
        image = response.data[0]
        if image.b64_json:
            return f"data:image/png;base64,{image.b64_json}"
        return image.url
