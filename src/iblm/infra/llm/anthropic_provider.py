"""Anthropic content provider for iblm.

This module provides the Anthropic implementation of the content
generation interface. Anthropic has no image generation endpoint, so
illustrations are requested as simple SVG drawings and returned as
data URIs.
"""

import base64
import re
from typing import Any, Self

from anthropic import AsyncAnthropic

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
    "AnthropicProvider",
]

logger = get_logger(__name__)

_SVG_PATTERN = re.compile(r"<svg\b.*?</svg>", re.DOTALL | re.IGNORECASE)

SVG_SYSTEM_PROMPT = """You draw friendly, colourful illustrations for young children.
Respond with a single self-contained SVG document (viewBox="0 0 512 512") and nothing else."""


class AnthropicProvider(ContentGeneratorInterface):
    """Anthropic implementation of the content generation interface."""

    config_class = LLMSettings

    def __init__(self, settings: LLMSettings) -> None:
        """Initialize Anthropic provider.

        Args:
            settings: LLM configuration settings
        """
        self._settings = settings
        api_key = settings.api_key.get_secret_value() if settings.api_key else None
        self._client = AsyncAnthropic(api_key=api_key)
        # The default model name targets OpenAI
        self._model = (
            settings.model if settings.model.startswith("claude") else "claude-sonnet-4-20250514"
        )

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

    async def _complete(self, system: str, prompt: str, max_tokens: int) -> str:
        response = await self._client.messages.create(
            model=self._model,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(block.text for block in response.content if block.type == "text")

    async def generate_content_batch(
        self,
        seed_topic: str,
        profile: ChildProfile | None,
        recommendation: ContentRecommendation,
        count: int = 3,
    ) -> list[ContentSkeleton]:
        """Generate a batch of cards."""
        user_prompt = build_batch_prompt(seed_topic, profile, recommendation, count)
        try:
            content = await self._complete(BATCH_SYSTEM_PROMPT, user_prompt, max_tokens=1024)
        except Exception as e:
            logger.warning("content_batch_generation_failed", error=str(e))
            return []

        # Claude may wrap JSON in a code fence
        start, end = content.find("{"), content.rfind("}")
        if start == -1 or end == -1:
            logger.warning("batch_response_not_json", preview=content[:80])
            return []
        return parse_batch_response(content[start : end + 1], count)

    async def generate_asset(self, prompt: str) -> str | None:
        """Draw an SVG illustration and return it as a data URI."""
        try:
            content = await self._complete(SVG_SYSTEM_PROMPT, prompt, max_tokens=4096)
        except Exception as e:
            logger.warning("asset_generation_failed", model=self._model, error=str(e))
            return None

        match = _SVG_PATTERN.search(content)
        if match is None:
            logger.warning("asset_response_not_svg", preview=content[:80])
            return None
        encoded = base64.b64encode(match.group(0).encode("utf-8")).decode("ascii")
        return f"data:image/svg+xml;base64,{encoded}"
