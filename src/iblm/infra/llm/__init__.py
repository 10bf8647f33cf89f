"""Content provider implementations for iblm."""

from iblm.infra.llm.anthropic_provider import AnthropicProvider
from iblm.infra.llm.openai_provider import OpenAIProvider

__all__ = ["AnthropicProvider", "OpenAIProvider", "get_provider_class"]

PROVIDERS: dict[str, type] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


def get_provider_class(name: str) -> type:
    """Resolve a provider name from LLMSettings.provider."""
    try:
        return PROVIDERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown content provider: {name!r}") from None
