"""Provider selection for Roadmapper."""

import logging

from roadmapper.config.settings import settings
from roadmapper.llm.providers.base import LLMProvider

logger = logging.getLogger(__name__)


def create_provider(
    provider_name: str | None = None,
    model: str | None = None,
) -> LLMProvider:
    """Create the configured LLM provider.

    Args:
        provider_name: Override for settings.llm_provider.
        model: Override for settings.llm_model.

    Raises:
        ValueError: If the provider name is unknown.
    """
    name = provider_name or settings.llm_provider
    model_name = model or settings.llm_model
    logger.info("Creating LLM provider: %s (model=%s)", name, model_name)

    if name == "anthropic":
        from roadmapper.llm.providers.anthropic import AnthropicProvider

        return AnthropicProvider(model=model_name, web_search=settings.llm_web_search)
    if name == "openai":
        from roadmapper.llm.providers.openai import OpenAIProvider

        return OpenAIProvider(model=model_name, temperature=settings.llm_temperature)
    raise ValueError(f"Unknown LLM provider: {name}")
