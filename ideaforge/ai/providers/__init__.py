"""Generation providers and the factory selecting one from settings."""

import logging
from typing import Union

from ideaforge.ai.providers.base import (
    DEFAULT_LANGUAGE,
    DEFAULT_PRESET,
    LANGUAGES,
    PRESETS,
    BundleProvider,
    Language,
    Preset,
    RevisionProvider,
    StepwiseProvider,
    normalize_language,
    normalize_preset,
    supports_bundle,
    supports_revision,
    supports_stepwise,
)
from ideaforge.ai.providers.fixture import FixtureGenerationProvider, derive_title
from ideaforge.ai.providers.llm import LLMGenerationProvider, PromptNotFound, render_prompt

logger = logging.getLogger(__name__)


def create_provider(settings) -> Union[StepwiseProvider, BundleProvider]:
    """
    Build the generation provider named by ``settings.AI_PROVIDER``.

    "openai" selects the one-shot LLM provider; anything else falls back
    to the fixture provider.

    Raises:
        ValueError: "openai" selected without OPENAI_API_KEY
    """
    if settings.AI_PROVIDER == "openai":
        from ideaforge.llm.providers.openai import OpenAIProvider

        if not settings.OPENAI_API_KEY:
            raise ValueError("AI_PROVIDER=openai requires OPENAI_API_KEY")

        llm = OpenAIProvider(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            timeout=settings.OPENAI_TIMEOUT_S,
        )
        logger.info(f"Using OpenAI generation provider (model={settings.OPENAI_MODEL})")
        return LLMGenerationProvider(
            llm=llm,
            model=settings.OPENAI_MODEL,
            prompts_dir=settings.AI_PROMPTS_DIR,
        )

    if settings.AI_PROVIDER != "mock":
        logger.warning(f"Unknown AI_PROVIDER {settings.AI_PROVIDER!r}, using fixtures")
    logger.info(f"Using fixture generation provider ({settings.AI_FIXTURES_DIR})")
    return FixtureGenerationProvider(settings.AI_FIXTURES_DIR)


__all__ = [
    "DEFAULT_LANGUAGE",
    "DEFAULT_PRESET",
    "LANGUAGES",
    "PRESETS",
    "Language",
    "Preset",
    "StepwiseProvider",
    "BundleProvider",
    "RevisionProvider",
    "normalize_language",
    "normalize_preset",
    "supports_bundle",
    "supports_revision",
    "supports_stepwise",
    "FixtureGenerationProvider",
    "LLMGenerationProvider",
    "PromptNotFound",
    "create_provider",
    "derive_title",
    "render_prompt",
]
