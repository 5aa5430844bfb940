"""LLM providers module."""

from ideaforge.llm.providers.base import LLMProvider, BaseLLMProvider
from ideaforge.llm.providers.openai import OpenAIProvider
from ideaforge.llm.providers.mock import MockLLMProvider, MockCall

__all__ = [
    "LLMProvider",
    "BaseLLMProvider",
    "OpenAIProvider",
    "MockLLMProvider",
    "MockCall",
]
