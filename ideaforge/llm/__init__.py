"""LLM integration module for IdeaForge."""

from ideaforge.llm.models import (
    Message,
    MessageRole,
    ResponseFormat,
    LLMResponse,
    LLMError,
    LLMException,
    LLMOperationalError,
)
from ideaforge.llm.providers.base import LLMProvider, BaseLLMProvider
from ideaforge.llm.providers.openai import OpenAIProvider
from ideaforge.llm.providers.mock import MockLLMProvider, MockCall
from ideaforge.llm.output_parser import (
    ProviderOutputMalformed,
    EmptyModelOutput,
    MalformedModelOutput,
    extract_json_object,
    parse_json_object,
    unwrap_json_string,
)

__all__ = [
    # Models
    "Message",
    "MessageRole",
    "ResponseFormat",
    "LLMResponse",
    "LLMError",
    "LLMException",
    "LLMOperationalError",
    # Providers
    "LLMProvider",
    "BaseLLMProvider",
    "OpenAIProvider",
    "MockLLMProvider",
    "MockCall",
    # Output parsing
    "ProviderOutputMalformed",
    "EmptyModelOutput",
    "MalformedModelOutput",
    "extract_json_object",
    "parse_json_object",
    "unwrap_json_string",
]
