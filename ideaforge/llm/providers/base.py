"""LLM provider base protocol."""

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from ideaforge.llm.models import (
    LLMException,
    LLMOperationalError,
    LLMResponse,
    Message,
    ResponseFormat,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for LLM providers."""

    @property
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'openai')."""
        ...

    async def complete(
        self,
        messages: List[Message],
        model: str,
        max_tokens: int = 16384,
        temperature: float = 0.0,
        system_prompt: Optional[str] = None,
        response_format: Optional[ResponseFormat] = None,
    ) -> LLMResponse:
        """
        Generate a completion from the LLM.

        Args:
            messages: Conversation messages
            model: Model identifier
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature
            system_prompt: Optional system prompt
            response_format: Optional strict JSON schema for the output

        Returns:
            LLMResponse with content and metadata

        Raises:
            LLMException: On provider errors
        """
        ...


class BaseLLMProvider(ABC):
    """Base class for LLM providers with common functionality."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @abstractmethod
    async def complete(
        self,
        messages: List[Message],
        model: str,
        max_tokens: int = 16384,
        temperature: float = 0.0,
        system_prompt: Optional[str] = None,
        response_format: Optional[ResponseFormat] = None,
    ) -> LLMResponse:
        ...

    async def complete_with_retry(
        self,
        messages: List[Message],
        model: str,
        max_tokens: int = 16384,
        temperature: float = 0.0,
        system_prompt: Optional[str] = None,
        response_format: Optional[ResponseFormat] = None,
        max_retries: int = 3,
        base_delay: float = 0.5,
    ) -> LLMResponse:
        """
        Complete with exponential backoff retry.

        Only transport errors flagged retryable (rate limits, timeouts,
        5xx) are retried. Backoff schedule (default): 0.5s, 2s, 8s with up
        to 25% jitter; retry_after_seconds from the provider wins.

        Raises:
            LLMOperationalError: After all retries exhausted on retryable errors
            LLMException: On non-retryable errors (immediate, no retry)
        """
        last_error: Optional[LLMException] = None
        delay = base_delay

        for attempt in range(max_retries + 1):
            try:
                return await self.complete(
                    messages=messages,
                    model=model,
                    max_tokens=max_tokens,
                    temperature=temperature,
                    system_prompt=system_prompt,
                    response_format=response_format,
                )
            except LLMException as e:
                last_error = e
                if not e.error.retryable or attempt == max_retries:
                    break

                sleep_time = e.error.retry_after_seconds or delay
                sleep_time += random.uniform(0, 0.25 * sleep_time)
                logger.warning(
                    f"{self.provider_name} call failed ({e.error.error_type}), "
                    f"retry {attempt + 1}/{max_retries} in {sleep_time:.2f}s"
                )
                await asyncio.sleep(sleep_time)
                delay *= 4

        if not last_error.error.retryable:
            raise last_error

        raise LLMOperationalError(
            provider=self.provider_name,
            status_code=last_error.error.status_code or 0,
            request_id=last_error.error.request_id,
            message=last_error.error.message,
            attempts=max_retries + 1,
        )
