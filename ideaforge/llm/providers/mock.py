"""Mock LLM provider for testing."""

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ideaforge.llm.models import (
    LLMError,
    LLMException,
    LLMResponse,
    Message,
    ResponseFormat,
    flatten_messages,
)
from ideaforge.llm.providers.base import BaseLLMProvider


@dataclass
class MockCall:
    """Record of a mock LLM call."""
    messages: List[Message]
    model: str
    max_tokens: int
    temperature: float
    system_prompt: Optional[str]
    response_format: Optional[ResponseFormat]
    timestamp: float = field(default_factory=time.time)


class MockLLMProvider(BaseLLMProvider):
    """Mock LLM provider returning canned text without API calls."""

    def __init__(
        self,
        default_response: str = "",
        responses: Optional[Dict[str, str]] = None,
        response_fn: Optional[Callable[[List[Message], str], str]] = None,
    ):
        """
        Args:
            default_response: Default response when no trigger matches
            responses: Dict mapping prompt substrings to responses
            response_fn: Custom function producing the response text
        """
        self._default_response = default_response
        self._responses = responses or {}
        self._response_fn = response_fn
        self._calls: List[MockCall] = []
        self._error_on_next: Optional[LLMError] = None

    @property
    def provider_name(self) -> str:
        return "mock-llm"

    @property
    def calls(self) -> List[MockCall]:
        return self._calls

    @property
    def call_count(self) -> int:
        return len(self._calls)

    def last_call(self) -> Optional[MockCall]:
        return self._calls[-1] if self._calls else None

    def set_error_on_next(self, error: LLMError) -> None:
        """Configure an error to be raised on the next call."""
        self._error_on_next = error

    async def complete(
        self,
        messages: List[Message],
        model: str,
        max_tokens: int = 16384,
        temperature: float = 0.0,
        system_prompt: Optional[str] = None,
        response_format: Optional[ResponseFormat] = None,
    ) -> LLMResponse:
        self._calls.append(MockCall(
            messages=messages,
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            system_prompt=system_prompt,
            response_format=response_format,
        ))

        if self._error_on_next:
            error = self._error_on_next
            self._error_on_next = None
            raise LLMException(error)

        return LLMResponse(
            content=self._get_response(messages, system_prompt),
            model=model,
        )

    def _get_response(self, messages: List[Message], system_prompt: Optional[str]) -> str:
        if self._response_fn:
            return self._response_fn(messages, system_prompt or "")

        all_text = (system_prompt or "") + flatten_messages(messages)
        for trigger, response in self._responses.items():
            if trigger in all_text:
                return response

        return self._default_response
