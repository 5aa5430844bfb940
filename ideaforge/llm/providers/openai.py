"""OpenAI Responses API provider."""

import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from ideaforge.llm.models import (
    LLMError,
    LLMException,
    LLMResponse,
    Message,
    MessageRole,
    ResponseFormat,
)
from ideaforge.llm.providers.base import BaseLLMProvider

logger = logging.getLogger(__name__)


def extract_output_text(data: Dict[str, Any]) -> str:
    """
    Pull the generated text out of a Responses API payload.

    Prefers the flattened ``output_text`` field when present, otherwise
    concatenates every ``output_text`` content block of the output items.
    """
    text = data.get("output_text")
    if isinstance(text, str) and text:
        return text

    parts: List[str] = []
    for item in data.get("output") or []:
        if not isinstance(item, dict):
            continue
        for block in item.get("content") or []:
            if isinstance(block, dict) and block.get("type") == "output_text":
                if isinstance(block.get("text"), str):
                    parts.append(block["text"])
    return "".join(parts)


class OpenAIProvider(BaseLLMProvider):
    """OpenAI Responses API provider (structured outputs supported)."""

    API_URL = "https://api.openai.com/v1/responses"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            base_url: Optional custom endpoint URL (proxies, gateways)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._api_key = api_key
        self._base_url = base_url or self.API_URL
        self._timeout = timeout
        self._transport = transport

    @property
    def provider_name(self) -> str:
        return "openai"

    async def complete(
        self,
        messages: List[Message],
        model: str,
        max_tokens: int = 16384,
        temperature: float = 0.0,
        system_prompt: Optional[str] = None,
        response_format: Optional[ResponseFormat] = None,
    ) -> LLMResponse:
        """Generate completion via the Responses API."""
        request_body: Dict[str, Any] = {
            "model": model,
            "input": self._format_messages(messages),
            "temperature": temperature,
            "max_output_tokens": max_tokens,
        }
        if system_prompt:
            request_body["instructions"] = system_prompt
        if response_format is not None:
            request_body["text"] = {"format": response_format.to_dict()}

        headers = {
            "authorization": f"Bearer {self._api_key}",
            "content-type": "application/json",
        }

        start_time = time.perf_counter()
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._base_url,
                    json=request_body,
                    headers=headers,
                )
        except httpx.TimeoutException as e:
            raise LLMException(LLMError.timeout(f"Request timed out: {e}"))
        except httpx.RequestError as e:
            raise LLMException(LLMError.api_error(f"Request failed: {e}", 0))

        latency_ms = (time.perf_counter() - start_time) * 1000
        request_id = response.headers.get("x-request-id")

        if response.status_code == 429:
            retry_after = response.headers.get("retry-after")
            raise LLMException(LLMError.rate_limit(
                "Rate limit exceeded",
                request_id=request_id,
                retry_after_seconds=float(retry_after) if retry_after and retry_after.isdigit() else None,
            ))

        if response.status_code >= 400:
            try:
                error_body = response.json()
            except ValueError:
                error_body = {}
            error_msg = (error_body.get("error") or {}).get("message") or response.text
            raise LLMException(LLMError.api_error(error_msg, response.status_code, request_id))

        data = response.json()
        usage = data.get("usage") or {}

        logger.debug(
            f"openai response {data.get('id')} status={data.get('status')} "
            f"latency={latency_ms:.0f}ms"
        )

        return LLMResponse(
            content=extract_output_text(data),
            model=data.get("model", model),
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
            latency_ms=latency_ms,
            stop_reason=data.get("status", "completed"),
            raw=data,
        )

    def _format_messages(self, messages: List[Message]) -> List[Dict[str, str]]:
        """System messages travel via ``instructions``; skip them here."""
        return [m.to_dict() for m in messages if m.role != MessageRole.SYSTEM]
