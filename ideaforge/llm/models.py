"""LLM domain models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class MessageRole(str, Enum):
    """Message roles for LLM conversations."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """A message in an LLM conversation."""
    role: MessageRole
    content: str

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=MessageRole.USER, content=content)

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary for API calls."""
        return {"role": self.role.value, "content": self.content}


@dataclass
class ResponseFormat:
    """Structured-output constraint: a named, strict JSON schema."""
    name: str
    schema: Dict[str, Any]
    strict: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "json_schema",
            "name": self.name,
            "strict": self.strict,
            "schema": self.schema,
        }


@dataclass
class LLMResponse:
    """Response from an LLM provider."""
    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    latency_ms: float = 0.0
    stop_reason: str = "completed"
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass
class LLMError:
    """Error from an LLM provider."""
    error_type: str
    message: str
    retryable: bool = False
    status_code: Optional[int] = None
    request_id: Optional[str] = None
    retry_after_seconds: Optional[float] = None

    @classmethod
    def rate_limit(
        cls,
        message: str,
        request_id: Optional[str] = None,
        retry_after_seconds: Optional[float] = None,
    ) -> "LLMError":
        return cls(
            error_type="rate_limit",
            message=message,
            retryable=True,
            status_code=429,
            request_id=request_id,
            retry_after_seconds=retry_after_seconds,
        )

    @classmethod
    def timeout(cls, message: str) -> "LLMError":
        return cls(error_type="timeout", message=message, retryable=True)

    @classmethod
    def api_error(
        cls,
        message: str,
        status_code: int,
        request_id: Optional[str] = None,
    ) -> "LLMError":
        """Create an API error. 5xx responses are retryable."""
        return cls(
            error_type="api_error",
            message=message,
            retryable=status_code >= 500,
            status_code=status_code,
            request_id=request_id,
        )


class LLMException(Exception):
    """Exception wrapping LLM transport errors."""

    def __init__(self, error: LLMError):
        self.error = error
        super().__init__(error.message)


class LLMOperationalError(LLMException):
    """Raised when all retries are exhausted for a retryable LLM error."""

    def __init__(
        self,
        provider: str,
        status_code: int,
        request_id: Optional[str],
        message: str,
        attempts: int,
    ):
        self.provider = provider
        self.attempts = attempts
        error = LLMError(
            error_type="operational_error",
            message=message,
            retryable=True,
            status_code=status_code,
            request_id=request_id,
        )
        super().__init__(error)


def flatten_messages(messages: List[Message]) -> str:
    """Join message contents, used for trigger matching in tests and logs."""
    return "\n\n".join(m.content for m in messages)
