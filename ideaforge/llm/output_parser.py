"""Output parsing for LLM responses.

Models asked for JSON do not always return clean JSON: the payload can
be wrapped in prose or code fences, and nested values sometimes come
back JSON-encoded as strings (occasionally more than once). The helpers
here recover what can be recovered and raise a typed error otherwise.
"""

import json
from typing import Any, Dict, Optional

SAMPLE_LENGTH = 200
MAX_UNWRAP_ATTEMPTS = 3

_FAILED = object()


class ProviderOutputMalformed(ValueError):
    """Model output could not be turned into the expected JSON shape."""

    def __init__(self, raw_text: str, error: str, kind: str):
        super().__init__(f"Model output failure ({kind}): {error}")
        self.raw_text = raw_text
        self.error = error
        self.kind = kind

    @property
    def sample(self) -> str:
        return self.raw_text[:SAMPLE_LENGTH]


class EmptyModelOutput(ProviderOutputMalformed):
    def __init__(self):
        super().__init__(
            raw_text="",
            error="No text content found in model response",
            kind="empty_output",
        )


class MalformedModelOutput(ProviderOutputMalformed):
    pass


def extract_json_object(text: str) -> Optional[str]:
    """Return the outermost ``{...}`` span of text, or None."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start:end + 1]


def _loads_lenient(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    extracted = extract_json_object(text)
    if extracted is None or extracted == text:
        return _FAILED
    try:
        return json.loads(extracted)
    except json.JSONDecodeError:
        return _FAILED


def parse_json_object(raw: Optional[str]) -> Dict[str, Any]:
    """
    Parse model output into a JSON object.

    Tries the whole text first, then the outermost ``{...}`` span.

    Raises:
        EmptyModelOutput: output is empty or whitespace
        MalformedModelOutput: no JSON object could be decoded
    """
    text = (raw or "").strip()
    if not text:
        raise EmptyModelOutput()

    parsed = _loads_lenient(text)
    if parsed is _FAILED:
        raise MalformedModelOutput(
            raw_text=text,
            error=f"output is not valid JSON. sample={text[:SAMPLE_LENGTH]}",
            kind="json_decode",
        )
    if not isinstance(parsed, dict):
        raise MalformedModelOutput(
            raw_text=text,
            error=f"top-level JSON value is {type(parsed).__name__}, expected object",
            kind="not_object",
        )
    return parsed


def unwrap_json_string(
    value: Any,
    label: str,
    max_attempts: int = MAX_UNWRAP_ATTEMPTS,
) -> Any:
    """
    Decode a value that may arrive as a (possibly double-encoded) JSON string.

    Non-strings and blank strings are returned unchanged. A string is
    decoded at most ``max_attempts`` times; a decode that yields a plain
    string without braces is returned as that string.

    Raises:
        MalformedModelOutput: the string never decodes to JSON
    """
    if not isinstance(value, str):
        return value

    text = value.strip()
    if not text:
        return value

    for _ in range(max_attempts):
        parsed = _loads_lenient(text)
        if parsed is _FAILED:
            break
        if isinstance(parsed, str):
            nxt = parsed.strip()
            if "{" in nxt and "}" in nxt:
                text = nxt
                continue
            return parsed
        return parsed

    raise MalformedModelOutput(
        raw_text=text,
        error=f"{label} is string but not valid JSON. sample={text[:SAMPLE_LENGTH]}",
        kind="section_unwrap",
    )
