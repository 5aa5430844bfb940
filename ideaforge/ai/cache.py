"""Process-local result cache with a time-to-live."""

import hashlib
import json
import time
from collections import OrderedDict
from typing import Any, Callable, Optional, Tuple


def build_cache_key(
    provider: str,
    language: str,
    preset: str,
    idea_text: str,
    project_id: Optional[str] = None,
) -> str:
    """sha256 hex of the canonical request tuple."""
    payload = json.dumps(
        {
            "provider": provider,
            "language": language,
            "preset": preset,
            "projectId": project_id,
            "ideaText": idea_text,
        },
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class TTLCache:
    """
    Bounded key/value cache whose entries expire ``ttl_seconds`` after insert.

    An entry stays live until the clock passes its expiry and is dropped
    lazily on the first read after that. When full, the oldest-inserted
    entry is evicted.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._max_entries = max(1, max_entries)
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() > expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries.pop(key, None)
        while len(self._entries) >= self._max_entries:
            self._entries.popitem(last=False)
        self._entries[key] = (self._clock() + self._ttl, value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
