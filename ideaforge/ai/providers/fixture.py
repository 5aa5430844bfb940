"""Fixture-backed generation provider.

Serves fixed documents per preset tier from ``<fixtures_dir>/<preset>/``
and patches the few idea-derived fields. Deterministic and offline:
the default provider for development and tests.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ideaforge.ai.exceptions import FixtureNotFound
from ideaforge.ai.providers.base import DEFAULT_PRESET, Language, Preset

logger = logging.getLogger(__name__)

TITLE_MAX_CHARS = 32
DEFAULT_TITLE = "새 프로젝트"

FIXTURE_FILES = {
    "idea": "idea.json",
    "screens": "screens.json",
    "api": "api.json",
    "erd": "erd.json",
    "questions": "questions.json",
}


def derive_title(text: str) -> str:
    """Title from idea text: trimmed, cut to 32 chars with an ellipsis."""
    trimmed = (text or "").strip()
    if not trimmed:
        return DEFAULT_TITLE
    if len(trimmed) > TITLE_MAX_CHARS:
        return f"{trimmed[:TITLE_MAX_CHARS]}…"
    return trimmed


class FixtureGenerationProvider:
    """Stepwise provider reading preset fixture documents."""

    name = "mock"

    def __init__(self, fixtures_dir: Path):
        self._fixtures_dir = Path(fixtures_dir)

    def _load_fixture(self, preset: Optional[Preset], document: str) -> Dict[str, Any]:
        path = self._fixtures_dir / (preset or DEFAULT_PRESET) / FIXTURE_FILES[document]
        if not path.is_file():
            raise FixtureNotFound(str(path))
        logger.debug(f"Loading fixture {path}")
        return json.loads(path.read_text(encoding="utf-8"))

    async def normalize_idea(
        self,
        idea_text: str,
        language: Language,
        preset: Optional[Preset] = None,
    ) -> Dict[str, Any]:
        data = self._load_fixture(preset, "idea")

        meta = data.get("project_meta")
        if isinstance(meta, dict):
            meta["primary_language"] = language
            meta["title"] = meta.get("title") or derive_title(idea_text)

        return data

    async def generate_screens(
        self,
        idea_normalized: Dict[str, Any],
        preset: Optional[Preset] = None,
    ) -> Dict[str, Any]:
        return self._load_fixture(preset, "screens")

    async def generate_api_spec(
        self,
        idea_normalized: Dict[str, Any],
        screens: Dict[str, Any],
        preset: Optional[Preset] = None,
    ) -> Dict[str, Any]:
        return self._load_fixture(preset, "api")

    async def generate_erd(
        self,
        idea_normalized: Dict[str, Any],
        preset: Optional[Preset] = None,
    ) -> Dict[str, Any]:
        return self._load_fixture(preset, "erd")

    async def generate_clarifying_questions(
        self,
        idea_normalized: Dict[str, Any],
        screens: Dict[str, Any],
        api_spec: Dict[str, Any],
        erd: Dict[str, Any],
        preset: Optional[Preset] = None,
    ) -> Dict[str, Any]:
        return self._load_fixture(preset, "questions")
