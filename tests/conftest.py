"""
Shared pytest fixtures for all tests.

Provides fixture-backed providers, in-memory stores and a couple of
factories for bundle documents used across the suites.
"""

import copy
import json
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict

import pytest

from ideaforge.ai.providers.fixture import FixtureGenerationProvider
from ideaforge.core.config import PACKAGE_ROOT
from ideaforge.persistence.repositories import InMemoryArtifactRepository

FIXTURES_DIR = PACKAGE_ROOT / "ai" / "fixtures"
PROMPTS_DIR = PACKAGE_ROOT / "ai" / "prompts"


# =============================================================================
# CLOCKS
# =============================================================================

class FakeMonotonic:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUtcClock:
    """UTC datetime clock that ticks one second per call."""

    def __init__(self):
        self.now = datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def monotonic_clock() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture
def utc_clock() -> FakeUtcClock:
    return FakeUtcClock()


# =============================================================================
# FIXTURE DOCUMENTS
# =============================================================================

@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def prompts_dir():
    return PROMPTS_DIR


def _read(preset: str, file_name: str) -> Dict[str, Any]:
    return json.loads((FIXTURES_DIR / preset / file_name).read_text(encoding="utf-8"))


@pytest.fixture
def raw_bundle() -> Callable[[str], Dict[str, Any]]:
    """
    Factory for an unvalidated five-section bundle built from a preset.

    The idea title is filled in so the bundle reads like model output.
    """

    def _build(preset: str = "medium") -> Dict[str, Any]:
        idea = _read(preset, "idea.json")
        idea["project_meta"]["title"] = f"{preset} project"
        return copy.deepcopy({
            "ideaNormalized": idea,
            "screens": _read(preset, "screens.json"),
            "apiSpec": _read(preset, "api.json"),
            "erd": _read(preset, "erd.json"),
            "questions": _read(preset, "questions.json"),
        })

    return _build


# =============================================================================
# PROVIDERS AND STORES
# =============================================================================

@pytest.fixture
def fixture_provider() -> FixtureGenerationProvider:
    return FixtureGenerationProvider(FIXTURES_DIR)


@pytest.fixture
def memory_repository() -> InMemoryArtifactRepository:
    return InMemoryArtifactRepository()
