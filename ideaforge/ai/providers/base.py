"""Generation provider protocols and capability checks.

Providers come in two shapes: stepwise (five dependent calls, one per
section) and one-shot (whole bundle per call, optionally revisable).
A provider is not required to implement both, so callers check for a
capability instead of checking the provider's class.
"""

from typing import Any, Dict, Literal, Protocol, runtime_checkable

Language = Literal["ko", "en", "ja"]
Preset = Literal["easy", "medium", "hard"]

LANGUAGES = ("ko", "en", "ja")
PRESETS = ("easy", "medium", "hard")
DEFAULT_LANGUAGE: Language = "ko"
DEFAULT_PRESET: Preset = "medium"

STEPWISE_METHODS = (
    "normalize_idea",
    "generate_screens",
    "generate_api_spec",
    "generate_erd",
    "generate_clarifying_questions",
)


def normalize_language(value: Any) -> Language:
    """Map KO/EN/JA (any case) to ko/en/ja; anything else falls back to ko."""
    if value is None:
        return DEFAULT_LANGUAGE
    lowered = str(value).strip().lower()
    return lowered if lowered in LANGUAGES else DEFAULT_LANGUAGE


def normalize_preset(value: Any) -> Preset:
    """Map EASY/MEDIUM/HARD (any case) to a preset; default medium."""
    if value is None:
        return DEFAULT_PRESET
    lowered = str(value).strip().lower()
    return lowered if lowered in PRESETS else DEFAULT_PRESET


@runtime_checkable
class StepwiseProvider(Protocol):
    """Five-call protocol; each call consumes the earlier outputs."""

    name: str

    async def normalize_idea(self, idea_text: str, language: Language, preset: Preset) -> Any: ...

    async def generate_screens(self, idea_normalized: Dict[str, Any], preset: Preset) -> Any: ...

    async def generate_api_spec(
        self, idea_normalized: Dict[str, Any], screens: Dict[str, Any], preset: Preset
    ) -> Any: ...

    async def generate_erd(self, idea_normalized: Dict[str, Any], preset: Preset) -> Any: ...

    async def generate_clarifying_questions(
        self,
        idea_normalized: Dict[str, Any],
        screens: Dict[str, Any],
        api_spec: Dict[str, Any],
        erd: Dict[str, Any],
        preset: Preset,
    ) -> Any: ...


@runtime_checkable
class BundleProvider(Protocol):
    """One-shot protocol: the whole raw bundle in one call."""

    name: str

    async def generate_bundle(self, idea_text: str, language: Language) -> Dict[str, Any]: ...


@runtime_checkable
class RevisionProvider(Protocol):
    name: str

    async def revise_bundle(
        self, instruction: str, base_json: Any, language: Language
    ) -> Dict[str, Any]: ...


def _has_callable(provider: Any, attr: str) -> bool:
    return callable(getattr(provider, attr, None))


def supports_bundle(provider: Any) -> bool:
    return _has_callable(provider, "generate_bundle")


def supports_revision(provider: Any) -> bool:
    return _has_callable(provider, "revise_bundle")


def supports_stepwise(provider: Any) -> bool:
    return all(_has_callable(provider, attr) for attr in STEPWISE_METHODS)
