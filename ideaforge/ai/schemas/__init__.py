"""
Section schemas for generated bundles.

A bundle holds five sections, each validated independently against its
pydantic model. Validation fills defaults for optional fields and rejects
the whole section when a required field is missing or an enumerated
value falls outside its closed set.
"""

from typing import Any, Dict, NamedTuple, Tuple, Type

from pydantic import ValidationError

from ideaforge.ai.schemas.api_spec import ApiSpecDraft
from ideaforge.ai.schemas.base import (
    SectionModel,
    SectionValidationFailed,
    issues_from_error,
)
from ideaforge.ai.schemas.erd import ErdDraft
from ideaforge.ai.schemas.idea import IdeaNormalized
from ideaforge.ai.schemas.questions import MAX_QUESTIONS, ClarifyingQuestions
from ideaforge.ai.schemas.screens import ScreenListDraft


class SectionSpec(NamedTuple):
    key: str
    label: str
    model: Type[SectionModel]


SECTIONS: Tuple[SectionSpec, ...] = (
    SectionSpec("ideaNormalized", "IdeaNormalized", IdeaNormalized),
    SectionSpec("screens", "ScreenListDraft", ScreenListDraft),
    SectionSpec("apiSpec", "ApiSpecDraft", ApiSpecDraft),
    SectionSpec("erd", "ErdDraft", ErdDraft),
    SectionSpec("questions", "ClarifyingQuestions", ClarifyingQuestions),
)

SECTION_KEYS: Tuple[str, ...] = tuple(spec.key for spec in SECTIONS)
_BY_KEY: Dict[str, SectionSpec] = {spec.key: spec for spec in SECTIONS}


def validate_section(key: str, value: Any) -> Dict[str, Any]:
    """
    Validate one section and return it as plain JSON data with defaults filled.

    Args:
        key: Bundle key of the section (e.g. "apiSpec")
        value: Raw section value from a provider

    Raises:
        SectionValidationFailed: value does not conform; carries the
            section label and a list of {path, message, type} issues
    """
    spec = _BY_KEY[key]
    try:
        model = spec.model.model_validate(value)
    except ValidationError as e:
        raise SectionValidationFailed(spec.label, issues_from_error(e)) from e
    return model.model_dump(mode="json", by_alias=True)


def validate_bundle(raw: Any) -> Dict[str, Dict[str, Any]]:
    """Validate all five sections in order, failing at the first bad one."""
    source = raw if isinstance(raw, dict) else {}
    return {key: validate_section(key, source.get(key)) for key in SECTION_KEYS}


__all__ = [
    "SECTIONS",
    "SECTION_KEYS",
    "MAX_QUESTIONS",
    "SectionSpec",
    "SectionModel",
    "SectionValidationFailed",
    "IdeaNormalized",
    "ScreenListDraft",
    "ApiSpecDraft",
    "ErdDraft",
    "ClarifyingQuestions",
    "validate_section",
    "validate_bundle",
]
