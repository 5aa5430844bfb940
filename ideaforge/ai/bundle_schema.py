"""Strict JSON schema for one-shot bundle generation.

Derived from the section models so the model-facing contract cannot
drift from the validators. Strict structured output needs every object
closed (``additionalProperties: false``) with every property required,
and rejects keywords such as ``default`` or ``maxItems``; the section
validators still enforce those after the call.
"""

from functools import lru_cache
from typing import Any, Dict

from pydantic.json_schema import models_json_schema

from ideaforge.ai.schemas import SECTIONS

BUNDLE_SCHEMA_NAME = "project_bundle_v1"

_DROPPED_KEYWORDS = frozenset(("title", "default", "maxItems", "minItems", "maxLength", "minLength"))

ANY_OBJECT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {},
    "required": [],
}


def _strictify(node: Any) -> Any:
    if isinstance(node, list):
        return [_strictify(item) for item in node]
    if not isinstance(node, dict):
        return node

    out: Dict[str, Any] = {}
    for key, value in node.items():
        if key in ("properties", "$defs"):
            # Name -> schema maps: keys are field/model names, not keywords
            out[key] = {name: _strictify(sub) for name, sub in value.items()}
        elif key not in _DROPPED_KEYWORDS:
            out[key] = _strictify(value)

    if out.get("type") == "object":
        properties = out.get("properties")
        if properties:
            out["additionalProperties"] = False
            out["required"] = list(properties)
        else:
            # Free-form maps cannot be expressed in strict mode
            return dict(ANY_OBJECT_SCHEMA)
    return out


@lru_cache(maxsize=1)
def build_bundle_schema() -> Dict[str, Any]:
    """Return the strict bundle schema (cached, treat as read-only)."""
    refs, top = models_json_schema(
        [(spec.model, "validation") for spec in SECTIONS],
        ref_template="#/$defs/{model}",
    )
    schema = {
        "type": "object",
        "properties": {
            spec.key: refs[(spec.model, "validation")] for spec in SECTIONS
        },
        "$defs": top.get("$defs", {}),
    }
    return _strictify(schema)
