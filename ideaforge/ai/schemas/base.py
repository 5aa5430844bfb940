"""Shared pieces for section schemas: base model, enums, validation errors."""

from typing import Any, Dict, List, Literal, Sequence, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, ValidationError

YesNo = Literal["yes", "no"]
YesNoUnknown = Literal["yes", "no", "unknown"]
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]
# JSON number; numeric strings and booleans are rejected
JsonNumber = Union[StrictInt, StrictFloat]


class SectionModel(BaseModel):
    """Base for generated sections: unknown keys are dropped, not rejected."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SectionValidationFailed(Exception):
    """A generated section does not conform to its schema."""

    def __init__(self, label: str, issues: List[Dict[str, Any]]):
        super().__init__(f"AI output validation failed: {label}")
        self.label = label
        self.issues = issues


def format_loc(loc: Sequence[Union[str, int]]) -> str:
    """Render a pydantic error location as ``a.b[2].c``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path


def issues_from_error(exc: ValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "path": format_loc(error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
