"""Request models for the AI endpoints."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_IDEA_TEXT = 20000
MAX_INSTRUCTION = 2000
MAX_NOTE = 500


class AiLanguage(str, Enum):
    KO = "KO"
    EN = "EN"
    JA = "JA"


class GenerateMode(str, Enum):
    DRAFT = "DRAFT"


class MockPreset(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


class GenerateProjectRequest(BaseModel):
    """Request to generate a project bundle from an idea."""

    model_config = ConfigDict(populate_by_name=True, json_schema_extra={
        "example": {
            "ideaText": "소셜 북마크 공유 앱",
            "language": "KO",
            "mockPreset": "EASY",
        }
    })

    idea_text: str = Field(..., alias="ideaText", max_length=MAX_IDEA_TEXT)
    language: Optional[AiLanguage] = None
    mode: Optional[GenerateMode] = None
    mock_preset: Optional[MockPreset] = Field(None, alias="mockPreset")
    project_id: Optional[str] = Field(None, alias="projectId")

    @field_validator("language", "mode", "mock_preset", mode="before")
    @classmethod
    def _case_insensitive(cls, value: Any) -> Any:
        return _upper(value)


class ReviseArtifactRequest(BaseModel):
    """Request to revise an artifact with a natural-language instruction."""

    instruction: str = Field(..., max_length=MAX_INSTRUCTION)
    language: Optional[AiLanguage] = None

    @field_validator("language", mode="before")
    @classmethod
    def _case_insensitive(cls, value: Any) -> Any:
        return _upper(value)


class ApproveArtifactRequest(BaseModel):
    """Request to approve an artifact."""

    note: Optional[str] = Field(None, max_length=MAX_NOTE)
