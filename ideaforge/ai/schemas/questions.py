"""ClarifyingQuestions: up to five follow-up questions for the idea author."""

from typing import List, Literal, Optional

from pydantic import Field

from ideaforge.ai.schemas.base import JsonNumber, SectionModel

MAX_QUESTIONS = 5

QuestionType = Literal["single_choice", "multi_choice", "free_text", "boolean"]
Impact = Literal["erd", "api", "screens", "timeline", "team"]


class ClarifyingQuestion(SectionModel):
    id: str
    question: str
    type: QuestionType
    options: List[str] = Field(default_factory=list)
    default: Optional[str] = None
    why_it_matters: str
    impacts: List[Impact]


class LimitPolicy(SectionModel):
    max_questions: JsonNumber = MAX_QUESTIONS
    rule: str = "Exactly 5 unless already fully specified"


class ClarifyingQuestions(SectionModel):
    schema_version: str = "1.0"
    # Hard cap, never truncated
    questions: List[ClarifyingQuestion] = Field(max_length=MAX_QUESTIONS)
    limit_policy: LimitPolicy
