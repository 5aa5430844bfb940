"""IdeaNormalized: structured restatement of a free-text project idea."""

from typing import List, Literal, Optional

from pydantic import Field

from ideaforge.ai.schemas.base import JsonNumber, SectionModel, YesNo, YesNoUnknown

Platform = Literal["web", "mobile_web", "ios", "android", "desktop"]
Language = Literal["ko", "en", "ja"]
Priority = Literal["must", "should", "could", "wont"]
ComplexityTrigger = Literal[
    "auth",
    "rbac",
    "payment",
    "realtime",
    "file_upload",
    "search",
    "recommendation",
    "external_api",
    "notifications",
    "admin_console",
    "analytics",
    "multilingual",
]


class ProjectMeta(SectionModel):
    title: str
    one_liner: str
    domain: str = "general"
    target_platforms: List[Platform]
    primary_language: Language = "ko"
    reference_links: List[str] = Field(default_factory=list)


class ProblemSolution(SectionModel):
    problem_statement: str
    solution_summary: str
    unique_value: List[str] = Field(default_factory=list)


class UserRole(SectionModel):
    role: str
    description: str
    key_permissions: List[str] = Field(default_factory=list)


class UserFlow(SectionModel):
    name: str
    actor_role: str
    steps: List[str]


class Feature(SectionModel):
    name: str
    description: str
    priority: Priority
    complexity_triggers: List[ComplexityTrigger]
    acceptance_criteria: List[str] = Field(default_factory=list)


class DataSensitivity(SectionModel):
    contains_pii: YesNoUnknown
    contains_payment_data: YesNoUnknown
    notes: str = ""


class NonFunctionalRequirements(SectionModel):
    security: List[str] = Field(default_factory=list)
    performance: List[str] = Field(default_factory=list)
    availability: List[str] = Field(default_factory=list)
    scalability: List[str] = Field(default_factory=list)


class Constraints(SectionModel):
    deadline: Optional[str] = None
    team_size_limit: Optional[JsonNumber] = None
    must_use_tech: List[str] = Field(default_factory=list)
    cannot_use_tech: List[str] = Field(default_factory=list)


class OpenQuestion(SectionModel):
    question: str
    why_it_matters: str
    options: List[str] = Field(default_factory=list)


class QualityFlags(SectionModel):
    missing_role_definitions: YesNo
    ambiguous_scope: YesNo
    high_risk_uncertainty: YesNo


class IdeaNormalized(SectionModel):
    schema_version: str = "1.0"
    project_meta: ProjectMeta
    problem_solution: ProblemSolution
    users_and_roles: List[UserRole]
    core_user_flows: List[UserFlow]
    features: List[Feature]
    data_sensitivity: DataSensitivity
    non_functional_requirements: NonFunctionalRequirements
    assumptions: List[str] = Field(default_factory=list)
    constraints: Constraints
    open_questions: List[OpenQuestion] = Field(default_factory=list)
    quality_flags: QualityFlags
