"""ScreenListDraft: UI screens, their API needs, permissions and navigation."""

from typing import List, Literal

from pydantic import Field

from ideaforge.ai.schemas.base import HttpMethod, SectionModel, YesNo

ScreenState = Literal["empty", "loading", "error", "success"]


class RequiredApi(SectionModel):
    method: HttpMethod
    path: str
    purpose: str


class ScreenPermissions(SectionModel):
    auth_required: YesNo
    roles_allowed: List[str] = Field(default_factory=list)


class Screen(SectionModel):
    id: str
    name: str
    route: str
    actor_roles: List[str]
    goal: str
    main_components: List[str] = Field(default_factory=list)
    states: List[ScreenState] = Field(default_factory=lambda: ["loading", "success"])
    required_apis: List[RequiredApi] = Field(default_factory=list)
    permissions: ScreenPermissions
    notes: List[str] = Field(default_factory=list)


class NavigationEdge(SectionModel):
    from_screen_id: str
    to_screen_id: str
    trigger: str


class ScreenListDraft(SectionModel):
    schema_version: str = "1.0"
    screens: List[Screen]
    navigation: List[NavigationEdge] = Field(default_factory=list)
    assumptions: List[str] = Field(default_factory=list)
    open_questions: List[str] = Field(default_factory=list)
