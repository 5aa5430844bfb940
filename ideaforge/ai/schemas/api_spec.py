"""ApiSpecDraft: endpoint definitions with request, response and error shapes."""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from ideaforge.ai.schemas.base import HttpMethod, JsonNumber, SectionModel, YesNo

AuthStrategy = Literal["session", "jwt", "oauth", "unknown"]
ContentType = Literal["application/json", "multipart/form-data", "none"]


class ApiAuth(SectionModel):
    strategy: AuthStrategy = "unknown"
    notes: List[str] = Field(default_factory=list)


class HeaderParam(SectionModel):
    name: str
    required: YesNo
    example: str = ""


class TypedParam(SectionModel):
    name: str
    type: str
    required: YesNo
    example: str = ""


class RequestBody(SectionModel):
    content_type: ContentType = "application/json"
    # "schema" would shadow a BaseModel attribute, hence the alias
    schema_: str = Field("object", alias="schema")
    example: Dict[str, Any] = Field(default_factory=dict)


class EndpointRequest(SectionModel):
    headers: List[HeaderParam] = Field(default_factory=list)
    query: List[TypedParam] = Field(default_factory=list)
    params: List[TypedParam] = Field(default_factory=list)
    body: RequestBody


class EndpointResponse(SectionModel):
    status: JsonNumber
    description: str
    schema_: str = Field("object", alias="schema")
    example: Dict[str, Any] = Field(default_factory=dict)


class EndpointError(SectionModel):
    status: JsonNumber
    code: str
    message: str
    when: str


class Endpoint(SectionModel):
    id: str
    name: str
    method: HttpMethod
    path: str
    summary: str
    auth_required: YesNo
    roles_allowed: List[str] = Field(default_factory=list)
    rate_limit_hint: Optional[str] = None
    request: EndpointRequest
    responses: List[EndpointResponse] = Field(default_factory=list)
    errors: List[EndpointError] = Field(default_factory=list)
    related_screens: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)


class ApiSpecDraft(SectionModel):
    schema_version: str = "1.0"
    base_url_hint: str = "/api"
    auth: ApiAuth
    endpoints: List[Endpoint]
    assumptions: List[str] = Field(default_factory=list)
    open_questions: List[str] = Field(default_factory=list)
