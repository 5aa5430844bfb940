"""ErdDraft: entities, relationships and schema-wide conventions."""

from typing import List, Literal, Optional

from pydantic import Field

from ideaforge.ai.schemas.base import SectionModel, YesNo, YesNoUnknown

Cardinality = Literal["1:1", "1:N", "N:M"]
OnDelete = Literal["CASCADE", "RESTRICT", "SET_NULL", "NO_ACTION", "unknown"]
IdStrategy = Literal["uuid", "cuid", "int", "unknown"]
TimestampConvention = Literal["createdAt/updatedAt", "none", "unknown"]


class Column(SectionModel):
    name: str
    type: str
    nullable: YesNo
    pk: YesNo
    unique: YesNo
    default: Optional[str] = None
    comment: str = ""


class Index(SectionModel):
    name: str
    columns: List[str]
    unique: YesNo


class Entity(SectionModel):
    name: str
    description: str = ""
    columns: List[Column]
    indexes: List[Index] = Field(default_factory=list)


class Relationship(SectionModel):
    from_entity: str
    from_column: str
    to_entity: str
    to_column: str
    cardinality: Cardinality
    on_delete: OnDelete = "unknown"
    notes: str = ""


class CommonConventions(SectionModel):
    id_strategy: IdStrategy = "cuid"
    timestamps: TimestampConvention = "createdAt/updatedAt"
    soft_delete: YesNoUnknown = "unknown"


class ErdDraft(SectionModel):
    schema_version: str = "1.0"
    entities: List[Entity]
    relationships: List[Relationship] = Field(default_factory=list)
    common_conventions: CommonConventions
    assumptions: List[str] = Field(default_factory=list)
    open_questions: List[str] = Field(default_factory=list)
