"""Persistence domain models."""

from dataclasses import dataclass, field
from datetime import datetime, UTC
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4


class ArtifactType(str, Enum):
    """Artifact type values. Generated bundles are stored as OTHER."""
    IDEA = "IDEA"
    SCREENS = "SCREENS"
    API_SPEC = "API_SPEC"
    ERD = "ERD"
    QUESTIONS = "QUESTIONS"
    OTHER = "OTHER"


@dataclass
class StoredArtifact:
    """
    Domain model for a stored AI artifact.

    Roots carry version 1 and no revision_base_id; every revision points
    at its chain root through revision_base_id.
    """
    id: str
    type: ArtifactType
    version: int
    content: Dict[str, Any]
    prompt_hash: Optional[str] = None
    revision_base_id: Optional[str] = None
    project_id: Optional[str] = None
    created_by_id: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        content: Dict[str, Any],
        artifact_type: ArtifactType = ArtifactType.OTHER,
        **kwargs,
    ) -> "StoredArtifact":
        """Create a new version-1 artifact with generated ID."""
        kwargs.setdefault("version", 1)
        return cls(
            id=str(uuid4()),
            type=artifact_type,
            content=content,
            **kwargs,
        )

    @property
    def root_id(self) -> str:
        return self.revision_base_id or self.id

    def to_meta(self) -> Dict[str, Any]:
        """All columns except content, keyed the way the API returns them."""
        return {
            "id": self.id,
            "type": self.type.value,
            "version": self.version,
            "promptHash": self.prompt_hash,
            "revisionBaseId": self.revision_base_id,
            "projectId": self.project_id,
            "createdById": self.created_by_id,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }
