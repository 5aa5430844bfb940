"""Failure kinds raised by the generation pipeline."""

from typing import Optional

from ideaforge.ai.schemas.base import SectionValidationFailed
from ideaforge.llm.output_parser import (
    EmptyModelOutput,
    MalformedModelOutput,
    ProviderOutputMalformed,
)


class ProviderUnsupportedOperation(Exception):
    """The configured provider lacks a capability the operation needs."""

    def __init__(self, provider: str, operation: str, message: Optional[str] = None):
        self.provider = provider
        self.operation = operation
        super().__init__(
            message or f"{operation} is not supported by current AI provider ({provider})"
        )


class FixtureNotFound(Exception):
    """A preset fixture document is missing on disk."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Fixture not found: {path}")


class ArtifactNotFound(Exception):
    """No artifact matches the lookup."""

    def __init__(self, artifact_id: Optional[str] = None, project_id: Optional[str] = None):
        self.artifact_id = artifact_id
        self.project_id = project_id
        if artifact_id is not None:
            message = f"Artifact not found: {artifact_id}"
        else:
            message = "No AiArtifact found"
        super().__init__(message)


class JobNotFound(Exception):
    """Job id unknown, or already reaped by TTL."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")


__all__ = [
    "SectionValidationFailed",
    "ProviderOutputMalformed",
    "EmptyModelOutput",
    "MalformedModelOutput",
    "ProviderUnsupportedOperation",
    "FixtureNotFound",
    "ArtifactNotFound",
    "JobNotFound",
]
