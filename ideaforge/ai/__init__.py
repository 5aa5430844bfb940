"""AI generation pipeline: providers, validators, diff, cache, jobs, orchestrator."""

from ideaforge.ai.cache import TTLCache, build_cache_key
from ideaforge.ai.diff import DiffEntry, compute_json_diff
from ideaforge.ai.exceptions import (
    ArtifactNotFound,
    FixtureNotFound,
    JobNotFound,
    ProviderOutputMalformed,
    ProviderUnsupportedOperation,
    SectionValidationFailed,
)
from ideaforge.ai.jobs import JobStatus, JobTracker
from ideaforge.ai.service import GenerationOrchestrator

__all__ = [
    "GenerationOrchestrator",
    "JobTracker",
    "JobStatus",
    "TTLCache",
    "build_cache_key",
    "DiffEntry",
    "compute_json_diff",
    "ArtifactNotFound",
    "FixtureNotFound",
    "JobNotFound",
    "ProviderOutputMalformed",
    "ProviderUnsupportedOperation",
    "SectionValidationFailed",
]
