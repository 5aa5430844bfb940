"""FastAPI dependency injection for API endpoints."""

import logging
from typing import Optional

from fastapi import Depends

from ideaforge.ai.cache import TTLCache
from ideaforge.ai.jobs import JobTracker
from ideaforge.ai.providers import create_provider
from ideaforge.ai.service import GenerationOrchestrator
from ideaforge.core.config import settings
from ideaforge.core.database import async_session_factory
from ideaforge.persistence.sql_repositories import SqlAlchemyArtifactRepository

logger = logging.getLogger(__name__)

# Process-wide singletons: the cache and job map must outlive a request
_orchestrator: Optional[GenerationOrchestrator] = None
_job_tracker: Optional[JobTracker] = None


def build_orchestrator() -> GenerationOrchestrator:
    """Wire provider, store and cache from settings."""
    cache = None
    if settings.AI_CACHE_ENABLED:
        cache = TTLCache(
            ttl_seconds=settings.cache_ttl_seconds,
            max_entries=settings.AI_CACHE_MAX_ENTRIES,
        )
    else:
        logger.info("Generation cache disabled")

    return GenerationOrchestrator(
        provider=create_provider(settings),
        repository=SqlAlchemyArtifactRepository(async_session_factory),
        cache=cache,
    )


def get_orchestrator() -> GenerationOrchestrator:
    """Get shared orchestrator instance."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = build_orchestrator()
    return _orchestrator


def get_job_tracker(
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> JobTracker:
    """Get shared job tracker instance."""
    global _job_tracker
    if _job_tracker is None:
        _job_tracker = JobTracker(
            orchestrator,
            ttl_seconds=settings.job_ttl_seconds,
            max_jobs=settings.AI_JOB_MAX_ENTRIES,
        )
    return _job_tracker


def current_job_tracker() -> Optional[JobTracker]:
    return _job_tracker


def reset_dependencies() -> None:
    """Drop shared instances (for testing)."""
    global _orchestrator, _job_tracker
    _orchestrator = None
    _job_tracker = None
