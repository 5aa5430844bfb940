"""
Background generation jobs.

Simple in-memory tracker for async generation requests. Jobs survive
between polls but not a server restart, and are reaped once older than
the job TTL regardless of status. The map is also bounded: when full, the
oldest-created job is dropped to make room.
"""

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Set

from ideaforge.ai.exceptions import JobNotFound
from ideaforge.ai.schemas.base import SectionValidationFailed
from ideaforge.llm.output_parser import ProviderOutputMalformed

logger = logging.getLogger(__name__)


class JobStatus(str, Enum):
    """Job execution status."""
    PENDING = "pending"
    DONE = "done"
    ERROR = "error"


@dataclass
class JobInfo:
    """A tracked generation job."""
    job_id: str
    status: JobStatus
    created_at: float
    updated_at: float
    result: Any = None
    error: Optional[Dict[str, Any]] = None


def serialize_error(error: BaseException) -> Dict[str, Any]:
    """Turn a job failure into ``{message, detail?}``."""
    if isinstance(error, SectionValidationFailed):
        return {
            "message": str(error),
            "detail": {"section": error.label, "issues": error.issues},
        }
    if isinstance(error, ProviderOutputMalformed):
        return {
            "message": str(error),
            "detail": {"kind": error.kind, "sample": error.sample},
        }
    return {"message": str(error) or type(error).__name__}


class JobTracker:
    """
    Registers generation jobs and runs them on the event loop.

    Args:
        orchestrator: Object exposing ``async generate(idea_text, language, preset)``
        ttl_seconds: Age (from creation) after which a job is reaped
        max_jobs: Most jobs kept at once; the oldest is evicted beyond that
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        orchestrator: Any,
        ttl_seconds: float,
        max_jobs: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._orchestrator = orchestrator
        self._ttl = ttl_seconds
        self._max_jobs = max(int(max_jobs), 1)
        self._clock = clock
        self._jobs: Dict[str, JobInfo] = {}
        # Strong references so running tasks are not garbage collected
        self._tasks: Set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._jobs)

    def _sweep(self) -> int:
        now = self._clock()
        expired = [
            job_id for job_id, job in self._jobs.items()
            if now - job.created_at > self._ttl
        ]
        for job_id in expired:
            del self._jobs[job_id]
        if expired:
            logger.debug(f"Reaped {len(expired)} expired jobs")
        return len(expired)

    def _evict_oldest(self) -> None:
        # Insertion order is creation order
        while len(self._jobs) >= self._max_jobs:
            job_id = next(iter(self._jobs))
            del self._jobs[job_id]
            logger.debug(f"Evicted job {job_id} (tracker full)")

    def create_job(
        self,
        idea_text: str,
        language: Any = None,
        preset: Any = None,
        project_id: Optional[str] = None,
    ) -> Dict[str, str]:
        """Register a pending job and schedule the generation in the background."""
        self._sweep()
        self._evict_oldest()

        now = self._clock()
        job_id = str(uuid.uuid4())
        self._jobs[job_id] = JobInfo(
            job_id=job_id,
            status=JobStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

        task = asyncio.create_task(
            self._run(job_id, idea_text, language, preset, project_id)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

        logger.info(f"Job {job_id} created")
        return {"jobId": job_id, "status": JobStatus.PENDING.value}

    async def _run(
        self,
        job_id: str,
        idea_text: str,
        language: Any,
        preset: Any,
        project_id: Optional[str],
    ) -> None:
        try:
            result = await self._orchestrator.generate(
                idea_text, language=language, preset=preset, project_id=project_id
            )
        except Exception as e:
            logger.error(f"Job {job_id} failed: {e}", exc_info=True)
            self._finish(job_id, JobStatus.ERROR, error=serialize_error(e))
            return
        self._finish(job_id, JobStatus.DONE, result=result)

    def _finish(
        self,
        job_id: str,
        status: JobStatus,
        result: Any = None,
        error: Optional[Dict[str, Any]] = None,
    ) -> None:
        job = self._jobs.get(job_id)
        if job is None:
            # Reaped while running; nothing to report to
            logger.debug(f"Job {job_id} finished after being reaped")
            return
        job.status = status
        job.result = result
        job.error = error
        job.updated_at = self._clock()
        logger.info(f"Job {job_id}: {status.value}")

    def get_job(self, job_id: str) -> Dict[str, Any]:
        """
        Current state of a job.

        Raises:
            JobNotFound: unknown or reaped job id
        """
        self._sweep()
        job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFound(job_id)

        if job.status is JobStatus.PENDING:
            return {"jobId": job_id, "status": job.status.value}
        if job.status is JobStatus.ERROR:
            return {"jobId": job_id, "status": job.status.value, "error": job.error}
        return {"jobId": job_id, "status": job.status.value, "result": job.result}

    async def wait_idle(self) -> None:
        """Wait for every scheduled job to finish (shutdown and tests)."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
