"""AI generation and artifact endpoints."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ideaforge.ai.jobs import JobTracker
from ideaforge.ai.service import GenerationOrchestrator
from ideaforge.api.dependencies import get_job_tracker, get_orchestrator
from ideaforge.api.schemas import (
    ApproveArtifactRequest,
    GenerateProjectRequest,
    ReviseArtifactRequest,
)

router = APIRouter(prefix="/ai", tags=["ai"])


def _value(member) -> Optional[str]:
    return member.value if member is not None else None


@router.post("/project/generate")
async def generate_project(
    request: GenerateProjectRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Generate, validate and store a project bundle synchronously."""
    return await orchestrator.generate(
        request.idea_text,
        language=_value(request.language),
        preset=_value(request.mock_preset),
        project_id=request.project_id,
    )


@router.post("/project/generate-async")
async def generate_project_async(
    request: GenerateProjectRequest,
    tracker: JobTracker = Depends(get_job_tracker),
) -> Dict[str, Any]:
    """Start generation in the background and return a job id to poll."""
    return tracker.create_job(
        request.idea_text,
        language=_value(request.language),
        preset=_value(request.mock_preset),
        project_id=request.project_id,
    )


@router.get("/project/generate-status/{job_id}")
async def get_generate_status(
    job_id: str,
    tracker: JobTracker = Depends(get_job_tracker),
) -> Dict[str, Any]:
    return tracker.get_job(job_id)


# Must stay above /artifacts/{artifact_id}
@router.get("/artifacts/latest")
async def get_latest_artifact(
    project_id: Optional[str] = Query(None, alias="projectId"),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    return await orchestrator.get_latest_artifact(project_id=project_id)


@router.get("/artifacts")
async def list_artifacts(
    limit: Optional[int] = Query(None),
    project_id: Optional[str] = Query(None, alias="projectId"),
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """List artifacts newest first; limit is clamped to 1..100 (default 20)."""
    return await orchestrator.list_artifacts(limit=limit, project_id=project_id)


@router.get("/artifacts/{artifact_id}")
async def get_artifact(
    artifact_id: str,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    return await orchestrator.get_artifact(artifact_id)


@router.get("/artifacts/{artifact_id}/revisions")
async def list_artifact_revisions(
    artifact_id: str,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    return await orchestrator.list_artifact_revisions(artifact_id)


@router.post("/artifacts/{artifact_id}/revise")
async def revise_artifact(
    artifact_id: str,
    request: ReviseArtifactRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Revise an artifact into the next version of its chain."""
    return await orchestrator.revise_artifact(
        artifact_id,
        request.instruction,
        language=_value(request.language),
    )


@router.post("/artifacts/{artifact_id}/approve")
async def approve_artifact(
    artifact_id: str,
    request: Optional[ApproveArtifactRequest] = None,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    note = request.note if request is not None else None
    return await orchestrator.approve_artifact(artifact_id, note=note)
