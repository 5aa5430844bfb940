"""
Fixtures for API tests.

The app is built without database initialization and the orchestrator
and job tracker dependencies are overridden with in-memory instances.
"""

import copy

import pytest
from fastapi.testclient import TestClient

from ideaforge.ai.jobs import JobTracker
from ideaforge.ai.service import GenerationOrchestrator
from ideaforge.api.dependencies import get_job_tracker, get_orchestrator
from ideaforge.api.main import create_app


class QueuedBundleProvider:
    """Bundle and revision capable provider serving one fixed bundle."""

    name = "queued"

    def __init__(self, bundle):
        self.bundle = bundle
        self.error = None

    async def generate_bundle(self, idea_text, language):
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.bundle)

    async def revise_bundle(self, instruction, base_json, language):
        if self.error is not None:
            raise self.error
        revised = copy.deepcopy(self.bundle)
        revised["ideaNormalized"]["project_meta"]["one_liner"] = instruction
        return revised


def build_client(orchestrator) -> TestClient:
    app = create_app(init_db=False)
    tracker = JobTracker(orchestrator, ttl_seconds=60)
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_job_tracker] = lambda: tracker
    return TestClient(app)


@pytest.fixture
def orchestrator(fixture_provider, memory_repository):
    return GenerationOrchestrator(fixture_provider, memory_repository)


@pytest.fixture
def client(orchestrator):
    with build_client(orchestrator) as test_client:
        yield test_client


@pytest.fixture
def bundle_provider(raw_bundle):
    return QueuedBundleProvider(raw_bundle("easy"))


@pytest.fixture
def bundle_client(bundle_provider, memory_repository):
    orchestrator = GenerationOrchestrator(bundle_provider, memory_repository)
    with build_client(orchestrator) as test_client:
        yield test_client
