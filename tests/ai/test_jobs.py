"""Tests for background generation jobs."""

import asyncio

import pytest

from ideaforge.ai.exceptions import JobNotFound
from ideaforge.ai.jobs import JobStatus, JobTracker, serialize_error
from ideaforge.ai.schemas.base import SectionValidationFailed
from ideaforge.llm.output_parser import MalformedModelOutput


class FakeOrchestrator:
    """Records generate calls; optionally blocks or fails."""

    def __init__(self, result=None, error=None):
        self.result = result if result is not None else {"meta": {"artifactId": "a1"}}
        self.error = error
        self.calls = []
        self.release = asyncio.Event()
        self.release.set()

    async def generate(self, idea_text, language=None, preset=None, project_id=None):
        self.calls.append((idea_text, language, preset, project_id))
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.result


class TestSerializeError:
    """Tests for job error payloads."""

    def test_section_validation(self):
        error = SectionValidationFailed("ErdDraft", [{"path": "entities", "message": "m", "type": "t"}])

        payload = serialize_error(error)

        assert payload["message"] == "AI output validation failed: ErdDraft"
        assert payload["detail"]["section"] == "ErdDraft"
        assert payload["detail"]["issues"][0]["path"] == "entities"

    def test_malformed_output(self):
        error = MalformedModelOutput(raw_text="x" * 500, error="bad", kind="json_decode")

        payload = serialize_error(error)

        assert payload["detail"]["kind"] == "json_decode"
        assert len(payload["detail"]["sample"]) == 200

    def test_plain_exception(self):
        assert serialize_error(RuntimeError("boom")) == {"message": "boom"}

    def test_exception_without_message(self):
        assert serialize_error(RuntimeError()) == {"message": "RuntimeError"}


class TestJobTracker:
    """Tests for JobTracker."""

    @pytest.mark.asyncio
    async def test_create_returns_pending(self, monotonic_clock):
        """A new job is pending until its task runs."""
        orchestrator = FakeOrchestrator()
        orchestrator.release.clear()
        tracker = JobTracker(orchestrator, ttl_seconds=60, clock=monotonic_clock)

        created = tracker.create_job("idea", language="ko", preset="easy", project_id="p1")

        assert created["status"] == "pending"
        assert tracker.get_job(created["jobId"]) == {
            "jobId": created["jobId"],
            "status": "pending",
        }

        orchestrator.release.set()
        await tracker.wait_idle()

    @pytest.mark.asyncio
    async def test_job_completes_with_result(self, monotonic_clock):
        orchestrator = FakeOrchestrator(result={"meta": {"artifactId": "art-1"}})
        tracker = JobTracker(orchestrator, ttl_seconds=60, clock=monotonic_clock)

        job_id = tracker.create_job("idea", language="en", preset="hard")["jobId"]
        await tracker.wait_idle()

        job = tracker.get_job(job_id)
        assert job["status"] == JobStatus.DONE.value
        assert job["result"] == {"meta": {"artifactId": "art-1"}}
        assert orchestrator.calls == [("idea", "en", "hard", None)]

    @pytest.mark.asyncio
    async def test_job_failure_is_captured(self, monotonic_clock):
        """A failing generation leaves the job in error with a serialized cause."""
        orchestrator = FakeOrchestrator(error=SectionValidationFailed("ScreenListDraft", []))
        tracker = JobTracker(orchestrator, ttl_seconds=60, clock=monotonic_clock)

        job_id = tracker.create_job("idea")["jobId"]
        await tracker.wait_idle()

        job = tracker.get_job(job_id)
        assert job["status"] == "error"
        assert job["error"]["detail"]["section"] == "ScreenListDraft"
        assert "result" not in job

    @pytest.mark.asyncio
    async def test_unknown_job(self, monotonic_clock):
        tracker = JobTracker(FakeOrchestrator(), ttl_seconds=60, clock=monotonic_clock)

        with pytest.raises(JobNotFound) as exc_info:
            tracker.get_job("missing")

        assert exc_info.value.job_id == "missing"

    @pytest.mark.asyncio
    async def test_jobs_are_reaped_after_ttl(self, monotonic_clock):
        """Finished jobs disappear once older than the TTL."""
        tracker = JobTracker(FakeOrchestrator(), ttl_seconds=60, clock=monotonic_clock)
        job_id = tracker.create_job("idea")["jobId"]
        await tracker.wait_idle()

        monotonic_clock.advance(59)
        assert tracker.get_job(job_id)["status"] == "done"

        monotonic_clock.advance(2)
        with pytest.raises(JobNotFound):
            tracker.get_job(job_id)
        assert len(tracker) == 0

    @pytest.mark.asyncio
    async def test_job_reaped_while_running_is_not_resurrected(self, monotonic_clock):
        orchestrator = FakeOrchestrator()
        orchestrator.release.clear()
        tracker = JobTracker(orchestrator, ttl_seconds=60, clock=monotonic_clock)
        job_id = tracker.create_job("idea")["jobId"]

        monotonic_clock.advance(120)
        with pytest.raises(JobNotFound):
            tracker.get_job(job_id)

        orchestrator.release.set()
        await tracker.wait_idle()

        assert len(tracker) == 0

    @pytest.mark.asyncio
    async def test_create_sweeps_expired_jobs(self, monotonic_clock):
        tracker = JobTracker(FakeOrchestrator(), ttl_seconds=10, clock=monotonic_clock)
        tracker.create_job("first")
        await tracker.wait_idle()

        monotonic_clock.advance(11)
        tracker.create_job("second")
        await tracker.wait_idle()

        assert len(tracker) == 1

    @pytest.mark.asyncio
    async def test_oldest_job_evicted_when_full(self, monotonic_clock):
        """A full tracker drops its oldest job, even a pending one."""
        orchestrator = FakeOrchestrator()
        orchestrator.release.clear()
        tracker = JobTracker(orchestrator, ttl_seconds=60, max_jobs=2, clock=monotonic_clock)

        first = tracker.create_job("one")
        second = tracker.create_job("two")
        third = tracker.create_job("three")

        assert len(tracker) == 2
        with pytest.raises(JobNotFound):
            tracker.get_job(first["jobId"])
        assert tracker.get_job(second["jobId"])["status"] == "pending"
        assert tracker.get_job(third["jobId"])["status"] == "pending"

        orchestrator.release.set()
        await tracker.wait_idle()

        assert len(tracker) == 2
        assert tracker.get_job(third["jobId"])["status"] == "done"

    def test_max_jobs_is_at_least_one(self):
        tracker = JobTracker(FakeOrchestrator(), ttl_seconds=60, max_jobs=0)
        assert tracker._max_jobs == 1
