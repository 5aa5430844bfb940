"""Tests for the AI generation and artifact endpoints."""

import time

from ideaforge.ai.schemas import SECTION_KEYS
from ideaforge.llm.models import LLMError, LLMException
from ideaforge.llm.output_parser import MalformedModelOutput

GENERATE = "/ai/project/generate"


def _generate(client, **overrides):
    body = {"ideaText": "소셜 북마크 공유 앱", "language": "KO", "mockPreset": "EASY"}
    body.update(overrides)
    response = client.post(GENERATE, json=body)
    assert response.status_code == 200, response.text
    return response.json()


def _poll(client, job_id, attempts=200):
    for _ in range(attempts):
        body = client.get(f"/ai/project/generate-status/{job_id}").json()
        if body["status"] != "pending":
            return body
        time.sleep(0.01)
    raise AssertionError(f"job {job_id} still pending")


class TestGenerateEndpoint:
    """Tests for POST /ai/project/generate."""

    def test_generate_korean_easy(self, client):
        data = _generate(client)

        for key in SECTION_KEYS:
            assert key in data
        assert data["ideaNormalized"]["project_meta"]["primary_language"] == "ko"
        assert len(data["questions"]["questions"]) <= 5
        assert data["meta"]["provider"] == "mock"
        assert data["meta"]["preset"] == "easy"
        assert data["meta"]["artifactId"]

    def test_lowercase_enums_accepted(self, client):
        data = _generate(client, language="en", mockPreset="hard")

        assert data["meta"]["preset"] == "hard"
        assert data["ideaNormalized"]["project_meta"]["primary_language"] == "en"

    def test_optional_fields_default(self, client):
        response = client.post(GENERATE, json={"ideaText": "idea"})

        assert response.status_code == 200
        assert response.json()["meta"]["preset"] == "medium"

    def test_missing_idea_text(self, client):
        response = client.post(GENERATE, json={"language": "KO"})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error_code"] == "VALIDATION_ERROR"
        assert any("ideaText" in e["field"] for e in detail["details"]["errors"])

    def test_unknown_language_rejected(self, client):
        response = client.post(GENERATE, json={"ideaText": "idea", "language": "FR"})
        assert response.status_code == 422

    def test_idea_text_too_long(self, client):
        response = client.post(GENERATE, json={"ideaText": "x" * 20001})
        assert response.status_code == 422

    def test_section_validation_failure(self, bundle_client, bundle_provider):
        del bundle_provider.bundle["erd"]["entities"]

        response = bundle_client.post(GENERATE, json={"ideaText": "idea"})

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error_code"] == "AI_OUTPUT_VALIDATION_FAILED"
        assert detail["details"]["section"] == "ErdDraft"
        assert detail["details"]["issues"][0]["path"] == "entities"

    def test_malformed_provider_output(self, bundle_client, bundle_provider):
        bundle_provider.error = MalformedModelOutput(raw_text="oops", error="bad", kind="json_decode")

        response = bundle_client.post(GENERATE, json={"ideaText": "idea"})

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["error_code"] == "PROVIDER_OUTPUT_MALFORMED"
        assert detail["details"] == {"kind": "json_decode", "sample": "oops"}

    def test_provider_transport_failure(self, bundle_client, bundle_provider):
        bundle_provider.error = LLMException(LLMError.api_error("Invalid API key", 401))

        response = bundle_client.post(GENERATE, json={"ideaText": "idea"})

        assert response.status_code == 502
        assert response.json()["detail"]["error_code"] == "PROVIDER_ERROR"


class TestGenerateAsyncEndpoints:
    """Tests for async generation and status polling."""

    def test_job_completes(self, client):
        response = client.post("/ai/project/generate-async", json={"ideaText": "idea", "mockPreset": "EASY"})

        assert response.status_code == 200
        created = response.json()
        assert created["status"] == "pending"

        job = _poll(client, created["jobId"])
        assert job["status"] == "done"
        assert job["result"]["meta"]["preset"] == "easy"

    def test_job_error_is_reported(self, bundle_client, bundle_provider):
        bundle_provider.bundle["screens"] = {"screens": "nope"}

        created = bundle_client.post("/ai/project/generate-async", json={"ideaText": "idea"}).json()
        job = _poll(bundle_client, created["jobId"])

        assert job["status"] == "error"
        assert job["error"]["detail"]["section"] == "ScreenListDraft"

    def test_unknown_job(self, client):
        response = client.get("/ai/project/generate-status/does-not-exist")

        assert response.status_code == 404
        detail = response.json()["detail"]
        assert detail["error_code"] == "JOB_NOT_FOUND"
        assert detail["details"] == {"jobId": "does-not-exist"}


class TestArtifactEndpoints:
    """Tests for artifact reads and approval."""

    def test_get_artifact(self, client):
        artifact_id = _generate(client)["meta"]["artifactId"]

        response = client.get(f"/ai/artifacts/{artifact_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["id"] == artifact_id
        assert body["meta"]["version"] == 1
        assert body["meta"]["type"] == "OTHER"
        assert set(body["contentJson"]) == set(SECTION_KEYS)

    def test_get_missing_artifact(self, client):
        response = client.get("/ai/artifacts/missing")

        assert response.status_code == 404
        detail = response.json()["detail"]
        assert detail["error_code"] == "ARTIFACT_NOT_FOUND"
        assert detail["details"] == {"id": "missing"}

    def test_latest_is_not_treated_as_an_id(self, client):
        _generate(client, projectId="p1")
        newest = _generate(client, projectId="p2")["meta"]["artifactId"]

        response = client.get("/ai/artifacts/latest")

        assert response.status_code == 200
        assert response.json()["meta"]["id"] == newest

    def test_latest_by_project(self, client):
        first = _generate(client, projectId="p1")["meta"]["artifactId"]
        _generate(client, projectId="p2")

        response = client.get("/ai/artifacts/latest", params={"projectId": "p1"})

        assert response.json()["meta"]["id"] == first

    def test_latest_when_none(self, client):
        response = client.get("/ai/artifacts/latest")

        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "ARTIFACT_NOT_FOUND"

    def test_list_clamps_limit(self, client):
        for i in range(3):
            _generate(client, ideaText=f"idea {i}")

        body = client.get("/ai/artifacts", params={"limit": 0}).json()
        assert body["meta"]["limit"] == 1
        assert body["meta"]["count"] == 1

        body = client.get("/ai/artifacts", params={"limit": 1000}).json()
        assert body["meta"]["limit"] == 100
        assert body["meta"]["count"] == 3

        body = client.get("/ai/artifacts").json()
        assert body["meta"]["limit"] == 20

    def test_list_by_project(self, client):
        _generate(client, projectId="p1")
        _generate(client, projectId="p2")

        body = client.get("/ai/artifacts", params={"projectId": "p1"}).json()

        assert body["meta"]["projectId"] == "p1"
        assert [item["projectId"] for item in body["items"]] == ["p1"]

    def test_approve_with_note(self, client):
        artifact_id = _generate(client)["meta"]["artifactId"]

        response = client.post(f"/ai/artifacts/{artifact_id}/approve", json={"note": "LGTM"})

        assert response.status_code == 200
        body = response.json()
        assert body["meta"]["id"] == artifact_id
        assert body["approval"]["note"] == "LGTM"
        stored = client.get(f"/ai/artifacts/{artifact_id}").json()
        assert stored["contentJson"]["approval"]["note"] == "LGTM"

    def test_approve_without_body(self, client):
        artifact_id = _generate(client)["meta"]["artifactId"]

        response = client.post(f"/ai/artifacts/{artifact_id}/approve")

        assert response.status_code == 200
        assert response.json()["approval"]["note"] is None

    def test_approve_note_too_long(self, client):
        artifact_id = _generate(client)["meta"]["artifactId"]

        response = client.post(f"/ai/artifacts/{artifact_id}/approve", json={"note": "n" * 501})

        assert response.status_code == 422

    def test_approve_missing(self, client):
        response = client.post("/ai/artifacts/missing/approve", json={})
        assert response.status_code == 404


class TestRevisionEndpoints:
    """Tests for revise and revision listing."""

    def test_revise_unsupported_on_fixture_provider(self, client):
        artifact_id = _generate(client)["meta"]["artifactId"]

        response = client.post(f"/ai/artifacts/{artifact_id}/revise", json={"instruction": "add login"})

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error_code"] == "PROVIDER_UNSUPPORTED"
        assert detail["message"] == "Revision is not supported by current AI provider"

    def test_revise_missing_artifact(self, bundle_client):
        response = bundle_client.post("/ai/artifacts/missing/revise", json={"instruction": "x"})
        assert response.status_code == 404

    def test_instruction_required(self, bundle_client):
        artifact_id = _generate(bundle_client)["meta"]["artifactId"]

        response = bundle_client.post(f"/ai/artifacts/{artifact_id}/revise", json={})

        assert response.status_code == 422

    def test_revision_chain(self, bundle_client):
        root_id = _generate(bundle_client)["meta"]["artifactId"]

        v2 = bundle_client.post(
            f"/ai/artifacts/{root_id}/revise", json={"instruction": "first change", "language": "en"}
        ).json()
        v3 = bundle_client.post(
            f"/ai/artifacts/{v2['meta']['artifactId']}/revise", json={"instruction": "second change"}
        ).json()

        assert v2["meta"]["version"] == 2
        assert v3["meta"]["version"] == 3
        assert v3["meta"]["baseArtifactId"] == root_id
        assert v2["revision"]["diff"] == [
            {
                "path": "ideaNormalized.project_meta.one_liner",
                "before": v2["revision"]["diff"][0]["before"],
                "after": "first change",
            },
        ]

        chain = bundle_client.get(f"/ai/artifacts/{v3['meta']['artifactId']}/revisions").json()
        assert chain["meta"]["baseArtifactId"] == root_id
        assert chain["meta"]["count"] == 3
        assert [item["version"] for item in chain["items"]] == [1, 2, 3]

    def test_revisions_of_missing_artifact(self, client):
        response = client.get("/ai/artifacts/missing/revisions")
        assert response.status_code == 404


class TestHealthAndMiddleware:
    """Tests for health check and correlation IDs."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert "version" in body

    def test_correlation_id_generated(self, client):
        response = client.get("/health")

        assert len(response.headers["X-Correlation-ID"]) == 36

    def test_correlation_id_echoed(self, client):
        cid = "12345678-1234-5678-1234-567812345678"

        response = client.get("/health", headers={"X-Correlation-ID": cid})

        assert response.headers["X-Correlation-ID"] == cid

    def test_invalid_correlation_id_replaced(self, client):
        response = client.get("/health", headers={"X-Correlation-ID": "not-a-uuid"})

        assert response.headers["X-Correlation-ID"] != "not-a-uuid"

    def test_correlation_id_on_errors(self, client):
        response = client.get("/ai/artifacts/missing")

        assert response.status_code == 404
        assert "X-Correlation-ID" in response.headers
