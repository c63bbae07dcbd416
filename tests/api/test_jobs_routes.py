"""API tests for /api/jobs and /api/pipeline."""

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from jobseeker.api.app import create_app
from jobseeker.db import FilteredJob, Job


@pytest.fixture
def filtered_jobs(session):
    session.add_all(
        [
            FilteredJob(
                id=f"fj-{n}",
                date="2026-03-01",
                platform=platform,
                job_posting_id=f"p-{n}",
                company_name_normalized="Acme",
                job_title=title,
                city="Sydney",
                analysis_passed=True,
                match_score=score,
                updated_at=datetime(2026, 3, 1, n, tzinfo=UTC),
            )
            for n, (title, platform, score) in enumerate(
                [("Python Developer", "seek", 80.0), ("Go Developer", "linkedin", 60.0)], start=1
            )
        ]
    )
    session.commit()


class TestJobs:
    def test_list(self, client, filtered_jobs):
        response = client.get("/api/jobs", params={"q": "python", "limit": 5})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["limit"] == 5
        assert body["totalPages"] == 1
        assert body["data"][0]["job_title"] == "Python Developer"
        assert body["data"][0]["analysis"]["match_score"] == 80.0

    def test_camel_case_query_params(self, client, filtered_jobs):
        body = client.get("/api/jobs", params={"minScore": 70, "sortBy": "match_score", "sortOrder": "asc"}).json()
        assert [j["id"] for j in body["data"]] == ["fj-1"]

    def test_invalid_sort_order(self, client):
        assert client.get("/api/jobs", params={"sortOrder": "sideways"}).status_code == 422

    def test_get_job(self, client, filtered_jobs):
        assert client.get("/api/jobs/fj-2").json()["platform"] == "linkedin"

    def test_missing_job(self, client):
        response = client.get("/api/jobs/nope")
        assert response.status_code == 404
        assert response.json() == {"detail": "Job not found"}

    def test_stats(self, client, filtered_jobs):
        stats = client.get("/api/jobs/stats/summary").json()
        assert stats["total"] == 2
        assert stats["avgScore"] == 70.0

        assert client.get("/api/jobs/stats/platforms").json() == [
            {"platform": "linkedin", "count": 1},
            {"platform": "seek", "count": 1},
        ]
        assert client.get("/api/jobs/stats/dates").json() == ["2026-03-01"]


def test_normalized_source(settings, database, analyzer, pipeline_runner, session):
    session.add(
        Job(
            id="job-1",
            dedup_key="acme|engineer",
            company_name_normalized="Acme",
            employment_type="Full-time",
            work_arrangement="Remote",
            job_title="Engineer",
        )
    )
    session.commit()
    normalized = settings.model_copy(update={"job_source": "normalized"})
    client = TestClient(create_app(normalized, database=database, analyzer=analyzer, pipeline_runner=pipeline_runner))

    body = client.get("/api/jobs", params={"employmentType": "Full-time"}).json()
    assert [j["id"] for j in body["data"]] == ["job-1"]
    assert client.get("/api/jobs/stats/summary").status_code == 404


class TestPipeline:
    def test_status(self, client, pipeline_runner):
        assert client.get("/api/pipeline/status").json() == {"isRunning": False}

    def test_trigger(self, client, pipeline_runner):
        response = client.post("/api/pipeline/trigger")

        assert response.status_code == 200
        assert response.json() == {"message": "Pipeline trigger started", "startTime": "2026-01-01T00:00:00+00:00"}
        pipeline_runner.run.assert_called_once()

    def test_trigger_while_running(self, client, pipeline_runner):
        pipeline_runner.try_start.return_value = None

        response = client.post("/api/pipeline/trigger")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "PIPELINE_RUNNING"
        pipeline_runner.run.assert_not_called()
