"""Tests for paginated job listing sources."""

from datetime import UTC, datetime, timedelta

import pytest

from jobseeker.db import FilteredJob, Job
from jobseeker.repositories.job_sources import (
    FilteredJobSource,
    JobQuery,
    NormalizedJobSource,
    clamp_paging,
    job_source_class,
)

BASE_TIME = datetime(2026, 3, 1, tzinfo=UTC)


def _filtered(n: int, **overrides) -> FilteredJob:
    values = {
        "id": f"fj-{n}",
        "date": "2026-03-01",
        "platform": "linkedin",
        "job_posting_id": f"post-{n}",
        "company_name_normalized": "Acme",
        "city": "Sydney",
        "state": "NSW",
        "job_title": f"Engineer {n}",
        "job_description": "Build things",
        "analysis_passed": True,
        "match_score": 50.0,
        "updated_at": BASE_TIME + timedelta(minutes=n),
    }
    values.update(overrides)
    return FilteredJob(**values)


def _job(n: int, **overrides) -> Job:
    values = {
        "id": f"job-{n}",
        "dedup_key": f"acme|engineer {n}",
        "company_name_normalized": "Acme",
        "employment_type": "Full-time",
        "work_arrangement": "Remote",
        "job_title": f"Engineer {n}",
        "city": "Melbourne",
        "state": "VIC",
        "created_at": BASE_TIME + timedelta(minutes=n),
    }
    values.update(overrides)
    return Job(**values)


@pytest.fixture
def filtered_source(session):
    session.add_all(
        [
            _filtered(1, job_title="Python Developer", platform="seek", match_score=90.0, date="2026-03-02"),
            _filtered(2, job_title="Go Developer", city="Melbourne", state="VIC", match_score=70.0),
            _filtered(3, job_title="Python Engineer", city="Melbourne", state="VIC", match_score=40.0),
            _filtered(4, job_title="Python Lead", analysis_passed=False, match_score=99.0),
            _filtered(5, job_title="Data Analyst", job_description="Reports at 100% accuracy", platform="indeed"),
        ]
    )
    session.commit()
    return FilteredJobSource(session)


@pytest.mark.parametrize(
    "page, limit, expected",
    [(None, None, (1, 10)), (0, 0, (1, 10)), (-3, 500, (1, 100)), (2, 25, (2, 25)), (1, -1, (1, 1))],
)
def test_clamp_paging(page, limit, expected):
    assert clamp_paging(page, limit) == expected


class TestFilteredJobSource:
    def test_only_passed_jobs_newest_first(self, filtered_source):
        page = filtered_source.list_jobs(JobQuery())

        assert page["total"] == 4
        assert [j["id"] for j in page["data"]] == ["fj-5", "fj-3", "fj-2", "fj-1"]
        assert page["totalPages"] == 1

    def test_keyword_and_location_combine(self, filtered_source):
        page = filtered_source.list_jobs(JobQuery(q="python", location="melbourne"))
        assert [j["id"] for j in page["data"]] == ["fj-3"]

    def test_keyword_wildcards_are_literal(self, filtered_source):
        assert filtered_source.list_jobs(JobQuery(q="100%"))["total"] == 1
        assert filtered_source.list_jobs(JobQuery(q="%"))["total"] == 1
        assert filtered_source.list_jobs(JobQuery(q="_"))["total"] == 0

    def test_platform_score_and_date(self, filtered_source):
        assert filtered_source.list_jobs(JobQuery(platform="seek"))["total"] == 1
        assert filtered_source.list_jobs(JobQuery(min_score=70))["total"] == 2
        assert filtered_source.list_jobs(JobQuery(date="2026-03-02"))["total"] == 1

    def test_pagination(self, filtered_source):
        page = filtered_source.list_jobs(JobQuery(page=2, limit=3))

        assert page["page"] == 2
        assert page["limit"] == 3
        assert page["total"] == 4
        assert page["totalPages"] == 2
        assert [j["id"] for j in page["data"]] == ["fj-1"]

    def test_sort_by_score(self, filtered_source):
        page = filtered_source.list_jobs(JobQuery(sort_by="analysis.match_score", sort_order="asc"))
        scores = [j["analysis"]["match_score"] for j in page["data"]]
        assert scores == sorted(scores)

    def test_unknown_sort_field_falls_back_to_default(self, filtered_source):
        page = filtered_source.list_jobs(JobQuery(sort_by="job_description; DROP TABLE filtered_jobs"))
        assert [j["id"] for j in page["data"]] == ["fj-5", "fj-3", "fj-2", "fj-1"]

    def test_analysis_is_nested(self, filtered_source):
        job = filtered_source.get_job("fj-1")

        assert job["analysis"]["passed"] is True
        assert job["analysis"]["match_score"] == 90.0
        assert "match_score" not in job

    def test_get_missing_job(self, filtered_source):
        assert filtered_source.get_job("nope") is None

    def test_stats(self, filtered_source):
        stats = filtered_source.stats()

        assert stats["total"] == 4
        assert stats["avgScore"] == pytest.approx((90 + 70 + 40 + 50) / 4)
        assert stats["byPlatform"][0] == {"platform": "linkedin", "count": 2}
        assert stats["byDate"] == [{"date": "2026-03-02", "count": 1}, {"date": "2026-03-01", "count": 3}]

    def test_available_dates(self, filtered_source):
        assert filtered_source.available_dates() == ["2026-03-02", "2026-03-01"]


class TestNormalizedJobSource:
    @pytest.fixture
    def source(self, session):
        session.add_all(
            [
                _job(1),
                _job(2, employment_type="Contract", work_arrangement="Hybrid", job_title="Go Engineer"),
                _job(3, city="Sydney", state="NSW"),
            ]
        )
        session.commit()
        return NormalizedJobSource(session)

    def test_filters(self, source):
        assert source.list_jobs(JobQuery(employment_type="Contract"))["total"] == 1
        assert source.list_jobs(JobQuery(work_arrangement="Remote"))["total"] == 2
        assert source.list_jobs(JobQuery(location="nsw"))["total"] == 1
        assert source.list_jobs(JobQuery(q="go eng"))["total"] == 1

    def test_filtered_only_fields_are_ignored(self, source):
        assert source.list_jobs(JobQuery(platform="seek", min_score=99))["total"] == 3

    def test_default_sort_is_created_at(self, source):
        assert [j["id"] for j in source.list_jobs(JobQuery())["data"]] == ["job-3", "job-2", "job-1"]

    def test_empty_page(self, source):
        page = source.list_jobs(JobQuery(page=5))
        assert page["data"] == []
        assert page["total"] == 3


def test_job_source_class():
    assert job_source_class("filtered") is FilteredJobSource
    assert job_source_class("normalized") is NormalizedJobSource
    with pytest.raises(ValueError):
        job_source_class("mongo")
