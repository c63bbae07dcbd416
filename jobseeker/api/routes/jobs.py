"""Job listing endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from jobseeker.api.deps import get_job_source
from jobseeker.api.schemas import JobPageResponse
from jobseeker.repositories.job_sources import FilteredJobSource, JobListingSource, JobQuery

router = APIRouter()


def _stats_source(source: JobListingSource) -> FilteredJobSource:
    if not isinstance(source, FilteredJobSource):
        raise HTTPException(status_code=404, detail="Statistics are not available for this job source")
    return source


@router.get("", response_model=JobPageResponse)
def list_jobs(
    page: int | None = None,
    limit: int | None = None,
    q: str | None = Query(default=None, description="Keyword search in title, description, company"),
    location: str | None = Query(default=None, description="City or state"),
    employment_type: str | None = Query(default=None, alias="employmentType"),
    work_arrangement: str | None = Query(default=None, alias="workArrangement"),
    platform: str | None = Query(default=None, description="linkedin/indeed/seek"),
    min_score: float | None = Query(default=None, alias="minScore"),
    date: str | None = Query(default=None, description="YYYY-MM-DD"),
    sort_by: str | None = Query(default=None, alias="sortBy"),
    sort_order: Literal["asc", "desc"] | None = Query(default=None, alias="sortOrder"),
    source: JobListingSource = Depends(get_job_source),
):
    """List jobs with pagination, search and filters."""
    query = JobQuery(
        page=page,
        limit=limit,
        q=q,
        location=location,
        employment_type=employment_type,
        work_arrangement=work_arrangement,
        platform=platform,
        min_score=min_score,
        date=date,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return source.list_jobs(query)


@router.get("/stats/summary")
def get_stats(source: JobListingSource = Depends(get_job_source)):
    """Totals, platform breakdown, average score and per-date counts."""
    return _stats_source(source).stats()


@router.get("/stats/platforms")
def get_platform_stats(source: JobListingSource = Depends(get_job_source)):
    """Job counts grouped by platform."""
    return _stats_source(source).platform_counts()


@router.get("/stats/dates")
def get_date_stats(source: JobListingSource = Depends(get_job_source)):
    """Dates that have job data, newest first."""
    return _stats_source(source).available_dates()


@router.get("/{job_id}")
def get_job(job_id: str, source: JobListingSource = Depends(get_job_source)):
    """Get a single job by ID."""
    job = source.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return job
