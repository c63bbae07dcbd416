"""
Job listing sources.

Two tables carry job listings with overlapping query shapes: ETL-normalized
jobs and pipeline-filtered jobs. Both are served through JobListingSource,
which owns pagination, keyword search, equality filters and sorting; the
subclasses only declare their table, columns and extra filters.
"""

import math
from abc import ABC
from typing import Any, Literal

from pydantic import BaseModel, Field
from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.orm import Session

from jobseeker.db.tables import FilteredJob, Job

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class JobQuery(BaseModel):
    """Listing query shared by both sources. Unused fields are ignored."""

    page: int | None = None
    limit: int | None = None
    q: str | None = Field(default=None, description="Keyword search in title, description, company")
    location: str | None = None
    employment_type: str | None = None
    work_arrangement: str | None = None
    platform: str | None = None
    min_score: float | None = None
    date: str | None = Field(default=None, description="YYYY-MM-DD")
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] | None = None


def clamp_paging(page: int | None, limit: int | None) -> tuple[int, int]:
    page = max(1, page or 1)
    limit = min(MAX_LIMIT, max(1, limit or DEFAULT_LIMIT))
    return page, limit


class JobListingSource(ABC):
    """Read-only, paginated access to one job listings table."""

    model: type
    default_sort: str
    search_columns: tuple[str, ...] = ("job_title", "job_description", "company_name_normalized")
    location_columns: tuple[str, ...] = ("city", "state")
    sort_columns: dict[str, str] = {}
    supports_stats = False

    def __init__(self, session: Session):
        self.session = session

    def _column(self, name: str):
        return getattr(self.model, name)

    def base_filters(self, query: JobQuery) -> list:
        """Filters every query of this source gets."""
        return []

    def build_filters(self, query: JobQuery) -> list:
        filters = self.base_filters(query)

        if query.q:
            filters.append(or_(*(self._column(c).icontains(query.q, autoescape=True) for c in self.search_columns)))
        if query.location:
            filters.append(
                or_(*(self._column(c).icontains(query.location, autoescape=True) for c in self.location_columns))
            )
        if query.employment_type:
            filters.append(self.model.employment_type == query.employment_type)
        if query.work_arrangement:
            filters.append(self.model.work_arrangement == query.work_arrangement)

        return filters

    def _order_by(self, query: JobQuery):
        column_name = self.sort_columns.get(query.sort_by or "", self.sort_columns[self.default_sort])
        column = self._column(column_name)
        return column.asc() if query.sort_order == "asc" else column.desc()

    def _select(self, filters: list) -> Select:
        statement = select(self.model)
        if filters:
            statement = statement.where(and_(*filters))
        return statement

    def list_jobs(self, query: JobQuery) -> dict[str, Any]:
        """Page of jobs: {data, total, page, limit, totalPages}."""
        page, limit = clamp_paging(query.page, query.limit)
        filters = self.build_filters(query)

        statement = (
            self._select(filters)
            .order_by(self._order_by(query), self.model.id)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        rows = self.session.scalars(statement).all()

        count_statement = select(func.count()).select_from(self.model)
        if filters:
            count_statement = count_statement.where(and_(*filters))
        total = self.session.scalar(count_statement) or 0

        return {
            "data": [self.to_dict(r) for r in rows],
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": math.ceil(total / limit),
        }

    def get_job(self, job_id: str) -> dict[str, Any] | None:
        row = self.session.get(self.model, job_id)
        return self.to_dict(row) if row is not None else None

    def to_dict(self, row) -> dict[str, Any]:
        return {c.key: getattr(row, c.key) for c in self.model.__table__.columns}


class NormalizedJobSource(JobListingSource):
    """Jobs normalized and deduplicated by the ETL step."""

    model = Job
    default_sort = "created_at"
    sort_columns = {
        "created_at": "created_at",
        "updated_at": "updated_at",
        "job_title": "job_title",
        "company_name_normalized": "company_name_normalized",
    }


class FilteredJobSource(JobListingSource):
    """Jobs that passed the pipeline's screening, with match analysis."""

    model = FilteredJob
    default_sort = "updated_at"
    location_columns = ("city", "state", "job_location")
    sort_columns = {
        "updated_at": "updated_at",
        "created_at": "created_at",
        "date": "date",
        "job_title": "job_title",
        "match_score": "match_score",
        "analysis.match_score": "match_score",
    }
    supports_stats = True

    def base_filters(self, query: JobQuery) -> list:
        filters = [FilteredJob.analysis_passed.is_(True)]
        if query.date:
            filters.append(FilteredJob.date == query.date)
        if query.platform:
            filters.append(FilteredJob.platform == query.platform)
        if query.min_score is not None:
            filters.append(FilteredJob.match_score >= query.min_score)
        return filters

    def to_dict(self, row: FilteredJob) -> dict[str, Any]:
        data = super().to_dict(row)
        data["analysis"] = {
            "passed": data.pop("analysis_passed"),
            "match_score": data.pop("match_score"),
            "match_reason": data.pop("match_reason"),
            "matching_skills": data.pop("matching_skills"),
            "missing_skills": data.pop("missing_skills"),
            "exclusion_stage": data.pop("exclusion_stage"),
            "exclusion_reason": data.pop("exclusion_reason"),
        }
        return data

    def platform_counts(self) -> list[dict[str, Any]]:
        count = func.count().label("count")
        statement = (
            select(FilteredJob.platform, count)
            .where(FilteredJob.analysis_passed.is_(True))
            .group_by(FilteredJob.platform)
            .order_by(count.desc(), FilteredJob.platform)
        )
        return [{"platform": platform, "count": n} for platform, n in self.session.execute(statement)]

    def available_dates(self) -> list[str]:
        statement = select(FilteredJob.date).group_by(FilteredJob.date).order_by(FilteredJob.date.desc())
        return list(self.session.scalars(statement))

    def stats(self) -> dict[str, Any]:
        passed = FilteredJob.analysis_passed.is_(True)
        total = self.session.scalar(select(func.count()).select_from(FilteredJob).where(passed)) or 0
        avg_score = self.session.scalar(select(func.avg(FilteredJob.match_score)).where(passed))

        count = func.count().label("count")
        by_date = self.session.execute(
            select(FilteredJob.date, count).where(passed).group_by(FilteredJob.date).order_by(FilteredJob.date.desc())
        )

        return {
            "total": total,
            "byPlatform": self.platform_counts(),
            "avgScore": float(avg_score or 0),
            "byDate": [{"date": d, "count": n} for d, n in by_date],
        }


JOB_SOURCES: dict[str, type[JobListingSource]] = {
    "filtered": FilteredJobSource,
    "normalized": NormalizedJobSource,
}


def job_source_class(name: str) -> type[JobListingSource]:
    try:
        return JOB_SOURCES[name]
    except KeyError:
        raise ValueError(f"Unknown job source '{name}'. Expected one of: {', '.join(JOB_SOURCES)}") from None
