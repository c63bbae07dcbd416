"""
Data access for JobSeeker.

- document_store: chunked binary storage for uploaded resumes
- analysis_repository: one analysis record per (owner, document)
- job_sources: paginated job listings over two tables
- user_repository: user accounts and their latest resume
"""

from jobseeker.repositories.analysis_repository import AnalysisRepository
from jobseeker.repositories.document_store import ALLOWED_MIME_TYPES, MAX_FILE_SIZE, DocumentStore
from jobseeker.repositories.job_sources import (
    FilteredJobSource,
    JobListingSource,
    JobQuery,
    NormalizedJobSource,
)
from jobseeker.repositories.user_repository import UserRepository

__all__ = [
    "ALLOWED_MIME_TYPES",
    "MAX_FILE_SIZE",
    "DocumentStore",
    "AnalysisRepository",
    "JobListingSource",
    "JobQuery",
    "NormalizedJobSource",
    "FilteredJobSource",
    "UserRepository",
]
