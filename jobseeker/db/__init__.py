"""Database package."""

from jobseeker.db.base import Base, Database, get_db
from jobseeker.db.tables import (
    DocumentChunk,
    FilteredJob,
    Job,
    ResumeAnalysis,
    StoredDocument,
    User,
)

__all__ = [
    "Base",
    "Database",
    "get_db",
    "User",
    "StoredDocument",
    "DocumentChunk",
    "ResumeAnalysis",
    "Job",
    "FilteredJob",
]
