"""Database table models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    LargeBinary,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from jobseeker.db.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class User(Base):
    """User account."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    email_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    verification_code: Mapped[str | None] = mapped_column(String(6), default=None)
    verification_code_expires: Mapped[datetime | None] = mapped_column(DateTime, default=None)

    # Latest uploaded resume
    resume_id: Mapped[str | None] = mapped_column(String(36), default=None)
    resume_file_name: Mapped[str | None] = mapped_column(String(255), default=None)
    resume_upload_date: Mapped[datetime | None] = mapped_column(DateTime, default=None)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)


class StoredDocument(Base):
    """Metadata for an uploaded document. Payload lives in document_chunks."""

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    filename: Mapped[str] = mapped_column(String(255))
    mime_type: Mapped[str] = mapped_column(String(127))
    size: Mapped[int] = mapped_column(Integer)
    owner_id: Mapped[str] = mapped_column(String(36), index=True)
    chunk_size: Mapped[int] = mapped_column(Integer)
    uploaded_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class DocumentChunk(Base):
    """One fixed-size slice of a document payload."""

    __tablename__ = "document_chunks"

    document_id: Mapped[str] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True
    )
    n: Mapped[int] = mapped_column(Integer, primary_key=True)
    data: Mapped[bytes] = mapped_column(LargeBinary)


class ResumeAnalysis(Base):
    """Structured analysis of a document. At most one per (user, document)."""

    __tablename__ = "resume_analyses"
    __table_args__ = (UniqueConstraint("user_id", "document_id", name="uq_resume_analyses_user_document"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    document_id: Mapped[str] = mapped_column(ForeignKey("documents.id", ondelete="CASCADE"), index=True)
    skills: Mapped[list] = mapped_column(JSON, default=list)  # [{"category": str, "items": [str]}]
    summary: Mapped[str] = mapped_column(Text)
    job_keywords: Mapped[list] = mapped_column(JSON, default=list)
    analyzed_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class Job(Base):
    """ETL-normalized job listing."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    dedup_key: Mapped[str] = mapped_column(String(255), index=True)
    apply_link: Mapped[str] = mapped_column(Text, default="")
    city: Mapped[str] = mapped_column(String(255), default="")
    state: Mapped[str] = mapped_column(String(255), default="")
    country: Mapped[str] = mapped_column(String(255), default="")
    company_name_normalized: Mapped[str] = mapped_column(String(255))
    employment_type: Mapped[str] = mapped_column(String(50), index=True)
    work_arrangement: Mapped[str] = mapped_column(String(50), index=True)
    job_title: Mapped[str] = mapped_column(String(255))
    job_description: Mapped[str] = mapped_column(Text, default="")
    job_location: Mapped[str] = mapped_column(String(255), default="")
    sources: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class FilteredJob(Base):
    """Job listing scored and filtered by the scraping pipeline."""

    __tablename__ = "filtered_jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    date: Mapped[str] = mapped_column(String(10), index=True)  # YYYY-MM-DD
    platform: Mapped[str] = mapped_column(String(20), index=True)  # linkedin/indeed/seek
    job_posting_id: Mapped[str] = mapped_column(String(255))
    company_name_normalized: Mapped[str] = mapped_column(String(255))
    city: Mapped[str] = mapped_column(String(255), default="")
    state: Mapped[str] = mapped_column(String(255), default="")
    country: Mapped[str] = mapped_column(String(255), default="")
    employment_type: Mapped[str] = mapped_column(String(50), default="")
    work_arrangement: Mapped[str] = mapped_column(String(50), default="")
    job_title: Mapped[str] = mapped_column(String(255))
    job_description: Mapped[str] = mapped_column(Text, default="")
    job_location: Mapped[str] = mapped_column(String(255), default="")
    apply_link: Mapped[str] = mapped_column(Text, default="")

    analysis_passed: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    match_score: Mapped[float] = mapped_column(Float, default=0.0)
    match_reason: Mapped[str] = mapped_column(Text, default="")
    matching_skills: Mapped[list] = mapped_column(JSON, default=list)
    missing_skills: Mapped[list] = mapped_column(JSON, default=list)
    exclusion_stage: Mapped[str | None] = mapped_column(String(20), default=None)  # visa/security
    exclusion_reason: Mapped[str | None] = mapped_column(Text, default=None)

    created_at: Mapped[datetime | None] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
