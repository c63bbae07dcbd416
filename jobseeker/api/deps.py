"""FastAPI dependencies: settings, authentication and per-request services."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobseeker.config import Settings
from jobseeker.db import get_db
from jobseeker.errors import Unauthorized
from jobseeker.repositories import AnalysisRepository, DocumentStore, UserRepository
from jobseeker.repositories.job_sources import JobListingSource
from jobseeker.services import AuthService, EmailService, PipelineRunner, ResumeService
from jobseeker.utils.security import TokenPayload, decode_access_token

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> TokenPayload:
    """Verified (user_id, email) from the bearer token."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthorized("Authentication required")
    try:
        return decode_access_token(credentials.credentials, settings.jwt_secret, settings.jwt_algorithm)
    except ValueError:
        raise Unauthorized("Invalid or expired token") from None


def get_resume_service(request: Request, db: Session = Depends(get_db)) -> ResumeService:
    settings: Settings = request.app.state.settings
    store = DocumentStore(db, max_size=settings.max_upload_bytes, chunk_size=settings.store_chunk_size)
    return ResumeService(store, AnalysisRepository(db), request.app.state.analyzer, UserRepository(db))


def get_auth_service(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)) -> AuthService:
    return AuthService(UserRepository(db), settings)


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_job_source(request: Request, db: Session = Depends(get_db)) -> JobListingSource:
    return request.app.state.job_source_class(db)


def get_pipeline_runner(request: Request) -> PipelineRunner:
    return request.app.state.pipeline_runner
