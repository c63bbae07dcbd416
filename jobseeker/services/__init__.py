"""
Services for JobSeeker.

- resume_service: upload, analyze and delete resumes with ownership checks
- auth_service: registration, email verification and login
- email_service: verification code delivery
- pipeline_runner: background trigger for the job-scraping pipeline
"""

from jobseeker.services.auth_service import AuthService
from jobseeker.services.email_service import EmailService
from jobseeker.services.pipeline_runner import PipelineRunner
from jobseeker.services.resume_service import ResumeService

__all__ = ["AuthService", "EmailService", "PipelineRunner", "ResumeService"]
