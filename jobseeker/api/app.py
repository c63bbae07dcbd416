"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from jobseeker.agents import ResumeAnalyzer
from jobseeker.api.limiter import create_limiter
from jobseeker.api.routes import auth, jobs, pipeline, resume
from jobseeker.config import Settings, get_settings
from jobseeker.db import Database
from jobseeker.errors import ServiceError
from jobseeker.repositories.job_sources import job_source_class
from jobseeker.services import EmailService, PipelineRunner
from jobseeker.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    analyzer: ResumeAnalyzer | None = None,
    pipeline_runner: PipelineRunner | None = None,
) -> FastAPI:
    """Composition root: build every shared component once and wire the routes."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    database = database or Database(settings.database_url)
    analyzer = analyzer or ResumeAnalyzer.from_settings(settings)
    pipeline_runner = pipeline_runner or PipelineRunner(settings.pipeline_command, settings.pipeline_workdir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create tables on startup, release connections on shutdown."""
        database.init_db()
        logger.info("JobSeeker API started (analysis configured: %s)", analyzer.is_configured())
        yield
        database.dispose()

    app = FastAPI(
        title="JobSeeker API",
        description="Job listings and AI resume analysis",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.analyzer = analyzer
    app.state.email_service = EmailService(settings)
    app.state.job_source_class = job_source_class(settings.job_source)
    app.state.pipeline_runner = pipeline_runner

    app.state.limiter = create_limiter(settings)

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Uniform error envelope for every typed failure."""
        return JSONResponse(status_code=exc.http_status, content={"success": False, "error": exc.to_dict()})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Invalid request data",
                    "retryable": False,
                    "details": _validation_details(exc),
                },
            },
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        """Return 429 with a clear message when rate limit is exceeded."""
        return JSONResponse(
            status_code=429,
            content={"detail": f"Rate limit exceeded: {exc.detail}"},
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
    app.include_router(resume.router, prefix="/api/resume", tags=["Resume"])
    app.include_router(jobs.router, prefix="/api/jobs", tags=["Jobs"])
    app.include_router(pipeline.router, prefix="/api/pipeline", tags=["Pipeline"])

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok", "analysisConfigured": analyzer.is_configured()}

    return app


def _validation_details(exc: RequestValidationError) -> list[dict]:
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")} for e in exc.errors()]
