"""
Configuration management for JobSeeker.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings

MIB = 1024 * 1024


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = "sqlite:///./jobseeker.db"

    # LLM
    deepseek_api_key: str = ""
    llm_model: str = "deepseek-chat"
    llm_api_base: str | None = None
    llm_temperature: float = 0.1
    llm_timeout: float = 30.0  # keep below client-facing HTTP timeouts

    # Analysis retry policy
    analysis_max_attempts: int = 3
    analysis_base_delay: float = 1.0

    # Document store
    max_upload_bytes: int = 5 * MIB
    store_chunk_size: int = 255 * 1024

    # Auth
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 7 * 24 * 60
    verification_code_ttl_minutes: int = 15

    # Email
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    email_from: str = "noreply@jobseeker.local"

    # Job listings: "filtered" or "normalized"
    job_source: str = "filtered"

    # Background scraping pipeline
    pipeline_command: str = "uv run python scripts/run_pipeline.py"
    pipeline_workdir: str = "."

    # API
    cors_origins: str = "http://localhost:5173"
    analyze_rate_limit: str = "10/minute"
    pipeline_rate_limit: str = "3/minute"

    rate_limit_enabled: bool = True

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_user and self.smtp_password)


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
