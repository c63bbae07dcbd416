"""API request/response schemas."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

EMAIL_PATTERN = r"^\S+@\S+\.\S+$"


class CamelModel(BaseModel):
    """Snake-case fields, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# Auth schemas
class RegisterRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=8, description="At least 8 characters")


class VerifyEmailRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    code: str = Field(pattern=r"^\d{6}$", description="6-digit verification code")


class LoginRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)


class ResendVerificationRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)


class UserProfile(CamelModel):
    resume_id: str | None = None
    resume_file_name: str | None = None
    resume_upload_date: datetime | None = None


class UserResponse(CamelModel):
    id: str
    email: str
    email_verified: bool
    profile: UserProfile
    created_at: datetime

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            email_verified=user.email_verified,
            profile=UserProfile.model_validate(user),
            created_at=user.created_at,
        )


class UserMessageData(BaseModel):
    user: UserResponse
    message: str


class UserData(BaseModel):
    user: UserResponse


class LoginData(BaseModel):
    user: UserResponse
    token: str


class MessageData(BaseModel):
    message: str


# Resume schemas
class SkillCategory(BaseModel):
    category: str
    items: list[str]


class AnalysisData(CamelModel):
    skills: list[SkillCategory]
    summary: str
    job_keywords: list[str]


class ResumeUploadData(CamelModel):
    document_id: str
    file_name: str
    upload_date: datetime


class ResumeDetailData(CamelModel):
    document_id: str
    file_name: str
    mime_type: str
    size: int
    upload_date: datetime
    has_analysis: bool
    analysis: AnalysisData | None = None


# Job listing schemas
class JobPageResponse(CamelModel):
    data: list[dict[str, Any]]
    total: int
    page: int
    limit: int
    total_pages: int


# Pipeline schemas
class PipelineTriggerResponse(CamelModel):
    message: str
    start_time: str
