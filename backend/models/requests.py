from pydantic import BaseModel, Field, field_validator

from models.schemas.application import ApplicationStatus
from models.schemas.job import JobStatus, JobType
from models.schemas.profile import Role

# GitHub logins: alphanumerics and single hyphens, at most 39 chars
GITHUB_USERNAME_PATTERN = r"^([A-Za-z0-9][A-Za-z0-9-]{0,38})?$"


class ProfileRequest(BaseModel):
    email: str = Field(..., max_length=320)
    full_name: str = Field(..., min_length=1, max_length=200)
    role: Role
    company_name: str | None = Field(None, max_length=200)


class JobCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    company: str = Field("", max_length=200, description="Defaults to the recruiter's company")
    location: str = Field(..., min_length=1, max_length=200)
    job_type: JobType = "full-time"
    experience_required: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=10000)
    requirements: list[str] | str = Field(
        default_factory=list,
        description="List of requirements or newline-separated text",
    )
    salary_range: str = Field("", max_length=100)

    @field_validator("requirements")
    @classmethod
    def _split_requirements(cls, value: list[str] | str) -> list[str]:
        lines = value.split("\n") if isinstance(value, str) else value
        return [line.strip() for line in lines if line.strip()]


class JobStatusRequest(BaseModel):
    status: JobStatus


class ApplicationRequest(BaseModel):
    resume_text: str = Field(..., min_length=1, max_length=50000, description="Plain text resume content")
    cover_letter: str | None = Field(None, max_length=10000)
    github_username: str | None = Field(None, pattern=GITHUB_USERNAME_PATTERN)
    linkedin_url: str | None = Field(None, max_length=500)

    @field_validator("resume_text")
    @classmethod
    def _resume_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Resume text must not be blank")
        return value


class ApplicationStatusRequest(BaseModel):
    status: ApplicationStatus
