from pydantic import BaseModel

from models.schemas import (
    Application,
    AttritionRisk,
    ExternalProfile,
    ResumeAnalysis,
)


class ApplicantInfo(BaseModel):
    full_name: str = ""
    email: str = ""


class JobInfo(BaseModel):
    title: str = ""
    company: str = ""


class ApplicationDetail(BaseModel):
    """Application with every derived record, as recruiters review it."""
    application: Application
    applicant: ApplicantInfo = ApplicantInfo()
    job: JobInfo = JobInfo()
    resume_analysis: ResumeAnalysis | None = None
    external_profile: ExternalProfile | None = None
    attrition_risk: AttritionRisk | None = None


class ApplicationSummary(BaseModel):
    """What an applicant sees about their own application."""
    id: str
    job_id: str
    status: str
    created_at: str
    job: JobInfo = JobInfo()
    match_score: int | None = None
    skills_extracted: list[str] = []
