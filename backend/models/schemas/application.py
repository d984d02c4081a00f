"""Job application submitted by a job seeker."""

from typing import Literal

from pydantic import BaseModel

ApplicationStatus = Literal[
    "submitted", "screening", "shortlisted", "interviewed", "rejected"
]


class Application(BaseModel):
    id: str
    job_id: str
    applicant_id: str
    resume_text: str
    cover_letter: str | None = None
    status: ApplicationStatus = "submitted"
    created_at: str = ""
