"""Job posting owned by a recruiter."""

from typing import Literal

from pydantic import BaseModel

JobType = Literal["full-time", "part-time", "contract", "internship", "remote"]
JobStatus = Literal["open", "closed"]


class Job(BaseModel):
    """A posted job.

    Only ``status`` changes after creation; requirements keep the order the
    recruiter entered them in.
    """
    id: str
    recruiter_id: str
    title: str
    company: str
    location: str = ""
    job_type: JobType = "full-time"
    experience_required: str = ""
    description: str = ""
    requirements: list[str] = []
    salary_range: str = ""
    status: JobStatus = "open"
    created_at: str = ""
