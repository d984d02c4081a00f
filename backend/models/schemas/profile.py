"""User profile attached to an upstream-authenticated identity."""

from typing import Literal

from pydantic import BaseModel

Role = Literal["job_seeker", "recruiter"]


class Profile(BaseModel):
    id: str
    email: str = ""
    full_name: str = ""
    role: Role = "job_seeker"
    company_name: str | None = None
    created_at: str = ""
