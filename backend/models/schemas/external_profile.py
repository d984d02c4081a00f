"""GitHub-derived social proof for an applicant."""

from typing import Literal

from pydantic import BaseModel

VerificationStatus = Literal["verified", "partial"]


class GitHubStats(BaseModel):
    """Raw counters returned by the profile lookup.

    ``stars`` and ``contributions`` are not read from GitHub. When
    ``synthetic`` is set they are random placeholders, not measurements.
    """
    repos: int = 0
    stars: int = 0
    contributions: int = 0
    synthetic: bool = False


class ExternalProfile(BaseModel):
    application_id: str = ""
    github_username: str | None = None
    linkedin_url: str | None = None
    github_repos_count: int = 0
    github_stars: int = 0
    github_contributions: int = 0
    metrics_synthetic: bool = False
    social_score: float = 0.0  # 0-100, rounded to one decimal
    verification_status: VerificationStatus = "partial"
