"""Stored record contracts: one model per table."""

from models.schemas.profile import Profile
from models.schemas.job import Job
from models.schemas.application import Application
from models.schemas.resume_analysis import ResumeAnalysis
from models.schemas.external_profile import ExternalProfile, GitHubStats
from models.schemas.attrition_risk import AttritionRisk

__all__ = [
    "Profile",
    "Job",
    "Application",
    "ResumeAnalysis",
    "ExternalProfile",
    "GitHubStats",
    "AttritionRisk",
]
