"""Heuristic resume analysis stored alongside each application."""

from pydantic import BaseModel


class ResumeAnalysis(BaseModel):
    """Keyword-based analysis computed once at submission.

    ``languages_detected`` and ``original_language`` are fixed tags; no
    language detection is performed.
    """
    application_id: str = ""
    skills_extracted: list[str] = []
    experience_years: int = 0
    languages_detected: list[str] = ["English"]
    original_language: str = "en"
    match_score: int = 0  # 50-95
    key_highlights: list[str] = []
