"""Resume analysis: experience, highlights and job match.

Pipeline (all pure, run synchronously on submit):
1. Skill extraction against the fixed vocabulary
2. Experience years from the first "N years" mention
3. Highlights from the first long lines
4. Match score from the job's requirement list
"""

import re

from models.schemas import Job, ResumeAnalysis
from services.skill_extractor import contains_keyword, extract_skills

# "5+ years", "3 year", "10years"
EXP_YEARS_RE = re.compile(r"(\d+)\+?\s*years?", re.IGNORECASE)
DEFAULT_EXPERIENCE_YEARS = 2

HIGHLIGHT_MIN_LENGTH = 20
MAX_HIGHLIGHTS = 5

BASE_MATCH_SCORE = 50
REQUIREMENT_BONUS = 10
MAX_MATCH_SCORE = 95


def extract_experience(resume_text: str) -> int:
    """Years from the first "N years" mention, or the default when absent."""
    match = EXP_YEARS_RE.search(resume_text)
    return int(match.group(1)) if match else DEFAULT_EXPERIENCE_YEARS


def extract_highlights(resume_text: str) -> list[str]:
    """First lines longer than HIGHLIGHT_MIN_LENGTH characters, in order.

    Length is measured on the trimmed line; the line itself is returned as written.
    """
    lines = resume_text.split("\n")
    return [line for line in lines if len(line.strip()) > HIGHLIGHT_MIN_LENGTH][:MAX_HIGHLIGHTS]


def calculate_match_score(
    resume_text: str, requirements: list[str], mode: str | None = None
) -> int:
    """Base score plus a bonus per requirement found in the resume, capped.

    Requirements are checked independently, so overlapping requirements
    ("SQL", "PostgreSQL") can both score.
    """
    score = BASE_MATCH_SCORE
    for requirement in requirements:
        if contains_keyword(resume_text, requirement, mode):
            score += REQUIREMENT_BONUS
    return min(score, MAX_MATCH_SCORE)


def analyze_resume(resume_text: str, job: Job, mode: str | None = None) -> ResumeAnalysis:
    return ResumeAnalysis(
        skills_extracted=extract_skills(resume_text, mode),
        experience_years=extract_experience(resume_text),
        match_score=calculate_match_score(resume_text, job.requirements, mode),
        key_highlights=extract_highlights(resume_text),
    )
