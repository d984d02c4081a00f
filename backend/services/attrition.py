"""Attrition risk heuristic.

The only signal is the number of "YYYY-YYYY" employment ranges in the
resume; each range is treated as one job change.
"""

import re

from models.schemas import AttritionRisk

YEAR_RANGE_RE = re.compile(r"\d{4}\s*-\s*\d{4}")

RISK_PER_CHANGE = 15
MAX_RISK_SCORE = 85
DEFAULT_TENURE_MONTHS = 24
TENURE_WINDOW_MONTHS = 60
FAST_PROGRESSION_THRESHOLD = 3


def count_job_changes(resume_text: str) -> int:
    return len(YEAR_RANGE_RE.findall(resume_text))


def _retention_prediction(risk_score: int) -> str:
    # Lower risk means the candidate is more likely to stay
    if risk_score < 30:
        return "high"
    if risk_score < 60:
        return "medium"
    return "low"


def calculate_attrition_risk(resume_text: str) -> AttritionRisk:
    job_changes = count_job_changes(resume_text)
    risk_score = min(job_changes * RISK_PER_CHANGE, MAX_RISK_SCORE)
    frequent = job_changes > FAST_PROGRESSION_THRESHOLD

    if frequent:
        risk_factors = ["Frequent job changes", "Short tenure at companies"]
    else:
        risk_factors = ["Stable career progression"]

    return AttritionRisk(
        risk_score=risk_score,
        job_hopping_frequency=job_changes / 5,
        average_tenure_months=(
            TENURE_WINDOW_MONTHS // job_changes if job_changes > 0 else DEFAULT_TENURE_MONTHS
        ),
        recent_job_changes=job_changes,
        career_progression_rate="fast" if frequent else "moderate",
        risk_factors=risk_factors,
        retention_prediction=_retention_prediction(risk_score),
    )
