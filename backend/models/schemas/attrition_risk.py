"""Attrition risk estimate derived from employment date ranges."""

from typing import Literal

from pydantic import BaseModel


class AttritionRisk(BaseModel):
    application_id: str = ""
    risk_score: int = 0  # 0-85
    job_hopping_frequency: float = 0.0
    average_tenure_months: int = 24
    recent_job_changes: int = 0
    career_progression_rate: Literal["fast", "moderate"] = "moderate"
    risk_factors: list[str] = []
    retention_prediction: Literal["high", "medium", "low"] = "high"
