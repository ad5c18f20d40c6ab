"""
Match score Pydantic schemas
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


def _as_percent(value: Any) -> int:
    """Round and clamp a model-reported score into 0-100. Missing/garbage -> 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if number != number:  # NaN
        return 0
    return max(0, min(100, int(round(number))))


class MatchResult(BaseModel):
    """Scorer output. Sub-scores are independent of overallScore."""
    overallScore: int = 0
    technicalScore: int = 0
    experienceScore: int = 0
    softSkillsScore: int = 0
    locationScore: int = 0
    recommendations: List[str] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def _require_overall(cls, data):
        # a reply without a numeric overallScore is not a score at all
        if not isinstance(data, dict):
            raise ValueError("score payload must be an object")
        overall = data.get("overallScore")
        if overall is None or isinstance(overall, bool):
            raise ValueError("overallScore is required")
        try:
            float(overall)
        except (TypeError, ValueError):
            raise ValueError("overallScore must be a number")
        return data

    @field_validator(
        "overallScore", "technicalScore", "experienceScore", "softSkillsScore", "locationScore",
        mode="before",
    )
    @classmethod
    def _score(cls, v):
        return _as_percent(v)

    @field_validator("recommendations", mode="before")
    @classmethod
    def _recommendations(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v.strip()] if v.strip() else []
        if not isinstance(v, (list, tuple)):
            return []
        return [str(item).strip() for item in v if item is not None and str(item).strip()]


class MatchScoreIn(BaseModel):
    resumeId: int
    jobId: int


class MatchScoreOut(MatchResult):
    id: int
    resumeId: int
    jobId: int
    createdAt: Optional[datetime] = None


def match_model_to_out(score) -> MatchScoreOut:
    return MatchScoreOut(
        id=score.id,
        resumeId=score.resume_id,
        jobId=score.job_id,
        overallScore=score.overall_score,
        technicalScore=score.technical_score,
        experienceScore=score.experience_score,
        softSkillsScore=score.soft_skills_score,
        locationScore=score.location_score,
        recommendations=list(score.recommendations or []),
        createdAt=score.created_at,
    )
