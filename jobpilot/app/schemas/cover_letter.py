"""
Cover letter Pydantic schemas
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

Tone = Literal["professional", "friendly", "enthusiastic", "minimal", "confident", "casual"]
Focus = Literal[
    "technical", "leadership", "project", "innovation",
    "skills", "experience", "achievements", "culture",
]


class CoverLetterIn(BaseModel):
    resumeId: int
    jobId: int
    tone: Tone = "professional"
    focus: Focus = "technical"


class CoverLetterUpdate(BaseModel):
    content: str = Field(min_length=1)


class CoverLetterOut(BaseModel):
    id: int
    resumeId: int
    jobId: int
    tone: str
    focus: str
    content: str
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


def cover_letter_model_to_out(letter) -> CoverLetterOut:
    return CoverLetterOut(
        id=letter.id,
        resumeId=letter.resume_id,
        jobId=letter.job_id,
        tone=letter.tone,
        focus=letter.focus,
        content=letter.content,
        createdAt=letter.created_at,
        updatedAt=letter.updated_at,
    )
