"""
Resume Pydantic schemas - jsonData follows the JSON Resume convention
(basics, work, education, skills, projects). Only the envelope is typed;
the document itself is stored as given.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from jobpilot.app.core.config import DEFAULT_RESUME_THEME


class ResumeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    theme: str = DEFAULT_RESUME_THEME
    jsonData: dict[str, Any]
    isDefault: bool = False


class ResumeUpdate(BaseModel):
    """PUT/PATCH body. jsonData replaces the whole document when present."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    theme: Optional[str] = None
    jsonData: Optional[dict[str, Any]] = None
    isDefault: Optional[bool] = None


class ResumeOut(BaseModel):
    id: int
    userId: int
    name: str
    theme: str
    jsonData: dict[str, Any]
    isDefault: bool
    createdAt: Optional[datetime] = None


def resume_model_to_out(resume) -> ResumeOut:
    """Convert Resume DB model to ResumeOut schema"""
    return ResumeOut(
        id=resume.id,
        userId=resume.user_id,
        name=resume.name,
        theme=resume.theme or DEFAULT_RESUME_THEME,
        jsonData=resume.json_data if isinstance(resume.json_data, dict) else {},
        isDefault=bool(resume.is_default),
        createdAt=resume.created_at,
    )
