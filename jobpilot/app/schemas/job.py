"""
Job posting, job analysis and job search Pydantic schemas
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _as_string_list(value: Any) -> List[str]:
    """Coerce model output into a clean, de-duplicated list of strings."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return []
    seen = set()
    out = []
    for item in value:
        text = _as_text(item)
        if text and text.lower() not in seen:
            seen.add(text.lower())
            out.append(text)
    return out


# --- Analysis (Job Description Parser output) ---
class JobAnalysis(BaseModel):
    """Structured job fields. Every field defaults to blank when the model omits it."""
    title: str = ""
    company: str = ""
    techStack: List[str] = Field(default_factory=list)
    softSkills: List[str] = Field(default_factory=list)
    experienceYears: str = ""
    location: str = ""
    employmentType: str = ""

    model_config = {"extra": "ignore"}

    @field_validator("title", "company", "experienceYears", "location", "employmentType", mode="before")
    @classmethod
    def _text(cls, v):
        return _as_text(v)

    @field_validator("techStack", "softSkills", mode="before")
    @classmethod
    def _lists(cls, v):
        return _as_string_list(v)


class JobAnalyzeIn(BaseModel):
    description: str


class JobAnalyzeUrlIn(BaseModel):
    url: str


# --- Saved job postings ---
class JobPostingCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    company: str = ""
    description: str = Field(min_length=1)
    techStack: List[str] = Field(default_factory=list)
    softSkills: List[str] = Field(default_factory=list)
    experienceYears: Optional[str] = None
    location: Optional[str] = None
    employmentType: Optional[str] = None
    parsedData: Optional[dict[str, Any]] = None
    url: Optional[str] = None


class JobPostingUpdate(BaseModel):
    """Manual edits. Structured fields may diverge from the raw description."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    company: Optional[str] = None
    description: Optional[str] = None
    techStack: Optional[List[str]] = None
    softSkills: Optional[List[str]] = None
    experienceYears: Optional[str] = None
    location: Optional[str] = None
    employmentType: Optional[str] = None
    url: Optional[str] = None


class JobPostingOut(BaseModel):
    id: int
    userId: int
    title: str
    company: str
    description: str
    parsedData: Optional[dict[str, Any]] = None
    techStack: List[str] = Field(default_factory=list)
    softSkills: List[str] = Field(default_factory=list)
    experienceYears: Optional[str] = None
    location: Optional[str] = None
    employmentType: Optional[str] = None
    url: Optional[str] = None
    source: str = "manual"
    externalId: Optional[str] = None
    createdAt: Optional[datetime] = None


def job_model_to_out(job) -> JobPostingOut:
    """Convert JobPosting DB model to JobPostingOut schema"""
    return JobPostingOut(
        id=job.id,
        userId=job.user_id,
        title=job.title,
        company=job.company or "",
        description=job.description or "",
        parsedData=job.parsed_data if isinstance(job.parsed_data, dict) else None,
        techStack=list(job.tech_stack or []),
        softSkills=list(job.soft_skills or []),
        experienceYears=job.experience_years,
        location=job.location,
        employmentType=job.employment_type,
        url=job.url,
        source=job.source or "manual",
        externalId=job.external_id,
        createdAt=job.created_at,
    )


# --- Job search (connector results) ---
class JobResult(BaseModel):
    """Connector-normalized job. Missing strings are "", missing salaries are None."""
    id: str = ""
    title: str = ""
    company: str = ""
    description: str = ""
    location: str = ""
    salaryMin: Optional[float] = None
    salaryMax: Optional[float] = None
    employmentType: str = ""
    datePosted: str = ""
    url: str = ""
    source: str = ""


class JobSearchOut(BaseModel):
    jobs: List[JobResult] = Field(default_factory=list)
    totalResults: int = 0
    page: int = 1
    perPage: int = 20
    hasMore: bool = False


class JobCategory(BaseModel):
    tag: str
    label: str


class ConnectorInfo(BaseModel):
    type: str
    name: str
    description: str
    isConfigured: bool
    requiresCredentials: List[dict[str, str]] = Field(default_factory=list)
