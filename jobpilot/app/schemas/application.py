"""
Application tracker and export package Pydantic schemas
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from jobpilot.app.core.config import APPLICATION_STATUSES, DEFAULT_APPLICATION_STATUS


def _check_status(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    status = value.strip().lower()
    if status not in APPLICATION_STATUSES:
        raise ValueError(f"status must be one of: {', '.join(APPLICATION_STATUSES)}")
    return status


class ApplicationCreate(BaseModel):
    resumeId: int
    jobId: int
    coverLetterId: Optional[int] = None
    status: str = DEFAULT_APPLICATION_STATUS
    notes: Optional[str] = None
    appliedAt: Optional[datetime] = None

    @field_validator("status")
    @classmethod
    def _status(cls, v):
        return _check_status(v)


class ApplicationUpdate(BaseModel):
    coverLetterId: Optional[int] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    appliedAt: Optional[datetime] = None

    @field_validator("status")
    @classmethod
    def _status(cls, v):
        return _check_status(v)


class ApplicationOut(BaseModel):
    id: int
    userId: int
    resumeId: Optional[int] = None
    jobId: Optional[int] = None
    coverLetterId: Optional[int] = None
    status: str
    notes: Optional[str] = None
    packageReference: Optional[str] = None
    appliedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


def application_model_to_out(app) -> ApplicationOut:
    return ApplicationOut(
        id=app.id,
        userId=app.user_id,
        resumeId=app.resume_id,
        jobId=app.job_id,
        coverLetterId=app.cover_letter_id,
        status=app.status,
        notes=app.notes,
        packageReference=app.package_reference,
        appliedAt=app.applied_at,
        createdAt=app.created_at,
        updatedAt=app.updated_at,
    )


class ExportPackageIn(BaseModel):
    resumeId: int
    jobId: int
    coverLetterId: int
    format: Literal["zip", "json"] = "zip"
    applicationId: Optional[int] = None
