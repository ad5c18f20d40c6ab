"""
Application tracker endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobpilot.app.core.dependencies import get_current_user, get_db
from jobpilot.app.models.user import User
from jobpilot.app.schemas.application import (
    ApplicationCreate,
    ApplicationOut,
    ApplicationUpdate,
    application_model_to_out,
)
from jobpilot.app.services import application_service, job_service, resume_service
from jobpilot.app.utils.http_errors import not_found

router = APIRouter()


@router.get("", response_model=list[ApplicationOut])
def list_applications(
    status_filter: Optional[str] = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """The user's applications, most recently updated first. Optional ?status=applied."""
    apps = application_service.list_applications(db, current_user, status=status_filter)
    return [application_model_to_out(a) for a in apps]


@router.post("", response_model=ApplicationOut, status_code=status.HTTP_201_CREATED)
def create_application(
    data: ApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not resume_service.get_resume(db, current_user, data.resumeId):
        raise not_found("Resume")
    if not job_service.get_job(db, current_user, data.jobId):
        raise not_found("Job posting")
    if data.coverLetterId is not None and not application_service.get_user_cover_letter(
        db, current_user, data.coverLetterId
    ):
        raise not_found("Cover letter")
    return application_model_to_out(application_service.create_application(db, current_user, data))


@router.get("/{application_id}", response_model=ApplicationOut)
def get_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    application = application_service.get_application(db, current_user, application_id)
    if not application:
        raise not_found("Application")
    return application_model_to_out(application)


@router.patch("/{application_id}", response_model=ApplicationOut)
def update_application(
    application_id: int,
    data: ApplicationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Move through draft -> applied -> interviewing -> offered / rejected, attach a letter, add notes."""
    application = application_service.get_application(db, current_user, application_id)
    if not application:
        raise not_found("Application")
    if data.coverLetterId is not None and not application_service.get_user_cover_letter(
        db, current_user, data.coverLetterId
    ):
        raise not_found("Cover letter")
    return application_model_to_out(application_service.update_application(db, application, data))


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    application = application_service.get_application(db, current_user, application_id)
    if not application:
        raise not_found("Application")
    application_service.delete_application(db, application)
