"""
Application tracker: links a resume, a job posting and optionally a cover letter.
Ownership of the linked entities is checked by the caller before writes.
"""
from datetime import datetime

from sqlalchemy.orm import Session

from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.application import Application
from jobpilot.app.models.cover_letter import CoverLetter
from jobpilot.app.models.resume import Resume
from jobpilot.app.models.user import User
from jobpilot.app.schemas.application import ApplicationCreate, ApplicationUpdate

logger = get_logger("services.application")


def list_applications(db: Session, user: User, status: str | None = None) -> list[Application]:
    q = db.query(Application).filter(Application.user_id == user.id)
    if status:
        q = q.filter(Application.status == status.strip().lower())
    return q.order_by(Application.updated_at.desc()).all()


def get_application(db: Session, user: User, application_id: int) -> Application | None:
    return (
        db.query(Application)
        .filter(Application.id == application_id, Application.user_id == user.id)
        .first()
    )


def get_user_cover_letter(db: Session, user: User, cover_letter_id: int) -> CoverLetter | None:
    """Cover letter reachable through one of the user's resumes."""
    return (
        db.query(CoverLetter)
        .join(Resume, Resume.id == CoverLetter.resume_id)
        .filter(CoverLetter.id == cover_letter_id, Resume.user_id == user.id)
        .first()
    )


def _applied_at(status: str, current: datetime | None, given: datetime | None) -> datetime | None:
    if given is not None:
        return given
    if status == "applied" and current is None:
        return datetime.utcnow()
    return current


def create_application(db: Session, user: User, payload: ApplicationCreate) -> Application:
    application = Application(
        user_id=user.id,
        resume_id=payload.resumeId,
        job_id=payload.jobId,
        cover_letter_id=payload.coverLetterId,
        status=payload.status,
        notes=payload.notes,
        applied_at=_applied_at(payload.status, None, payload.appliedAt),
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    logger.info(
        "Application created user_id=%s application_id=%s status=%s",
        user.id, application.id, application.status,
    )
    return application


def update_application(db: Session, application: Application, payload: ApplicationUpdate) -> Application:
    data = payload.model_dump(exclude_unset=True)
    if "coverLetterId" in data:
        application.cover_letter_id = data["coverLetterId"]
    if "notes" in data:
        application.notes = data["notes"]
    if data.get("status"):
        application.status = data["status"]
    application.applied_at = _applied_at(application.status, application.applied_at, data.get("appliedAt"))
    application.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(application)
    return application


def set_package_reference(db: Session, application: Application, reference: str) -> Application:
    application.package_reference = reference
    application.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(application)
    return application


def delete_application(db: Session, application: Application) -> None:
    db.delete(application)
    db.commit()
