"""
Resume service - single source of truth for resume storage operations.
Used by /api/resumes, match scoring, cover letters and export packages.

A user has at most one default resume; every write that sets is_default
clears it on the user's other resumes in the same transaction.
"""
from typing import Any

from sqlalchemy.orm import Session

from jobpilot.app.core.config import DEFAULT_RESUME_THEME, RESUME_REQUIRED_SECTIONS
from jobpilot.app.core.exceptions import ValidationError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.application import Application
from jobpilot.app.models.cover_letter import CoverLetter
from jobpilot.app.models.match_score import MatchScore
from jobpilot.app.models.resume import Resume
from jobpilot.app.models.user import User
from jobpilot.app.schemas.resume import ResumeCreate, ResumeUpdate

logger = get_logger("services.resume")


def validate_resume_document(json_data: Any) -> dict:
    """Minimal structure check: the document must carry basics, work or skills."""
    if not isinstance(json_data, dict) or not any(k in json_data for k in RESUME_REQUIRED_SECTIONS):
        raise ValidationError(
            "Resume must contain at least one of: " + ", ".join(RESUME_REQUIRED_SECTIONS)
        )
    return json_data


def list_resumes(db: Session, user: User) -> list[Resume]:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user.id)
        .order_by(Resume.is_default.desc(), Resume.created_at.desc())
        .all()
    )


def get_resume(db: Session, user: User, resume_id: int) -> Resume | None:
    """Resume owned by the user, or None (foreign resumes look missing)."""
    return db.query(Resume).filter(Resume.id == resume_id, Resume.user_id == user.id).first()


def get_default_resume(db: Session, user: User) -> Resume | None:
    return (
        db.query(Resume)
        .filter(Resume.user_id == user.id, Resume.is_default.is_(True))
        .first()
    )


def _clear_default(db: Session, user_id: int, keep_id: int | None = None) -> None:
    q = db.query(Resume).filter(Resume.user_id == user_id, Resume.is_default.is_(True))
    if keep_id is not None:
        q = q.filter(Resume.id != keep_id)
    q.update({Resume.is_default: False}, synchronize_session="fetch")


def create_resume(db: Session, user: User, payload: ResumeCreate) -> Resume:
    json_data = validate_resume_document(payload.jsonData)
    if payload.isDefault:
        _clear_default(db, user.id)
    resume = Resume(
        user_id=user.id,
        name=payload.name.strip(),
        theme=(payload.theme or DEFAULT_RESUME_THEME).strip() or DEFAULT_RESUME_THEME,
        json_data=json_data,
        is_default=bool(payload.isDefault),
    )
    db.add(resume)
    db.commit()
    db.refresh(resume)
    logger.info("Resume created user_id=%s resume_id=%s default=%s", user.id, resume.id, resume.is_default)
    return resume


def update_resume(db: Session, user: User, resume: Resume, payload: ResumeUpdate) -> Resume:
    """Apply the fields present in payload. jsonData replaces the stored document wholesale."""
    if payload.jsonData is not None:
        resume.json_data = validate_resume_document(payload.jsonData)
    if payload.name is not None:
        resume.name = payload.name.strip()
    if payload.theme is not None:
        resume.theme = payload.theme.strip() or DEFAULT_RESUME_THEME
    if payload.isDefault is not None:
        if payload.isDefault:
            _clear_default(db, user.id, keep_id=resume.id)
        resume.is_default = payload.isDefault
    db.commit()
    db.refresh(resume)
    logger.info("Resume updated user_id=%s resume_id=%s", user.id, resume.id)
    return resume


def set_default_resume(db: Session, user: User, resume: Resume) -> Resume:
    _clear_default(db, user.id, keep_id=resume.id)
    resume.is_default = True
    db.commit()
    db.refresh(resume)
    logger.info("Default resume set user_id=%s resume_id=%s", user.id, resume.id)
    return resume


def delete_resume(db: Session, user: User, resume: Resume) -> None:
    """Delete the resume with its scores and letters; applications keep their row without the link."""
    letter_ids = [row.id for row in db.query(CoverLetter.id).filter(CoverLetter.resume_id == resume.id)]
    if letter_ids:
        db.query(Application).filter(Application.cover_letter_id.in_(letter_ids)).update(
            {Application.cover_letter_id: None}, synchronize_session="fetch"
        )
    db.query(Application).filter(Application.resume_id == resume.id).update(
        {Application.resume_id: None}, synchronize_session="fetch"
    )
    db.query(MatchScore).filter(MatchScore.resume_id == resume.id).delete(synchronize_session="fetch")
    db.query(CoverLetter).filter(CoverLetter.resume_id == resume.id).delete(synchronize_session="fetch")
    db.delete(resume)
    db.commit()
    logger.info("Resume deleted user_id=%s resume_id=%s letters=%d", user.id, resume.id, len(letter_ids))
