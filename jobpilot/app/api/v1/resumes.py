"""
Resume endpoints - JSON Resume documents owned by the current user
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobpilot.app.core.dependencies import get_current_user, get_db
from jobpilot.app.core.exceptions import ValidationError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.user import User
from jobpilot.app.schemas.resume import ResumeCreate, ResumeOut, ResumeUpdate, resume_model_to_out
from jobpilot.app.services import resume_service
from jobpilot.app.utils.http_errors import http_error, not_found

logger = get_logger("api.resumes")
router = APIRouter()


@router.get("", response_model=list[ResumeOut])
def list_resumes(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """All of the user's resumes, default first, newest next."""
    return [resume_model_to_out(r) for r in resume_service.list_resumes(db, current_user)]


@router.post("", response_model=ResumeOut, status_code=status.HTTP_201_CREATED)
def create_resume(
    data: ResumeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Save a resume document. jsonData must contain at least one of
    `basics`, `work`, `skills`.
    """
    try:
        resume = resume_service.create_resume(db, current_user, data)
    except ValidationError as e:
        raise http_error(e)
    return resume_model_to_out(resume)


@router.get("/default", response_model=ResumeOut)
def get_default_resume(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    resume = resume_service.get_default_resume(db, current_user)
    if not resume:
        raise not_found("Default resume")
    return resume_model_to_out(resume)


@router.get("/{resume_id}", response_model=ResumeOut)
def get_resume(resume_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    resume = resume_service.get_resume(db, current_user, resume_id)
    if not resume:
        raise not_found("Resume")
    return resume_model_to_out(resume)


def _update(resume_id: int, data: ResumeUpdate, db: Session, current_user: User) -> ResumeOut:
    resume = resume_service.get_resume(db, current_user, resume_id)
    if not resume:
        raise not_found("Resume")
    try:
        resume = resume_service.update_resume(db, current_user, resume, data)
    except ValidationError as e:
        raise http_error(e)
    return resume_model_to_out(resume)


@router.put("/{resume_id}", response_model=ResumeOut)
def replace_resume(
    resume_id: int,
    data: ResumeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Save the resume wholesale (the editor sends the full document)."""
    return _update(resume_id, data, db, current_user)


@router.patch("/{resume_id}", response_model=ResumeOut)
def patch_resume(
    resume_id: int,
    data: ResumeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Rename, change theme or toggle default without resending the document."""
    return _update(resume_id, data, db, current_user)


@router.put("/{resume_id}/default", response_model=ResumeOut)
def set_default_resume(
    resume_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    resume = resume_service.get_resume(db, current_user, resume_id)
    if not resume:
        raise not_found("Resume")
    return resume_model_to_out(resume_service.set_default_resume(db, current_user, resume))


@router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resume(resume_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    resume = resume_service.get_resume(db, current_user, resume_id)
    if not resume:
        raise not_found("Resume")
    resume_service.delete_resume(db, current_user, resume)
