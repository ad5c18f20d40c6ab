"""
Cover letter endpoints - generate (one current letter per resume/job pair) and edit
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobpilot.app.core.dependencies import get_current_user, get_db
from jobpilot.app.core.exceptions import JobPilotError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.user import User
from jobpilot.app.schemas.cover_letter import (
    CoverLetterIn,
    CoverLetterOut,
    CoverLetterUpdate,
    cover_letter_model_to_out,
)
from jobpilot.app.services import job_service, resume_service
from jobpilot.app.services.application_service import get_user_cover_letter
from jobpilot.app.services.cover_letter_service import (
    generate_cover_letter,
    get_cover_letter,
    save_cover_letter,
    update_cover_letter_content,
)
from jobpilot.app.utils.http_errors import http_error, not_found

logger = get_logger("api.cover_letters")
router = APIRouter()


@router.post("", response_model=CoverLetterOut)
def create_cover_letter(
    data: CoverLetterIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Generate a cover letter for a resume/job pair.

    - **tone**: professional, friendly, enthusiastic, minimal, confident, casual
    - **focus**: technical, leadership, project, innovation, skills, experience, achievements, culture
    """
    resume = resume_service.get_resume(db, current_user, data.resumeId)
    if not resume:
        raise not_found("Resume")
    job = job_service.get_job(db, current_user, data.jobId)
    if not job:
        raise not_found("Job posting")

    try:
        content = generate_cover_letter(
            resume, job, data.tone, data.focus, current_user.id, api_key=current_user.openai_api_key
        )
    except JobPilotError as e:
        raise http_error(e)
    letter = save_cover_letter(db, resume.id, job.id, data.tone, data.focus, content)
    return cover_letter_model_to_out(letter)


@router.get("/{resume_id}/{job_id}", response_model=CoverLetterOut)
def read_cover_letter(
    resume_id: int,
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not resume_service.get_resume(db, current_user, resume_id) or not job_service.get_job(db, current_user, job_id):
        raise not_found("Cover letter")
    letter = get_cover_letter(db, resume_id, job_id)
    if not letter:
        raise not_found("Cover letter")
    return cover_letter_model_to_out(letter)


@router.patch("/{cover_letter_id}", response_model=CoverLetterOut)
def edit_cover_letter(
    cover_letter_id: int,
    data: CoverLetterUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Replace the letter text with the user's edit."""
    letter = get_user_cover_letter(db, current_user, cover_letter_id)
    if not letter:
        raise not_found("Cover letter")
    return cover_letter_model_to_out(update_cover_letter_content(db, letter, data.content))
