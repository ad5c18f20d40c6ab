"""
Match score endpoints - score a resume against a job posting (one row per pair)
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobpilot.app.core.dependencies import get_current_user, get_db
from jobpilot.app.core.exceptions import JobPilotError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.user import User
from jobpilot.app.schemas.match import MatchScoreIn, MatchScoreOut, match_model_to_out
from jobpilot.app.services import job_service, resume_service
from jobpilot.app.services.match_scorer import calculate_match_score, get_match_score, save_match_score
from jobpilot.app.utils.http_errors import http_error, not_found

logger = get_logger("api.match_scores")
router = APIRouter()


@router.post("", response_model=MatchScoreOut)
def score_match(
    data: MatchScoreIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Calculate and store the match score. Re-scoring the same pair overwrites it."""
    resume = resume_service.get_resume(db, current_user, data.resumeId)
    if not resume:
        raise not_found("Resume")
    job = job_service.get_job(db, current_user, data.jobId)
    if not job:
        raise not_found("Job posting")

    try:
        result = calculate_match_score(resume, job, current_user.id, api_key=current_user.openai_api_key)
    except JobPilotError as e:
        raise http_error(e)
    return match_model_to_out(save_match_score(db, resume.id, job.id, result))


@router.get("/{resume_id}/{job_id}", response_model=MatchScoreOut)
def read_match_score(
    resume_id: int,
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not resume_service.get_resume(db, current_user, resume_id) or not job_service.get_job(db, current_user, job_id):
        raise not_found("Match score")
    score = get_match_score(db, resume_id, job_id)
    if not score:
        raise not_found("Match score")
    return match_model_to_out(score)
