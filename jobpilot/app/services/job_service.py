"""
Job posting storage: manual/analyzed postings and postings imported from job boards.
"""
from typing import Any

from sqlalchemy.orm import Session

from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.application import Application
from jobpilot.app.models.cover_letter import CoverLetter
from jobpilot.app.models.job_posting import JobPosting
from jobpilot.app.models.match_score import MatchScore
from jobpilot.app.models.user import User
from jobpilot.app.schemas.job import JobPostingCreate, JobPostingUpdate, JobResult

logger = get_logger("services.job")

# API field -> column, for the structured fields a user may edit by hand
_EDITABLE = {
    "title": "title",
    "company": "company",
    "description": "description",
    "techStack": "tech_stack",
    "softSkills": "soft_skills",
    "experienceYears": "experience_years",
    "location": "location",
    "employmentType": "employment_type",
    "url": "url",
}


def list_jobs(db: Session, user: User) -> list[JobPosting]:
    return (
        db.query(JobPosting)
        .filter(JobPosting.user_id == user.id)
        .order_by(JobPosting.created_at.desc())
        .all()
    )


def get_job(db: Session, user: User, job_id: int) -> JobPosting | None:
    return db.query(JobPosting).filter(JobPosting.id == job_id, JobPosting.user_id == user.id).first()


def create_job(db: Session, user: User, payload: JobPostingCreate) -> JobPosting:
    job = JobPosting(
        user_id=user.id,
        title=payload.title.strip(),
        company=(payload.company or "").strip(),
        description=payload.description,
        parsed_data=payload.parsedData,
        tech_stack=list(payload.techStack),
        soft_skills=list(payload.softSkills),
        experience_years=payload.experienceYears,
        location=payload.location,
        employment_type=payload.employmentType,
        url=payload.url,
        source="manual",
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Job created user_id=%s job_id=%s tech=%d", user.id, job.id, len(job.tech_stack or []))
    return job


def update_job(db: Session, job: JobPosting, payload: JobPostingUpdate) -> JobPosting:
    """Manual edit; structured fields are not re-checked against the description."""
    data: dict[str, Any] = payload.model_dump(exclude_unset=True)
    for field, column in _EDITABLE.items():
        if field in data and data[field] is not None:
            value = data[field]
            setattr(job, column, list(value) if isinstance(value, list) else value)
    db.commit()
    db.refresh(job)
    return job


def delete_job(db: Session, user: User, job: JobPosting) -> None:
    letter_ids = [row.id for row in db.query(CoverLetter.id).filter(CoverLetter.job_id == job.id)]
    if letter_ids:
        db.query(Application).filter(Application.cover_letter_id.in_(letter_ids)).update(
            {Application.cover_letter_id: None}, synchronize_session="fetch"
        )
    db.query(Application).filter(Application.job_id == job.id).update(
        {Application.job_id: None}, synchronize_session="fetch"
    )
    db.query(MatchScore).filter(MatchScore.job_id == job.id).delete(synchronize_session="fetch")
    db.query(CoverLetter).filter(CoverLetter.job_id == job.id).delete(synchronize_session="fetch")
    db.delete(job)
    db.commit()
    logger.info("Job deleted user_id=%s job_id=%s", user.id, job.id)


def import_job_result(db: Session, user: User, result: JobResult) -> JobPosting:
    """
    Save a job board search result as a posting. Importing the same external
    job twice returns the existing posting.
    """
    source = (result.source or "").strip() or "external"
    if result.id:
        existing = (
            db.query(JobPosting)
            .filter(
                JobPosting.user_id == user.id,
                JobPosting.source == source,
                JobPosting.external_id == result.id,
            )
            .first()
        )
        if existing:
            return existing

    job = JobPosting(
        user_id=user.id,
        title=result.title.strip() or "Untitled position",
        company=result.company.strip(),
        description=result.description or "",
        tech_stack=[],
        soft_skills=[],
        location=result.location or None,
        employment_type=result.employmentType or None,
        url=result.url or None,
        source=source,
        external_id=result.id or None,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Job imported user_id=%s job_id=%s source=%s external_id=%s", user.id, job.id, source, result.id)
    return job
