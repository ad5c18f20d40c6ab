"""
Job board search endpoints - proxies the configured connector and imports results.
Mounted under /api/jobs ahead of the saved-postings router.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobpilot.app.core.config import settings
from jobpilot.app.core.dependencies import get_current_user, get_db
from jobpilot.app.core.exceptions import JobPilotError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.user import User
from jobpilot.app.schemas.job import (
    ConnectorInfo,
    JobCategory,
    JobPostingOut,
    JobResult,
    JobSearchOut,
    job_model_to_out,
)
from jobpilot.app.services import job_service
from jobpilot.app.services.job_connectors import ConnectorManager
from jobpilot.app.utils.http_errors import http_error, not_found

logger = get_logger("api.job_search")
router = APIRouter()
connectors_router = APIRouter()


@router.get("/search", response_model=JobSearchOut)
def search_jobs(
    query: str = "",
    location: Optional[str] = None,
    salary_min: Optional[int] = Query(default=None, ge=0),
    salary_max: Optional[int] = Query(default=None, ge=0),
    employment_type: Optional[str] = None,
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1),
    current_user: User = Depends(get_current_user),
):
    """Search the job board. per_page is capped at the board's maximum (50)."""
    per_page = min(per_page, settings.adzuna_max_results_per_page)
    try:
        connector = ConnectorManager(current_user).get_connector("adzuna")
        result = connector.search_jobs(
            query,
            location=location,
            salary_min=salary_min,
            salary_max=salary_max,
            employment_type=employment_type,
            page=page,
            results_per_page=per_page,
        )
    except JobPilotError as e:
        logger.warning("Job search failed user_id=%s error=%s", current_user.id, e.message)
        raise http_error(e)

    total = result["totalCount"]
    return JobSearchOut(
        jobs=[JobResult(**j) for j in result["jobs"]],
        totalResults=total,
        page=page,
        perPage=per_page,
        hasMore=page * per_page < total,
    )


@router.get("/search/categories", response_model=list[JobCategory])
def get_categories(current_user: User = Depends(get_current_user)):
    try:
        connector = ConnectorManager(current_user).get_connector("adzuna")
        return [JobCategory(**c) for c in connector.get_categories()]
    except JobPilotError as e:
        raise http_error(e)


@router.get("/search/{external_id}", response_model=JobResult)
def get_job_details(external_id: str, current_user: User = Depends(get_current_user)):
    try:
        connector = ConnectorManager(current_user).get_connector("adzuna")
        job = connector.get_job_details(external_id)
    except JobPilotError as e:
        raise http_error(e)
    if job is None:
        raise not_found("Job")
    return JobResult(**job)


@router.post("/import", response_model=JobPostingOut, status_code=status.HTTP_201_CREATED)
def import_job(
    data: JobResult,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Save a search result as a job posting (source = connector name)."""
    return job_model_to_out(job_service.import_job_result(db, current_user, data))


@connectors_router.get("", response_model=list[ConnectorInfo])
def list_connectors(current_user: User = Depends(get_current_user)):
    """Known job boards and whether each is usable with the current credentials."""
    return [ConnectorInfo(**c) for c in ConnectorManager(current_user).get_available_connectors()]
