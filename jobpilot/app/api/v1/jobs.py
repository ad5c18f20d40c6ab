"""
Job posting endpoints - analyze (paste / URL / upload) and saved postings CRUD
"""
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from jobpilot.app.core.config import ALLOWED_JOB_UPLOAD_EXTENSIONS, settings
from jobpilot.app.core.dependencies import get_current_user, get_db
from jobpilot.app.core.exceptions import JobPilotError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.user import User
from jobpilot.app.schemas.job import (
    JobAnalysis,
    JobAnalyzeIn,
    JobAnalyzeUrlIn,
    JobPostingCreate,
    JobPostingOut,
    JobPostingUpdate,
    job_model_to_out,
)
from jobpilot.app.services import job_service
from jobpilot.app.services.job_analyzer import analyze_job_description
from jobpilot.app.services.job_description_scraper import fetch_job_page
from jobpilot.app.services.text_extraction import extract_text
from jobpilot.app.utils.http_errors import http_error, not_found

logger = get_logger("api.jobs")
router = APIRouter()


def _analyze(text: str, user: User) -> JobAnalysis:
    try:
        return analyze_job_description(text, user.id, api_key=user.openai_api_key)
    except JobPilotError as e:
        raise http_error(e)


@router.post("/analyze", response_model=JobAnalysis)
def analyze_job(data: JobAnalyzeIn, current_user: User = Depends(get_current_user)):
    """Extract title, company, tech stack, soft skills, experience, location and employment type."""
    if not data.description.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Job description is required")
    return _analyze(data.description, current_user)


@router.post("/analyze-url", response_model=JobAnalysis)
def analyze_job_url(data: JobAnalyzeUrlIn, current_user: User = Depends(get_current_user)):
    """Scrape the posting page, then analyze its description. Scraped title/company fill blanks."""
    try:
        page = fetch_job_page(data.url, user_id=current_user.id)
    except JobPilotError as e:
        raise http_error(e)
    analysis = _analyze(page.description, current_user)
    return analysis.model_copy(update={
        "title": analysis.title or page.title,
        "company": analysis.company or page.company,
        "location": analysis.location or page.location,
    })


@router.post("/upload", response_model=JobAnalysis)
async def upload_job_description(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
):
    """
    Upload a job description file (.txt, .pdf, .docx) and analyze its text.
    The file is kept under the upload directory.
    """
    suffix = Path(file.filename or "").suffix.lower()
    if suffix not in ALLOWED_JOB_UPLOAD_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file type. Allowed: {', '.join(sorted(ALLOWED_JOB_UPLOAD_EXTENSIONS))}",
        )

    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty")
    if len(contents) > settings.max_upload_bytes:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="Uploaded file is too large")

    upload_path = Path(settings.upload_dir)
    upload_path.mkdir(parents=True, exist_ok=True)
    file_path = upload_path / f"{uuid.uuid4()}{suffix}"
    try:
        file_path.write_bytes(contents)
    except OSError as e:
        raise HTTPException(status_code=500, detail=f"Failed to save file: {str(e)}")

    try:
        text = await run_in_threadpool(extract_text, file_path)
    except Exception as e:
        logger.warning("Text extraction failed user_id=%s file=%s error=%s", current_user.id, file_path.name, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Could not read text from the uploaded file")
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No text found in the uploaded file")

    return await run_in_threadpool(_analyze, text, current_user)


@router.get("", response_model=list[JobPostingOut])
def list_jobs(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return [job_model_to_out(j) for j in job_service.list_jobs(db, current_user)]


@router.post("", response_model=JobPostingOut, status_code=status.HTTP_201_CREATED)
def create_job(
    data: JobPostingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Save a posting: raw description plus the (possibly hand-edited) structured fields."""
    return job_model_to_out(job_service.create_job(db, current_user, data))


@router.get("/{job_id}", response_model=JobPostingOut)
def get_job(job_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    job = job_service.get_job(db, current_user, job_id)
    if not job:
        raise not_found("Job posting")
    return job_model_to_out(job)


@router.put("/{job_id}", response_model=JobPostingOut)
def update_job(
    job_id: int,
    data: JobPostingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    job = job_service.get_job(db, current_user, job_id)
    if not job:
        raise not_found("Job posting")
    return job_model_to_out(job_service.update_job(db, job, data))


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(job_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    job = job_service.get_job(db, current_user, job_id)
    if not job:
        raise not_found("Job posting")
    job_service.delete_job(db, current_user, job)
