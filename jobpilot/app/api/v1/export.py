"""
Export package endpoint - resume + cover letter + job description (+ match score report)
"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from jobpilot.app.core.dependencies import get_current_user, get_db
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.user import User
from jobpilot.app.schemas.application import ExportPackageIn
from jobpilot.app.services import application_service, job_service, resume_service
from jobpilot.app.services.export_service import build_json_package, build_zip_package, package_filename
from jobpilot.app.services.match_scorer import get_match_score
from jobpilot.app.utils.http_errors import not_found

logger = get_logger("api.export")
router = APIRouter()


@router.post("")
def export_package(
    data: ExportPackageIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Build the application package.

    - **format=zip**: resume.json, cover-letter.txt, job-description.txt and,
      when the pair has been scored, match-score-report.txt
    - **format=json**: the same content as one JSON document
    - **applicationId**: optional; the package file name is recorded on that application
    """
    resume = resume_service.get_resume(db, current_user, data.resumeId)
    job = job_service.get_job(db, current_user, data.jobId)
    letter = application_service.get_user_cover_letter(db, current_user, data.coverLetterId)
    if not resume or not job or not letter:
        raise not_found("Required documents")

    application = None
    if data.applicationId is not None:
        application = application_service.get_application(db, current_user, data.applicationId)
        if not application:
            raise not_found("Application")

    score = get_match_score(db, resume.id, job.id)
    filename = package_filename(job, data.format)
    if application is not None:
        application_service.set_package_reference(db, application, filename)
    logger.info(
        "Export package user_id=%s resume_id=%s job_id=%s format=%s scored=%s",
        current_user.id, resume.id, job.id, data.format, score is not None,
    )

    if data.format == "json":
        return build_json_package(resume, job, letter, score)
    return Response(
        content=build_zip_package(resume, job, letter, score),
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
