"""
FastAPI application entry point
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobpilot.app.api.v1 import (
    applications,
    auth,
    cover_letters,
    export,
    external_logs,
    job_search,
    jobs,
    match_scores,
    resumes,
)
from jobpilot.app.core.config import settings
from jobpilot.app.core.logging_config import get_logger, setup_logging
from jobpilot.app.db import session as db_session
from jobpilot.app.db.base import Base

# Import models so they register with Base.metadata
import jobpilot.app.models  # noqa: F401

setup_logging()
logger = get_logger("main")

# Create database tables (Alembic owns migrations; this covers fresh SQLite dev databases)
Base.metadata.create_all(bind=db_session.engine)

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description="Resume, job analysis, match scoring, cover letter and job search API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers. job_search goes before jobs so /api/jobs/search is not read as a job id.
app.include_router(auth.router, prefix="/api/auth", tags=["authentication"])
app.include_router(resumes.router, prefix="/api/resumes", tags=["resumes"])
app.include_router(job_search.router, prefix="/api/jobs", tags=["job-search"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(job_search.connectors_router, prefix="/api/connectors", tags=["job-search"])
app.include_router(match_scores.router, prefix="/api/match-score", tags=["match-score"])
app.include_router(cover_letters.router, prefix="/api/cover-letters", tags=["cover-letters"])
app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
app.include_router(export.router, prefix="/api/export-package", tags=["export"])
app.include_router(external_logs.router, prefix="/api/external-logs", tags=["external-logs"])

logger.info("%s API %s ready", settings.app_name, settings.app_version)


@app.get("/")
def read_root():
    """Root endpoint"""
    return {"message": f"{settings.app_name} API", "version": settings.app_version}


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
