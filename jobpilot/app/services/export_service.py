"""
Application package export: resume JSON, cover letter, job description and
(when the pair has been scored) a match score report, as a zip archive or a
single JSON bundle.
"""
import io
import json
import re
import zipfile
from datetime import datetime
from typing import Any

from jobpilot.app.models.cover_letter import CoverLetter
from jobpilot.app.models.job_posting import JobPosting
from jobpilot.app.models.match_score import MatchScore
from jobpilot.app.models.resume import Resume

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def package_filename(job: JobPosting, extension: str = "zip") -> str:
    parts = [p for p in (job.company, job.title) if p and p.strip()]
    slug = _UNSAFE.sub("-", "-".join(parts)).strip("-")[:100] or f"job-{job.id}"
    return f"application-package-{slug}.{extension}"


def match_score_report(score: MatchScore) -> str:
    recommendations = "\n".join(f"- {r}" for r in (score.recommendations or [])) or "No recommendations available"
    return (
        "Match Score Report\n"
        f"Overall Score: {score.overall_score}%\n"
        f"Technical Skills: {score.technical_score}%\n"
        f"Experience Level: {score.experience_score}%\n"
        f"Soft Skills: {score.soft_skills_score}%\n"
        f"Location Match: {score.location_score}%\n"
        "\n"
        "Recommendations:\n"
        f"{recommendations}\n"
    )


def build_zip_package(
    resume: Resume,
    job: JobPosting,
    cover_letter: CoverLetter,
    score: MatchScore | None = None,
) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("resume.json", json.dumps(resume.json_data or {}, indent=2, ensure_ascii=False))
        zf.writestr("cover-letter.txt", cover_letter.content or "")
        zf.writestr("job-description.txt", job.description or "")
        if score is not None:
            zf.writestr("match-score-report.txt", match_score_report(score))
    return buf.getvalue()


def build_json_package(
    resume: Resume,
    job: JobPosting,
    cover_letter: CoverLetter,
    score: MatchScore | None = None,
) -> dict[str, Any]:
    return {
        "exportedAt": datetime.utcnow().isoformat() + "Z",
        "resume": {"id": resume.id, "name": resume.name, "theme": resume.theme, "jsonData": resume.json_data or {}},
        "job": {
            "id": job.id,
            "title": job.title,
            "company": job.company,
            "description": job.description,
            "techStack": list(job.tech_stack or []),
            "location": job.location,
            "url": job.url,
        },
        "coverLetter": {
            "id": cover_letter.id,
            "tone": cover_letter.tone,
            "focus": cover_letter.focus,
            "content": cover_letter.content,
        },
        "matchScore": None if score is None else {
            "overallScore": score.overall_score,
            "technicalScore": score.technical_score,
            "experienceScore": score.experience_score,
            "softSkillsScore": score.soft_skills_score,
            "locationScore": score.location_score,
            "recommendations": list(score.recommendations or []),
            "report": match_score_report(score),
        },
    }
