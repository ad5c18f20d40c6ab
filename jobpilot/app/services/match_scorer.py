"""
Match scoring: (resume, job posting) -> overall + four sub-scores and recommendations.
One LLM call; the model's scores are trusted as reported (only rounded and
clamped to 0-100). Sparse input short-circuits to all-zero scores.
"""
import json
from datetime import datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobpilot.app.core.config import INSUFFICIENT_DATA_RECOMMENDATION
from jobpilot.app.core.exceptions import ScoringError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.job_posting import JobPosting
from jobpilot.app.models.match_score import MatchScore
from jobpilot.app.models.resume import Resume
from jobpilot.app.schemas.match import MatchResult
from jobpilot.app.services.llm import chat_completion, parse_llm_json

logger = get_logger("services.match_scorer")

_FAILED = "Failed to calculate match score."

SCORE_SYSTEM_PROMPT = """You are an expert resume matcher. Score how well a resume matches a job's requirements.

Score each category from 0 to 100:
- technicalScore: technical skills match (languages, frameworks, tools)
- experienceScore: experience level and years versus the requirement
- softSkillsScore: soft skills and leadership qualities
- locationScore: 100 if remote or same location, lower when relocation is needed
- overallScore: your holistic judgement of the whole match

If the resume or the job requirements are empty or too sparse to judge, return 0 for every score
and a single recommendation saying there is insufficient data.

Also give 3-5 specific, actionable recommendations for improving the match.

Return only valid JSON in exactly this format:
{"overallScore": number, "technicalScore": number, "experienceScore": number,
 "softSkillsScore": number, "locationScore": number, "recommendations": ["string"]}"""

SCORE_USER_PROMPT = """Score this resume against the job requirements.

RESUME DATA:
{resume}

JOB REQUIREMENTS:
{job}"""


def _non_empty(value: Any) -> bool:
    if isinstance(value, dict):
        return any(_non_empty(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return any(_non_empty(v) for v in value)
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


def has_resume_data(json_data: Any) -> bool:
    """True when the document has any basics, work or skills content."""
    if not isinstance(json_data, dict):
        return False
    return any(_non_empty(json_data.get(section)) for section in ("basics", "work", "skills"))


def has_job_data(job: JobPosting) -> bool:
    return bool(job.tech_stack) or bool((job.description or "").strip())


def resume_summary(json_data: dict) -> dict:
    """Fields the scorer looks at: headline, location, skills and work highlights."""
    basics = json_data.get("basics") if isinstance(json_data.get("basics"), dict) else {}
    location = basics.get("location")
    if isinstance(location, dict):
        location = ", ".join(str(v) for v in (location.get("city"), location.get("region"), location.get("countryCode")) if v)

    skills = []
    for skill in json_data.get("skills") or []:
        if isinstance(skill, dict):
            skills.append({"name": skill.get("name", ""), "level": skill.get("level", ""), "keywords": skill.get("keywords") or []})
        elif isinstance(skill, str):
            skills.append({"name": skill})

    work = []
    for entry in (json_data.get("work") or [])[:5]:
        if not isinstance(entry, dict):
            continue
        work.append({
            "position": entry.get("position", ""),
            "company": entry.get("name") or entry.get("company", ""),
            "startDate": entry.get("startDate", ""),
            "endDate": entry.get("endDate", ""),
            "summary": entry.get("summary", ""),
            "highlights": (entry.get("highlights") or [])[:5],
        })

    return {
        "label": basics.get("label", ""),
        "summary": basics.get("summary", ""),
        "location": location or "",
        "skills": skills,
        "work": work,
    }


def job_requirements(job: JobPosting) -> dict:
    return {
        "title": job.title,
        "company": job.company,
        "techStack": list(job.tech_stack or []),
        "softSkills": list(job.soft_skills or []),
        "experienceYears": job.experience_years or "",
        "location": job.location or "",
        "employmentType": job.employment_type or "",
    }


def insufficient_data_result() -> MatchResult:
    return MatchResult(overallScore=0, recommendations=[INSUFFICIENT_DATA_RECOMMENDATION])


def calculate_match_score(
    resume: Resume,
    job: JobPosting,
    user_id: int | None,
    api_key: str | None = None,
) -> MatchResult:
    """Score one resume against one job. Raises ScoringError on provider/parse failure."""
    json_data = resume.json_data if isinstance(resume.json_data, dict) else {}
    if not has_resume_data(json_data) or not has_job_data(job):
        logger.info("Match score skipped (insufficient data) resume_id=%s job_id=%s", resume.id, job.id)
        return insufficient_data_result()

    content = chat_completion(
        [
            {"role": "system", "content": SCORE_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": SCORE_USER_PROMPT.format(
                    resume=json.dumps(resume_summary(json_data), indent=2, default=str),
                    job=json.dumps(job_requirements(job), indent=2),
                ),
            },
        ],
        user_id=user_id,
        api_key=api_key,
        error_cls=ScoringError,
        error_message=_FAILED,
        json_mode=True,
        temperature=0.1,
    )

    result = parse_llm_json(content, MatchResult)
    if not result.ok:
        logger.warning("Match score response unparseable resume_id=%s job_id=%s error=%s", resume.id, job.id, result.error)
        raise ScoringError(f"{_FAILED} The scoring response could not be read.")

    logger.info(
        "Match scored resume_id=%s job_id=%s overall=%d",
        resume.id,
        job.id,
        result.payload.overallScore,
    )
    return result.payload


def _apply(score: MatchScore, result: MatchResult) -> None:
    score.overall_score = result.overallScore
    score.technical_score = result.technicalScore
    score.experience_score = result.experienceScore
    score.soft_skills_score = result.softSkillsScore
    score.location_score = result.locationScore
    score.recommendations = list(result.recommendations)
    score.created_at = datetime.utcnow()


def save_match_score(db: Session, resume_id: int, job_id: int, result: MatchResult) -> MatchScore:
    """Upsert the single current score for (resume_id, job_id). Last write wins."""
    score = (
        db.query(MatchScore)
        .filter(MatchScore.resume_id == resume_id, MatchScore.job_id == job_id)
        .first()
    )
    if score is None:
        score = MatchScore(resume_id=resume_id, job_id=job_id)
        _apply(score, result)
        db.add(score)
        try:
            db.commit()
        except IntegrityError:
            # A concurrent request inserted the pair first; overwrite its row.
            db.rollback()
            score = (
                db.query(MatchScore)
                .filter(MatchScore.resume_id == resume_id, MatchScore.job_id == job_id)
                .one()
            )
            _apply(score, result)
            db.commit()
    else:
        _apply(score, result)
        db.commit()
    db.refresh(score)
    return score


def get_match_score(db: Session, resume_id: int, job_id: int) -> MatchScore | None:
    return (
        db.query(MatchScore)
        .filter(MatchScore.resume_id == resume_id, MatchScore.job_id == job_id)
        .first()
    )
