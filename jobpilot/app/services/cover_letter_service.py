"""Cover letter generation from a stored resume + job posting."""
import json
from datetime import datetime

from sqlalchemy.orm import Session

from jobpilot.app.core.exceptions import GenerationError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.models.cover_letter import CoverLetter
from jobpilot.app.models.job_posting import JobPosting
from jobpilot.app.models.resume import Resume
from jobpilot.app.services.llm import chat_completion

logger = get_logger("services.cover_letter")

_FAILED = "Failed to generate cover letter."

TONE_INSTRUCTIONS = {
    "professional": "Write in a formal, professional tone suitable for corporate environments.",
    "friendly": "Write in a warm, approachable tone while maintaining professionalism.",
    "enthusiastic": "Write with energy and excitement, showing genuine interest in the role.",
    "minimal": "Write concisely and directly, focusing only on key qualifications.",
    "confident": "Write with assurance, stating qualifications plainly and without hedging.",
    "casual": "Write in a relaxed, conversational tone while staying respectful.",
}

FOCUS_INSTRUCTIONS = {
    "technical": "Emphasize technical skills, programming languages, and technical achievements.",
    "leadership": "Highlight leadership experience, team management, and strategic thinking.",
    "project": "Focus on project delivery, results achieved, and problem-solving abilities.",
    "innovation": "Showcase creative thinking, innovation, and cutting-edge technology experience.",
    "skills": "Map the candidate's strongest skills directly onto the job's requirements.",
    "experience": "Emphasize depth and relevance of work history for this role.",
    "achievements": "Lead with concrete, measurable accomplishments from past roles.",
    "culture": "Show alignment with the company's mission, values, and ways of working.",
}

COVER_LETTER_SYSTEM_PROMPT = """You are an expert cover letter writer. Create personalized, compelling cover letters that highlight the candidate's most relevant qualifications for the specific job.

Guidelines:
- Keep it to 3-4 paragraphs
- Start with a strong opening that mentions the specific role and company
- Highlight 2-3 most relevant qualifications that match job requirements
- Show genuine interest in the company and role
- End with a call to action
- Use specific examples from the resume when possible; do not invent experience or skills
- Avoid generic phrases and cliches

Tone: {tone}
Focus: {focus}"""

COVER_LETTER_USER_PROMPT = """Write a cover letter for this candidate applying to this job:

CANDIDATE INFO:
Name: {name}
Current Title: {label}
Email: {email}

RESUME HIGHLIGHTS:
{highlights}

JOB DETAILS:
Position: {job_title}
Company: {company}
Required Skills: {skills}
Experience: {experience}
Location: {location}

Create a compelling cover letter that demonstrates why this candidate is a strong fit for this role."""


def tone_instruction(tone: str) -> str:
    return TONE_INSTRUCTIONS.get(tone, TONE_INSTRUCTIONS["professional"])


def focus_instruction(focus: str) -> str:
    return FOCUS_INSTRUCTIONS.get(focus, FOCUS_INSTRUCTIONS["technical"])


def _section(json_data: dict, key: str, limit: int) -> list:
    value = json_data.get(key)
    return list(value[:limit]) if isinstance(value, list) else []


def build_cover_letter_messages(resume: Resume, job: JobPosting, tone: str, focus: str) -> list[dict[str, str]]:
    json_data = resume.json_data if isinstance(resume.json_data, dict) else {}
    basics = json_data.get("basics") if isinstance(json_data.get("basics"), dict) else {}
    highlights = {
        "work": _section(json_data, "work", 3),
        "skills": _section(json_data, "skills", 8),
        "education": _section(json_data, "education", 2),
    }
    return [
        {
            "role": "system",
            "content": COVER_LETTER_SYSTEM_PROMPT.format(tone=tone_instruction(tone), focus=focus_instruction(focus)),
        },
        {
            "role": "user",
            "content": COVER_LETTER_USER_PROMPT.format(
                name=basics.get("name") or "Candidate",
                label=basics.get("label") or "Professional",
                email=basics.get("email") or "",
                highlights=json.dumps(highlights, indent=2, default=str),
                job_title=job.title,
                company=job.company or "the company",
                skills=", ".join(job.tech_stack or []) or "Various",
                experience=job.experience_years or "Not specified",
                location=job.location or "Not specified",
            ),
        },
    ]


def generate_cover_letter(
    resume: Resume,
    job: JobPosting,
    tone: str,
    focus: str,
    user_id: int | None,
    api_key: str | None = None,
) -> str:
    """Generate letter text. Raises GenerationError on provider failure or empty content."""
    content = chat_completion(
        build_cover_letter_messages(resume, job, tone, focus),
        user_id=user_id,
        api_key=api_key,
        error_cls=GenerationError,
        error_message=_FAILED,
        temperature=0.7,
        max_tokens=1000,
    )
    if not content:
        raise GenerationError(f"{_FAILED} No cover letter content was generated.")
    logger.info(
        "Cover letter generated resume_id=%s job_id=%s tone=%s focus=%s chars=%d",
        resume.id, job.id, tone, focus, len(content),
    )
    return content


def save_cover_letter(db: Session, resume_id: int, job_id: int, tone: str, focus: str, content: str) -> CoverLetter:
    """Keep one current letter per (resume, job); regenerating overwrites it."""
    letter = (
        db.query(CoverLetter)
        .filter(CoverLetter.resume_id == resume_id, CoverLetter.job_id == job_id)
        .order_by(CoverLetter.updated_at.desc())
        .first()
    )
    if letter is None:
        letter = CoverLetter(resume_id=resume_id, job_id=job_id, tone=tone, focus=focus, content=content)
        db.add(letter)
    else:
        letter.tone = tone
        letter.focus = focus
        letter.content = content
        letter.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(letter)
    return letter


def get_cover_letter(db: Session, resume_id: int, job_id: int) -> CoverLetter | None:
    return (
        db.query(CoverLetter)
        .filter(CoverLetter.resume_id == resume_id, CoverLetter.job_id == job_id)
        .order_by(CoverLetter.updated_at.desc())
        .first()
    )


def update_cover_letter_content(db: Session, letter: CoverLetter, content: str) -> CoverLetter:
    letter.content = content
    letter.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(letter)
    return letter
