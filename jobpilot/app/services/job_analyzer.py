"""
Job description analysis: free-text posting -> structured job fields via one LLM call.
"""
from jobpilot.app.core.exceptions import AnalysisError
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.schemas.job import JobAnalysis
from jobpilot.app.services.llm import chat_completion, parse_llm_json

logger = get_logger("services.job_analyzer")

MAX_DESCRIPTION_CHARS = 12000
_FAILED = "Failed to analyze job description."

ANALYZE_SYSTEM_PROMPT = """You are an expert job description analyzer. Extract structured information from job postings.

Extract:
- title: the job title / position
- company: the hiring company's name
- techStack: technical skills, programming languages, frameworks, databases and tools mentioned
- softSkills: soft skills, interpersonal skills and leadership qualities mentioned
- experienceYears: years of experience required, worded as in the posting (e.g. "3+ years", "3-5 years", "Entry level")
- location: work location, or "Remote" for remote roles
- employmentType: e.g. "Full-time", "Part-time", "Contract", "Internship"

Use an empty string or empty array for anything the posting does not state. Do not guess.

Return only valid JSON in exactly this format:
{"title": "string", "company": "string", "techStack": ["string"], "softSkills": ["string"],
 "experienceYears": "string", "location": "string", "employmentType": "string"}"""

ANALYZE_USER_PROMPT = "Analyze this job description and extract the structured information:\n\n{description}"


def analyze_job_description(description: str, user_id: int | None, api_key: str | None = None) -> JobAnalysis:
    """
    Parse a raw job posting into structured fields.

    Missing fields come back blank; raises AnalysisError when the provider
    call fails or the response is not a JSON object.
    """
    text = (description or "").strip()
    if not text:
        raise AnalysisError("Job description is required.")

    content = chat_completion(
        [
            {"role": "system", "content": ANALYZE_SYSTEM_PROMPT},
            {"role": "user", "content": ANALYZE_USER_PROMPT.format(description=text[:MAX_DESCRIPTION_CHARS])},
        ],
        user_id=user_id,
        api_key=api_key,
        error_cls=AnalysisError,
        error_message=_FAILED,
        json_mode=True,
        temperature=0.1,
    )

    result = parse_llm_json(content, JobAnalysis)
    if not result.ok:
        logger.warning("Job analysis response unparseable user_id=%s error=%s", user_id, result.error)
        raise AnalysisError(f"{_FAILED} The analysis response could not be read.")

    analysis = result.payload
    logger.info(
        "Job analyzed user_id=%s title=%s tech=%d soft=%d",
        user_id,
        analysis.title[:60],
        len(analysis.techStack),
        len(analysis.softSkills),
    )
    return analysis
