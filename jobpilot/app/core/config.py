"""
Application configuration settings.
Loads from .env file first (overrides shell env for local dev), then pydantic reads from environment.
Production: set env vars in the platform (Docker, K8s, etc.); .env is optional.

All backend-related configs and constants are centralized here.
"""
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env path: jobpilot/.env (absolute path, works regardless of cwd)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = (_BASE_DIR / ".env").resolve()

# Load .env into environment BEFORE pydantic reads. override=True ensures .env
# values override any shell env. When .env doesn't exist (prod), this is a no-op.
if _ENV_FILE.exists():
    load_dotenv(_ENV_FILE, override=True)


class Settings(BaseSettings):
    """Application settings. Source: env vars (after dotenv load)."""

    # App
    app_name: str = "JobPilot"
    app_version: str = "1.0.0"
    port: int = 8001

    # Database
    database_url: str = "sqlite:///./jobpilot.db"

    # Auth
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Uploads (job description files)
    upload_dir: str = "uploads/jobs"
    max_upload_bytes: int = 5_000_000

    # OpenAI (application-wide fallback; users may store their own key)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"

    # Adzuna job board (application-wide fallback)
    adzuna_app_id: str = ""
    adzuna_api_key: str = ""
    adzuna_country: str = "us"
    adzuna_base_url: str = "https://api.adzuna.com/v1/api/jobs"
    adzuna_max_results_per_page: int = 50

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


# --- Constants (non-env, business config) ---

# Cover letter generation parameters (union of every tone/focus offered in the UI)
COVER_LETTER_TONES: tuple[str, ...] = (
    "professional",
    "friendly",
    "enthusiastic",
    "minimal",
    "confident",
    "casual",
)
COVER_LETTER_FOCUSES: tuple[str, ...] = (
    "technical",
    "leadership",
    "project",
    "innovation",
    "skills",
    "experience",
    "achievements",
    "culture",
)

# Application tracker
APPLICATION_STATUSES: tuple[str, ...] = ("draft", "applied", "interviewing", "offered", "rejected")
DEFAULT_APPLICATION_STATUS: str = "draft"

# Resumes
DEFAULT_RESUME_THEME: str = "modern"
RESUME_REQUIRED_SECTIONS: tuple[str, ...] = ("basics", "work", "skills")

# Job description upload
ALLOWED_JOB_UPLOAD_EXTENSIONS: frozenset[str] = frozenset({".txt", ".pdf", ".docx"})

# Job description scraper
MAX_HTML_BYTES: int = 2_000_000
SCRAPER_USER_AGENT: str = "Mozilla/5.0 (compatible; JobPilot/1.0)"

# Match scoring
INSUFFICIENT_DATA_RECOMMENDATION: str = (
    "Insufficient data to calculate a match score. Add skills and work history to the resume "
    "and make sure the job posting has a description or tech stack."
)
