from jobpilot.app.models.user import User
from jobpilot.app.models.resume import Resume
from jobpilot.app.models.job_posting import JobPosting
from jobpilot.app.models.match_score import MatchScore
from jobpilot.app.models.cover_letter import CoverLetter
from jobpilot.app.models.application import Application
from jobpilot.app.models.external_log import ExternalLog
