"""
Pytest fixtures for JobPilot API tests.
Uses in-memory SQLite, provides test user, auth token, sample resume/job and
helpers for mocking the job board (requests) and the LLM provider (OpenAI).
"""
import json
import os
import tempfile
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import requests
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Use in-memory SQLite for tests - set before config/session load
# Must override any .env DATABASE_URL
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["OPENAI_API_KEY"] = ""
os.environ["ADZUNA_APP_ID"] = ""
os.environ["ADZUNA_API_KEY"] = ""
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="jobpilot-uploads-")

from jobpilot.app.db.base import Base
from jobpilot.main import app
from jobpilot.app.core.dependencies import get_db
from jobpilot.app.core.security import create_access_token, get_password_hash
from jobpilot.app.models.job_posting import JobPosting
from jobpilot.app.models.resume import Resume
from jobpilot.app.models.user import User

# In-memory SQLite for tests - StaticPool ensures all sessions share same DB
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Patch the session module so app (and the external call logger) use our test engine
import jobpilot.app.db.session as session_module
session_module.engine = engine
session_module.SessionLocal = TestingSessionLocal


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

SAMPLE_RESUME = {
    "basics": {
        "name": "Ada Lovelace",
        "label": "Senior Frontend Engineer",
        "email": "ada@example.com",
        "location": {"city": "San Francisco", "region": "CA", "countryCode": "US"},
    },
    "work": [
        {
            "name": "Analytical Engines",
            "position": "Senior Frontend Engineer",
            "startDate": "2019-01",
            "highlights": ["Led React migration", "Mentored four engineers"],
        }
    ],
    "education": [{"institution": "University of London", "area": "Mathematics"}],
    "skills": [{"name": "Frontend", "keywords": ["React", "TypeScript", "GraphQL"]}],
}


@pytest.fixture(scope="function")
def db_session():
    """Create tables and a fresh DB session per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_user(db_session):
    """Create a test user in the DB (no third-party credentials)."""
    user = User(
        id=1,
        username="testuser",
        email="test@example.com",
        hashed_password=get_password_hash("testpass123"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session):
    user = User(id=2, username="otheruser", hashed_password=get_password_hash("otherpass123"))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def credentialed_user(db_session, test_user):
    """Test user with OpenAI and Adzuna credentials stored."""
    test_user.openai_api_key = "sk-user-key"
    test_user.adzuna_app_id = "app-123"
    test_user.adzuna_api_key = "key-456"
    db_session.commit()
    db_session.refresh(test_user)
    return test_user


@pytest.fixture
def auth_headers(test_user):
    """Bearer token for test user."""
    token = create_access_token(data={"sub": str(test_user.id), "username": test_user.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(db_session, test_user):
    """TestClient with DB and test user pre-seeded."""
    return TestClient(app)


@pytest.fixture
def sample_resume(db_session, test_user):
    resume = Resume(user_id=test_user.id, name="Main resume", json_data=SAMPLE_RESUME, is_default=True)
    db_session.add(resume)
    db_session.commit()
    db_session.refresh(resume)
    return resume


@pytest.fixture
def sample_job(db_session, test_user):
    job = JobPosting(
        user_id=test_user.id,
        title="Senior React Developer",
        company="Acme",
        description="Senior React Developer, 3+ years, remote. TypeScript and GraphQL a plus.",
        tech_stack=["React", "TypeScript", "GraphQL"],
        soft_skills=["Communication"],
        experience_years="3+ years",
        location="Remote",
        employment_type="Full-time",
    )
    db_session.add(job)
    db_session.commit()
    db_session.refresh(job)
    return job


def make_response(status_code=200, body=None, text=None, url="https://api.example.com/"):
    """Real requests.Response carrying a JSON body (or raw text)."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode("utf-8")
        response.headers["Content-Type"] = "text/html"
    return response


@pytest.fixture
def http_response():
    return make_response


def completion(content):
    """Object shaped like an OpenAI chat completion."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def mock_openai():
    """
    Patch the OpenAI client class used by the pipeline. Set
    `mock.create.return_value` / `side_effect` per test; `mock.cls` is the
    patched constructor.
    """
    with patch("jobpilot.app.services.llm.OpenAI") as cls:
        instance = MagicMock()
        cls.return_value = instance
        yield SimpleNamespace(cls=cls, create=instance.chat.completions.create, client=instance)


@pytest.fixture
def llm_reply(mock_openai):
    """Make the mocked provider answer with the given content (dict -> JSON)."""
    def _reply(content):
        text = json.dumps(content) if isinstance(content, (dict, list)) else content
        mock_openai.create.return_value = completion(text)
        return mock_openai
    return _reply
