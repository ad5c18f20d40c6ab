"""Tests for saved job postings, upload, URL analysis and search result import"""
import json
from unittest.mock import patch

import pytest
import requests

from jobpilot.app.models.external_log import ExternalLog
from jobpilot.app.models.job_posting import JobPosting
from jobpilot.app.models.match_score import MatchScore
from jobpilot.app.services.job_description_scraper import parse_job_page

ANALYSIS = {
    "title": "Backend Engineer",
    "company": "",
    "techStack": ["Python", "PostgreSQL"],
    "softSkills": ["Ownership"],
    "experienceYears": "5+ years",
    "location": "",
    "employmentType": "Full-time",
}

LONG_DESCRIPTION = (
    "<p>We are hiring a Backend Engineer to build our payments platform.</p>"
    "<h3>Responsibilities</h3><ul><li>Design and operate Python services</li>"
    "<li>Own PostgreSQL schemas and migrations</li></ul>"
    "<h3>Requirements</h3><ul><li>5+ years of backend experience</li>"
    "<li>Strong skills in Python, SQL and distributed systems</li></ul>"
)

JSON_LD_PAGE = f"""<html><head><title>Careers</title>
<script type="application/ld+json">{json.dumps({
    "@context": "https://schema.org",
    "@type": "JobPosting",
    "title": "Backend Engineer",
    "description": LONG_DESCRIPTION,
    "hiringOrganization": {"@type": "Organization", "name": "Globex"},
    "jobLocation": {"@type": "Place", "address": {"addressLocality": "Berlin", "addressCountry": "DE"}},
})}</script></head><body><h1>Backend Engineer</h1></body></html>"""

SELECTOR_PAGE = f"""<html><head><title>Backend Engineer - Globex</title></head><body>
<nav>Home Jobs About</nav>
<div class="job-description">{LONG_DESCRIPTION}</div>
<footer>All rights reserved</footer></body></html>"""


@pytest.fixture
def mock_request():
    with patch("jobpilot.app.services.api_logger.requests.request") as m:
        yield m


# --- Page parsing ---


def test_parse_json_ld_posting():
    page = parse_job_page(JSON_LD_PAGE, "https://jobs.example.com/1")
    assert page.method == "json-ld"
    assert page.title == "Backend Engineer"
    assert page.company == "Globex"
    assert "Berlin" in page.location
    assert "payments platform" in page.description
    assert "<li>" not in page.description


def test_parse_falls_back_to_selectors():
    page = parse_job_page(SELECTOR_PAGE)
    assert page.method == "selectors"
    assert "Responsibilities" in page.description
    assert "All rights reserved" not in page.description


def test_parse_page_without_description():
    html = "<html><body><p>" + "Nothing to see here. " * 3 + "</p></body></html>" + " " * 100
    assert parse_job_page(html) is None


# --- Saved postings ---


def _job_body(**overrides):
    body = {
        "title": "Backend Engineer",
        "company": "Globex",
        "description": "Python and PostgreSQL",
        "techStack": ["Python"],
        "experienceYears": "5+ years",
    }
    body.update(overrides)
    return body


def test_jobs_require_auth(client):
    assert client.get("/api/jobs").status_code == 401


def test_create_and_list_jobs(client, auth_headers):
    r = client.post("/api/jobs", json=_job_body(), headers=auth_headers)
    assert r.status_code == 201
    data = r.json()
    assert data["source"] == "manual"
    assert data["techStack"] == ["Python"]

    r = client.get("/api/jobs", headers=auth_headers)
    assert [j["id"] for j in r.json()] == [data["id"]]


def test_create_job_requires_description(client, auth_headers):
    r = client.post("/api/jobs", json=_job_body(description=""), headers=auth_headers)
    assert r.status_code == 422


def test_update_job_keeps_unsent_fields(client, auth_headers, sample_job):
    r = client.put(
        f"/api/jobs/{sample_job.id}",
        json={"techStack": ["React", "Next.js"], "location": "Berlin"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    data = r.json()
    assert data["techStack"] == ["React", "Next.js"]
    assert data["location"] == "Berlin"
    assert data["title"] == "Senior React Developer"
    assert data["experienceYears"] == "3+ years"


def test_foreign_job_is_not_found(client, auth_headers, other_user, db_session):
    job = JobPosting(user_id=other_user.id, title="Hidden", company="", description="x")
    db_session.add(job)
    db_session.commit()
    assert client.get(f"/api/jobs/{job.id}", headers=auth_headers).status_code == 404
    assert client.delete(f"/api/jobs/{job.id}", headers=auth_headers).status_code == 404


def test_delete_job_removes_scores(client, auth_headers, sample_resume, sample_job, db_session):
    db_session.add(MatchScore(
        resume_id=sample_resume.id,
        job_id=sample_job.id,
        overall_score=50,
        technical_score=50,
        experience_score=50,
        soft_skills_score=50,
        location_score=50,
        recommendations=[],
    ))
    db_session.commit()
    job_id = sample_job.id
    r = client.delete(f"/api/jobs/{job_id}", headers=auth_headers)
    assert r.status_code == 204
    db_session.expire_all()
    assert db_session.query(MatchScore).count() == 0
    assert client.get(f"/api/jobs/{job_id}", headers=auth_headers).status_code == 404


# --- Upload ---


def test_upload_txt_is_analyzed(client, auth_headers, credentialed_user, llm_reply, mock_openai):
    llm_reply(ANALYSIS)
    r = client.post(
        "/api/jobs/upload",
        files={"file": ("posting.txt", b"Backend Engineer. Python, PostgreSQL. 5+ years.", "text/plain")},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["techStack"] == ["Python", "PostgreSQL"]
    prompt = mock_openai.create.call_args.kwargs["messages"][-1]["content"]
    assert "Backend Engineer. Python, PostgreSQL." in prompt


def test_upload_rejects_unsupported_extension(client, auth_headers, mock_openai):
    r = client.post(
        "/api/jobs/upload",
        files={"file": ("posting.exe", b"MZ", "application/octet-stream")},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert "Invalid file type" in r.json()["detail"]
    mock_openai.create.assert_not_called()


def test_upload_rejects_empty_file(client, auth_headers):
    r = client.post("/api/jobs/upload", files={"file": ("posting.txt", b"", "text/plain")}, headers=auth_headers)
    assert r.status_code == 400


# --- Analyze from URL ---


def test_analyze_url_fills_blanks_from_page(
    client, auth_headers, credentialed_user, llm_reply, mock_openai, mock_request, http_response, db_session
):
    mock_request.return_value = http_response(200, text=JSON_LD_PAGE)
    llm_reply(ANALYSIS)
    r = client.post("/api/jobs/analyze-url", json={"url": "https://jobs.example.com/1"}, headers=auth_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["title"] == "Backend Engineer"
    assert data["company"] == "Globex"
    assert "Berlin" in data["location"]
    assert data["experienceYears"] == "5+ years"

    args, kwargs = mock_request.call_args
    assert args == ("GET", "https://jobs.example.com/1")
    assert "User-Agent" in kwargs["headers"]
    services = {log.service for log in db_session.query(ExternalLog).all()}
    assert services == {"JobPage", "OpenAI"}


def test_analyze_url_rejects_non_http(client, auth_headers, mock_request):
    r = client.post("/api/jobs/analyze-url", json={"url": "ftp://jobs.example.com/1"}, headers=auth_headers)
    assert r.status_code == 400
    mock_request.assert_not_called()


def test_analyze_url_upstream_status_502(client, auth_headers, mock_request, http_response):
    mock_request.return_value = http_response(403, text="Forbidden")
    r = client.post("/api/jobs/analyze-url", json={"url": "https://jobs.example.com/1"}, headers=auth_headers)
    assert r.status_code == 502
    assert r.json()["detail"] == "Job page returned HTTP 403"


def test_analyze_url_unreachable_503(client, auth_headers, mock_request):
    mock_request.side_effect = requests.ConnectionError("dns failure")
    r = client.post("/api/jobs/analyze-url", json={"url": "https://jobs.example.com/1"}, headers=auth_headers)
    assert r.status_code == 503


def test_analyze_url_without_description_400(client, auth_headers, mock_request, http_response, mock_openai):
    mock_request.return_value = http_response(200, text="<html><body>" + "<p>Login</p>" * 20 + "</body></html>")
    r = client.post("/api/jobs/analyze-url", json={"url": "https://jobs.example.com/1"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Could not find a job description at that URL"
    mock_openai.create.assert_not_called()


# --- Import from search ---


SEARCH_RESULT = {
    "id": "4512345678",
    "title": "Senior React Developer",
    "company": "Acme",
    "description": "Build user interfaces with React.",
    "location": "San Francisco, CA",
    "salaryMin": 120000,
    "salaryMax": None,
    "employmentType": "permanent",
    "datePosted": "2026-10-01T10:00:00Z",
    "url": "https://www.adzuna.com/land/ad/4512345678",
    "source": "adzuna",
}


def test_import_search_result(client, auth_headers):
    r = client.post("/api/jobs/import", json=SEARCH_RESULT, headers=auth_headers)
    assert r.status_code == 201
    data = r.json()
    assert data["source"] == "adzuna"
    assert data["externalId"] == "4512345678"
    assert data["url"] == SEARCH_RESULT["url"]
    assert data["company"] == "Acme"


def test_import_twice_returns_same_posting(client, auth_headers, db_session):
    first = client.post("/api/jobs/import", json=SEARCH_RESULT, headers=auth_headers).json()
    second = client.post("/api/jobs/import", json=SEARCH_RESULT, headers=auth_headers).json()
    assert first["id"] == second["id"]
    assert db_session.query(JobPosting).count() == 1
