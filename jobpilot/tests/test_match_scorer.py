"""Tests for the match scorer and /api/match-score"""
import json

import pytest

from jobpilot.app.core.config import INSUFFICIENT_DATA_RECOMMENDATION
from jobpilot.app.core.exceptions import ScoringError
from jobpilot.app.models.job_posting import JobPosting
from jobpilot.app.models.match_score import MatchScore
from jobpilot.app.models.resume import Resume
from jobpilot.app.services.match_scorer import calculate_match_score

SCORES = {
    "overallScore": 82,
    "technicalScore": 90,
    "experienceScore": 75,
    "softSkillsScore": 70,
    "locationScore": 100,
    "recommendations": ["Mention GraphQL projects", "Quantify the React migration"],
}


def test_empty_resume_scores_zero_without_provider_call(sample_job, mock_openai):
    resume = Resume(id=99, user_id=1, name="Empty", json_data={})
    result = calculate_match_score(resume, sample_job, user_id=1, api_key="sk-test")
    assert result.overallScore == 0
    assert result.technicalScore == 0
    assert result.locationScore == 0
    assert result.recommendations == [INSUFFICIENT_DATA_RECOMMENDATION]
    assert "insufficient data" in result.recommendations[0].lower()
    mock_openai.create.assert_not_called()


def test_resume_with_only_blank_sections_is_insufficient(sample_job, mock_openai):
    resume = Resume(id=99, user_id=1, name="Blank", json_data={"basics": {"name": ""}, "work": [], "skills": []})
    result = calculate_match_score(resume, sample_job, user_id=1, api_key="sk-test")
    assert result.overallScore == 0
    mock_openai.create.assert_not_called()


def test_job_without_stack_or_description_is_insufficient(sample_resume, mock_openai):
    job = JobPosting(id=99, user_id=1, title="Mystery role", company="", description="", tech_stack=[])
    result = calculate_match_score(sample_resume, job, user_id=1, api_key="sk-test")
    assert result.overallScore == 0
    assert result.recommendations == [INSUFFICIENT_DATA_RECOMMENDATION]
    mock_openai.create.assert_not_called()


def test_scores_are_taken_from_model(sample_resume, sample_job, llm_reply):
    llm_reply(SCORES)
    result = calculate_match_score(sample_resume, sample_job, user_id=1, api_key="sk-test")
    assert result.overallScore == 82
    assert result.technicalScore == 90
    assert result.recommendations == SCORES["recommendations"]


def test_scores_are_rounded_and_clamped(sample_resume, sample_job, llm_reply):
    llm_reply({
        "overallScore": 87.6,
        "technicalScore": 150,
        "experienceScore": -5,
        "softSkillsScore": "64",
        "locationScore": None,
    })
    result = calculate_match_score(sample_resume, sample_job, user_id=1, api_key="sk-test")
    assert result.overallScore == 88
    assert result.technicalScore == 100
    assert result.experienceScore == 0
    assert result.softSkillsScore == 64
    assert result.locationScore == 0
    assert result.recommendations == []


def test_overall_is_not_recomputed_from_sub_scores(sample_resume, sample_job, llm_reply):
    llm_reply({**SCORES, "overallScore": 10})
    result = calculate_match_score(sample_resume, sample_job, user_id=1, api_key="sk-test")
    assert result.overallScore == 10


def test_prompt_carries_resume_and_job_data(sample_resume, sample_job, llm_reply, mock_openai):
    llm_reply(SCORES)
    calculate_match_score(sample_resume, sample_job, user_id=1, api_key="sk-test")
    kwargs = mock_openai.create.call_args.kwargs
    prompt = kwargs["messages"][-1]["content"]
    assert "Led React migration" in prompt
    assert "GraphQL" in prompt
    assert "3+ years" in prompt
    assert "San Francisco, CA, US" in prompt
    assert kwargs["response_format"] == {"type": "json_object"}


def test_unparseable_score_raises(sample_resume, sample_job, llm_reply):
    llm_reply("{not json")
    with pytest.raises(ScoringError):
        calculate_match_score(sample_resume, sample_job, user_id=1, api_key="sk-test")


def test_reply_without_overall_score_raises(sample_resume, sample_job, llm_reply):
    llm_reply({"error": "model overloaded, try later"})
    with pytest.raises(ScoringError):
        calculate_match_score(sample_resume, sample_job, user_id=1, api_key="sk-test")


def test_non_numeric_overall_score_raises(sample_resume, sample_job, llm_reply):
    llm_reply({**SCORES, "overallScore": "high"})
    with pytest.raises(ScoringError):
        calculate_match_score(sample_resume, sample_job, user_id=1, api_key="sk-test")


def test_provider_error_raises(sample_resume, sample_job, mock_openai):
    mock_openai.create.side_effect = Exception("timeout")
    with pytest.raises(ScoringError) as exc:
        calculate_match_score(sample_resume, sample_job, user_id=1, api_key="sk-test")
    assert "Failed to calculate match score" in exc.value.message


# --- API ---


def test_match_score_requires_auth(client):
    r = client.post("/api/match-score", json={"resumeId": 1, "jobId": 1})
    assert r.status_code == 401


def test_scoring_twice_leaves_one_row(
    client, auth_headers, credentialed_user, sample_resume, sample_job, llm_reply, mock_openai, db_session
):
    llm_reply(SCORES)
    body = {"resumeId": sample_resume.id, "jobId": sample_job.id}
    r1 = client.post("/api/match-score", json=body, headers=auth_headers)
    assert r1.status_code == 200
    assert r1.json()["overallScore"] == 82

    mock_openai.create.return_value.choices[0].message.content = json.dumps({**SCORES, "overallScore": 55})
    r2 = client.post("/api/match-score", json=body, headers=auth_headers)
    assert r2.status_code == 200
    assert r2.json()["overallScore"] == 55
    assert r2.json()["id"] == r1.json()["id"]

    rows = db_session.query(MatchScore).filter(
        MatchScore.resume_id == sample_resume.id, MatchScore.job_id == sample_job.id
    ).all()
    assert len(rows) == 1
    assert rows[0].overall_score == 55


def test_get_match_score(client, auth_headers, credentialed_user, sample_resume, sample_job, llm_reply):
    llm_reply(SCORES)
    client.post("/api/match-score", json={"resumeId": sample_resume.id, "jobId": sample_job.id}, headers=auth_headers)
    r = client.get(f"/api/match-score/{sample_resume.id}/{sample_job.id}", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["technicalScore"] == 90
    assert r.json()["recommendations"] == SCORES["recommendations"]


def test_get_match_score_missing_404(client, auth_headers, sample_resume, sample_job):
    r = client.get(f"/api/match-score/{sample_resume.id}/{sample_job.id}", headers=auth_headers)
    assert r.status_code == 404


def test_match_score_unknown_resume_404(client, auth_headers, sample_job):
    r = client.post("/api/match-score", json={"resumeId": 999, "jobId": sample_job.id}, headers=auth_headers)
    assert r.status_code == 404


def test_match_score_provider_failure_502(
    client, auth_headers, credentialed_user, sample_resume, sample_job, mock_openai, db_session
):
    mock_openai.create.side_effect = Exception("boom")
    r = client.post(
        "/api/match-score", json={"resumeId": sample_resume.id, "jobId": sample_job.id}, headers=auth_headers
    )
    assert r.status_code == 502
    assert db_session.query(MatchScore).count() == 0


def test_match_score_error_reply_502_and_nothing_saved(
    client, auth_headers, credentialed_user, sample_resume, sample_job, llm_reply, db_session
):
    llm_reply({"error": "model overloaded, try later"})
    r = client.post(
        "/api/match-score", json={"resumeId": sample_resume.id, "jobId": sample_job.id}, headers=auth_headers
    )
    assert r.status_code == 502
    assert db_session.query(MatchScore).count() == 0
