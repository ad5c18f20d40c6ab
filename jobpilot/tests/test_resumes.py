"""Tests for /api/resumes"""
from jobpilot.app.models.application import Application
from jobpilot.app.models.cover_letter import CoverLetter
from jobpilot.app.models.match_score import MatchScore
from jobpilot.app.models.resume import Resume

SAMPLE_RESUME = {
    "basics": {"name": "Ada Lovelace", "label": "Senior Frontend Engineer"},
    "work": [{"name": "Analytical Engines", "position": "Senior Frontend Engineer"}],
    "skills": [{"name": "Frontend", "keywords": ["React", "TypeScript"]}],
}


def _create(client, headers, name="Resume", **extra):
    body = {"name": name, "jsonData": SAMPLE_RESUME}
    body.update(extra)
    return client.post("/api/resumes", json=body, headers=headers)


def test_resumes_require_auth(client):
    assert client.get("/api/resumes").status_code == 401


def test_create_resume(client, auth_headers):
    r = _create(client, auth_headers, name="Frontend", theme="classic")
    assert r.status_code == 201
    data = r.json()
    assert data["name"] == "Frontend"
    assert data["theme"] == "classic"
    assert data["jsonData"]["basics"]["name"] == "Ada Lovelace"
    assert data["isDefault"] is False


def test_create_resume_default_theme(client, auth_headers):
    assert _create(client, auth_headers).json()["theme"] == "modern"


def test_resume_document_needs_a_core_section(client, auth_headers):
    r = client.post(
        "/api/resumes",
        json={"name": "Bad", "jsonData": {"education": [{"institution": "MIT"}]}},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert "basics, work, skills" in r.json()["detail"]


def test_only_one_default_resume(client, auth_headers, db_session, test_user):
    first = _create(client, auth_headers, name="A", isDefault=True).json()
    second = _create(client, auth_headers, name="B", isDefault=True).json()
    defaults = db_session.query(Resume).filter(Resume.user_id == test_user.id, Resume.is_default.is_(True)).all()
    assert [r.id for r in defaults] == [second["id"]]

    r = client.put(f"/api/resumes/{first['id']}/default", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["isDefault"] is True
    db_session.expire_all()
    defaults = db_session.query(Resume).filter(Resume.user_id == test_user.id, Resume.is_default.is_(True)).all()
    assert [r.id for r in defaults] == [first["id"]]


def test_default_endpoint(client, auth_headers):
    assert client.get("/api/resumes/default", headers=auth_headers).status_code == 404
    created = _create(client, auth_headers, isDefault=True).json()
    r = client.get("/api/resumes/default", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["id"] == created["id"]


def test_list_puts_default_first(client, auth_headers):
    _create(client, auth_headers, name="Older default", isDefault=True)
    _create(client, auth_headers, name="Newer")
    names = [r["name"] for r in client.get("/api/resumes", headers=auth_headers).json()]
    assert names[0] == "Older default"


def test_patch_renames_without_touching_document(client, auth_headers, sample_resume):
    r = client.patch(f"/api/resumes/{sample_resume.id}", json={"name": "Renamed"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["name"] == "Renamed"
    assert r.json()["jsonData"]["work"][0]["highlights"] == ["Led React migration", "Mentored four engineers"]


def test_put_replaces_document(client, auth_headers, sample_resume):
    doc = {"basics": {"name": "Ada L."}, "skills": []}
    r = client.put(f"/api/resumes/{sample_resume.id}", json={"jsonData": doc}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["jsonData"] == doc


def test_put_invalid_document_400(client, auth_headers, sample_resume):
    r = client.put(f"/api/resumes/{sample_resume.id}", json={"jsonData": {}}, headers=auth_headers)
    assert r.status_code == 400


def test_foreign_resume_is_not_found(client, auth_headers, other_user, db_session):
    resume = Resume(user_id=other_user.id, name="Theirs", json_data=SAMPLE_RESUME)
    db_session.add(resume)
    db_session.commit()
    assert client.get(f"/api/resumes/{resume.id}", headers=auth_headers).status_code == 404
    assert client.patch(f"/api/resumes/{resume.id}", json={"name": "x"}, headers=auth_headers).status_code == 404


def test_delete_resume_cascades(client, auth_headers, sample_resume, sample_job, db_session, test_user):
    letter = CoverLetter(
        resume_id=sample_resume.id, job_id=sample_job.id, tone="professional", focus="technical", content="Hi"
    )
    db_session.add(letter)
    db_session.add(MatchScore(
        resume_id=sample_resume.id,
        job_id=sample_job.id,
        overall_score=70,
        technical_score=70,
        experience_score=70,
        soft_skills_score=70,
        location_score=70,
        recommendations=[],
    ))
    db_session.commit()
    application = Application(
        user_id=test_user.id, resume_id=sample_resume.id, job_id=sample_job.id, cover_letter_id=letter.id
    )
    db_session.add(application)
    db_session.commit()

    r = client.delete(f"/api/resumes/{sample_resume.id}", headers=auth_headers)
    assert r.status_code == 204

    db_session.expire_all()
    assert db_session.query(MatchScore).count() == 0
    assert db_session.query(CoverLetter).count() == 0
    kept = db_session.get(Application, application.id)
    assert kept is not None
    assert kept.resume_id is None
    assert kept.cover_letter_id is None
