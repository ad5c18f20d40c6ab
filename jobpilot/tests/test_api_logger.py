"""Tests for the external call logger and GET /api/external-logs"""
import asyncio
from unittest.mock import patch

import pytest
import requests
from starlette.requests import Request

from jobpilot.app.models.external_log import ExternalLog
from jobpilot.app.services.api_logger import api_call_options_from_request, audited_call, log_api_call

ENDPOINT = "https://api.example.com/v1/things"


@pytest.fixture
def mock_request():
    with patch("jobpilot.app.services.api_logger.requests.request") as m:
        yield m


def test_success_is_logged_after_the_call(db_session, test_user, mock_request, http_response):
    def _respond(*args, **kwargs):
        # nothing is written before the response exists
        assert db_session.query(ExternalLog).count() == 0
        return http_response(200, {"ok": True})

    mock_request.side_effect = _respond
    response = log_api_call("Example", ENDPOINT, "post", {"q": "x"}, user_id=test_user.id)
    assert response.status_code == 200

    log = db_session.query(ExternalLog).one()
    assert log.service == "Example"
    assert log.endpoint == ENDPOINT
    assert log.method == "POST"
    assert log.request_data == {"q": "x"}
    assert log.response_data == {"ok": True}
    assert log.status_code == 200
    assert log.success is True
    assert log.error_message is None
    assert log.response_time_ms >= 0


def test_non_2xx_is_logged_as_failure(db_session, mock_request, http_response):
    mock_request.return_value = http_response(500, {"error": "boom"})
    response = log_api_call("Example", ENDPOINT, "GET")
    assert response.status_code == 500
    log = db_session.query(ExternalLog).one()
    assert log.success is False
    assert log.status_code == 500
    assert log.error_message == "HTTP 500"
    assert log.user_id is None


def test_non_json_response_body_is_not_recorded(db_session, mock_request, http_response):
    mock_request.return_value = http_response(200, text="<html>hello</html>")
    log_api_call("Example", ENDPOINT, "GET")
    assert db_session.query(ExternalLog).one().response_data is None


def test_transport_failure_is_logged_and_reraised(db_session, mock_request):
    error = requests.ConnectionError("connection refused")
    mock_request.side_effect = error
    with pytest.raises(requests.ConnectionError) as exc:
        log_api_call("Example", ENDPOINT, "GET")
    assert exc.value is error
    log = db_session.query(ExternalLog).one()
    assert log.status_code == 0
    assert log.success is False
    assert log.error_message == "connection refused"


def test_log_write_failure_does_not_affect_caller(db_session, mock_request, http_response):
    original = http_response(201, {"id": 5})
    mock_request.return_value = original
    with patch(
        "jobpilot.app.services.api_logger.write_external_log",
        side_effect=RuntimeError("database is locked"),
    ):
        response = log_api_call("Example", ENDPOINT, "POST", {"a": 1})
    assert response is original
    assert db_session.query(ExternalLog).count() == 0


def test_get_sends_no_body(db_session, mock_request, http_response):
    mock_request.return_value = http_response(200, {})
    log_api_call("Example", ENDPOINT, "GET", {"app_key": "***"})
    args, kwargs = mock_request.call_args
    assert args == ("GET", ENDPOINT)
    assert "json" not in kwargs
    assert kwargs["headers"]["Content-Type"] == "application/json"


def test_post_sends_json_body_and_extra_headers(db_session, mock_request, http_response):
    mock_request.return_value = http_response(200, {})
    log_api_call("Example", ENDPOINT, "POST", {"a": 1}, headers={"Authorization": "Bearer secret"})
    _, kwargs = mock_request.call_args
    assert kwargs["json"] == {"a": 1}
    assert kwargs["headers"]["Authorization"] == "Bearer secret"
    assert kwargs["headers"]["Content-Type"] == "application/json"


def test_log_endpoint_replaces_recorded_url(db_session, mock_request, http_response):
    mock_request.return_value = http_response(200, {})
    log_api_call("Example", ENDPOINT + "?key=secret", "GET", log_endpoint=ENDPOINT + "?key=***")
    args, _ = mock_request.call_args
    assert args[1].endswith("key=secret")
    assert db_session.query(ExternalLog).one().endpoint.endswith("key=***")


# --- SDK calls ---


def test_audited_call_success(db_session):
    result = audited_call("OpenAI", "https://api.openai.com/v1/models", "get", lambda: {"data": []}, user_id=None)
    assert result == {"data": []}
    log = db_session.query(ExternalLog).one()
    assert log.status_code == 200
    assert log.method == "GET"
    assert log.success is True


def test_audited_call_uses_sdk_status_code(db_session):
    class ApiError(Exception):
        status_code = 401

    def _call():
        raise ApiError("invalid api key")

    with pytest.raises(ApiError):
        audited_call("OpenAI", "https://api.openai.com/v1/models", "GET", _call)
    log = db_session.query(ExternalLog).one()
    assert log.status_code == 401
    assert log.error_message == "invalid api key"


def test_audited_call_without_response_is_status_zero(db_session):
    def _call():
        raise TimeoutError("timed out")

    with pytest.raises(TimeoutError):
        audited_call("OpenAI", "https://api.openai.com/v1/chat/completions", "POST", _call)
    assert db_session.query(ExternalLog).one().status_code == 0


# --- Options from an inbound request ---


def _request(body: bytes) -> Request:
    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {"type": "http", "method": "POST", "path": "/", "headers": [], "query_string": b""}
    return Request(scope, receive)


def test_options_from_request_with_json_body(test_user):
    options = asyncio.run(
        api_call_options_from_request(_request(b'{"query": "react"}'), "Adzuna", ENDPOINT, "GET", user=test_user)
    )
    assert options == {
        "service": "Adzuna",
        "endpoint": ENDPOINT,
        "method": "GET",
        "request_data": {"query": "react"},
        "user_id": test_user.id,
    }


def test_options_from_request_without_body_or_user():
    options = asyncio.run(api_call_options_from_request(_request(b""), "OpenAI", ENDPOINT, "GET"))
    assert options["request_data"] is None
    assert options["user_id"] is None


def test_options_from_request_keeps_empty_object():
    options = asyncio.run(api_call_options_from_request(_request(b"{}"), "OpenAI", ENDPOINT, "GET"))
    assert options["request_data"] == {}


# --- API ---


def _seed_logs(db_session, user_id, service, count):
    for i in range(count):
        db_session.add(ExternalLog(
            user_id=user_id,
            service=service,
            endpoint=f"{ENDPOINT}/{i}",
            method="GET",
            status_code=200,
            success=True,
        ))
    db_session.commit()


def test_external_logs_requires_auth(client):
    assert client.get("/api/external-logs").status_code == 401


def test_external_logs_scoped_filtered_and_paginated(client, auth_headers, test_user, other_user, db_session):
    _seed_logs(db_session, test_user.id, "Adzuna", 3)
    _seed_logs(db_session, test_user.id, "OpenAI", 2)
    _seed_logs(db_session, other_user.id, "Adzuna", 4)

    r = client.get("/api/external-logs", headers=auth_headers)
    assert r.status_code == 200
    assert len(r.json()) == 5
    assert all(row["userId"] == test_user.id for row in r.json())

    r = client.get("/api/external-logs?service=Adzuna", headers=auth_headers)
    assert [row["service"] for row in r.json()] == ["Adzuna"] * 3

    first = client.get("/api/external-logs?limit=2&page=1", headers=auth_headers).json()
    second = client.get("/api/external-logs?limit=2&page=2", headers=auth_headers).json()
    assert len(first) == 2
    assert len(second) == 2
    assert {row["id"] for row in first}.isdisjoint({row["id"] for row in second})


def test_external_logs_newest_first(client, auth_headers, test_user, db_session):
    _seed_logs(db_session, test_user.id, "OpenAI", 3)
    ids = [row["id"] for row in client.get("/api/external-logs", headers=auth_headers).json()]
    assert ids == sorted(ids, reverse=True)


def test_external_logs_limit_bounds(client, auth_headers):
    assert client.get("/api/external-logs?limit=0", headers=auth_headers).status_code == 422
    assert client.get("/api/external-logs?limit=201", headers=auth_headers).status_code == 422
