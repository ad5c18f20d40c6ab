"""
External call logger. Every outbound third-party call (job board, job pages,
LLM provider) goes through here so it lands in the external_logs audit table.

Ordering: the network call always happens first, the audit write second.
A transport failure is still audited (status_code=0) and then re-raised.
A failed audit write is logged and dropped; the caller always gets the real
response or the real exception.
"""
from __future__ import annotations

import json
import time
from typing import Any, Callable, TypeVar

import requests
from fastapi import Request

from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.db import session as db_session
from jobpilot.app.models.external_log import ExternalLog

logger = get_logger("services.api_logger")

T = TypeVar("T")

JSON_HEADERS = {"Content-Type": "application/json"}


def write_external_log(**fields: Any) -> None:
    """Persist one audit record in its own session (never the request's session)."""
    db = db_session.SessionLocal()
    try:
        db.add(ExternalLog(**fields))
        db.commit()
    finally:
        db.close()


def _record(**fields: Any) -> None:
    try:
        write_external_log(**fields)
    except Exception as e:
        logger.warning(
            "External log write failed service=%s endpoint=%s error=%s",
            fields.get("service"),
            str(fields.get("endpoint") or "")[:120],
            e,
        )


def _response_payload(response: requests.Response) -> Any:
    """JSON body of the response, or None when it is empty or not JSON."""
    try:
        if not response.content:
            return None
        return response.json()
    except ValueError:
        return None


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def log_api_call(
    service: str,
    endpoint: str,
    method: str,
    request_data: Any = None,
    user_id: int | None = None,
    *,
    headers: dict[str, str] | None = None,
    log_endpoint: str | None = None,
) -> requests.Response:
    """
    Perform an HTTP call with requests and audit it.

    request_data is sent as the JSON body for non-GET methods and is always
    recorded. headers are sent but never recorded. log_endpoint replaces the
    endpoint in the audit record (e.g. a URL with credentials masked).
    """
    method = method.upper()
    kwargs: dict[str, Any] = {"headers": {**JSON_HEADERS, **(headers or {})}}
    if request_data is not None and method != "GET":
        kwargs["json"] = request_data

    record = {
        "service": service,
        "endpoint": log_endpoint or endpoint,
        "method": method,
        "request_data": request_data,
        "user_id": user_id,
    }
    started = time.monotonic()
    try:
        response = requests.request(method, endpoint, **kwargs)
    except Exception as e:
        _record(
            **record,
            response_data=None,
            status_code=0,
            success=False,
            error_message=str(e),
            response_time_ms=_elapsed_ms(started),
        )
        raise

    _record(
        **record,
        response_data=_response_payload(response),
        status_code=response.status_code,
        success=response.ok,
        error_message=None if response.ok else f"HTTP {response.status_code}",
        response_time_ms=_elapsed_ms(started),
    )
    logger.debug("External call service=%s method=%s status=%s", service, method, response.status_code)
    return response


def _sdk_payload(result: Any) -> Any:
    dump = getattr(result, "model_dump", None)
    if not callable(dump):
        return None
    try:
        data = dump(mode="json")
    except Exception:
        return None
    return data if isinstance(data, dict) else None


def audited_call(
    service: str,
    endpoint: str,
    method: str,
    call: Callable[[], T],
    request_data: Any = None,
    user_id: int | None = None,
) -> T:
    """
    Audit a call made through a provider SDK (OpenAI). Same ordering and
    isolation as log_api_call: status 200 on success, the SDK error's
    status_code on API errors, 0 when no response was received.
    """
    record = {
        "service": service,
        "endpoint": endpoint,
        "method": method.upper(),
        "request_data": request_data,
        "user_id": user_id,
    }
    started = time.monotonic()
    try:
        result = call()
    except Exception as e:
        status_code = getattr(e, "status_code", None)
        _record(
            **record,
            response_data=None,
            status_code=status_code if isinstance(status_code, int) else 0,
            success=False,
            error_message=str(e),
            response_time_ms=_elapsed_ms(started),
        )
        raise

    _record(
        **record,
        response_data=_sdk_payload(result),
        status_code=200,
        success=True,
        error_message=None,
        response_time_ms=_elapsed_ms(started),
    )
    return result


async def api_call_options_from_request(
    request: Request,
    service: str,
    endpoint: str,
    method: str,
    user=None,
) -> dict[str, Any]:
    """
    Derive log_api_call keyword arguments from an inbound request.
    request_data is None when the body is absent/empty ({} stays {}); a body
    that is not JSON is kept as text. user_id is None without a user.
    """
    raw = await request.body()
    request_data: Any = None
    if raw:
        try:
            request_data = json.loads(raw)
        except ValueError:
            request_data = raw.decode("utf-8", errors="replace")
    return {
        "service": service,
        "endpoint": endpoint,
        "method": method,
        "request_data": request_data,
        "user_id": getattr(user, "id", None),
    }
