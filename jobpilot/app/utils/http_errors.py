"""
Translate pipeline errors into HTTP responses.
"""
from fastapi import HTTPException, status

from jobpilot.app.core.exceptions import (
    AnalysisError,
    ConnectorError,
    ConnectorNotConfiguredError,
    GenerationError,
    JobPilotError,
    NetworkError,
    ScoringError,
    ValidationError,
)

_STATUS = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConnectorNotConfiguredError, status.HTTP_400_BAD_REQUEST),
    (NetworkError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ConnectorError, status.HTTP_502_BAD_GATEWAY),
    (AnalysisError, status.HTTP_502_BAD_GATEWAY),
    (ScoringError, status.HTTP_502_BAD_GATEWAY),
    (GenerationError, status.HTTP_502_BAD_GATEWAY),
)


def http_error(e: JobPilotError) -> HTTPException:
    for cls, code in _STATUS:
        if isinstance(e, cls):
            return HTTPException(status_code=code, detail=e.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


def not_found(what: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{what} not found")
