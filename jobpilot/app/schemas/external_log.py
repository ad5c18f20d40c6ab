"""
External call audit log Pydantic schemas
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class ExternalLogOut(BaseModel):
    id: int
    userId: Optional[int] = None
    service: str
    endpoint: str
    method: str
    requestData: Any = None
    responseData: Any = None
    statusCode: int
    success: bool
    errorMessage: Optional[str] = None
    responseTimeMs: Optional[int] = None
    createdAt: Optional[datetime] = None


def external_log_model_to_out(log) -> ExternalLogOut:
    return ExternalLogOut(
        id=log.id,
        userId=log.user_id,
        service=log.service,
        endpoint=log.endpoint,
        method=log.method,
        requestData=log.request_data,
        responseData=log.response_data,
        statusCode=log.status_code,
        success=bool(log.success),
        errorMessage=log.error_message,
        responseTimeMs=log.response_time_ms,
        createdAt=log.created_at,
    )
