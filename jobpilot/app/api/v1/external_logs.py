"""
External call audit log - read-only browsing of the current user's outbound calls
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobpilot.app.core.dependencies import get_current_user, get_db
from jobpilot.app.models.external_log import ExternalLog
from jobpilot.app.models.user import User
from jobpilot.app.schemas.external_log import ExternalLogOut, external_log_model_to_out

router = APIRouter()


@router.get("", response_model=list[ExternalLogOut])
def list_external_logs(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=200),
    service: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Newest first. Filter by service name (e.g. Adzuna, OpenAI, JobPage)."""
    q = db.query(ExternalLog).filter(ExternalLog.user_id == current_user.id)
    if service:
        q = q.filter(ExternalLog.service == service)
    rows = (
        q.order_by(ExternalLog.created_at.desc(), ExternalLog.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return [external_log_model_to_out(r) for r in rows]
