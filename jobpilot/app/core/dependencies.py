"""
Dependency injection utilities: DB session per request and the bearer-token user.
Every pipeline call receives the resolved user's id explicitly.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from jobpilot.app.core.config import settings
from jobpilot.app.db import session as db_session
from jobpilot.app.models.user import User

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_db() -> Session:
    """Get database session"""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _user_id_from_token(token: str) -> int:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise _unauthorized("Invalid or expired token")
    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token")


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the user from the `sub` claim of the bearer JWT."""
    if not credentials:
        raise _unauthorized("Authentication required")
    user = db.query(User).filter(User.id == _user_id_from_token(credentials.credentials)).first()
    if not user:
        raise _unauthorized("User not found")
    return user
