"""
Authentication service business logic
"""
from datetime import timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobpilot.app.core.config import settings
from jobpilot.app.core.logging_config import get_logger
from jobpilot.app.core.security import create_access_token, get_password_hash, verify_password
from jobpilot.app.models.user import User
from jobpilot.app.schemas.user import CredentialsIn, UserLogin, UserRegister

logger = get_logger("services.auth")


def _issue_token(user: User) -> str:
    return create_access_token(
        data={"sub": str(user.id), "username": user.username},
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )


class AuthService:
    """Service for authentication operations"""

    @staticmethod
    def register_user(db: Session, user_data: UserRegister):
        """Register a new user"""
        username = user_data.username.strip()
        if db.query(User).filter(User.username == username).first():
            return {"success": False, "message": "Username already taken"}

        new_user = User(
            username=username,
            email=(user_data.email or "").strip() or None,
            hashed_password=get_password_hash(user_data.password),
        )
        db.add(new_user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            return {"success": False, "message": "Username already taken"}
        db.refresh(new_user)

        return {
            "success": True,
            "user": new_user,
            "message": "User registered successfully",
            "access_token": _issue_token(new_user),
            "token_type": "bearer",
        }

    @staticmethod
    def login_user(db: Session, login_data: UserLogin):
        """Authenticate user and return access token"""
        user = db.query(User).filter(User.username == login_data.username.strip()).first()
        if not user or not verify_password(login_data.password, user.hashed_password):
            return {"success": False, "message": "Invalid username or password"}

        return {
            "success": True,
            "access_token": _issue_token(user),
            "token_type": "bearer",
            "user": user,
            "message": "Login successful",
        }

    @staticmethod
    def update_credentials(db: Session, user: User, data: CredentialsIn) -> User:
        """Store the provided credentials as-is. Omitted fields stay; blank clears."""
        fields = data.model_dump(exclude_unset=True)
        mapping = {
            "openaiApiKey": "openai_api_key",
            "adzunaAppId": "adzuna_app_id",
            "adzunaApiKey": "adzuna_api_key",
        }
        for field, column in mapping.items():
            if field in fields:
                value = (fields[field] or "").strip()
                setattr(user, column, value or None)
        db.commit()
        db.refresh(user)
        logger.info("Credentials updated user_id=%s fields=%s", user.id, sorted(fields))
        return user
