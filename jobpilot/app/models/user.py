"""
User - account plus per-user third-party credentials
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from jobpilot.app.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True)
    hashed_password = Column(String(255), nullable=False)

    # Stored as provided; validated only by the "test connection" endpoint
    openai_api_key = Column(String(255), nullable=True)
    adzuna_app_id = Column(String(100), nullable=True)
    adzuna_api_key = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
