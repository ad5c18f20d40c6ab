"""
Resume - JSON Resume document owned by a user
"""
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String

from jobpilot.app.db.base import Base


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    theme = Column(String(50), nullable=False, default="modern")
    json_data = Column(JSON, nullable=False, default=dict)  # basics, work, education, skills, projects
    is_default = Column(Boolean, nullable=False, default=False)  # at most one per user

    created_at = Column(DateTime, default=datetime.utcnow)
