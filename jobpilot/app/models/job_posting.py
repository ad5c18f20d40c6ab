"""
JobPosting - saved job description plus its structured analysis
"""
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from jobpilot.app.db.base import Base


class JobPosting(Base):
    __tablename__ = "job_postings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=False)

    parsed_data = Column(JSON, nullable=True)  # raw analyzer output, if any
    tech_stack = Column(JSON, default=list)
    soft_skills = Column(JSON, default=list)
    experience_years = Column(String(100), nullable=True)
    location = Column(String(255), nullable=True)
    employment_type = Column(String(100), nullable=True)

    url = Column(String(1024), nullable=True)
    source = Column(String(50), nullable=False, default="manual")  # manual, adzuna, ...
    external_id = Column(String(100), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
