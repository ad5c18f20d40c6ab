"""
MatchScore - one current score per (resume, job) pair
"""
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, UniqueConstraint

from jobpilot.app.db.base import Base


class MatchScore(Base):
    __tablename__ = "match_scores"
    __table_args__ = (UniqueConstraint("resume_id", "job_id", name="uq_match_scores_resume_job"),)

    id = Column(Integer, primary_key=True, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("job_postings.id", ondelete="CASCADE"), nullable=False, index=True)

    overall_score = Column(Integer, nullable=False)
    technical_score = Column(Integer, nullable=False)
    experience_score = Column(Integer, nullable=False)
    soft_skills_score = Column(Integer, nullable=False)
    location_score = Column(Integer, nullable=False)
    recommendations = Column(JSON, default=list)

    created_at = Column(DateTime, default=datetime.utcnow)
