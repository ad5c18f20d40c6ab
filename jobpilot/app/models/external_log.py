"""
ExternalLog - immutable audit record of one outbound third-party call
"""
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from jobpilot.app.db.base import Base


class ExternalLog(Base):
    __tablename__ = "external_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    service = Column(String(100), nullable=False, index=True)
    endpoint = Column(String(2048), nullable=False)
    method = Column(String(10), nullable=False)
    request_data = Column(JSON, nullable=True)
    response_data = Column(JSON, nullable=True)
    status_code = Column(Integer, nullable=False, default=0)  # 0 = no response received
    success = Column(Boolean, nullable=False, default=False)
    error_message = Column(Text, nullable=True)
    response_time_ms = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
