"""
Database engine and session factory.
SQLite (the default) is shared across FastAPI's worker threads; server
databases get pre-ping so stale pooled connections are replaced.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from jobpilot.app.core.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.database_url, echo=False, **_engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
