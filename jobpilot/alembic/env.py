"""
Alembic migration environment for the JobPilot schema (users, resumes,
job_postings, match_scores, cover_letters, applications, external_logs).
The database URL always comes from Settings, never from alembic.ini.
"""
import sys
from pathlib import Path

# Run from a source checkout without installing: jobpilot/alembic -> project root
sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from jobpilot.app.core.config import settings
from jobpilot.app.db.base import Base

import jobpilot.app.models  # noqa: F401  (registers every table on Base.metadata)

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
IS_SQLITE = settings.database_url.startswith("sqlite")


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite cannot ALTER constraints in place; batch mode copies the table
        render_as_batch=IS_SQLITE,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the configured URL without connecting."""
    _configure(url=settings.database_url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(settings.database_url, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
