from __future__ import annotations

import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from sampler.infra.db.tables import metadata


def engine_from_env(database_url: Optional[str] = None) -> Optional[Engine]:
    database_url = database_url or os.getenv("DATABASE_URL")
    if not database_url:
        return None
    return create_engine(database_url, future=True)


def resolve_engine(engine: Optional[Engine] = None, database_url: Optional[str] = None) -> Engine:
    """Engine for jobs and CLI commands; tables are created when missing."""
    if engine is None:
        engine = engine_from_env(database_url)
        if engine is None:
            raise RuntimeError("DATABASE_URL required if engine not provided")
    metadata.create_all(engine)
    return engine
