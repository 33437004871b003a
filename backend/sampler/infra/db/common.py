from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Table, func, select
from sqlalchemy.engine import Engine


def to_utc_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """Datetime columns hold naive UTC values."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return uuid.uuid4().hex[:20]


def count_rows(engine: Engine, table: Table, *conditions) -> int:
    stmt = select(func.count()).select_from(table)
    if conditions:
        stmt = stmt.where(*conditions)
    with engine.begin() as conn:
        return int(conn.execute(stmt).scalar_one())


def created_between(table: Table, start: Optional[datetime] = None, end: Optional[datetime] = None) -> list:
    conditions = []
    if start is not None:
        conditions.append(table.c.created_at >= to_utc_naive(start))
    if end is not None:
        conditions.append(table.c.created_at <= to_utc_naive(end))
    return conditions
