from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.engine import Engine

from sampler.domain.models import CheckIn

from .common import count_rows
from .tables import checkins_table, reviews_table


class ActivityRepository:
    """Reviews and check-ins, the two sources of awarded points."""

    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def list_review_points(self) -> List[int]:
        with self.engine.begin() as conn:
            rows = conn.execute(select(reviews_table.c.points_earned)).scalars().all()
        return [value or 0 for value in rows]

    def list_check_ins(self) -> List[CheckIn]:
        with self.engine.begin() as conn:
            rows = conn.execute(
                select(checkins_table.c.id, checkins_table.c.points, checkins_table.c.event_id)
            ).mappings().all()
        return [CheckIn(id=row["id"], points=row["points"], event_id=row["event_id"]) for row in rows]

    def count_reviews(self) -> int:
        return count_rows(self.engine, reviews_table)

    def count_check_ins(self) -> int:
        return count_rows(self.engine, checkins_table)
