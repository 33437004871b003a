from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Set

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine

from sampler.domain.errors import NotFoundError
from sampler.domain.models import Trivia

from .common import count_rows, new_id, to_utc_naive
from .tables import trivia_responses_table, trivia_table


class TriviaRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def get_trivia(self, trivia_id: str) -> Trivia:
        with self.engine.begin() as conn:
            row = conn.execute(select(trivia_table).where(trivia_table.c.id == trivia_id)).mappings().first()
        if row is None:
            raise NotFoundError("Trivia question not found")
        return row_to_trivia(row)

    def list_active(self, at: datetime, *, limit: int) -> List[Trivia]:
        at = to_utc_naive(at)
        stmt = (
            select(trivia_table)
            .where(trivia_table.c.start_date <= at, trivia_table.c.end_date >= at)
            .order_by(trivia_table.c.start_date)
            .limit(limit)
        )
        with self.engine.begin() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [row_to_trivia(row) for row in rows]

    def answered_trivia_ids(self, user_id: str, *, limit: int) -> Set[str]:
        stmt = (
            select(trivia_responses_table.c.trivia_id)
            .where(trivia_responses_table.c.user_id == user_id)
            .limit(limit)
        )
        with self.engine.begin() as conn:
            return set(conn.execute(stmt).scalars().all())

    def has_response(self, user_id: str, trivia_id: str) -> bool:
        return (
            count_rows(
                self.engine,
                trivia_responses_table,
                trivia_responses_table.c.user_id == user_id,
                trivia_responses_table.c.trivia_id == trivia_id,
            )
            > 0
        )

    def create_response(self, *, user_id: str, trivia_id: str, answer: str, answer_index: int) -> str:
        response_id = new_id()
        with self.engine.begin() as conn:
            conn.execute(
                insert(trivia_responses_table).values(
                    id=response_id,
                    trivia_id=trivia_id,
                    user_id=user_id,
                    answer=answer,
                    answer_index=answer_index,
                    created_at=to_utc_naive(datetime.now(timezone.utc)),
                )
            )
        return response_id

    def update_skips(self, trivia_id: str, *, skipped_users: List[str], skips: Optional[int]) -> None:
        values: dict = {"skipped_users": skipped_users}
        if skips is not None:
            values["skips"] = skips
        with self.engine.begin() as conn:
            conn.execute(update(trivia_table).where(trivia_table.c.id == trivia_id).values(**values))

    def count_trivia(
        self,
        *,
        starts_after: Optional[datetime] = None,
        active_at: Optional[datetime] = None,
        ended_before: Optional[datetime] = None,
    ) -> int:
        conditions = []
        if starts_after is not None:
            conditions.append(trivia_table.c.start_date > to_utc_naive(starts_after))
        if active_at is not None:
            at = to_utc_naive(active_at)
            conditions.extend([trivia_table.c.start_date <= at, trivia_table.c.end_date >= at])
        if ended_before is not None:
            conditions.append(trivia_table.c.end_date < to_utc_naive(ended_before))
        return count_rows(self.engine, trivia_table, *conditions)


def row_to_trivia(row: Mapping[str, Any]) -> Trivia:
    return Trivia(
        id=row["id"],
        question=row["question"],
        answers=list(row.get("answers") or []),
        correct_option_index=row["correct_option_index"],
        points=row.get("points") or 0,
        start_date=row["start_date"],
        end_date=row["end_date"],
        skipped_users=list(row.get("skipped_users") or []),
        skips=row.get("skips"),
        client_id=row.get("client_id"),
    )
