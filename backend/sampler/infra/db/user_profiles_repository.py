from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping, Optional

from sqlalchemy import select, update
from sqlalchemy.engine import Engine

from sampler.domain.errors import NotFoundError
from sampler.domain.models import UserProfile

from .common import count_rows, created_between
from .tables import user_profiles_table


class UserProfilesRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def list_profiles(self, *, limit: Optional[int] = None, offset: int = 0) -> List[UserProfile]:
        stmt = select(user_profiles_table).order_by(user_profiles_table.c.id)
        if limit is not None:
            stmt = stmt.limit(limit).offset(offset)
        with self.engine.begin() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [row_to_profile(row) for row in rows]

    def get_profile(self, user_id: str) -> UserProfile:
        with self.engine.begin() as conn:
            row = conn.execute(
                select(user_profiles_table).where(user_profiles_table.c.id == user_id)
            ).mappings().first()
        if row is None:
            raise NotFoundError("User not found")
        return row_to_profile(row)

    def update_saved_events(self, user_id: str, saved_event_ids: str) -> None:
        self._update(user_id, saved_event_ids=saved_event_ids)

    def update_tier(self, user_id: str, tier_level: str) -> None:
        self._update(user_id, tier_level=tier_level)

    def set_total_points(self, user_id: str, total_points: int) -> None:
        self._update(user_id, total_points=total_points)

    def count_profiles(
        self,
        *,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
        blocked: Optional[bool] = None,
    ) -> int:
        conditions = created_between(user_profiles_table, created_from, created_to)
        if blocked is not None:
            conditions.append(user_profiles_table.c.is_blocked.is_(blocked))
        return count_rows(self.engine, user_profiles_table, *conditions)

    def _update(self, user_id: str, **values) -> None:
        with self.engine.begin() as conn:
            result = conn.execute(
                update(user_profiles_table).where(user_profiles_table.c.id == user_id).values(**values)
            )
        if not result.rowcount:
            raise NotFoundError("User not found")


def row_to_profile(row: Mapping[str, Any]) -> UserProfile:
    return UserProfile(
        id=row["id"],
        auth_id=row.get("auth_id"),
        saved_event_ids=row.get("saved_event_ids"),
        total_points=row.get("total_points") or 0,
        tier_level=row.get("tier_level"),
        is_blocked=bool(row.get("is_blocked")),
    )
