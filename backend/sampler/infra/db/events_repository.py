from __future__ import annotations

from datetime import datetime
from typing import Any, List, Mapping

from sqlalchemy import select
from sqlalchemy.engine import Engine

from sampler.domain.errors import NotFoundError
from sampler.domain.models import ClientRelation, Embedded, Event, Unresolved

from .clients_repository import row_to_client
from .common import to_utc_naive
from .tables import clients_table, events_table

CLIENT_PREFIX = "client__"


class EventsRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def list_upcoming_events(self, since: datetime, *, join_clients: bool = True) -> List[Event]:
        """Visible, non-archived events dated at or after ``since``, oldest first."""
        filters = [
            events_table.c.is_archived.is_(False),
            events_table.c.is_hidden.is_(False),
            events_table.c.date >= to_utc_naive(since),
        ]
        if join_clients:
            join_stmt = events_table.outerjoin(clients_table, events_table.c.client_id == clients_table.c.id)
            stmt = select(
                events_table,
                *[col.label(f"{CLIENT_PREFIX}{col.name}") for col in clients_table.c],
            ).select_from(join_stmt)
        else:
            stmt = select(events_table)
        stmt = stmt.where(*filters).order_by(events_table.c.date, events_table.c.id)
        with self.engine.begin() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [row_to_event(row) for row in rows]

    def list_events(self) -> List[Event]:
        with self.engine.begin() as conn:
            rows = conn.execute(select(events_table).order_by(events_table.c.date)).mappings().all()
        return [row_to_event(row) for row in rows]

    def get_event(self, event_id: str) -> Event:
        with self.engine.begin() as conn:
            row = conn.execute(select(events_table).where(events_table.c.id == event_id)).mappings().first()
        if row is None:
            raise NotFoundError(f"Event {event_id} not found")
        return row_to_event(row)


def row_to_event(row: Mapping[str, Any]) -> Event:
    return Event(
        id=row["id"],
        name=row["name"],
        date=row["date"],
        start_time=row.get("start_time"),
        end_time=row.get("end_time"),
        address=row.get("address"),
        city=row.get("city"),
        state=row.get("state"),
        zip_code=row.get("zip_code"),
        check_in_points=row.get("check_in_points") or 0,
        review_points=row.get("review_points") or 0,
        is_archived=bool(row.get("is_archived")),
        is_hidden=bool(row.get("is_hidden")),
        client=_client_relation(row),
    )


def _client_relation(row: Mapping[str, Any]) -> ClientRelation:
    if row.get(f"{CLIENT_PREFIX}id") is not None:
        joined = {
            key[len(CLIENT_PREFIX):]: value for key, value in row.items() if key.startswith(CLIENT_PREFIX)
        }
        return Embedded(row_to_client(joined))
    client_id = row.get("client_id")
    if client_id:
        return Unresolved(client_id)
    return None
