from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from sqlalchemy import select, update
from sqlalchemy.engine import Engine

from sampler.domain.errors import NotFoundError
from sampler.domain.models import Notification

from .common import count_rows, to_utc_naive
from .tables import notifications_table

STATUS_SENT = "Sent"


class NotificationsRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def get_notification(self, notification_id: str) -> Notification:
        with self.engine.begin() as conn:
            row = conn.execute(
                select(notifications_table).where(notifications_table.c.id == notification_id)
            ).mappings().first()
        if row is None:
            raise NotFoundError(f"Notification {notification_id} not found")
        return row_to_notification(row)

    def mark_sent(self, notification_id: str, *, sent_at: datetime, recipients: int) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                update(notifications_table)
                .where(notifications_table.c.id == notification_id)
                .values(status=STATUS_SENT, sent_at=to_utc_naive(sent_at), recipients=recipients)
            )

    def count_notifications(self) -> int:
        return count_rows(self.engine, notifications_table)


def row_to_notification(row: Mapping[str, Any]) -> Notification:
    return Notification(
        id=row["id"],
        title=row["title"],
        message=row["message"],
        type=row.get("type"),
        target_audience=row.get("target_audience") or "All",
        status=row.get("status") or "Draft",
        scheduled_at=row.get("scheduled_at"),
        sent_at=row.get("sent_at"),
        recipients=row.get("recipients"),
    )
