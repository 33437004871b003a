from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine

from sampler.domain.errors import NotFoundError
from sampler.domain.models import Client

from .common import count_rows, created_between
from .tables import clients_table


class ClientsRepository:
    def __init__(self, engine: Engine):
        if engine is None:
            raise ValueError("engine is required")
        self.engine = engine

    def get_client(self, client_id: str) -> Client:
        with self.engine.begin() as conn:
            row = conn.execute(
                select(clients_table).where(clients_table.c.id == client_id)
            ).mappings().first()
        if row is None:
            raise NotFoundError(f"Client {client_id} not found")
        return row_to_client(row)

    def count_clients(self, *, created_from: Optional[datetime] = None, created_to: Optional[datetime] = None) -> int:
        return count_rows(self.engine, clients_table, *created_between(clients_table, created_from, created_to))


def row_to_client(row: Mapping[str, Any]) -> Client:
    location = row.get("location")
    return Client(
        id=row["id"],
        name=row.get("name") or "",
        location=tuple(location) if isinstance(location, list) else location,
        city=row.get("city"),
        address=row.get("address"),
        state=row.get("state"),
        zip=row.get("zip"),
        logo_url=row.get("logo_url"),
    )
