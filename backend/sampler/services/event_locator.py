from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from sampler.domain.errors import NotFoundError, UpstreamError
from sampler.domain.models import Client, Embedded, Event, LocationQuery, RankedPage, Unresolved
from sampler.domain.ranking import rank_events
from sampler.infra.db.clients_repository import ClientsRepository
from sampler.infra.db.events_repository import EventsRepository

logger = logging.getLogger(__name__)


def start_of_today(now: Optional[datetime] = None) -> datetime:
    """Midnight of the server's local date, as an aware datetime."""
    now = (now or datetime.now()).astimezone()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


class EventLocatorService:
    def __init__(self, events_repo: EventsRepository, clients_repo: ClientsRepository):
        self.events_repo = events_repo
        self.clients_repo = clients_repo

    def get_events_by_location(self, query: LocationQuery, *, now: Optional[datetime] = None) -> RankedPage:
        try:
            events = self.events_repo.list_upcoming_events(start_of_today(now))
        except SQLAlchemyError as exc:
            raise UpstreamError(f"Failed to fetch events: {exc}") from exc

        candidates: List[Tuple[Event, Optional[Client]]] = []
        for event in events:
            candidates.append((event, self._resolve_client(event)))

        result = rank_events(
            candidates,
            query.latitude,
            query.longitude,
            page=query.page,
            page_size=query.page_size,
        )
        logger.info(
            "Found %s events, returning %s for page %s",
            result.pagination.total,
            len(result.events),
            result.pagination.page,
        )
        return result

    def _resolve_client(self, event: Event) -> Optional[Client]:
        relation = event.client
        if isinstance(relation, Embedded):
            return relation.client
        if isinstance(relation, Unresolved):
            try:
                return self.clients_repo.get_client(relation.client_id)
            except (NotFoundError, SQLAlchemyError) as exc:
                logger.warning("Error fetching client %s: %s", relation.client_id, exc)
                return None
        return None
