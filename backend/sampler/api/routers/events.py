from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.engine import Engine

from sampler.api.deps import get_engine, get_platform_settings
from sampler.domain.models import Client, RankedEvent
from sampler.domain.validation import validate_location_query
from sampler.infra.db.clients_repository import ClientsRepository
from sampler.infra.db.events_repository import EventsRepository
from sampler.services.event_locator import EventLocatorService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"], dependencies=[Depends(get_platform_settings)])


@router.post("/get-events-by-location")
def get_events_by_location(
    payload: Any = Body(None),
    engine: Engine = Depends(get_engine),
):
    query = validate_location_query(payload)
    logger.info(
        "Fetching events for location: (%s, %s), page: %s, pageSize: %s",
        query.latitude,
        query.longitude,
        query.page,
        query.page_size,
    )
    service = EventLocatorService(EventsRepository(engine), ClientsRepository(engine))
    result = service.get_events_by_location(query)
    return {
        "success": True,
        "events": [_ranked_event_payload(item) for item in result.events],
        "pagination": result.pagination.to_dict(),
    }


def _ranked_event_payload(item: RankedEvent) -> dict:
    event = item.event
    return {
        "id": event.id,
        "name": event.name,
        "date": _to_iso(event.date),
        "startTime": _to_iso(event.start_time),
        "endTime": _to_iso(event.end_time),
        "address": event.address,
        "city": event.city,
        "state": event.state,
        "zipCode": event.zip_code,
        "checkInPoints": event.check_in_points,
        "reviewPoints": event.review_points,
        "isArchived": event.is_archived,
        "isHidden": event.is_hidden,
        "client": _client_payload(item.client),
        "distance": item.distance_km,
    }


def _client_payload(client: Client) -> dict:
    return {
        "id": client.id,
        "name": client.name,
        "logoURL": client.logo_url,
        "city": client.city,
        "address": client.address,
        "state": client.state,
        "zip": client.zip,
        "location": list(client.location) if client.location is not None else None,
    }


def _to_iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None
