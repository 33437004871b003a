from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from .geo import haversine_km
from .models import Client, Event, Pagination, RankedEvent, RankedPage

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, page_size: int) -> Tuple[List[T], Pagination]:
    total = len(items)
    total_pages = math.ceil(total / page_size) if page_size else 0
    start = (page - 1) * page_size
    window = list(items[start:start + page_size])
    return window, Pagination(page=page, page_size=page_size, total=total, total_pages=total_pages)


def rank_events(
    candidates: Iterable[Tuple[Event, Optional[Client]]],
    lat: float,
    lon: float,
    *,
    page: int,
    page_size: int,
) -> RankedPage:
    """Order events by distance from ``(lat, lon)`` and cut the requested page.

    ``candidates`` must already be in date order; the sort is stable so events
    at the same distance keep that order. Events without a client or without
    usable client coordinates are left out of ``total``.
    """
    ranked: List[RankedEvent] = []
    for event, client in candidates:
        if client is None:
            continue
        coords = client.coordinates()
        if coords is None:
            continue
        client_lat, client_lon = coords
        distance = haversine_km(lat, lon, client_lat, client_lon)
        ranked.append(RankedEvent(event=event, client=client, distance_km=distance))
    ranked.sort(key=lambda item: item.distance_km)
    window, pagination = paginate(ranked, page, page_size)
    return RankedPage(events=window, pagination=pagination)
