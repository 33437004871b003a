from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional, Union


@dataclass(frozen=True)
class Client:
    id: str
    name: str
    # stored as [longitude, latitude]
    location: Optional[tuple] = None
    city: Optional[str] = None
    address: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    logo_url: Optional[str] = None

    def coordinates(self) -> Optional[tuple[float, float]]:
        """Return ``(lat, lon)`` when the stored location is usable."""
        if not isinstance(self.location, (list, tuple)) or len(self.location) != 2:
            return None
        lon, lat = self.location
        if not _is_finite_number(lat) or not _is_finite_number(lon):
            return None
        if not (-90 <= lat <= 90 and -180 <= lon <= 180):
            return None
        return float(lat), float(lon)


@dataclass(frozen=True)
class Embedded:
    client: Client


@dataclass(frozen=True)
class Unresolved:
    client_id: str


ClientRelation = Union[Embedded, Unresolved, None]


@dataclass(frozen=True)
class Event:
    id: str
    name: str
    date: datetime
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    check_in_points: int = 0
    review_points: int = 0
    is_archived: bool = False
    is_hidden: bool = False
    client: ClientRelation = None

    @property
    def starts_at(self) -> datetime:
        return self.start_time or self.date


REMINDER_FLAG_KEYS = {"24h": "reminder24hSent", "1h": "reminder1hSent"}


@dataclass
class SavedEvent:
    """One stored saved-event entry; flag updates are written into ``raw``."""

    raw: dict

    @property
    def event_id(self) -> Optional[str]:
        return self.raw.get("eventId")

    @property
    def reminder_24h_sent(self) -> bool:
        return self.reminder_sent("24h")

    @property
    def reminder_1h_sent(self) -> bool:
        return self.reminder_sent("1h")

    def reminder_sent(self, key: str) -> bool:
        return bool(self.raw.get(REMINDER_FLAG_KEYS[key]))

    def mark_reminder_sent(self, key: str) -> None:
        self.raw[REMINDER_FLAG_KEYS[key]] = True


def parse_saved_events(raw: Optional[str]) -> List[Any]:
    """Decode the serialized saved-event list as stored; raises ``ValueError`` on bad input."""
    if not raw:
        return []
    items = json.loads(raw)
    if not isinstance(items, list):
        raise ValueError("saved events must be a JSON list")
    return items


def saved_event_entries(items: List[Any]) -> List[SavedEvent]:
    """Views over the dict entries of ``items``; other entries are left untouched."""
    return [SavedEvent(item) for item in items if isinstance(item, dict)]


def dump_saved_events(items: List[Any]) -> str:
    return json.dumps(items)


@dataclass
class UserProfile:
    id: str
    auth_id: Optional[str] = None
    saved_event_ids: Optional[str] = None
    total_points: int = 0
    tier_level: Optional[str] = None
    is_blocked: bool = False


@dataclass
class Notification:
    id: str
    title: str
    message: str
    type: Optional[str] = None
    target_audience: str = "All"
    status: str = "Draft"
    scheduled_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None
    recipients: Optional[int] = None


@dataclass(frozen=True)
class CheckIn:
    id: str
    points: Optional[int] = None
    event_id: Optional[str] = None


@dataclass
class Trivia:
    id: str
    question: str
    answers: List[str]
    correct_option_index: int
    points: int
    start_date: datetime
    end_date: datetime
    skipped_users: List[str] = field(default_factory=list)
    skips: Optional[int] = None
    client_id: Optional[str] = None

    def is_active(self, at: datetime) -> bool:
        return self.start_date <= at <= self.end_date


@dataclass(frozen=True)
class LocationQuery:
    latitude: float
    longitude: float
    page: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int
    total: int
    total_pages: int

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "total": self.total,
            "totalPages": self.total_pages,
        }


@dataclass(frozen=True)
class RankedEvent:
    event: Event
    client: Client
    distance_km: float


@dataclass(frozen=True)
class RankedPage:
    events: List[RankedEvent]
    pagination: Pagination


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
