from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from sampler.domain import stats
from sampler.domain.errors import NotFoundError
from sampler.infra.db.activity_repository import ActivityRepository
from sampler.infra.db.clients_repository import ClientsRepository
from sampler.infra.db.events_repository import EventsRepository
from sampler.infra.db.notifications_repository import NotificationsRepository
from sampler.infra.db.trivia_repository import TriviaRepository
from sampler.infra.db.user_profiles_repository import UserProfilesRepository

logger = logging.getLogger(__name__)


class StatisticsService:
    """Dashboard counters, recomputed from full scans on every call."""

    def __init__(self, engine: Engine):
        self.clients = ClientsRepository(engine)
        self.users = UserProfilesRepository(engine)
        self.events = EventsRepository(engine)
        self.activity = ActivityRepository(engine)
        self.notifications = NotificationsRepository(engine)
        self.trivia = TriviaRepository(engine)

    def get_statistics(self, page: str, *, now: Optional[datetime] = None) -> dict:
        now = (now or datetime.now()).astimezone()
        handlers: Dict[str, Callable[[datetime], dict]] = {
            "dashboard": self.dashboard,
            "clients": self.clients_page,
            "users": self.users_page,
            "notifications": self.notifications_page,
            "trivia": self.trivia_page,
        }
        return handlers[page](now)

    def dashboard(self, now: datetime) -> dict:
        _, last_month_end = stats.last_month_range(now)
        total_clients = self.clients.count_clients()
        total_users = self.users.count_profiles()
        total_points = self.total_points_awarded()
        previous_clients = self.clients.count_clients(created_to=last_month_end)
        previous_users = self.users.count_profiles(created_to=last_month_end)
        return {
            "totalClientsBrands": total_clients,
            "totalPointsAwarded": total_points,
            "totalUsers": total_users,
            "averagePPU": stats.average_points(total_points, total_users),
            "totalCheckins": self.activity.count_check_ins(),
            "reviews": self.activity.count_reviews(),
            "totalClientsBrandsChange": stats.calculate_change(total_clients, previous_clients),
            "totalUsersChange": stats.calculate_change(total_users, previous_users),
            # no per-month history for these yet
            "totalPointsAwardedChange": 0,
            "averagePPUChange": 0,
            "totalCheckinsChange": 0,
            "reviewsChange": 0,
        }

    def clients_page(self, now: datetime) -> dict:
        start, end = stats.this_month_range(now)
        return {
            "totalClients": self.clients.count_clients(),
            "newThisMonth": self.clients.count_clients(created_from=start, created_to=end),
        }

    def users_page(self, now: datetime) -> dict:
        start, end = stats.this_week_range(now)
        total_users = self.users.count_profiles()
        return {
            "totalUsers": total_users,
            "avgPoints": stats.average_points(self.total_points_awarded(), total_users),
            "newThisWeek": self.users.count_profiles(created_from=start, created_to=end),
            "usersInBlacklist": self.users.count_profiles(blocked=True),
        }

    def notifications_page(self, now: datetime) -> dict:
        total = self.notifications.count_notifications()
        return {
            "totalSent": total,
            "avgOpenRate": stats.PLACEHOLDER_OPEN_RATE,
            "avgClickRate": stats.PLACEHOLDER_CLICK_RATE,
            # placeholder, same as the total until scheduling lands
            "scheduled": total,
        }

    def trivia_page(self, now: datetime) -> dict:
        return {
            "totalQuizzes": self.trivia.count_trivia(),
            "scheduled": self.trivia.count_trivia(starts_after=now),
            "active": self.trivia.count_trivia(active_at=now),
            "completed": self.trivia.count_trivia(ended_before=now),
        }

    def total_points_awarded(self) -> int:
        """Review points plus check-in points, falling back to the event's check-in reward."""
        total = sum(self.activity.list_review_points())
        for check_in in self.activity.list_check_ins():
            if check_in.points is not None:
                total += check_in.points
                continue
            if not check_in.event_id:
                continue
            try:
                total += self.events.get_event(check_in.event_id).check_in_points
            except (NotFoundError, SQLAlchemyError) as exc:
                logger.warning("Error fetching event for check-in %s: %s", check_in.id, exc)
        return total
