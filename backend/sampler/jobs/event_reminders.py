from __future__ import annotations

from datetime import datetime
from typing import Optional

import typer

from sampler.infra.database import resolve_engine
from sampler.infra.db.events_repository import EventsRepository
from sampler.infra.db.notifications_repository import NotificationsRepository
from sampler.infra.db.user_profiles_repository import UserProfilesRepository
from sampler.infra.settings import load_platform_settings
from sampler.logging_config import configure_logging
from sampler.providers.push.base import PushSender
from sampler.providers.push.platform import PlatformPushSender
from sampler.services.notification_dispatch import NotificationDispatchService

app = typer.Typer(help="Send 24h/1h reminders for saved events (cron target)")


def run_event_reminders(
    *,
    engine=None,
    database_url: Optional[str] = None,
    sender: Optional[PushSender] = None,
    now: Optional[datetime] = None,
) -> dict:
    engine = resolve_engine(engine, database_url)
    sender = sender or PlatformPushSender(load_platform_settings())
    service = NotificationDispatchService(
        NotificationsRepository(engine),
        UserProfilesRepository(engine),
        EventsRepository(engine),
        sender,
    )
    result = service.check_and_send_event_reminders(now=now)
    print(
        f"[event_reminders] reminders24h={result['reminders24h']} "
        f"reminders1h={result['reminders1h']}"
    )
    return result


@app.command()
def run(
    database_url: Optional[str] = typer.Option(None, help="Overrides DATABASE_URL"),
    at: Optional[str] = typer.Option(None, help="Reference time (ISO 8601), defaults to now"),
):
    configure_logging()
    now = datetime.fromisoformat(at) if at else None
    run_event_reminders(database_url=database_url, now=now)


if __name__ == "__main__":
    app()
