from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from sampler.domain.errors import PushDeliveryError
from sampler.domain.models import Event, SavedEvent, dump_saved_events, parse_saved_events, saved_event_entries
from sampler.infra.db.common import to_utc_naive
from sampler.infra.db.events_repository import EventsRepository
from sampler.infra.db.notifications_repository import STATUS_SENT, NotificationsRepository
from sampler.infra.db.user_profiles_repository import UserProfilesRepository
from sampler.providers.push.base import PushSender

logger = logging.getLogger(__name__)

REMINDER_TOLERANCE = timedelta(minutes=15)
REMINDER_OFFSETS = {"24h": timedelta(hours=24), "1h": timedelta(hours=1)}
REMINDER_LABELS = {"24h": "24 hours", "1h": "1 hour"}


@dataclass
class DeliverySummary:
    sent_count: int
    message_id: Optional[str]
    status: str


def send_to_users(
    sender: PushSender,
    user_ids: List[str],
    title: str,
    body: str,
    data: Optional[dict] = None,
) -> DeliverySummary:
    """Send one push per user, in order, counting only the accepted ones."""
    if not user_ids:
        logger.info("No user IDs provided for push")
        return DeliverySummary(sent_count=0, message_id=None, status="skipped")
    sent = 0
    last = None
    for user_id in user_ids:
        try:
            last = sender.send_push(user_id=user_id, title=title, body=body, data=data or {})
        except PushDeliveryError as exc:
            logger.warning("Failed to send push to user %s: %s", user_id, exc)
            continue
        sent += 1
        logger.info("Push created for user %s: messageId=%s, status=%s", user_id, last.message_id, last.status)
    logger.info("Push notification summary: %s/%s users", sent, len(user_ids))
    if last is None:
        return DeliverySummary(sent_count=0, message_id=None, status="failed")
    return DeliverySummary(sent_count=sent, message_id=last.message_id, status=last.status)


def reminder_windows(now: datetime) -> Dict[str, tuple]:
    """Inclusive ``(start, end)`` bands around now+24h and now+1h, in naive UTC."""
    windows = {}
    for key, offset in REMINDER_OFFSETS.items():
        target = to_utc_naive(now + offset)
        windows[key] = (target - REMINDER_TOLERANCE, target + REMINDER_TOLERANCE)
    return windows


class NotificationDispatchService:
    def __init__(
        self,
        notifications_repo: NotificationsRepository,
        profiles_repo: UserProfilesRepository,
        events_repo: EventsRepository,
        sender: PushSender,
    ):
        self.notifications_repo = notifications_repo
        self.profiles_repo = profiles_repo
        self.events_repo = events_repo
        self.sender = sender

    def send_notification(self, notification_id: str, *, now: Optional[datetime] = None) -> dict:
        notification = self.notifications_repo.get_notification(notification_id)
        logger.info(
            'Notification found: title="%s", status="%s", targetAudience="%s"',
            notification.title,
            notification.status,
            notification.target_audience,
        )
        if notification.status == STATUS_SENT:
            logger.info("Notification %s already sent - skipping", notification_id)
            return {"success": True, "recipients": notification.recipients or 0}

        if notification.target_audience != "All":
            # TODO: filter recipients once audience segments are stored on user profiles.
            logger.warning(
                "Audience %r is not filtered yet; sending to all users", notification.target_audience
            )
        users = self.profiles_repo.list_profiles()
        sent_at = now or datetime.now(timezone.utc)
        if not users:
            logger.info("No target users found")
            self.notifications_repo.mark_sent(notification_id, sent_at=sent_at, recipients=0)
            return {"success": True, "recipients": 0}

        auth_ids = [user.auth_id for user in users if user.auth_id and isinstance(user.auth_id, str)]
        if not auth_ids:
            logger.info("No valid user auth IDs found")
            return {"success": False, "recipients": 0}

        logger.info("Preparing to send push notification to %s users", len(auth_ids))
        summary = send_to_users(
            self.sender,
            auth_ids,
            notification.title,
            notification.message,
            {"notificationId": notification.id, "type": notification.type or ""},
        )
        self.notifications_repo.mark_sent(notification_id, sent_at=sent_at, recipients=summary.sent_count)
        logger.info("Notification sent. Recipients: %s, Message ID: %s", summary.sent_count, summary.message_id)

        result = {"success": True, "recipients": summary.sent_count}
        if summary.message_id:
            result["messageId"] = summary.message_id
        return result

    def check_and_send_event_reminders(self, *, now: Optional[datetime] = None) -> dict:
        now = now or datetime.now(timezone.utc)
        windows = reminder_windows(now)
        for key, (start, end) in windows.items():
            logger.info("%s window: %s to %s", key, start.isoformat(), end.isoformat())

        events = {event.id: event for event in self.events_repo.list_events()}
        users = self.profiles_repo.list_profiles()
        logger.info("Checking %s users against %s events", len(users), len(events))

        counts = {key: 0 for key in windows}
        for user in users:
            try:
                sent = self._remind_user(user, events, windows)
            except Exception as exc:
                logger.error("Error processing user %s: %s", user.id, exc)
                continue
            for key, value in sent.items():
                counts[key] += value

        logger.info("Reminder check complete. 24h reminders: %s, 1h reminders: %s", counts["24h"], counts["1h"])
        return {"success": True, "reminders24h": counts["24h"], "reminders1h": counts["1h"]}

    def _remind_user(self, user, events: Dict[str, Event], windows: Dict[str, tuple]) -> Dict[str, int]:
        sent = {key: 0 for key in windows}
        if not user.saved_event_ids or not user.auth_id:
            return sent
        try:
            saved_events = parse_saved_events(user.saved_event_ids)
        except ValueError:
            logger.warning("Error parsing savedEventIds for user %s", user.id)
            return sent

        changed = False
        for saved in saved_event_entries(saved_events):
            event = events.get(saved.event_id)
            if event is None:
                continue
            starts_at = to_utc_naive(event.starts_at)
            for key in self._due_reminders(saved, starts_at, windows):
                logger.info('User %s needs %s reminder for event "%s"', user.id, key, event.name)
                send_to_users(
                    self.sender,
                    [user.auth_id],
                    f"Event Reminder: {event.name}",
                    f'Your saved event "{event.name}" starts in {REMINDER_LABELS[key]}! '
                    f"Location: {event.address}, {event.city}",
                    {"eventId": event.id, "reminderType": key, "type": "Event Reminder"},
                )
                saved.mark_reminder_sent(key)
                sent[key] += 1
                changed = True

        if changed:
            self.profiles_repo.update_saved_events(user.id, dump_saved_events(saved_events))
            logger.info("Updated reminder flags for user %s", user.id)
        return sent

    @staticmethod
    def _due_reminders(saved: SavedEvent, starts_at: datetime, windows: Dict[str, tuple]) -> Iterable[str]:
        for key, (start, end) in windows.items():
            if start <= starts_at <= end and not saved.reminder_sent(key):
                yield key
