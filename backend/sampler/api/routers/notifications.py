from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.engine import Engine

from sampler.api.deps import get_engine, get_push_sender
from sampler.domain.errors import NotFoundError, UpstreamError
from sampler.domain.validation import validate_notification_request
from sampler.infra.db.events_repository import EventsRepository
from sampler.infra.db.notifications_repository import NotificationsRepository
from sampler.infra.db.user_profiles_repository import UserProfilesRepository
from sampler.providers.push.base import PushSender
from sampler.services.notification_dispatch import NotificationDispatchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["notifications"])
reminder_fallback_router = APIRouter(tags=["notifications"])


def _dispatcher(engine: Engine, sender: PushSender) -> NotificationDispatchService:
    return NotificationDispatchService(
        NotificationsRepository(engine),
        UserProfilesRepository(engine),
        EventsRepository(engine),
        sender,
    )


@router.post("/send-notification")
def send_notification(
    payload: Any = Body(None),
    engine: Engine = Depends(get_engine),
    sender: PushSender = Depends(get_push_sender),
):
    notification_id = validate_notification_request(payload)
    logger.info("Sending notification: %s", notification_id)
    try:
        return _dispatcher(engine, sender).send_notification(notification_id)
    except NotFoundError as exc:
        # unknown ids answer 500 like other store failures
        raise UpstreamError(exc.message) from exc


def _run_reminders(engine: Engine, sender: PushSender) -> dict:
    return _dispatcher(engine, sender).check_and_send_event_reminders()


@router.api_route("/check-event-reminders", methods=["GET", "POST"])
def check_event_reminders(
    engine: Engine = Depends(get_engine),
    sender: PushSender = Depends(get_push_sender),
):
    logger.info("Processing check-event-reminders request")
    return _run_reminders(engine, sender)


@reminder_fallback_router.get("/{path:path}", include_in_schema=False)
def scheduled_reminders(
    path: str,
    engine: Engine = Depends(get_engine),
    sender: PushSender = Depends(get_push_sender),
):
    # the scheduler hits the function root with a plain GET
    logger.info("Processing scheduled reminder check via GET /%s", path)
    return _run_reminders(engine, sender)
