from __future__ import annotations

from typing import Optional

import httpx

from sampler.domain.errors import PushDeliveryError
from sampler.infra.db.common import new_id
from sampler.infra.settings import PlatformSettings

from .base import PushResult, PushSender


class PlatformPushSender(PushSender):
    """Creates push messages through the platform's messaging REST API."""

    PUSH_PATH = "/messaging/messages/push"

    def __init__(
        self,
        settings: PlatformSettings,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings
        self.timeout = timeout
        self.transport = transport

    def send_push(
        self,
        *,
        user_id: str,
        title: str,
        body: str,
        data: Optional[dict] = None,
    ) -> PushResult:
        payload = {
            "messageId": new_id(),
            "title": title,
            "body": body,
            "topics": [],
            "users": [user_id],
            "targets": [],
            "data": data or {},
            "draft": False,
        }
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                resp = client.post(self.url, json=payload, headers=self._headers())
                resp.raise_for_status()
                message = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise PushDeliveryError(f"push to {user_id} failed: {exc}") from exc
        return PushResult(message_id=message.get("$id"), status=message.get("status", "unknown"))

    @property
    def url(self) -> str:
        return self.settings.endpoint.rstrip("/") + self.PUSH_PATH

    def _headers(self) -> dict:
        return {
            "X-Appwrite-Project": self.settings.project_id,
            "X-Appwrite-Key": self.settings.api_key,
        }
