from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class PushResult:
    message_id: Optional[str]
    status: str


class PushSender(Protocol):
    """Contract for push-notification providers."""

    def send_push(
        self,
        *,
        user_id: str,
        title: str,
        body: str,
        data: Optional[dict] = None,
    ) -> PushResult:
        """Queue one push message for the auth user ``user_id``.

        Implementations raise ``PushDeliveryError`` when the provider rejects
        the message or cannot be reached.
        """
        raise NotImplementedError
