from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Push delivery lives outside the engine; this is the only contract."""

    def send(self, user_id: str, title: str, body: str, data: Optional[Mapping[str, str]] = None) -> None:
        raise NotImplementedError


class LoggingNotificationSink:
    """Default sink: records the notification in the application log."""

    def send(self, user_id: str, title: str, body: str, data: Optional[Mapping[str, str]] = None) -> None:
        logger.info("Notification to %s: %s - %s %s", user_id, title, body, dict(data or {}))


def notify_quietly(sink: Optional[NotificationSink], user_id: Optional[str], title: str, body: str, data=None) -> None:
    """Fire-and-forget delivery; failures are logged, never raised."""
    if sink is None or not user_id:
        return
    try:
        sink.send(user_id, title, body, data)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to send notification %r to %s: %s", title, user_id, exc)
