"""NotificationSink that stores notifications in a JSON file.

Real-time delivery (websockets, push) is outside this package; emitted
events are written to the log where a delivery process can pick them up.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from printshop.domain.notifications import Notification, NotificationSink
from printshop.infrastructure.persistence.json_store import JsonFile

logger = structlog.get_logger(__name__)


class JsonNotificationSink(NotificationSink):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    def emit_to_user(self, user_id: str, event: str, payload: dict) -> None:
        logger.info("Event emitted", event_name=event, room=f"user:{user_id}", payload=payload)

    def emit_to_admins(self, event: str, payload: dict) -> None:
        logger.info("Event emitted", event_name=event, room="admins", payload=payload)

    def create_notification(self, notification: Notification) -> None:
        with self._file.update() as notifications:
            notifications.append(
                {
                    "user_id": notification.user_id,
                    "title": notification.title,
                    "message": notification.message,
                    "type": notification.type.value,
                    "order_id": notification.order_id,
                    "read": False,
                    "created_at": notification.created_at.isoformat(),
                }
            )
        self.emit_to_user(
            notification.user_id,
            "notification",
            {"title": notification.title, "message": notification.message},
        )
