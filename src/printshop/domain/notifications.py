"""Outbound notification port.

The order use cases push events and user-facing notifications through a
``NotificationSink`` handed to them explicitly.  How the events reach a
browser or a phone is the sink implementation's business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

NEW_ORDER = "newOrder"
ORDER_UPDATED = "orderUpdated"


class NotificationType(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    user_id: str
    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    order_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class NotificationSink(ABC):

    @abstractmethod
    def emit_to_user(self, user_id: str, event: str, payload: dict) -> None:
        """Push a real-time event to one user."""

    @abstractmethod
    def emit_to_admins(self, event: str, payload: dict) -> None:
        """Push a real-time event to every administrator."""

    @abstractmethod
    def create_notification(self, notification: Notification) -> None:
        """Store a notification for its user (and push it if possible)."""
