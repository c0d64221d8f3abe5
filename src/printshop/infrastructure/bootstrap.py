"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from printshop.infrastructure.config import Settings
from printshop.infrastructure.notifications.json_notification_sink import (
    JsonNotificationSink,
)
from printshop.infrastructure.persistence.json_order_number_sequence import (
    JsonOrderNumberSequence,
)
from printshop.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from printshop.infrastructure.persistence.json_service_repository import (
    JsonServiceRepository,
)


def service_repository(settings: Settings) -> JsonServiceRepository:
    return JsonServiceRepository(settings.data_dir / "services.json")


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


def order_number_sequence(settings: Settings) -> JsonOrderNumberSequence:
    orders = order_repository(settings)
    return JsonOrderNumberSequence(
        settings.data_dir / "sequences.json",
        existing_numbers=orders.order_numbers,
    )


def notification_sink(settings: Settings) -> JsonNotificationSink:
    return JsonNotificationSink(settings.data_dir / "notifications.json")
