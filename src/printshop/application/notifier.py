"""Order notifications.

Wraps the injected NotificationSink.  A failing sink is logged and
otherwise ignored: the order mutation that triggered the notification
has already been persisted and stays that way.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from printshop.domain.model.order import Order
from printshop.domain.model.order_status import STATUS_LABELS, OrderStatus
from printshop.domain.notifications import (
    NEW_ORDER,
    ORDER_UPDATED,
    Notification,
    NotificationSink,
    NotificationType,
)

logger = structlog.get_logger(__name__)


class OrderNotifier:

    def __init__(self, sink: NotificationSink) -> None:
        self._sink = sink

    def order_created(self, order: Order) -> None:
        self._deliver(
            "confirmation",
            order,
            lambda: self._sink.create_notification(
                Notification(
                    user_id=order.client_id,
                    title="New order",
                    message=f"Order #{order.order_number} created successfully",
                    type=NotificationType.SUCCESS,
                    order_id=order.id,
                )
            ),
        )
        self._deliver(
            NEW_ORDER,
            order,
            lambda: self._sink.emit_to_admins(
                NEW_ORDER,
                {
                    "orderId": order.id,
                    "orderNumber": order.order_number,
                    "clientId": order.client_id,
                    "status": order.status.value,
                    "totalPrice": str(order.total_price.amount),
                },
            ),
        )

    def status_changed(self, order: Order, old_status: OrderStatus) -> None:
        label = STATUS_LABELS[order.status]
        kind = (
            NotificationType.WARNING
            if order.status is OrderStatus.CANCELLED
            else NotificationType.INFO
        )
        payload = {
            "orderId": order.id,
            "orderNumber": order.order_number,
            "clientId": order.client_id,
            "oldStatus": old_status.value,
            "newStatus": order.status.value,
        }
        self._deliver(
            "status notification",
            order,
            lambda: self._sink.create_notification(
                Notification(
                    user_id=order.client_id,
                    title="Order update",
                    message=f"Your order #{order.order_number} is now: {label}",
                    type=kind,
                    order_id=order.id,
                )
            ),
        )
        self._deliver(
            ORDER_UPDATED,
            order,
            lambda: self._sink.emit_to_user(order.client_id, ORDER_UPDATED, payload),
        )
        self._deliver(
            ORDER_UPDATED,
            order,
            lambda: self._sink.emit_to_admins(ORDER_UPDATED, payload),
        )

    @staticmethod
    def _deliver(what: str, order: Order, send: Callable[[], None]) -> None:
        try:
            send()
        except Exception:
            logger.exception(
                "Notification delivery failed",
                notification=what,
                order_number=order.order_number,
            )
