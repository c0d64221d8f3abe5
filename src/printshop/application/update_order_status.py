"""Application service: Update Order Status use case.

The lifecycle controller.  Only administrators move orders between
statuses; every move appends exactly one history entry, is persisted,
then announced to the client and to the administrators.
"""

from __future__ import annotations

import structlog

from printshop.application.dto import OrderDTO, order_to_dto, parse_choice
from printshop.application.notifier import OrderNotifier
from printshop.domain.exceptions import OrderNotFound
from printshop.domain.model.actor import Actor
from printshop.domain.model.order_status import OrderStatus
from printshop.domain.notifications import NotificationSink
from printshop.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        sink: NotificationSink,
        allow_override: bool = False,
    ) -> None:
        self._order_repo = order_repo
        self._notifier = OrderNotifier(sink)
        self._allow_override = allow_override

    def handle(
        self,
        order_id: int,
        new_status: str,
        actor: Actor,
        notes: str = "",
    ) -> OrderDTO:
        actor.require_admin("change an order's status")
        status = parse_choice(OrderStatus, new_status, "status")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")

        old_status = order.status
        order.change_status(
            status,
            changed_by=actor.id,
            notes=notes,
            allow_override=self._allow_override,
        )
        self._order_repo.save(order)

        logger.info(
            "Order status changed",
            order_number=order.order_number,
            old_status=old_status.value,
            new_status=status.value,
            changed_by=actor.id,
            override=self._allow_override,
        )
        self._notifier.status_changed(order, old_status)
        return order_to_dto(order)
