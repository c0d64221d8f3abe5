"""Application service: Submit Draft use case.

A client turns their quote (``draft``) into a real order (``pending``).
"""

from __future__ import annotations

import structlog

from printshop.application.dto import OrderDTO, order_to_dto
from printshop.application.notifier import OrderNotifier
from printshop.domain.exceptions import ForbiddenError, InvalidStatusTransition, OrderNotFound
from printshop.domain.model.actor import Actor
from printshop.domain.model.order_status import OrderStatus
from printshop.domain.notifications import NotificationSink
from printshop.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class SubmitDraftHandler:

    def __init__(self, order_repo: OrderRepository, sink: NotificationSink) -> None:
        self._order_repo = order_repo
        self._notifier = OrderNotifier(sink)

    def handle(self, order_id: int, actor: Actor, notes: str = "") -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")
        if not order.can_be_read_by(actor):
            raise ForbiddenError(f"Not allowed to submit order #{order_id}")
        if order.status is not OrderStatus.DRAFT:
            raise InvalidStatusTransition(
                f"Only draft orders can be submitted; order {order.order_number} "
                f"is {order.status.value}"
            )

        order.change_status(OrderStatus.PENDING, changed_by=actor.id, notes=notes)
        self._order_repo.save(order)

        logger.info("Draft submitted", order_number=order.order_number, actor=actor.id)
        self._notifier.status_changed(order, OrderStatus.DRAFT)
        return order_to_dto(order)
