"""Application service: Delete Order use case.

Administrators may delete any order.  A client may only delete their
own order, and only while it is still a draft.
"""

from __future__ import annotations

import structlog

from printshop.domain.exceptions import ForbiddenError, OrderNotFound
from printshop.domain.model.actor import Actor
from printshop.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, actor: Actor) -> None:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")

        if not order.can_be_deleted_by(actor):
            raise ForbiddenError(f"Not allowed to delete order #{order_id}")

        self._order_repo.delete(order_id)
        logger.info(
            "Order deleted",
            order_number=order.order_number,
            status=order.status.value,
            deleted_by=actor.id,
        )
