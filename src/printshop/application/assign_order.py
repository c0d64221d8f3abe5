"""Application service: assign an order to a staff member."""

from __future__ import annotations

import structlog

from printshop.application.dto import OrderDTO, order_to_dto
from printshop.domain.exceptions import OrderNotFound
from printshop.domain.model.actor import Actor
from printshop.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class AssignOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, assignee_id: str | None, actor: Actor) -> OrderDTO:
        """Set (or clear, with None) the order's assignee."""
        actor.require_admin("assign orders")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")

        order.assign_to(assignee_id or None)
        self._order_repo.save(order)

        logger.info("Order assigned", order_number=order.order_number, assignee=assignee_id)
        return order_to_dto(order)
