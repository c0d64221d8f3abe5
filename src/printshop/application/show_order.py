"""Application service: Show Order use case (query)."""

from __future__ import annotations

from printshop.application.dto import OrderDTO, order_to_dto
from printshop.domain.exceptions import ForbiddenError, OrderNotFound
from printshop.domain.model.actor import Actor
from printshop.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, actor: Actor) -> OrderDTO:
        """Return the order if *actor* owns it or is an administrator."""
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")
        if not order.can_be_read_by(actor):
            raise ForbiddenError(f"Not allowed to view order #{order_id}")
        return order_to_dto(order)
