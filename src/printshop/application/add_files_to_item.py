"""Application service: attach uploaded files to an order item.

File storage happens elsewhere; the order only keeps the opaque
references (URLs or paths) it is handed.
"""

from __future__ import annotations

import structlog

from printshop.application.dto import OrderDTO, order_to_dto
from printshop.domain.exceptions import ForbiddenError, OrderNotFound, ValidationError
from printshop.domain.model.actor import Actor
from printshop.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class AddFilesToItemHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: int,
        item_index: int,
        file_refs: list[str],
        actor: Actor,
    ) -> OrderDTO:
        if not file_refs:
            raise ValidationError("At least one file reference is required")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")
        if not order.can_be_read_by(actor):
            raise ForbiddenError(f"Not allowed to modify order #{order_id}")

        order.add_files_to_item(item_index, file_refs)
        self._order_repo.save(order)

        logger.info(
            "Files attached to order item",
            order_number=order.order_number,
            item_index=item_index,
            files=len(file_refs),
        )
        return order_to_dto(order)
