"""Application service: record how (and whether) an order was paid.

Bookkeeping only; no payment gateway is involved.
"""

from __future__ import annotations

import structlog

from printshop.application.dto import OrderDTO, order_to_dto, parse_choice
from printshop.domain.exceptions import OrderNotFound
from printshop.domain.model.actor import Actor
from printshop.domain.model.order_status import PaymentMethod, PaymentStatus
from printshop.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class RecordPaymentHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: int,
        payment_status: str,
        payment_method: str,
        actor: Actor,
    ) -> OrderDTO:
        actor.require_admin("record payments")
        status = parse_choice(PaymentStatus, payment_status, "payment status")
        method = parse_choice(PaymentMethod, payment_method, "payment method")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")

        order.record_payment(status, method)
        self._order_repo.save(order)

        logger.info(
            "Payment recorded",
            order_number=order.order_number,
            payment_status=status.value,
            payment_method=method.value,
        )
        return order_to_dto(order)
