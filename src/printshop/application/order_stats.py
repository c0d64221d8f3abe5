"""Application service: order counts and revenue per status (query)."""

from __future__ import annotations

from decimal import Decimal

from printshop.application.dto import StatusStatsDTO
from printshop.domain.model.order_status import OrderStatus
from printshop.domain.repository.order_repository import OrderRepository


class OrderStatsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, client_id: str | None = None) -> dict[str, StatusStatsDTO]:
        """Every status is present in the result, even with zero orders."""
        counts = {status: 0 for status in OrderStatus}
        revenue = {status: Decimal("0") for status in OrderStatus}

        for order in self._order_repo.list_all(client_id=client_id):
            counts[order.status] += 1
            revenue[order.status] += order.total_price.amount

        return {
            status.value: StatusStatsDTO(
                count=counts[status],
                revenue=f"{revenue[status]:.2f}",
            )
            for status in OrderStatus
        }
