"""Application service: List Orders use case (query)."""

from __future__ import annotations

from printshop.application.dto import OrderDTO, PageDTO, order_to_dto, paginate, parse_choice
from printshop.domain.model.actor import Actor
from printshop.domain.model.order_status import OrderStatus
from printshop.domain.repository.order_repository import OrderRepository

DEFAULT_PAGE_SIZE = 20


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        actor: Actor,
        status: str | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> PageDTO[OrderDTO]:
        """Newest first.  Clients only ever see their own orders.

        *search* matches anywhere in the order number, ignoring case.
        """
        client_id = None if actor.is_admin else actor.id
        orders = self._order_repo.list_all(client_id=client_id)

        if status is not None:
            wanted = parse_choice(OrderStatus, status, "status")
            orders = [o for o in orders if o.status is wanted]
        if search:
            needle = search.strip().lower()
            orders = [o for o in orders if needle in (o.order_number or "").lower()]

        orders.sort(key=lambda o: o.created_at, reverse=True)
        result = paginate(orders, page, limit)
        return PageDTO(
            items=[order_to_dto(o) for o in result.items],
            page=result.page,
            limit=result.limit,
            total=result.total,
        )
