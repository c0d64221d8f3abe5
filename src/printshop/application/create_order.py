"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
This is the only place that coordinates the catalog, the pricing
engine, order numbering and the Order aggregate.

All-or-nothing: every item is priced and every rule checked before the
order number is drawn or anything is saved.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from printshop.application.dto import OrderDTO, OrderItemRequest, order_to_dto, parse_choice
from printshop.application.notifier import OrderNotifier
from printshop.domain.exceptions import MissingRequiredOption, ValidationError
from printshop.domain.model.order import Order, OrderItem
from printshop.domain.model.order_status import Priority
from printshop.domain.notifications import NotificationSink
from printshop.domain.repository.order_number_sequence import OrderNumberSequence
from printshop.domain.repository.order_repository import OrderRepository
from printshop.domain.repository.service_repository import ServiceRepository
from printshop.domain.service import pricing
from printshop.domain.service.catalog import ServiceCatalog
from printshop.domain.service.order_numbering import OrderNumberGenerator

logger = structlog.get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        service_repo: ServiceRepository,
        sequence: OrderNumberSequence,
        sink: NotificationSink,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._catalog = ServiceCatalog(service_repo)
        self._numbers = OrderNumberGenerator(sequence)
        self._notifier = OrderNotifier(sink)
        self._clock = clock

    def handle(
        self,
        client_id: str,
        item_requests: list[OrderItemRequest],
        due_date: datetime | None = None,
        notes: str | None = None,
        priority: str = "normal",
        draft: bool = False,
    ) -> OrderDTO:
        """Create a new print order.

        Steps:
        1. Resolve each service (must exist and be active).
        2. Price each item; unit and total prices are frozen on the item.
        3. Let the Order aggregate validate its own rules.
        4. Draw an order number, persist, notify.
        """
        if not item_requests:
            raise ValidationError("Order must contain at least one item")

        items = [self._build_item(request) for request in item_requests]

        order = Order.create(
            client_id=client_id,
            items=items,
            due_date=due_date,
            notes=notes,
            priority=parse_choice(Priority, priority, "priority"),
            draft=draft,
            now=self._clock(),
        )

        order.assign_number(self._numbers.next_number(order.created_at))
        self._order_repo.save(order)

        logger.info(
            "Order created",
            order_id=order.id,
            order_number=order.order_number,
            client_id=order.client_id,
            status=order.status.value,
            total=str(order.total_price),
            items=len(order.items),
        )
        self._notifier.order_created(order)

        return order_to_dto(order)

    def _build_item(self, request: OrderItemRequest) -> OrderItem:
        service = self._catalog.get_orderable_service(request.service_id)

        quote = pricing.quote(service, request.quantity, request.options)

        missing = pricing.missing_required_options(service, request.options)
        if missing:
            names = ", ".join(option.name for option in missing)
            raise MissingRequiredOption(f"Required options missing for {service.name}: {names}")

        item = OrderItem(
            service_id=service.id,
            service_name=service.name,
            quantity=quote.quantity,
            unit_price=quote.unit_price,  # <-- price snapshot
            total_price=quote.total_price,
            options=dict(request.options or {}),
            notes=request.notes,
        )
        item.attach_files(list(request.files))
        return item
