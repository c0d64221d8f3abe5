"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  The mapping helpers at
the bottom are shared by every handler that returns an order or a
service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Generic, TypeVar

from printshop.domain.exceptions import ValidationError
from printshop.domain.model.order import Order, OrderItem, StatusChange
from printshop.domain.model.order_status import STATUS_LABELS
from printshop.domain.model.service import OptionKind, Service, ServiceOption
from printshop.domain.model.value_objects import to_decimal

# --- Input -------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemRequest:
    """Input: one line the client asked for."""

    service_id: str
    quantity: int
    options: dict[str, object] = field(default_factory=dict)
    files: list[str] = field(default_factory=list)
    notes: str | None = None


@dataclass(frozen=True)
class OptionSpec:
    """Input: one configurable option of a service being defined."""

    id: str
    name: str
    kind: str
    choices: list[str] = field(default_factory=list)
    price_modifier: str = "0"
    required: bool = False


# --- Output ------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemDTO:
    service_id: str
    service_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "100.00 XOF"
    total_price: str
    options: dict[str, object]
    files: list[str]
    notes: str | None


@dataclass(frozen=True)
class StatusChangeDTO:
    status: str
    label: str
    changed_at: str
    changed_by: str
    notes: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    client_id: str
    status: str
    status_label: str
    items: list[OrderItemDTO]
    total: str
    priority: str
    due_date: str | None
    notes: str | None
    assigned_to: str | None
    payment_status: str
    payment_method: str
    status_history: list[StatusChangeDTO]
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class ServiceOptionDTO:
    id: str
    name: str
    kind: str
    choices: list[str]
    price_modifier: str
    required: bool


@dataclass(frozen=True)
class ServiceDTO:
    id: str
    name: str
    category: str
    base_price: str
    unit: str
    min_quantity: int
    max_quantity: int
    is_active: bool
    description: str
    options: list[ServiceOptionDTO]


@dataclass(frozen=True)
class PriceQuoteDTO:
    service_id: str
    service_name: str
    quantity: int
    unit_price: str
    total_price: str
    options: dict[str, object]


@dataclass(frozen=True)
class StatusStatsDTO:
    count: int
    revenue: str  # plain amount, e.g. "1250.00"


T = TypeVar("T")

MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageDTO(Generic[T]):
    """One page of a listing plus the size of the whole result."""

    items: list[T]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return -(-self.total // self.limit)


def paginate(items: list[T], page: int, limit: int) -> PageDTO[T]:
    """Slice *items* to the requested 1-based page."""
    if page < 1:
        raise ValidationError(f"Page must be 1 or more, got {page}")
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}, got {limit}")
    start = (page - 1) * limit
    return PageDTO(items=items[start:start + limit], page=page, limit=limit, total=len(items))


# --- Parsing helpers ---------------------------------------------------------

E = TypeVar("E", bound=Enum)


def parse_choice(enum_cls: type[E], value: str | E, what: str) -> E:
    """Turn a raw string into an enum member, or fail with ValidationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {what} {value!r} (expected one of: {allowed})")


def to_service_option(spec: OptionSpec) -> ServiceOption:
    return ServiceOption(
        id=spec.id.strip(),
        name=spec.name.strip(),
        kind=parse_choice(OptionKind, spec.kind, "option kind"),
        choices=tuple(c.strip() for c in spec.choices if c.strip()),
        price_modifier=to_decimal(spec.price_modifier, what="price modifier"),
        required=spec.required,
    )


# --- Mapping -----------------------------------------------------------------


def _fmt(when: datetime | None) -> str | None:
    """Aware values are shown in UTC; naive ones as given, without a zone."""
    if when is None:
        return None
    if when.tzinfo is None:
        return when.strftime("%Y-%m-%d %H:%M")
    return when.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _item_to_dto(item: OrderItem) -> OrderItemDTO:
    return OrderItemDTO(
        service_id=item.service_id,
        service_name=item.service_name,
        quantity=item.quantity.value,
        unit_price=str(item.unit_price),
        total_price=str(item.total_price),
        options=dict(item.options),
        files=list(item.files),
        notes=item.notes,
    )


def _change_to_dto(change: StatusChange) -> StatusChangeDTO:
    return StatusChangeDTO(
        status=change.status.value,
        label=STATUS_LABELS[change.status],
        changed_at=_fmt(change.changed_at),  # type: ignore[arg-type]
        changed_by=change.changed_by,
        notes=change.notes,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,  # type: ignore[arg-type]
        client_id=order.client_id,
        status=order.status.value,
        status_label=order.status_label,
        items=[_item_to_dto(item) for item in order.items],
        total=str(order.total_price),
        priority=order.priority.value,
        due_date=_fmt(order.due_date),
        notes=order.notes,
        assigned_to=order.assigned_to,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method.value,
        status_history=[_change_to_dto(c) for c in order.status_history],
        created_at=_fmt(order.created_at),  # type: ignore[arg-type]
        updated_at=_fmt(order.updated_at),  # type: ignore[arg-type]
    )


def service_to_dto(service: Service) -> ServiceDTO:
    return ServiceDTO(
        id=service.id,
        name=service.name,
        category=service.category.value,
        base_price=str(service.base_price),
        unit=service.unit,
        min_quantity=service.min_quantity,
        max_quantity=service.max_quantity,
        is_active=service.is_active,
        description=service.description,
        options=[
            ServiceOptionDTO(
                id=o.id,
                name=o.name,
                kind=o.kind.value,
                choices=list(o.choices),
                price_modifier=str(o.price_modifier),
                required=o.required,
            )
            for o in service.options
        ],
    )
