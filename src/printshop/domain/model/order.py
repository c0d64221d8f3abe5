"""Order aggregate, the core of the domain.

The Order is an aggregate root that owns its line items and its status
history.  All business invariants are enforced here:

- ``total_price`` always equals the sum of the item totals
- ``status_history`` is append-only and starts with the creation entry
- ``order_number`` is assigned exactly once
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from printshop.domain.exceptions import (
    InvalidStatusTransition,
    ItemIndexOutOfRange,
    ValidationError,
)
from printshop.domain.model.actor import Actor
from printshop.domain.model.order_status import (
    STATUS_LABELS,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    Priority,
    can_transition,
)
from printshop.domain.model.value_objects import Money, Quantity


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50
MAX_ITEM_NOTES = 500
MAX_ORDER_NOTES = 1000
MAX_STATUS_NOTES = 500
CREATION_NOTE = "Order created"


@dataclass
class OrderItem:
    """One priced line, holding a snapshot of the service at order time.

    ``unit_price`` and ``total_price`` are frozen when the item is built
    and never recomputed from the live catalog.  Only the attached file
    references may grow afterwards.
    """

    service_id: str
    service_name: str
    quantity: Quantity
    unit_price: Money
    total_price: Money
    options: dict[str, object] = field(default_factory=dict)
    files: list[str] = field(default_factory=list)
    notes: str | None = None

    def __post_init__(self) -> None:
        if self.notes is not None and len(self.notes) > MAX_ITEM_NOTES:
            raise ValidationError(f"Item notes cannot exceed {MAX_ITEM_NOTES} characters")

    def attach_files(self, file_refs: list[str]) -> None:
        for ref in file_refs:
            if not isinstance(ref, str) or not ref.strip():
                raise ValidationError("File references must be non-empty strings")
        self.files.extend(ref.strip() for ref in file_refs)


@dataclass(frozen=True)
class StatusChange:
    """One entry of the append-only status audit trail."""

    status: OrderStatus
    changed_at: datetime
    changed_by: str
    notes: str = ""


def calculate_total(items: list[OrderItem]) -> Money:
    """Sum of the item totals (pure)."""
    if not items:
        return Money.zero()
    result = Money.zero(items[0].total_price.currency)
    for item in items:
        result = result + item.total_price
    return result


@dataclass
class Order:
    """Aggregate root for print orders.

    Use ``Order.create()`` for new orders.  The ``__init__`` is kept simple
    so the repository can reconstitute persisted orders without
    re-validating or re-appending history.
    """

    id: int | None
    order_number: str | None
    client_id: str
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    total_price: Money = field(default_factory=Money.zero)
    due_date: datetime | None = None
    priority: Priority = Priority.NORMAL
    notes: str | None = None
    assigned_to: str | None = None
    status_history: list[StatusChange] = field(default_factory=list)
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: PaymentMethod = PaymentMethod.CASH
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
    version: int = 0

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        client_id: str,
        items: list[OrderItem],
        due_date: datetime | None = None,
        notes: str | None = None,
        priority: Priority = Priority.NORMAL,
        draft: bool = False,
        now: datetime | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants.

        The order starts ``pending`` (or ``draft`` for a quote) with a
        single history entry attributed to the client.  The order number
        is assigned separately, once every check has passed.
        """
        if not client_id or not client_id.strip():
            raise ValidationError("Client is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        if notes is not None and len(notes) > MAX_ORDER_NOTES:
            raise ValidationError(f"Order notes cannot exceed {MAX_ORDER_NOTES} characters")

        currencies = {item.total_price.currency for item in items}
        if len(currencies) > 1:
            raise ValidationError(
                f"Items mix currencies: {', '.join(sorted(currencies))}"
            )

        created_at = now or _now()
        status = OrderStatus.DRAFT if draft else OrderStatus.PENDING
        order = Order(
            id=None,
            order_number=None,
            client_id=client_id,
            items=list(items),
            status=status,
            due_date=due_date,
            priority=priority,
            notes=notes,
            status_history=[
                StatusChange(
                    status=status,
                    changed_at=created_at,
                    changed_by=client_id,
                    notes=CREATION_NOTE,
                )
            ],
            created_at=created_at,
            updated_at=created_at,
        )
        order.recalculate_total()
        return order

    def assign_number(self, order_number: str) -> None:
        if self.order_number is not None:
            raise ValidationError(
                f"Order already numbered {self.order_number}; numbers are immutable"
            )
        self.order_number = order_number

    # --- Items ----------------------------------------------------------------

    def recalculate_total(self) -> Money:
        self.total_price = calculate_total(self.items)
        return self.total_price

    def add_files_to_item(self, item_index: int, file_refs: list[str]) -> OrderItem:
        """Append file references to one item; price and status are untouched."""
        if not 0 <= item_index < len(self.items):
            raise ItemIndexOutOfRange(
                f"Order {self.order_number} has no item #{item_index}"
            )
        item = self.items[item_index]
        item.attach_files(file_refs)
        self.recalculate_total()
        self.touch()
        return item

    # --- State transitions ----------------------------------------------------

    def change_status(
        self,
        new_status: OrderStatus,
        changed_by: str,
        notes: str = "",
        allow_override: bool = False,
        at: datetime | None = None,
    ) -> StatusChange:
        """Move to *new_status* and record exactly one history entry.

        Illegal transitions are refused unless *allow_override* is set, in
        which case any status may follow any other.
        """
        if len(notes) > MAX_STATUS_NOTES:
            raise ValidationError(f"Status notes cannot exceed {MAX_STATUS_NOTES} characters")
        if not allow_override and not can_transition(self.status, new_status):
            raise InvalidStatusTransition(
                f"Cannot move order {self.order_number} from "
                f"{self.status.value} to {new_status.value}"
            )

        entry = StatusChange(
            status=new_status,
            changed_at=at or _now(),
            changed_by=changed_by,
            notes=notes,
        )
        self.status = new_status
        self.status_history.append(entry)
        self.touch(entry.changed_at)
        return entry

    def assign_to(self, user_id: str | None) -> None:
        self.assigned_to = user_id
        self.touch()

    def record_payment(self, status: PaymentStatus, method: PaymentMethod) -> None:
        self.payment_status = status
        self.payment_method = method
        self.touch()

    # --- Access rules ---------------------------------------------------------

    def is_owned_by(self, user_id: str) -> bool:
        return self.client_id == user_id

    def can_be_read_by(self, actor: Actor) -> bool:
        return actor.is_admin or self.is_owned_by(actor.id)

    def can_be_deleted_by(self, actor: Actor) -> bool:
        """Admins delete anything; owners only while the order is a draft."""
        if actor.is_admin:
            return True
        return self.is_owned_by(actor.id) and self.status is OrderStatus.DRAFT

    # --- Computed properties --------------------------------------------------

    @property
    def status_label(self) -> str:
        return STATUS_LABELS[self.status]

    def touch(self, at: datetime | None = None) -> None:
        self.updated_at = at or _now()
