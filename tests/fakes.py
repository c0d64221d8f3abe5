"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON stores but
keep everything in dicts and lists. No file I/O, no side effects.
"""

from __future__ import annotations

from decimal import Decimal

from printshop.domain.exceptions import ConflictError
from printshop.domain.model.order import Order
from printshop.domain.model.service import OptionKind, Service, ServiceCategory, ServiceOption
from printshop.domain.model.value_objects import Money
from printshop.domain.notifications import Notification, NotificationSink
from printshop.domain.repository.order_number_sequence import OrderNumberSequence
from printshop.domain.repository.order_repository import OrderRepository
from printshop.domain.repository.service_repository import ServiceRepository


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self.saves = 0

    def next_id(self) -> int:
        return self._next_id

    def get_by_id(self, order_id: int) -> Order | None:
        return self._store.get(order_id)

    def list_all(self, client_id: str | None = None) -> list[Order]:
        return [
            o for o in self._store.values()
            if client_id is None or o.client_id == client_id
        ]

    def save(self, order: Order) -> None:
        if order.id is None:
            if any(o.order_number == order.order_number for o in self._store.values()):
                raise ConflictError(f"Order number {order.order_number} is already taken")
            order.id = self._next_id
            self._next_id += 1
        order.version += 1
        self._store[order.id] = order
        self.saves += 1

    def delete(self, order_id: int) -> None:
        self._store.pop(order_id, None)


class FakeServiceRepository(ServiceRepository):

    def __init__(self, services: list[Service] | None = None) -> None:
        self._store: dict[str, Service] = {}
        for s in services or []:
            self._store[s.id] = s

    def get_by_id(self, service_id: str) -> Service | None:
        return self._store.get(service_id)

    def get_by_name(self, name: str) -> Service | None:
        for s in self._store.values():
            if s.name.lower() == name.lower():
                return s
        return None

    def list_all(self) -> list[Service]:
        return list(self._store.values())

    def save(self, service: Service) -> None:
        self._store[service.id] = service


class FakeOrderNumberSequence(OrderNumberSequence):

    def __init__(self) -> None:
        self.counters: dict[tuple[int, int], int] = {}

    def next_value(self, year: int, month: int) -> int:
        key = (year, month)
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]


class RecordingNotificationSink(NotificationSink):

    def __init__(self) -> None:
        self.user_events: list[tuple[str, str, dict]] = []
        self.admin_events: list[tuple[str, dict]] = []
        self.notifications: list[Notification] = []

    def emit_to_user(self, user_id: str, event: str, payload: dict) -> None:
        self.user_events.append((user_id, event, payload))

    def emit_to_admins(self, event: str, payload: dict) -> None:
        self.admin_events.append((event, payload))

    def create_notification(self, notification: Notification) -> None:
        self.notifications.append(notification)


class FailingNotificationSink(NotificationSink):

    def emit_to_user(self, user_id: str, event: str, payload: dict) -> None:
        raise ConnectionError("socket gone")

    def emit_to_admins(self, event: str, payload: dict) -> None:
        raise ConnectionError("socket gone")

    def create_notification(self, notification: Notification) -> None:
        raise ConnectionError("database gone")


# --- Catalog builders --------------------------------------------------------


def flyer_service(**overrides) -> Service:
    """100 per unit, 1..1000, a glossy checkbox (+10) and a paper select (+5)."""
    fields = dict(
        id="1",
        name="Flyers A5",
        category=ServiceCategory.FLYERS,
        base_price=Money.of("100"),
        unit="sheet",
        min_quantity=1,
        max_quantity=1000,
        options=[
            ServiceOption(
                id="glossy",
                name="Glossy finish",
                kind=OptionKind.CHECKBOX,
                price_modifier=Decimal("10"),
            ),
            ServiceOption(
                id="paper",
                name="Paper",
                kind=OptionKind.SELECT,
                choices=("standard", "premium"),
                price_modifier=Decimal("5"),
            ),
        ],
    )
    fields.update(overrides)
    return Service(**fields)


def card_service(**overrides) -> Service:
    """Business cards: 25 per unit, 50..5000, a required corner select."""
    fields = dict(
        id="2",
        name="Business cards",
        category=ServiceCategory.CARDS,
        base_price=Money.of("25"),
        unit="card",
        min_quantity=50,
        max_quantity=5000,
        options=[
            ServiceOption(
                id="corners",
                name="Corners",
                kind=OptionKind.SELECT,
                choices=("square", "rounded"),
                price_modifier=Decimal("0.5"),
                required=True,
            ),
        ],
    )
    fields.update(overrides)
    return Service(**fields)
