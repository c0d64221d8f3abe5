"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from printshop.domain.exceptions import ConflictError
from printshop.domain.model.order import Order, OrderItem, StatusChange
from printshop.domain.model.order_status import (
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    Priority,
)
from printshop.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from printshop.domain.repository.order_repository import OrderRepository
from printshop.infrastructure.persistence.json_store import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        return self._next_id(self._file.read())

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.read():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self, client_id: str | None = None) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._file.read()
            if client_id is None or raw["client_id"] == client_id
        ]

    def order_numbers(self) -> list[str]:
        return [raw["order_number"] for raw in self._file.read() if raw.get("order_number")]

    def save(self, order: Order) -> None:
        with self._file.update() as orders:
            if order.id is None:
                self._insert(orders, order)
            else:
                self._replace(orders, order)
        order.version += 1

    def delete(self, order_id: int) -> None:
        with self._file.update() as orders:
            orders[:] = [raw for raw in orders if raw["id"] != order_id]

    # --- Write helpers --------------------------------------------------------

    def _insert(self, orders: list[dict], order: Order) -> None:
        if any(raw.get("order_number") == order.order_number for raw in orders):
            raise ConflictError(f"Order number {order.order_number} is already taken")
        order.id = self._next_id(orders)
        orders.append(self._to_raw(order, version=order.version + 1))

    def _replace(self, orders: list[dict], order: Order) -> None:
        for i, raw in enumerate(orders):
            if raw["id"] != order.id:
                continue
            if raw.get("version", 0) != order.version:
                raise ConflictError(
                    f"Order {order.order_number} was modified concurrently "
                    f"(stored version {raw.get('version', 0)}, yours {order.version})"
                )
            orders[i] = self._to_raw(order, version=order.version + 1)
            return
        raise ConflictError(f"Order #{order.id} no longer exists")

    @staticmethod
    def _next_id(orders: list[dict]) -> int:
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order, version: int) -> dict:
        return {
            "id": order.id,
            "version": version,
            "order_number": order.order_number,
            "client_id": order.client_id,
            "status": order.status.value,
            "total_price": str(order.total_price.amount),
            "currency": order.total_price.currency,
            "due_date": order.due_date.isoformat() if order.due_date else None,
            "priority": order.priority.value,
            "notes": order.notes,
            "assigned_to": order.assigned_to,
            "payment_status": order.payment_status.value,
            "payment_method": order.payment_method.value,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "items": [
                {
                    "service_id": item.service_id,
                    "service_name": item.service_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "total_price": str(item.total_price.amount),
                    "currency": item.total_price.currency,
                    "options": item.options,
                    "files": item.files,
                    "notes": item.notes,
                }
                for item in order.items
            ],
            "status_history": [
                {
                    "status": change.status.value,
                    "changed_at": change.changed_at.isoformat(),
                    "changed_by": change.changed_by,
                    "notes": change.notes,
                }
                for change in order.status_history
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                service_id=i["service_id"],
                service_name=i["service_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", DEFAULT_CURRENCY)),
                total_price=Money(Decimal(i["total_price"]), i.get("currency", DEFAULT_CURRENCY)),
                options=dict(i.get("options", {})),
                files=list(i.get("files", [])),
                notes=i.get("notes"),
            )
            for i in raw["items"]
        ]
        history = [
            StatusChange(
                status=OrderStatus(h["status"]),
                changed_at=datetime.fromisoformat(h["changed_at"]),
                changed_by=h["changed_by"],
                notes=h.get("notes", ""),
            )
            for h in raw["status_history"]
        ]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            client_id=raw["client_id"],
            items=items,
            status=OrderStatus(raw["status"]),
            total_price=Money(Decimal(raw["total_price"]), raw.get("currency", DEFAULT_CURRENCY)),
            due_date=datetime.fromisoformat(raw["due_date"]) if raw.get("due_date") else None,
            priority=Priority(raw.get("priority", "normal")),
            notes=raw.get("notes"),
            assigned_to=raw.get("assigned_to"),
            status_history=history,
            payment_status=PaymentStatus(raw.get("payment_status", "pending")),
            payment_method=PaymentMethod(raw.get("payment_method", "cash")),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            version=raw.get("version", 0),
        )
