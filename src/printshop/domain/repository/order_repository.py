"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from printshop.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self, client_id: str | None = None) -> list[Order]:
        """Return every order, or only those of *client_id*."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order.

        Raises ConflictError when ``order.version`` no longer matches the
        stored copy, or when a new order reuses an existing order number.
        Bumps ``order.version`` on success.
        """

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Remove an order permanently."""
