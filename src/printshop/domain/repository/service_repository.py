"""Abstract repository for Service aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, in-memory) live in
the infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from printshop.domain.model.service import Service


class ServiceRepository(ABC):

    @abstractmethod
    def get_by_id(self, service_id: str) -> Service | None:
        """Return a service by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Service | None:
        """Return a service by its name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Service]:
        """Return every service in the catalog, active or not."""

    @abstractmethod
    def save(self, service: Service) -> None:
        """Persist a new or updated service."""
