"""Domain service: Service Catalog lookups used while building orders."""

from __future__ import annotations

from printshop.domain.exceptions import ServiceInactive, ServiceNotFound
from printshop.domain.model.service import Service
from printshop.domain.repository.service_repository import ServiceRepository


class ServiceCatalog:

    def __init__(self, service_repo: ServiceRepository) -> None:
        self._service_repo = service_repo

    def get_service(self, service_id: str) -> Service:
        service = self._service_repo.get_by_id(service_id)
        if service is None:
            raise ServiceNotFound(f"Service not found: '{service_id}'")
        return service

    def get_orderable_service(self, service_id: str) -> Service:
        """Like ``get_service`` but refuses deactivated services."""
        service = self.get_service(service_id)
        if not service.is_active:
            raise ServiceInactive(f"Service not available: {service.name}")
        return service

    @staticmethod
    def is_quantity_in_range(service: Service, quantity: int) -> bool:
        return service.is_quantity_in_range(quantity)
