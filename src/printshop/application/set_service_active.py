"""Application service: activate or deactivate a service.

Deactivation is the only way a service leaves the catalog; orders that
reference it keep working from their price snapshot.
"""

from __future__ import annotations

import structlog

from printshop.application.dto import ServiceDTO, service_to_dto
from printshop.domain.model.actor import Actor
from printshop.domain.repository.service_repository import ServiceRepository
from printshop.domain.service.catalog import ServiceCatalog

logger = structlog.get_logger(__name__)


class SetServiceActiveHandler:

    def __init__(self, service_repo: ServiceRepository) -> None:
        self._service_repo = service_repo

    def handle(self, actor: Actor, service_id: str, active: bool) -> ServiceDTO:
        actor.require_admin("manage the catalog")
        service = ServiceCatalog(self._service_repo).get_service(service_id)

        if active:
            service.activate()
        else:
            service.deactivate()
        self._service_repo.save(service)

        logger.info(
            "Service activated" if active else "Service deactivated",
            service_id=service.id,
            name=service.name,
        )
        return service_to_dto(service)
