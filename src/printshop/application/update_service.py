"""Application service: Update Service use case.

Only the fields passed (not None) change.  Orders placed before the
update keep the prices they were created with.
"""

from __future__ import annotations

import structlog

from printshop.application.dto import (
    OptionSpec,
    ServiceDTO,
    parse_choice,
    service_to_dto,
    to_service_option,
)
from printshop.domain.exceptions import ValidationError
from printshop.domain.model.actor import Actor
from printshop.domain.model.service import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH, ServiceCategory
from printshop.domain.model.value_objects import Money
from printshop.domain.repository.service_repository import ServiceRepository
from printshop.domain.service.catalog import ServiceCatalog

logger = structlog.get_logger(__name__)


class UpdateServiceHandler:

    def __init__(self, service_repo: ServiceRepository) -> None:
        self._service_repo = service_repo

    def handle(
        self,
        actor: Actor,
        service_id: str,
        name: str | None = None,
        description: str | None = None,
        category: str | None = None,
        base_price: str | None = None,
        unit: str | None = None,
        min_quantity: int | None = None,
        max_quantity: int | None = None,
        options: list[OptionSpec] | None = None,
    ) -> ServiceDTO:
        actor.require_admin("manage the catalog")
        service = ServiceCatalog(self._service_repo).get_service(service_id)

        if name is not None:
            name = name.strip()
            if not name or len(name) > MAX_NAME_LENGTH:
                raise ValidationError(
                    f"Service name must be 1 to {MAX_NAME_LENGTH} characters"
                )
            clash = self._service_repo.get_by_name(name)
            if clash is not None and clash.id != service.id:
                raise ValidationError(f"Service '{name}' already exists")
            service.name = name
        if description is not None:
            if len(description) > MAX_DESCRIPTION_LENGTH:
                raise ValidationError(
                    f"Service description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
                )
            service.description = description.strip()
        if category is not None:
            service.category = parse_choice(ServiceCategory, category, "category")
        if base_price is not None:
            service.update_price(Money.of(base_price, service.base_price.currency))
        if unit is not None:
            if not unit.strip():
                raise ValidationError("Service unit is required")
            service.unit = unit.strip()
        if min_quantity is not None or max_quantity is not None:
            service.set_quantity_bounds(
                service.min_quantity if min_quantity is None else min_quantity,
                service.max_quantity if max_quantity is None else max_quantity,
            )
        if options is not None:
            service.replace_options([to_service_option(spec) for spec in options])

        self._service_repo.save(service)
        logger.info("Service updated", service_id=service.id, name=service.name)
        return service_to_dto(service)
