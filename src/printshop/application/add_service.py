"""Application service: Add Service use case."""

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
from printshop.domain.model.service import DEFAULT_MAX_QUANTITY, Service, ServiceCategory
from printshop.domain.model.value_objects import DEFAULT_CURRENCY, Money
from printshop.domain.repository.service_repository import ServiceRepository

logger = structlog.get_logger(__name__)


class AddServiceHandler:

    def __init__(self, service_repo: ServiceRepository, currency: str = DEFAULT_CURRENCY) -> None:
        self._service_repo = service_repo
        self._currency = currency

    def handle(
        self,
        actor: Actor,
        name: str,
        category: str,
        base_price: str,
        unit: str = "unit",
        min_quantity: int = 1,
        max_quantity: int = DEFAULT_MAX_QUANTITY,
        options: list[OptionSpec] | None = None,
        description: str = "",
    ) -> ServiceDTO:
        """Add a new service to the catalog."""
        actor.require_admin("manage the catalog")

        if not name or not name.strip():
            raise ValidationError("Service name is required")

        existing = self._service_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Service '{name.strip()}' already exists")

        # Auto-assign ID based on existing services
        all_services = self._service_repo.list_all()
        if all_services:
            next_id = str(max(int(s.id) for s in all_services) + 1)
        else:
            next_id = "1"

        service = Service.create(
            id=next_id,
            name=name,
            category=parse_choice(ServiceCategory, category, "category"),
            base_price=Money.of(base_price, self._currency),
            unit=unit,
            min_quantity=min_quantity,
            max_quantity=max_quantity,
            options=[to_service_option(spec) for spec in options or []],
            description=description,
        )
        self._service_repo.save(service)

        logger.info("Service added", service_id=service.id, name=service.name)
        return service_to_dto(service)
