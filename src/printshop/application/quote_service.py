"""Application service: price a service without placing an order."""

from __future__ import annotations

from printshop.application.dto import PriceQuoteDTO
from printshop.domain.repository.service_repository import ServiceRepository
from printshop.domain.service import pricing
from printshop.domain.service.catalog import ServiceCatalog


class QuoteServiceHandler:

    def __init__(self, service_repo: ServiceRepository) -> None:
        self._service_repo = service_repo

    def handle(
        self,
        service_id: str,
        quantity: int,
        options: dict[str, object] | None = None,
    ) -> PriceQuoteDTO:
        service = ServiceCatalog(self._service_repo).get_service(service_id)
        quote = pricing.quote(service, quantity, options)
        return PriceQuoteDTO(
            service_id=service.id,
            service_name=service.name,
            quantity=quote.quantity.value,
            unit_price=str(quote.unit_price),
            total_price=str(quote.total_price),
            options=dict(options or {}),
        )
