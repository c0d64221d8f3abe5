"""Application service: browse the catalog (query)."""

from __future__ import annotations

from printshop.application.dto import PageDTO, ServiceDTO, paginate, parse_choice, service_to_dto
from printshop.domain.model.service import ServiceCategory
from printshop.domain.repository.service_repository import ServiceRepository

DEFAULT_PAGE_SIZE = 50


class ListServicesHandler:

    def __init__(self, service_repo: ServiceRepository) -> None:
        self._service_repo = service_repo

    def handle(
        self,
        category: str | None = None,
        active_only: bool = False,
        search: str | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> PageDTO[ServiceDTO]:
        """*search* matches the name or the description, ignoring case."""
        services = self._service_repo.list_all()
        if category is not None:
            wanted = parse_choice(ServiceCategory, category, "category")
            services = [s for s in services if s.category is wanted]
        if active_only:
            services = [s for s in services if s.is_active]
        if search:
            needle = search.strip().lower()
            services = [
                s for s in services
                if needle in s.name.lower() or needle in s.description.lower()
            ]

        services.sort(key=lambda s: int(s.id))
        result = paginate(services, page, limit)
        return PageDTO(
            items=[service_to_dto(s) for s in result.items],
            page=result.page,
            limit=result.limit,
            total=result.total,
        )

    def categories(self) -> list[str]:
        """Categories that at least one service uses."""
        used = {s.category for s in self._service_repo.list_all()}
        return [c.value for c in ServiceCategory if c in used]
