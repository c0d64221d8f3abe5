"""JSON-file-backed implementation of ServiceRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from printshop.domain.model.service import OptionKind, Service, ServiceCategory, ServiceOption
from printshop.domain.model.value_objects import DEFAULT_CURRENCY, Money
from printshop.domain.repository.service_repository import ServiceRepository
from printshop.infrastructure.persistence.json_store import JsonFile


class JsonServiceRepository(ServiceRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, empty=[])

    # --- ServiceRepository interface ------------------------------------------

    def get_by_id(self, service_id: str) -> Service | None:
        for raw in self._file.read():
            if raw["id"] == service_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Service | None:
        for raw in self._file.read():
            if raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Service]:
        return [self._to_domain(raw) for raw in self._file.read()]

    def save(self, service: Service) -> None:
        with self._file.update() as services:
            for i, raw in enumerate(services):
                if raw["id"] == service.id:
                    services[i] = self._to_raw(service)
                    break
            else:
                services.append(self._to_raw(service))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(service: Service) -> dict:
        return {
            "id": service.id,
            "name": service.name,
            "description": service.description,
            "category": service.category.value,
            "base_price": str(service.base_price.amount),
            "currency": service.base_price.currency,
            "unit": service.unit,
            "min_quantity": service.min_quantity,
            "max_quantity": service.max_quantity,
            "is_active": service.is_active,
            "options": [
                {
                    "id": o.id,
                    "name": o.name,
                    "kind": o.kind.value,
                    "choices": list(o.choices),
                    "price_modifier": str(o.price_modifier),
                    "required": o.required,
                }
                for o in service.options
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Service:
        return Service(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            category=ServiceCategory(raw["category"]),
            base_price=Money(Decimal(raw["base_price"]), raw.get("currency", DEFAULT_CURRENCY)),
            unit=raw.get("unit", "unit"),
            min_quantity=raw["min_quantity"],
            max_quantity=raw["max_quantity"],
            is_active=raw.get("is_active", True),
            options=[
                ServiceOption(
                    id=o["id"],
                    name=o["name"],
                    kind=OptionKind(o["kind"]),
                    choices=tuple(o.get("choices", [])),
                    price_modifier=Decimal(o.get("price_modifier", "0")),
                    required=o.get("required", False),
                )
                for o in raw.get("options", [])
            ],
        )
