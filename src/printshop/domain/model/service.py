"""Service aggregate: a printable product in the catalog.

Services live independently of orders: prices change and services get
switched off, but existing orders keep the price snapshot they took at
creation time.  A service referenced by orders is never removed, only
deactivated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from printshop.domain.exceptions import ValidationError
from printshop.domain.model.value_objects import Money

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
DEFAULT_MAX_QUANTITY = 10000


class ServiceCategory(Enum):
    FLYERS = "flyers"
    CARDS = "cards"
    POSTERS = "posters"
    BROCHURES = "brochures"
    OTHER = "other"


class OptionKind(Enum):
    SELECT = "select"
    CHECKBOX = "checkbox"
    NUMBER = "number"


@dataclass(frozen=True)
class ServiceOption:
    """A configurable modifier (finish, paper type...) with a price delta.

    ``price_modifier`` is signed and applied per unit when the option is
    selected on an order item.
    """

    id: str
    name: str
    kind: OptionKind
    choices: tuple[str, ...] = ()
    price_modifier: Decimal = Decimal("0")
    required: bool = False

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValidationError("Option id is required")
        if not self.name or not self.name.strip():
            raise ValidationError("Option name is required")
        if not isinstance(self.price_modifier, Decimal):
            raise ValidationError(f"Price modifier of option '{self.id}' must be a Decimal")
        if self.kind is OptionKind.SELECT and not self.choices:
            raise ValidationError(f"Select option '{self.id}' needs at least one choice")


@dataclass
class Service:
    """Aggregate root for catalog entries.

    Use ``Service.create()`` for new services.  ``__init__`` stays plain
    so repositories can rebuild persisted services as they were stored.
    """

    id: str
    name: str
    category: ServiceCategory
    base_price: Money
    unit: str = "unit"
    min_quantity: int = 1
    max_quantity: int = DEFAULT_MAX_QUANTITY
    options: list[ServiceOption] = field(default_factory=list)
    is_active: bool = True
    description: str = ""

    @staticmethod
    def create(
        id: str,
        name: str,
        category: ServiceCategory,
        base_price: Money,
        unit: str = "unit",
        min_quantity: int = 1,
        max_quantity: int = DEFAULT_MAX_QUANTITY,
        options: list[ServiceOption] | None = None,
        description: str = "",
    ) -> Service:
        if not name or not name.strip():
            raise ValidationError("Service name is required")
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise ValidationError(f"Service name cannot exceed {MAX_NAME_LENGTH} characters")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Service description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
            )
        if not unit or not unit.strip():
            raise ValidationError("Service unit is required")

        service = Service(
            id=id,
            name=name.strip(),
            category=category,
            base_price=base_price,
            unit=unit.strip(),
            description=description.strip(),
        )
        service.set_quantity_bounds(min_quantity, max_quantity)
        service.replace_options(options or [])
        return service

    # --- Mutations ------------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the base price.

        Existing orders are unaffected; their items froze the price.
        """
        self.base_price = new_price

    def set_quantity_bounds(self, min_quantity: int, max_quantity: int) -> None:
        if not isinstance(min_quantity, int) or min_quantity < 1:
            raise ValidationError("Minimum quantity must be at least 1")
        if not isinstance(max_quantity, int) or max_quantity < min_quantity:
            raise ValidationError(
                f"Maximum quantity ({max_quantity}) must be >= minimum quantity ({min_quantity})"
            )
        self.min_quantity = min_quantity
        self.max_quantity = max_quantity

    def replace_options(self, options: list[ServiceOption]) -> None:
        ids = [o.id for o in options]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValidationError(f"Duplicate option ids: {', '.join(duplicates)}")
        self.options = list(options)

    def deactivate(self) -> None:
        self.is_active = False

    def activate(self) -> None:
        self.is_active = True

    # --- Queries --------------------------------------------------------------

    def is_quantity_in_range(self, quantity: int) -> bool:
        return self.min_quantity <= quantity <= self.max_quantity

    def get_option(self, option_id: str) -> ServiceOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None
