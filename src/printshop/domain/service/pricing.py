"""Domain service: Pricing Engine.

Turns a service definition, a quantity and the client's option
selection into a line price.  Pure functions, no repository access.

    total = base_price * quantity
          + sum(price_modifier * quantity for each selected option)

The sum is rounded once, half-up on the cent, after every modifier has
been added.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal

from printshop.domain.exceptions import (
    InvalidOptionSelection,
    InvalidQuantity,
    ValidationError,
)
from printshop.domain.model.service import OptionKind, Service, ServiceOption
from printshop.domain.model.value_objects import Money, Quantity, round_cents, to_decimal


@dataclass(frozen=True)
class PriceQuote:
    unit_price: Money
    total_price: Money
    quantity: Quantity


def check_quantity(service: Service, quantity: int) -> Quantity:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(f"Quantity must be an integer, got {quantity!r}")
    if quantity < service.min_quantity:
        raise InvalidQuantity(
            f"Minimum quantity for {service.name}: {service.min_quantity} (got {quantity})"
        )
    if quantity > service.max_quantity:
        raise InvalidQuantity(
            f"Maximum quantity for {service.name}: {service.max_quantity} (got {quantity})"
        )
    return Quantity(quantity)


def validate_selection(service: Service, selected: Mapping[str, object] | None) -> None:
    """Reject option payloads whose values cannot belong to the service.

    Unknown option ids are tolerated; they simply never match.
    """
    if selected is None:
        return
    if not isinstance(selected, Mapping):
        raise InvalidOptionSelection("Options must be a mapping of option id to value")
    for key in selected:
        if not isinstance(key, str):
            raise InvalidOptionSelection(f"Option ids must be strings, got {key!r}")

    for option in service.options:
        if option.id not in selected:
            continue
        value = selected[option.id]
        if value is None:
            continue
        if option.kind is OptionKind.CHECKBOX and not isinstance(value, bool):
            raise InvalidOptionSelection(
                f"Option '{option.name}' expects true/false, got {value!r}"
            )
        if option.kind is OptionKind.SELECT:
            if value != "" and value not in option.choices:
                raise InvalidOptionSelection(
                    f"Option '{option.name}' expects one of "
                    f"{', '.join(option.choices)}, got {value!r}"
                )
        if option.kind is OptionKind.NUMBER and value != "":
            try:
                to_decimal(value, what=f"value for option '{option.name}'")
            except ValidationError as exc:
                raise InvalidOptionSelection(str(exc)) from exc


def is_selected(option: ServiceOption, value: object) -> bool:
    if value is None or value == "":
        return False
    if option.kind is OptionKind.CHECKBOX:
        return value is True
    if option.kind is OptionKind.NUMBER:
        return to_decimal(value, what=f"value for option '{option.name}'") != 0
    return bool(value)


def price(
    service: Service,
    quantity: int,
    selected_options: Mapping[str, object] | None = None,
) -> Money:
    """Return the rounded total price of one line."""
    return quote(service, quantity, selected_options).total_price


def quote(
    service: Service,
    quantity: int,
    selected_options: Mapping[str, object] | None = None,
) -> PriceQuote:
    qty = check_quantity(service, quantity)
    validate_selection(service, selected_options)
    selected = selected_options or {}

    total: Decimal = service.base_price.amount * qty.value
    for option in service.options:
        if option.id in selected and is_selected(option, selected[option.id]):
            total += option.price_modifier * qty.value

    total = round_cents(total)
    if total < 0:
        raise ValidationError(
            f"Selected options bring the price of {service.name} below zero"
        )
    return PriceQuote(
        unit_price=service.base_price,
        total_price=Money(total, service.base_price.currency),
        quantity=qty,
    )


def missing_required_options(
    service: Service, selected: Mapping[str, object] | None
) -> list[ServiceOption]:
    """Required options that were not given a value.

    A checkbox counts as given when it is present with a bool value.
    """
    selected = selected or {}
    missing = []
    for option in service.options:
        if not option.required:
            continue
        value = selected.get(option.id)
        if option.kind is OptionKind.CHECKBOX:
            if not isinstance(value, bool):
                missing.append(option)
        elif value is None or value == "":
            missing.append(option)
    return missing
