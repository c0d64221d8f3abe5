"""CLI commands for the Service catalog."""

from __future__ import annotations

import json

import click

from printshop.application.add_service import AddServiceHandler
from printshop.application.dto import OptionSpec, ServiceDTO
from printshop.application.list_services import ListServicesHandler
from printshop.application.quote_service import QuoteServiceHandler
from printshop.application.set_service_active import SetServiceActiveHandler
from printshop.application.update_service import UpdateServiceHandler
from printshop.domain.exceptions import DomainException
from printshop.domain.model.service import ServiceCategory
from printshop.infrastructure.bootstrap import service_repository
from printshop.infrastructure.cli.context import CliContext, DomainError, pass_context
from printshop.infrastructure.cli.order_commands import parse_options, typed_options

_CATEGORIES = [c.value for c in ServiceCategory]


def parse_option_specs(raw: str | None) -> list[OptionSpec] | None:
    """Parse a JSON list of option objects, e.g.

    [{"id": "finish", "name": "Finish", "kind": "select",
      "choices": ["matte", "glossy"], "price_modifier": "5"}]
    """
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Options are not valid JSON: {exc}")
    if not isinstance(data, list):
        raise click.BadParameter("Options must be a JSON list of objects")

    specs = []
    for entry in data:
        if not isinstance(entry, dict):
            raise click.BadParameter("Options must be a JSON list of objects")
        try:
            specs.append(
                OptionSpec(
                    id=str(entry["id"]),
                    name=str(entry["name"]),
                    kind=str(entry["kind"]),
                    choices=[str(c) for c in entry.get("choices", [])],
                    price_modifier=str(entry.get("price_modifier", "0")),
                    required=bool(entry.get("required", False)),
                )
            )
        except KeyError as exc:
            raise click.BadParameter(f"Option is missing the {exc} field")
    return specs


def _display_service(dto: ServiceDTO) -> None:
    state = "active" if dto.is_active else "inactive"
    click.echo(f"Service #{dto.id} '{dto.name}' [{dto.category}, {state}]")
    click.echo(
        f"  {dto.base_price} per {dto.unit}, quantity {dto.min_quantity}-{dto.max_quantity}"
    )
    for option in dto.options:
        extra = f" choices={','.join(option.choices)}" if option.choices else ""
        flag = " required" if option.required else ""
        click.echo(
            f"  option {option.id} ({option.kind}) {option.name}: "
            f"{option.price_modifier}/unit{extra}{flag}"
        )


@click.command("add")
@click.option("--name", required=True, help="Service name.")
@click.option("--category", required=True, type=click.Choice(_CATEGORIES))
@click.option("--price", required=True, help="Base price per unit (e.g. 100).")
@click.option("--unit", default="unit", show_default=True, help="Unit label.")
@click.option("--min", "min_quantity", default=1, show_default=True, type=int)
@click.option("--max", "max_quantity", default=10000, show_default=True, type=int)
@click.option("--description", default="", help="Description.")
@click.option("--options", "options_json", default=None, help="Options as a JSON list.")
@pass_context
def service_add(
    ctx: CliContext,
    name: str,
    category: str,
    price: str,
    unit: str,
    min_quantity: int,
    max_quantity: int,
    description: str,
    options_json: str | None,
) -> None:
    """Add a new service to the catalog."""
    handler = AddServiceHandler(
        service_repo=service_repository(ctx.settings),
        currency=ctx.settings.currency,
    )

    try:
        dto = handler.handle(
            ctx.actor,
            name=name,
            category=category,
            base_price=price,
            unit=unit,
            min_quantity=min_quantity,
            max_quantity=max_quantity,
            options=parse_option_specs(options_json),
            description=description,
        )
    except DomainException as exc:
        raise DomainError(exc)

    click.echo(f"Service #{dto.id} '{dto.name}' added at {dto.base_price}")


@click.command("list")
@click.option("--category", type=click.Choice(_CATEGORIES), default=None)
@click.option("--active-only", is_flag=True, default=False, help="Hide inactive services.")
@click.option("--search", default=None, help="Text to find in the name or description.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=50, show_default=True, type=int, help="Services per page.")
@pass_context
def service_list(
    ctx: CliContext,
    category: str | None,
    active_only: bool,
    search: str | None,
    page: int,
    limit: int,
) -> None:
    """List the services in the catalog."""
    handler = ListServicesHandler(service_repo=service_repository(ctx.settings))

    try:
        result = handler.handle(
            category=category, active_only=active_only, search=search, page=page, limit=limit
        )
    except DomainException as exc:
        raise DomainError(exc)

    if not result.items:
        click.echo("No services found.")
        return

    for dto in result.items:
        _display_service(dto)
    click.echo(f"Page {result.page} of {result.pages} ({result.total} services)")


@click.command("categories")
@pass_context
def service_categories(ctx: CliContext) -> None:
    """List the categories in use."""
    handler = ListServicesHandler(service_repo=service_repository(ctx.settings))
    for category in handler.categories():
        click.echo(category)


@click.command("update")
@click.option("--id", "service_id", required=True, help="Service ID.")
@click.option("--name", default=None)
@click.option("--category", type=click.Choice(_CATEGORIES), default=None)
@click.option("--price", default=None, help="New base price (e.g. 120).")
@click.option("--unit", default=None)
@click.option("--min", "min_quantity", type=int, default=None)
@click.option("--max", "max_quantity", type=int, default=None)
@click.option("--description", default=None)
@click.option("--options", "options_json", default=None, help="Replace options (JSON list).")
@pass_context
def service_update(
    ctx: CliContext,
    service_id: str,
    name: str | None,
    category: str | None,
    price: str | None,
    unit: str | None,
    min_quantity: int | None,
    max_quantity: int | None,
    description: str | None,
    options_json: str | None,
) -> None:
    """Update a service's fields."""
    handler = UpdateServiceHandler(service_repo=service_repository(ctx.settings))

    try:
        dto = handler.handle(
            ctx.actor,
            service_id,
            name=name,
            description=description,
            category=category,
            base_price=price,
            unit=unit,
            min_quantity=min_quantity,
            max_quantity=max_quantity,
            options=parse_option_specs(options_json),
        )
    except DomainException as exc:
        raise DomainError(exc)

    click.echo(f"Service #{dto.id} updated.")
    _display_service(dto)


def _set_active(ctx: CliContext, service_id: str, active: bool) -> None:
    handler = SetServiceActiveHandler(service_repo=service_repository(ctx.settings))

    try:
        dto = handler.handle(ctx.actor, service_id, active)
    except DomainException as exc:
        raise DomainError(exc)

    click.echo(f"Service #{dto.id} '{dto.name}' {'activated' if active else 'deactivated'}.")


@click.command("activate")
@click.option("--id", "service_id", required=True, help="Service ID.")
@pass_context
def service_activate(ctx: CliContext, service_id: str) -> None:
    """Make a service orderable again."""
    _set_active(ctx, service_id, True)


@click.command("deactivate")
@click.option("--id", "service_id", required=True, help="Service ID.")
@pass_context
def service_deactivate(ctx: CliContext, service_id: str) -> None:
    """Withdraw a service from the catalog (existing orders are kept)."""
    _set_active(ctx, service_id, False)


@click.command("quote")
@click.option("--id", "service_id", required=True, help="Service ID.")
@click.option("--qty", "quantity", required=True, type=int, help="Quantity.")
@click.option("--option", "options", multiple=True, help="Selected option as 'id=value'.")
@pass_context
def service_quote(ctx: CliContext, service_id: str, quantity: int, options: tuple[str, ...]) -> None:
    """Price a service without placing an order."""
    service_repo = service_repository(ctx.settings)
    selected = typed_options(
        service_repo.get_by_id(service_id), parse_options(";".join(options))
    )

    handler = QuoteServiceHandler(service_repo=service_repo)

    try:
        dto = handler.handle(service_id, quantity, selected)
    except DomainException as exc:
        raise DomainError(exc)

    click.echo(f"{dto.service_name} x {dto.quantity}")
    click.echo(f"  Unit price:  {dto.unit_price}")
    click.echo(f"  Total price: {dto.total_price}")
