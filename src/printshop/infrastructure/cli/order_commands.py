"""CLI commands for the Order aggregate."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import timezone

import click

from printshop.application.add_files_to_item import AddFilesToItemHandler
from printshop.application.assign_order import AssignOrderHandler
from printshop.application.create_order import CreateOrderHandler
from printshop.application.delete_order import DeleteOrderHandler
from printshop.application.dto import OrderDTO, OrderItemRequest
from printshop.application.list_orders import ListOrdersHandler
from printshop.application.order_stats import OrderStatsHandler
from printshop.application.record_payment import RecordPaymentHandler
from printshop.application.show_order import ShowOrderHandler
from printshop.application.submit_draft import SubmitDraftHandler
from printshop.application.update_order_status import UpdateOrderStatusHandler
from printshop.domain.exceptions import DomainException
from printshop.domain.model.order_status import (
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    Priority,
)
from printshop.domain.model.service import OptionKind, Service
from printshop.infrastructure.bootstrap import (
    notification_sink,
    order_number_sequence,
    order_repository,
    service_repository,
)
from printshop.infrastructure.cli.context import CliContext, DomainError, pass_context


def parse_options(raw: str, separator: str = ";") -> dict[str, object]:
    """Parse 'finish=glossy;rush=true' into an options mapping of text values."""
    options: dict[str, object] = {}
    for pair in raw.split(separator):
        pair = pair.strip()
        if not pair:
            continue
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid option '{pair}'. Expected 'option_id=value'."
            )
        key, value = pair.split("=", 1)
        options[key.strip()] = value.strip()
    return options


def typed_options(service: Service | None, options: Mapping[str, object]) -> dict[str, object]:
    """Give checkbox options their boolean; every other value stays text.

    Unknown services are passed through untouched so the use case can
    report them.
    """
    typed = dict(options)
    if service is None:
        return typed
    for option in service.options:
        value = typed.get(option.id)
        if option.kind is OptionKind.CHECKBOX and isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("true", "false"):
                typed[option.id] = lowered == "true"
    return typed


def parse_item(raw: str) -> OrderItemRequest:
    """Parse 'SERVICE_ID:QTY[:opt=val;opt=val]' into an OrderItemRequest."""
    parts = raw.strip().split(":", 2)
    if len(parts) < 2:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected 'ServiceId:Quantity[:opt=val;...]'."
        )
    service_id, qty_str = parts[0].strip(), parts[1].strip()
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(
            f"Invalid quantity '{qty_str}' for service '{service_id}'."
        )
    options = parse_options(parts[2]) if len(parts) == 3 else {}
    return OrderItemRequest(service_id=service_id, quantity=qty, options=options)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (#{dto.id}, status={dto.status}: {dto.status_label})")
    click.echo(f"Client:   {dto.client_id}")
    click.echo(f"Priority: {dto.priority}")
    if dto.due_date:
        click.echo(f"Due:      {dto.due_date}")
    if dto.assigned_to:
        click.echo(f"Assigned: {dto.assigned_to}")
    click.echo(f"Payment:  {dto.payment_status} ({dto.payment_method})")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()

    click.echo(f"  {'#':<3} {'Service':<24} {'Qty':>6} {'Unit':>14} {'Total':>16}")
    click.echo(f"  {'-'*67}")
    for index, item in enumerate(dto.items):
        click.echo(
            f"  {index:<3} {item.service_name:<24} {item.quantity:>6} "
            f"{item.unit_price:>14} {item.total_price:>16}"
        )
        if item.options:
            opts = ", ".join(f"{k}={v}" for k, v in item.options.items())
            click.echo(f"      options: {opts}")
        for ref in item.files:
            click.echo(f"      file: {ref}")
    click.echo(f"  {'-'*67}")
    click.echo(f"  {'Order Total':<34} {dto.total:>33}")

    if dto.notes:
        click.echo()
        click.echo(f"Notes: {dto.notes}")


@click.command("create")
@click.option(
    "--item", "items", multiple=True, required=True,
    help="Item as 'ServiceId:Qty[:opt=val;opt=val]'. Repeat for several items.",
)
@click.option("--due", "due_date", type=click.DateTime(), default=None, help="Due date.")
@click.option("--notes", default=None, help="Free-text notes.")
@click.option(
    "--priority", type=click.Choice([p.value for p in Priority]), default="normal",
    show_default=True,
)
@click.option("--draft", is_flag=True, default=False, help="Save as a quote (draft).")
@pass_context
def order_create(
    ctx: CliContext,
    items: tuple[str, ...],
    due_date,
    notes: str | None,
    priority: str,
    draft: bool,
) -> None:
    """Create a new print order for the current user.

    A due date given without a zone is read as local time.
    """
    service_repo = service_repository(ctx.settings)
    requests = []
    for raw in items:
        request = parse_item(raw)
        service = service_repo.get_by_id(request.service_id)
        requests.append(
            dataclasses.replace(request, options=typed_options(service, request.options))
        )
    if due_date is not None:
        due_date = due_date.astimezone(timezone.utc)

    handler = CreateOrderHandler(
        order_repo=order_repository(ctx.settings),
        service_repo=service_repo,
        sequence=order_number_sequence(ctx.settings),
        sink=notification_sink(ctx.settings),
    )

    try:
        dto = handler.handle(
            client_id=ctx.actor.id,
            item_requests=requests,
            due_date=due_date,
            notes=notes,
            priority=priority,
            draft=draft,
        )
    except DomainException as exc:
        raise DomainError(exc)

    click.echo(f"Order {dto.order_number} created  (status={dto.status})")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--history", is_flag=True, default=False, help="Include the status history.")
@pass_context
def order_show(ctx: CliContext, order_id: int, history: bool) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(ctx.settings))

    try:
        dto = handler.handle(order_id, ctx.actor)
    except DomainException as exc:
        raise DomainError(exc)

    _display_order(dto)
    if history:
        click.echo()
        click.echo("History:")
        for change in dto.status_history:
            line = f"  {change.changed_at}  {change.status:<11} by {change.changed_by}"
            if change.notes:
                line += f"  ({change.notes})"
            click.echo(line)


@click.command("list")
@click.option(
    "--status", type=click.Choice([s.value for s in OrderStatus]), default=None,
    help="Only orders in this status.",
)
@click.option("--search", default=None, help="Part of an order number.")
@click.option("--page", default=1, show_default=True, type=int)
@click.option("--limit", default=20, show_default=True, type=int, help="Orders per page.")
@pass_context
def order_list(
    ctx: CliContext, status: str | None, search: str | None, page: int, limit: int
) -> None:
    """List orders (all for admins, your own for clients)."""
    handler = ListOrdersHandler(order_repo=order_repository(ctx.settings))

    try:
        result = handler.handle(ctx.actor, status=status, search=search, page=page, limit=limit)
    except DomainException as exc:
        raise DomainError(exc)

    if not result.items:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<5} {'Number':<14} {'Client':<12} {'Status':<11} {'Total':>16}")
    click.echo("-" * 62)
    for dto in result.items:
        click.echo(
            f"{dto.id:<5} {dto.order_number:<14} {dto.client_id:<12} "
            f"{dto.status:<11} {dto.total:>16}"
        )
    click.echo(f"Page {result.page} of {result.pages} ({result.total} orders)")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--to", "new_status", required=True, type=click.Choice([s.value for s in OrderStatus]),
    help="New status.",
)
@click.option("--notes", default="", help="Why the status changed.")
@pass_context
def order_status(ctx: CliContext, order_id: int, new_status: str, notes: str) -> None:
    """Move an order to another status (administrators)."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(ctx.settings),
        sink=notification_sink(ctx.settings),
        allow_override=ctx.settings.allow_status_override,
    )

    try:
        dto = handler.handle(order_id, new_status, ctx.actor, notes=notes)
    except DomainException as exc:
        raise DomainError(exc)

    click.echo(f"Order {dto.order_number} is now {dto.status} ({dto.status_label}).")


@click.command("submit")
@click.option("--id", "order_id", required=True, type=int, help="Draft order ID.")
@click.option("--notes", default="", help="Message for the shop.")
@pass_context
def order_submit(ctx: CliContext, order_id: int, notes: str) -> None:
    """Submit a draft (quote) so the shop starts processing it."""
    handler = SubmitDraftHandler(
        order_repo=order_repository(ctx.settings),
        sink=notification_sink(ctx.settings),
    )

    try:
        dto = handler.handle(order_id, ctx.actor, notes=notes)
    except DomainException as exc:
        raise DomainError(exc)

    click.echo(f"Order {dto.order_number} submitted (status={dto.status}).")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@pass_context
def order_delete(ctx: CliContext, order_id: int) -> None:
    """Delete an order (admins: any; clients: own drafts only)."""
    handler = DeleteOrderHandler(order_repo=order_repository(ctx.settings))

    try:
        handler.handle(order_id, ctx.actor)
    except DomainException as exc:
        raise DomainError(exc)

    click.echo(f"Order #{order_id} deleted.")


@click.command("attach")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--item", "item_index", required=True, type=int, help="Item index (from 0).")
@click.option("--file", "files", multiple=True, required=True, help="File reference (URL).")
@pass_context
def order_attach(ctx: CliContext, order_id: int, item_index: int, files: tuple[str, ...]) -> None:
    """Attach uploaded file references to an order item."""
    handler = AddFilesToItemHandler(order_repo=order_repository(ctx.settings))

    try:
        dto = handler.handle(order_id, item_index, list(files), ctx.actor)
    except DomainException as exc:
        raise DomainError(exc)

    click.echo(
        f"{len(files)} file(s) attached to item {item_index} of order {dto.order_number}."
    )


@click.command("assign")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "assignee", default=None, help="Staff member ID (omit to unassign).")
@pass_context
def order_assign(ctx: CliContext, order_id: int, assignee: str | None) -> None:
    """Assign an order to a staff member (administrators)."""
    handler = AssignOrderHandler(order_repo=order_repository(ctx.settings))

    try:
        dto = handler.handle(order_id, assignee, ctx.actor)
    except DomainException as exc:
        raise DomainError(exc)

    if dto.assigned_to:
        click.echo(f"Order {dto.order_number} assigned to {dto.assigned_to}.")
    else:
        click.echo(f"Order {dto.order_number} unassigned.")


@click.command("payment")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status", "payment_status", required=True,
    type=click.Choice([s.value for s in PaymentStatus]),
)
@click.option(
    "--method", "payment_method", default="cash", show_default=True,
    type=click.Choice([m.value for m in PaymentMethod]),
)
@pass_context
def order_payment(ctx: CliContext, order_id: int, payment_status: str, payment_method: str) -> None:
    """Record an order's payment status (administrators)."""
    handler = RecordPaymentHandler(order_repo=order_repository(ctx.settings))

    try:
        dto = handler.handle(order_id, payment_status, payment_method, ctx.actor)
    except DomainException as exc:
        raise DomainError(exc)

    click.echo(f"Order {dto.order_number}: payment {dto.payment_status} ({dto.payment_method}).")


@click.command("stats")
@pass_context
def order_stats(ctx: CliContext) -> None:
    """Order count and revenue per status."""
    handler = OrderStatsHandler(order_repo=order_repository(ctx.settings))
    client_id = None if ctx.actor.is_admin else ctx.actor.id
    stats = handler.handle(client_id)

    click.echo(f"{'Status':<12} {'Count':>6} {'Revenue':>14}")
    click.echo("-" * 34)
    for status, row in stats.items():
        click.echo(f"{status:<12} {row.count:>6} {row.revenue:>14}")
