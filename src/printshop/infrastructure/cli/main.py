import click

from printshop.domain.model.actor import Actor, Role
from printshop.infrastructure.cli.context import CliContext
from printshop.infrastructure.cli.order_commands import (
    order_assign,
    order_attach,
    order_create,
    order_delete,
    order_list,
    order_payment,
    order_show,
    order_stats,
    order_status,
    order_submit,
)
from printshop.infrastructure.cli.service_commands import (
    service_activate,
    service_add,
    service_categories,
    service_deactivate,
    service_list,
    service_quote,
    service_update,
)
from printshop.infrastructure.config import Settings
from printshop.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--actor", "actor_id", envvar="PRINTSHOP_ACTOR", default="admin", show_default=True,
    help="ID of the user running the command.",
)
@click.option(
    "--role", type=click.Choice([r.value for r in Role]), envvar="PRINTSHOP_ROLE",
    default=Role.ADMIN.value, show_default=True, help="Role of that user.",
)
@click.pass_context
def cli(ctx: click.Context, actor_id: str, role: str) -> None:
    """Print shop order management"""
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.UsageError(str(exc))
    configure_logging(settings.log_level, settings.log_json)
    ctx.obj = CliContext(settings=settings, actor=Actor(id=actor_id, role=Role(role)))


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def service() -> None:
    """Manage the service catalog."""


# Register subcommands
order.add_command(order_assign)
order.add_command(order_attach)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_payment)
order.add_command(order_show)
order.add_command(order_stats)
order.add_command(order_status)
order.add_command(order_submit)
service.add_command(service_activate)
service.add_command(service_add)
service.add_command(service_categories)
service.add_command(service_deactivate)
service.add_command(service_list)
service.add_command(service_quote)
service.add_command(service_update)
