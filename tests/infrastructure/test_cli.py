"""End-to-end tests of the click CLI against a temporary data directory."""

import json
import re

import pytest
from click.testing import CliRunner

from printshop.infrastructure.cli.main import cli

FLYER_OPTIONS = json.dumps(
    [
        {"id": "glossy", "name": "Glossy finish", "kind": "checkbox", "price_modifier": "10"},
        {"id": "paper", "name": "Paper", "kind": "select",
         "choices": ["standard", "premium"], "price_modifier": "5"},
    ]
)


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    env = {
        "PRINTSHOP_DATA_DIR": str(tmp_path),
        "PRINTSHOP_LOG_LEVEL": "WARNING",
        "PRINTSHOP_ALLOW_STATUS_OVERRIDE": None,
        "PRINTSHOP_ACTOR": None,
        "PRINTSHOP_ROLE": None,
    }

    def _run(*args, actor="boss", role="admin"):
        return runner.invoke(cli, ["--actor", actor, "--role", role, *args], env=env)

    return _run


@pytest.fixture
def catalog(run):
    result = run(
        "service", "add", "--name", "Flyers A5", "--category", "flyers",
        "--price", "100", "--unit", "sheet", "--max", "1000", "--options", FLYER_OPTIONS,
    )
    assert result.exit_code == 0, result.output
    return result


def test_add_and_list_services(run, catalog):
    assert "Service #1 'Flyers A5' added at 100.00 XOF" in catalog.output

    result = run("service", "list")
    assert result.exit_code == 0
    assert "option glossy (checkbox)" in result.output

    assert run("service", "categories").output.strip() == "flyers"


def test_quote(run, catalog):
    result = run("service", "quote", "--id", "1", "--qty", "10", "--option", "glossy=true")
    assert result.exit_code == 0, result.output
    assert "Total price: 1100.00 XOF" in result.output


def test_client_cannot_manage_catalog(run):
    result = run(
        "service", "add", "--name", "Posters", "--category", "posters", "--price", "10",
        actor="alice", role="client",
    )
    assert result.exit_code == 4
    assert "Only administrators" in result.output


def test_order_lifecycle(run, catalog, tmp_path):
    created = run(
        "order", "create", "--item", "1:5:glossy=true;paper=premium", "--notes", "Rush",
        actor="alice", role="client",
    )
    assert created.exit_code == 0, created.output
    assert re.search(r"Order CMD\d{4}00001 created", created.output)
    assert "575.00 XOF" in created.output

    moved = run("order", "status", "--id", "1", "--to", "processing")
    assert moved.exit_code == 0, moved.output
    assert "is now processing (In progress)" in moved.output

    shown = run("order", "show", "--id", "1", "--history", actor="alice", role="client")
    assert shown.exit_code == 0, shown.output
    assert "processing" in shown.output
    assert "by boss" in shown.output

    notifications = json.loads((tmp_path / "notifications.json").read_text())
    assert [n["user_id"] for n in notifications] == ["alice", "alice"]


def test_second_order_takes_next_number(run, catalog):
    run("order", "create", "--item", "1:1", actor="alice", role="client")
    result = run("order", "create", "--item", "1:1", actor="bob", role="client")
    assert re.search(r"Order CMD\d{4}00002 created", result.output)


def test_invalid_quantity_exit_code(run, catalog):
    result = run("order", "create", "--item", "1:5000", actor="alice", role="client")
    assert result.exit_code == 1
    assert "Maximum quantity" in result.output


def test_unknown_order_exit_code(run):
    assert run("order", "show", "--id", "42").exit_code == 3


def test_client_cannot_change_status(run, catalog):
    run("order", "create", "--item", "1:1", actor="alice", role="client")
    result = run("order", "status", "--id", "1", "--to", "processing", actor="alice", role="client")
    assert result.exit_code == 4


def test_illegal_transition_exit_code(run, catalog):
    run("order", "create", "--item", "1:1", actor="alice", role="client")
    result = run("order", "status", "--id", "1", "--to", "delivered")
    assert result.exit_code == 1
    assert "from pending to delivered" in result.output


def test_bad_item_format(run, catalog):
    result = run("order", "create", "--item", "nonsense", actor="alice", role="client")
    assert result.exit_code == 2


def test_stats(run, catalog):
    run("order", "create", "--item", "1:2", actor="alice", role="client")
    result = run("order", "stats")
    assert result.exit_code == 0
    assert re.search(r"pending\s+1\s+200.00", result.output)


def test_due_date_is_stored_with_a_zone(run, catalog):
    result = run(
        "order", "create", "--item", "1:1", "--due", "2030-06-20 17:00",
        actor="alice", role="client",
    )
    assert result.exit_code == 0, result.output
    assert re.search(r"Due:\s+2030-06-\d\d \d\d:\d\d UTC", result.output)


def test_list_orders_search_and_pages(run, catalog):
    for client in ("alice", "bob", "carol"):
        run("order", "create", "--item", "1:1", actor=client, role="client")

    result = run("order", "list", "--search", "00002")
    assert result.exit_code == 0, result.output
    assert "bob" in result.output
    assert "alice" not in result.output
    assert "Page 1 of 1 (1 orders)" in result.output

    paged = run("order", "list", "--limit", "2", "--page", "2")
    assert "Page 2 of 2 (3 orders)" in paged.output

    assert run("order", "list", "--page", "0").exit_code == 1


def test_list_services_search(run, catalog):
    result = run("service", "list", "--search", "FLYERS")
    assert "Flyers A5" in result.output
    assert run("service", "list", "--search", "mugs").output.strip() == "No services found."
