"""Unit tests for the status transition table."""

import pytest

from printshop.domain.model.order_status import (
    STATUS_LABELS,
    TERMINAL_STATUSES,
    OrderStatus,
    can_transition,
)

FORWARD = [
    (OrderStatus.DRAFT, OrderStatus.PENDING),
    (OrderStatus.PENDING, OrderStatus.PROCESSING),
    (OrderStatus.PROCESSING, OrderStatus.COMPLETED),
    (OrderStatus.COMPLETED, OrderStatus.DELIVERED),
]


@pytest.mark.parametrize("current,new", FORWARD)
def test_forward_steps_allowed(current, new):
    assert can_transition(current, new)


@pytest.mark.parametrize("current", [s for s in OrderStatus if s not in TERMINAL_STATUSES])
def test_cancel_from_any_non_terminal(current):
    assert can_transition(current, OrderStatus.CANCELLED)


@pytest.mark.parametrize("terminal", sorted(TERMINAL_STATUSES, key=lambda s: s.value))
def test_terminal_statuses_go_nowhere(terminal):
    assert not any(can_transition(terminal, s) for s in OrderStatus)


def test_no_skipping_or_going_back():
    assert not can_transition(OrderStatus.PENDING, OrderStatus.COMPLETED)
    assert not can_transition(OrderStatus.PROCESSING, OrderStatus.PENDING)
    assert not can_transition(OrderStatus.PENDING, OrderStatus.PENDING)


def test_every_status_has_a_label():
    assert set(STATUS_LABELS) == set(OrderStatus)
