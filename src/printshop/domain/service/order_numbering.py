"""Domain service: human-readable order numbers.

Format ``CMD{YY}{MM}{NNNNN}``, e.g. ``CMD240600001``.  The sequence is a
per-month counter held by an ``OrderNumberSequence`` whose increment is
atomic, so two concurrent creations can never read the same value.
"""

from __future__ import annotations

import re
from datetime import datetime

from printshop.domain.repository.order_number_sequence import OrderNumberSequence

PREFIX = "CMD"
SEQUENCE_WIDTH = 5

_TRAILING_DIGITS = re.compile(r"(\d+)$")


def period_prefix(when: datetime) -> str:
    return f"{PREFIX}{when:%y}{when:%m}"


def format_order_number(when: datetime, sequence: int) -> str:
    return f"{period_prefix(when)}{sequence:0{SEQUENCE_WIDTH}d}"


def trailing_sequence(order_number: str, prefix: str) -> int | None:
    """Sequence part of *order_number* if it carries *prefix*, else None."""
    if not order_number.startswith(prefix):
        return None
    match = _TRAILING_DIGITS.search(order_number[len(prefix):])
    if match is None:
        return None
    return int(match.group(1))


class OrderNumberGenerator:

    def __init__(self, sequence: OrderNumberSequence) -> None:
        self._sequence = sequence

    def next_number(self, when: datetime) -> str:
        value = self._sequence.next_value(when.year, when.month)
        return format_order_number(when, value)
