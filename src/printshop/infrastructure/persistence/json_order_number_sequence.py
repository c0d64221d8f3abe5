"""JSON-file-backed per-month order number counter."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

from printshop.domain.repository.order_number_sequence import OrderNumberSequence
from printshop.domain.service.order_numbering import period_prefix, trailing_sequence
from printshop.infrastructure.persistence.json_store import JsonFile


class JsonOrderNumberSequence(OrderNumberSequence):
    """Counters keyed ``YYYY-MM``.

    A month seen for the first time is seeded from the existing order
    numbers carrying the same ``CMDYYMM`` prefix, so a lost counter file
    never hands out a number twice.
    """

    def __init__(
        self,
        file_path: Path,
        existing_numbers: Callable[[], Iterable[str]] = lambda: (),
    ) -> None:
        self._file = JsonFile(file_path, empty={})
        self._existing_numbers = existing_numbers

    def next_value(self, year: int, month: int) -> int:
        key = f"{year:04d}-{month:02d}"
        with self._file.update() as counters:
            current = counters.get(key)
            if current is None:
                current = self._seed(year, month)
            counters[key] = current + 1
            return counters[key]

    def _seed(self, year: int, month: int) -> int:
        prefix = period_prefix(datetime(year, month, 1))
        found = [
            seq
            for seq in (trailing_sequence(n, prefix) for n in self._existing_numbers())
            if seq is not None
        ]
        return max(found, default=0)
