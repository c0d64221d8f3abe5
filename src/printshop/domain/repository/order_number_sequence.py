"""Abstract atomic counter behind order numbering."""

from __future__ import annotations

from abc import ABC, abstractmethod


class OrderNumberSequence(ABC):

    @abstractmethod
    def next_value(self, year: int, month: int) -> int:
        """Atomically increment and return the counter for (year, month).

        The first call for a month returns 1 unless the counter was seeded.
        """
