"""State shared by every CLI command, and domain-error reporting."""

from __future__ import annotations

from dataclasses import dataclass

import click

from printshop.domain.exceptions import DomainException
from printshop.domain.model.actor import Actor
from printshop.infrastructure.config import Settings

_EXIT_CODES = {
    "invalid_input": 1,
    "not_found": 3,
    "forbidden": 4,
    "conflict": 5,
}


@dataclass(frozen=True)
class CliContext:
    settings: Settings
    actor: Actor


pass_context = click.make_pass_decorator(CliContext)


class DomainError(click.ClickException):
    """A DomainException surfaced to the terminal, exit code by category."""

    def __init__(self, exc: DomainException) -> None:
        super().__init__(str(exc))
        self.exit_code = _EXIT_CODES.get(exc.category, 1)
