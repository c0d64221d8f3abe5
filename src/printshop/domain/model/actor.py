"""The authenticated caller, as handed over by the outer layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from printshop.domain.exceptions import ForbiddenError


class Role(Enum):
    ADMIN = "admin"
    CLIENT = "client"


@dataclass(frozen=True)
class Actor:
    id: str
    role: Role = Role.CLIENT

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def require_admin(self, action: str) -> None:
        if not self.is_admin:
            raise ForbiddenError(f"Only administrators may {action}")
