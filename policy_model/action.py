"""
Akcje i role.

Action = nazwa (COLLECT / USE / TRANSFER / …) + role. Co najwyżej jedna rola danego
typu; dodanie roli istniejącego typu zastępuje ją w miejscu (kolejność zostaje).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .values import ANY_PURPOSE, ANYONE, ANYTHING, RoleValue
from .valueset import RoleValueSet


class RoleType(StrEnum):
    OBJECT     = "OBJECT"
    SOURCE     = "SOURCE"
    PURPOSE    = "PURPOSE"
    TARGET     = "TARGET"
    INSTRUMENT = "INSTRUMENT"

    def range_restriction(self) -> RoleValue | None:
        """Wartownik dziedziny wartości roli (None dla INSTRUMENT)."""
        return _RANGES.get(self)


_RANGES: dict[RoleType, RoleValue] = {
    RoleType.OBJECT:  ANYTHING,
    RoleType.SOURCE:  ANYONE,
    RoleType.PURPOSE: ANY_PURPOSE,
    RoleType.TARGET:  ANYONE,
}


@dataclass(frozen=True, slots=True)
class Role:
    """
    Rola akcji.

    - type:   typ roli
    - prefix: słowo wprowadzające w DSL (FROM / TO / FOR / "" dla obiektu)
    - values: wyrażenie zbioru wartości
    """
    type:   RoleType
    prefix: str
    values: RoleValueSet

    def __str__(self) -> str:
        if self.prefix:
            return f"{self.prefix} {self.values}"
        return str(self.values)


@dataclass(slots=True)
class Action:
    name:  str
    roles: dict[RoleType, Role] = field(default_factory=dict)

    def add(self, role: Role) -> None:
        # dict zachowuje pozycję przy nadpisaniu istniejącego klucza
        self.roles[role.type] = role

    def role(self, role_type: RoleType) -> Role | None:
        return self.roles.get(role_type)

    def values(self, role_type: RoleType) -> RoleValueSet:
        """Wyrażenie wartości roli; KeyError gdy akcja nie ma tej roli."""
        return self.roles[role_type].values

    def clone(self) -> Action:
        # role są niezmienne, wystarczy nowy słownik
        return Action(self.name, dict(self.roles))

    def __str__(self) -> str:
        return " ".join([self.name, *(str(r) for r in self.roles.values())])
