"""
Wyrażenia zbiorów wartości ról (RoleValueSet).

Niezmienne drzewo: liść Singleton(value) oraz węzły binarne Union, Intersect,
Complement. Poddrzewa są współdzielone, więc kopia wyrażenia to samo wyrażenie.
"""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum

from .values import RoleValue


class SetOp(StrEnum):
    """Rodzaj węzła wyrażenia. Wartość to separator w postaci tekstowej."""
    SINGLE     = ""
    UNION      = ", "
    INTERSECT  = " + "
    COMPLEMENT = " \\ "


@dataclass(frozen=True, slots=True)
class Singleton:
    value: RoleValue

    @property
    def op(self) -> SetOp:
        return SetOp.SINGLE

    def first(self) -> RoleValue:
        return self.value

    def leaves(self) -> Iterator[RoleValue]:
        yield self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class _Binary:
    lhs: RoleValueSet
    rhs: RoleValueSet

    def first(self) -> RoleValue:
        """Schodzi skrajnie w lewo do pierwszego liścia."""
        node: RoleValueSet = self
        while not isinstance(node, Singleton):
            node = node.lhs
        return node.value

    def leaves(self) -> Iterator[RoleValue]:
        yield from self.lhs.leaves()
        yield from self.rhs.leaves()

    def __str__(self) -> str:
        return f"{self.lhs}{self.op.value}{self.rhs}"


@dataclass(frozen=True, slots=True)
class Union(_Binary):
    @property
    def op(self) -> SetOp:
        return SetOp.UNION


@dataclass(frozen=True, slots=True)
class Intersect(_Binary):
    @property
    def op(self) -> SetOp:
        return SetOp.INTERSECT


@dataclass(frozen=True, slots=True)
class Complement(_Binary):
    """lhs \\ rhs — wartości z lhs z wyłączeniem rhs."""
    @property
    def op(self) -> SetOp:
        return SetOp.COMPLEMENT


RoleValueSet: TypeAlias = Singleton | Union | Intersect | Complement
