"""
Wartości ról: aktor, dana, cel.

RoleValue to unia oznaczona {Actor, Datum, Purpose}. Każda dziedzina ma wyróżniony
wartownik (ANYONE / ANYTHING), porównywany po wartości, nie po tożsamości obiektu.
"""

from __future__ import annotations

from typing import TypeAlias

from dataclasses import dataclass
from enum import StrEnum


# ---------------------------------------------------------------------------
# Dziedziny pojęć
# ---------------------------------------------------------------------------

class ConceptClass(StrEnum):
    """Dziedzina pojęcia w aksjomatach typów: A (aktor), D (dana), P (cel)."""
    ACTOR   = "A"
    DATUM   = "D"
    PURPOSE = "P"

    @classmethod
    def parse(cls, label: str) -> ConceptClass | None:
        try:
            return cls(label)
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Wartości
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Actor:
    """Aktor (źródło lub odbiorca danych)."""
    name: str

    @property
    def domain(self) -> ConceptClass:
        return ConceptClass.ACTOR

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Datum:
    """Dana, na której wykonywana jest akcja."""
    name: str

    @property
    def domain(self) -> ConceptClass:
        return ConceptClass.DATUM

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Purpose:
    """Cel, w którym wykonywana jest akcja."""
    name: str

    @property
    def domain(self) -> ConceptClass:
        return ConceptClass.PURPOSE

    def __str__(self) -> str:
        return self.name


RoleValue: TypeAlias = Actor | Datum | Purpose


# Wartownicy: wierzchołki dziedzin
ANYONE:           Actor   = Actor("anyone")
ANYTHING:         Datum   = Datum("anything")
ANY_PURPOSE:      Purpose = Purpose("anything")

SENTINELS: dict[ConceptClass, RoleValue] = {
    ConceptClass.ACTOR:   ANYONE,
    ConceptClass.DATUM:   ANYTHING,
    ConceptClass.PURPOSE: ANY_PURPOSE,
}


def make_value(domain: ConceptClass, name: str) -> RoleValue:
    """Tworzy wartość roli danej dziedziny."""
    match domain:
        case ConceptClass.ACTOR:
            return Actor(name)
        case ConceptClass.DATUM:
            return Datum(name)
        case ConceptClass.PURPOSE:
            return Purpose(name)
    raise ValueError(f"Nieznana dziedzina: {domain!r}")


def is_sentinel(value: RoleValue) -> bool:
    return SENTINELS[value.domain] == value
