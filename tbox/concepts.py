"""
Wyrażenia pojęciowe i aksjomaty TBox.

Algebra ograniczona do tego, czego używa kompilator polityk: klasy nazwane,
Thing / Nothing, przecięcie, suma, dopełnienie i ograniczenie egzystencjalne ∃r.C.
"""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Iterable
from dataclasses import dataclass

OWL = "http://www.w3.org/2002/07/owl"


@dataclass(frozen=True, slots=True, order=True)
class Named:
    """Klasa nazwana identyfikowana przez IRI (`<przestrzeń>#<fragment>`)."""
    iri: str

    @property
    def fragment(self) -> str:
        return self.iri.rsplit("#", 1)[-1]

    def __str__(self) -> str:
        return self.fragment


THING   = Named(f"{OWL}#Thing")
NOTHING = Named(f"{OWL}#Nothing")


@dataclass(frozen=True, slots=True)
class And:
    operands: frozenset[Concept]

    def __str__(self) -> str:
        return "(" + " ⊓ ".join(sorted(str(c) for c in self.operands)) + ")"


@dataclass(frozen=True, slots=True)
class Or:
    operands: frozenset[Concept]

    def __str__(self) -> str:
        return "(" + " ⊔ ".join(sorted(str(c) for c in self.operands)) + ")"


@dataclass(frozen=True, slots=True)
class Not:
    operand: Concept

    def __str__(self) -> str:
        return f"¬{self.operand}"


@dataclass(frozen=True, slots=True)
class Some:
    """∃role.filler"""
    role:   str
    filler: Concept

    def __str__(self) -> str:
        return f"∃{self.role.rsplit('#', 1)[-1]}.{self.filler}"


Concept: TypeAlias = Named | And | Or | Not | Some


def conjunction(operands: Iterable[Concept]) -> Concept:
    """Przecięcie spłaszczone; jeden argument zwracany bez opakowania."""
    flat: set[Concept] = set()
    for c in operands:
        if isinstance(c, And):
            flat |= c.operands
        elif c != THING:
            flat.add(c)
    if not flat:
        return THING
    if len(flat) == 1:
        return next(iter(flat))
    return And(frozenset(flat))


def disjunction(operands: Iterable[Concept]) -> Concept:
    """Suma spłaszczona; jeden argument zwracany bez opakowania."""
    flat: set[Concept] = set()
    for c in operands:
        if isinstance(c, Or):
            flat |= c.operands
        elif c != NOTHING:
            flat.add(c)
    if not flat:
        return NOTHING
    if len(flat) == 1:
        return next(iter(flat))
    return Or(frozenset(flat))


def negation(c: Concept) -> Concept:
    """Dopełnienie w postaci NNF (negacja przepchnięta do literałów)."""
    match c:
        case Named() if c == THING:
            return NOTHING
        case Named() if c == NOTHING:
            return THING
        case Named():
            return Not(c)
        case Not(operand):
            return operand
        case And(operands):
            return disjunction(negation(o) for o in operands)
        case Or(operands):
            return conjunction(negation(o) for o in operands)
    return Not(c)


def signature(c: Concept) -> set[Named]:
    """Klasy nazwane występujące w wyrażeniu."""
    match c:
        case Named():
            return {c}
        case Not(operand):
            return signature(operand)
        case Some(_, filler):
            return signature(filler)
        case And(operands) | Or(operands):
            out: set[Named] = set()
            for o in operands:
                out |= signature(o)
            return out
    return set()


# ---------------------------------------------------------------------------
# Aksjomaty
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SubClassOf:
    sub: Concept
    sup: Concept


@dataclass(frozen=True, slots=True)
class EquivalentClasses:
    first:  Concept
    second: Concept


@dataclass(frozen=True, slots=True)
class DisjointClasses:
    classes: frozenset[Concept]


Axiom: TypeAlias = SubClassOf | EquivalentClasses | DisjointClasses
