"""
Aksjomaty typów: relacja hierarchii między nazwą a jedną lub wieloma nazwami
w obrębie jednej dziedziny (aktor / dana / cel).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .values import ConceptClass


class TypeOp(StrEnum):
    """Operator relacji. Wartość to symbol z DSL."""
    SUBCLASS   = "<"
    SUPERCLASS = ">"
    DISJOINT   = "\\"
    EQUIVALENT = "="

    @classmethod
    def parse(cls, symbol: str) -> TypeOp | None:
        try:
            return cls(symbol)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class TypeAxiom:
    """
    Aksjomat typu: `<A|D|P> lhs op rhs[,rhs...]`.

    - type: dziedzina
    - lhs:  nazwa po lewej stronie
    - op:   relacja
    - rhs:  nazwy po prawej stronie (co najmniej jedna)
    """
    type: ConceptClass
    lhs:  str
    op:   TypeOp
    rhs:  tuple[str, ...]

    def __str__(self) -> str:
        return f"{self.type.value} {self.lhs} {self.op.value} {','.join(self.rhs)}"
