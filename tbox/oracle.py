"""
Interfejs wyroczni TBox, z której korzystają kompilator i analizy.

Rdzeń nie zakłada niczego o sposobie wyliczania odpowiedzi. Instancja nie jest
bezpieczna wątkowo: jeden wątek = jedna wyrocznia (kopie przez copy()).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from .concepts import NOTHING, Axiom, Concept, Named


class TBoxOracle(Protocol):

    def assert_subclass(self, sub: Concept, sup: Concept) -> None: ...

    def assert_equivalent(self, first: Concept, second: Concept) -> None: ...

    def assert_disjoint(self, classes: Iterable[Concept]) -> None: ...

    def is_entailed_subclass(self, sub: Concept, sup: Concept) -> bool: ...

    def is_entailed_equivalent(self, first: Concept, second: Concept) -> bool: ...

    def direct_subclasses(self, c: Concept) -> set[Named]: ...

    def direct_superclasses(self, c: Concept) -> set[Named]: ...

    def is_satisfiable(self, c: Concept) -> bool: ...

    def refresh(self) -> None:
        """Uwzględnia aksjomaty dodane od ostatniej klasyfikacji."""
        ...

    def axioms(self) -> list[Axiom]: ...

    def add_axioms(self, axioms: Iterable[Axiom]) -> None: ...

    def copy(self) -> TBoxOracle:
        """Niezależna kopia ze wszystkimi aksjomatami."""
        ...


def strict_subclasses(oracle: TBoxOracle, c: Concept) -> set[Named]:
    """Bezpośrednie podklasy c bez Nothing i bez klas równoważnych c."""
    return {
        n for n in oracle.direct_subclasses(c)
        if n != NOTHING and not oracle.is_entailed_subclass(c, n)
    }
