"""
tbox/structural.py — referencyjna wyrocznia TBox: klasyfikator subsumpcji strukturalnej.

Dwie warstwy:
  - wypełniacze ról (wyrażenia nad klasami nazwanymi bez definicji: ⊓, ⊔, ¬) są
    rozstrzygane przez przeszukiwanie z nawrotami i propagacją aksjomatów nazwa ⊑ nazwa,
    nazwa ≡ nazwa oraz rozłączności;
  - pojęcia górnego poziomu (⊓ klas nazwanych i ∃r.C) są porównywane strukturalnie:
    D jest spełnione przez opis C, gdy każda nazwa z D należy do domknięcia C, a każde
    ∃r.G z D ma w C odpowiednik ∃r.F z F ⊑ G.

Klasy zdefiniowane (A ≡ E) są realizowane: jeśli opis C spełnia E, to A trafia do
domknięcia C. Wyniki są buforowane do następnej zmiany aksjomatów lub refresh().

Konwencje bezpośrednich nad/podklas:
  - direct_superclasses(C): klasy nazwane równoważne C (bez samego C) oraz minimalne
    ścisłe nadklasy; gdy brak, {Thing}
  - direct_subclasses(C): klasy nazwane równoważne C (bez samego C) oraz maksymalne
    ścisłe podklasy; gdy brak ścisłych podklas, wynik zawiera Nothing
  - klasy niespełnialne nie są zwracane jako podklasy
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from .concepts import (
    NOTHING,
    THING,
    And,
    Axiom,
    Concept,
    DisjointClasses,
    EquivalentClasses,
    Named,
    Not,
    Or,
    Some,
    SubClassOf,
    negation,
    signature,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Description:
    """Opis pojęcia: domknięcie nazw, ograniczenia egzystencjalne i reszta (⊔, ¬)."""
    names:  set[Named]    = field(default_factory=set)
    somes:  list[Some]    = field(default_factory=list)
    others: list[Concept] = field(default_factory=list)
    seen:   set[Named]    = field(default_factory=set)
    unsat:  bool          = False


class StructuralTBox:
    """Wyrocznia TBox dla algebry polityk (klasy nazwane, ⊓, ⊔, ¬ w wypełniaczach, ∃r.C)."""

    def __init__(self, axioms: Iterable[Axiom] = ()) -> None:
        self._axioms:      list[Axiom]                 = []
        self._told:        dict[Named, set[Concept]]   = defaultdict(set)
        self._told_subs:   dict[Named, set[Named]]     = defaultdict(set)
        self._definitions: dict[Named, set[Concept]]   = defaultdict(set)
        self._disjoint:    dict[Named, set[Named]]     = defaultdict(set)
        self._names:       set[Named]                  = set()
        self._clear_caches()
        self.add_axioms(axioms)

    # ------------------------------------------------------------------
    # Aksjomaty
    # ------------------------------------------------------------------

    def assert_subclass(self, sub: Concept, sup: Concept) -> None:
        if not isinstance(sub, Named):
            raise ValueError(f"Podklasa w aksjomacie musi być klasą nazwaną: {sub}")
        self._record(SubClassOf(sub, sup))
        self._told[sub].add(sup)
        if isinstance(sup, Named):
            self._told_subs[sup].add(sub)

    def assert_equivalent(self, first: Concept, second: Concept) -> None:
        if not (isinstance(first, Named) or isinstance(second, Named)):
            raise ValueError(f"Co najmniej jedna strona równoważności musi być nazwana: {first} ≡ {second}")
        self._record(EquivalentClasses(first, second))
        if isinstance(first, Named) and isinstance(second, Named):
            self._told[first].add(second)
            self._told[second].add(first)
            self._told_subs[first].add(second)
            self._told_subs[second].add(first)
        elif isinstance(first, Named):
            self._definitions[first].add(second)
        else:
            self._definitions[second].add(first)

    def assert_disjoint(self, classes: Iterable[Concept]) -> None:
        members = frozenset(classes)
        if not all(isinstance(c, Named) for c in members):
            raise ValueError("Rozłączność jest obsługiwana tylko dla klas nazwanych")
        self._record(DisjointClasses(members))
        for a in members:
            for b in members:
                if a != b:
                    self._disjoint[a].add(b)

    def add_axioms(self, axioms: Iterable[Axiom]) -> None:
        for axiom in axioms:
            match axiom:
                case SubClassOf(sub, sup):
                    self.assert_subclass(sub, sup)
                case EquivalentClasses(first, second):
                    self.assert_equivalent(first, second)
                case DisjointClasses(classes):
                    self.assert_disjoint(classes)

    def axioms(self) -> list[Axiom]:
        return list(self._axioms)

    def copy(self) -> StructuralTBox:
        return StructuralTBox(self._axioms)

    def refresh(self) -> None:
        self._clear_caches()

    def _record(self, axiom: Axiom) -> None:
        self._axioms.append(axiom)
        for part in _axiom_parts(axiom):
            self._names |= signature(part)
        self._names -= {THING, NOTHING}
        self._clear_caches()

    def _clear_caches(self) -> None:
        self._descriptions: dict[Concept, _Description]       = {}
        self._subsumption:  dict[tuple[Concept, Concept], bool] = {}
        self._supers:       dict[Named, frozenset[Named]]     = {}
        self._propositional: dict[Concept, bool]              = {}
        self._building:     set[Concept]                      = set()

    # ------------------------------------------------------------------
    # Zapytania
    # ------------------------------------------------------------------

    def is_entailed_subclass(self, sub: Concept, sup: Concept) -> bool:
        if sup == THING or sub == NOTHING or sub == sup:
            return True
        key = (sub, sup)
        cached = self._subsumption.get(key)
        if cached is not None:
            return cached

        if self._is_propositional(sub) and self._is_propositional(sup):
            result = not self._satisfiable([sub, negation(sup)])
        else:
            desc = self._description(sub)
            result = desc.unsat or self._holds(desc, sup)
        self._subsumption[key] = result
        return result

    def is_entailed_equivalent(self, first: Concept, second: Concept) -> bool:
        return self.is_entailed_subclass(first, second) and self.is_entailed_subclass(second, first)

    def is_satisfiable(self, c: Concept) -> bool:
        if self._is_propositional(c):
            return self._satisfiable([c])
        return not self._description(c).unsat

    def direct_superclasses(self, c: Concept) -> set[Named]:
        supers      = self._superclasses(c) - {c}
        equivalents = {n for n in supers if self.is_entailed_subclass(n, c)}
        strict      = supers - equivalents

        # n nie jest bezpośrednia, gdy leży ściśle nad inną ścisłą nadklasą
        covered: set[Named] = set()
        for m in strict:
            for n in self._named_supers(m) & strict:
                if n != m and m not in self._named_supers(n):
                    covered.add(n)
        direct = strict - covered
        result = equivalents | direct
        return result or {THING}

    def direct_subclasses(self, c: Concept) -> set[Named]:
        subs = {
            n for n in self._names
            if n != c and self.is_satisfiable(n) and self.is_entailed_subclass(n, c)
        }
        equivalents = {n for n in subs if self.is_entailed_subclass(c, n)}
        strict      = subs - equivalents

        # n jest bezpośrednia, gdy nie leży ściśle pod inną ścisłą podklasą
        direct: set[Named] = set()
        for n in strict:
            above = self._named_supers(n) & strict
            if all(n in self._named_supers(m) for m in above if m != n):
                direct.add(n)
        result = equivalents | direct
        if not direct:
            result.add(NOTHING)
        return result

    # ------------------------------------------------------------------
    # Klasyfikacja klas nazwanych
    # ------------------------------------------------------------------

    def _named_supers(self, n: Named) -> frozenset[Named]:
        """Wszystkie klasy nazwane (w tym n), które subsumują n."""
        cached = self._supers.get(n)
        if cached is None:
            cached = frozenset(self._superclasses(n) | {n})
            self._supers[n] = cached
        return cached

    def _superclasses(self, c: Concept) -> set[Named]:
        if not self._is_propositional(c) or isinstance(c, Named):
            desc = self._description(c)
            if desc.unsat:
                return set(self._names)
            if not (desc.others and self._is_propositional(c)):
                return desc.names & self._names
        return {n for n in self._names if self.is_entailed_subclass(c, n)}

    # ------------------------------------------------------------------
    # Warstwa strukturalna
    # ------------------------------------------------------------------

    def _description(self, c: Concept) -> _Description:
        cached = self._descriptions.get(c)
        if cached is not None:
            return cached

        desc = _Description()
        self._expand(c, desc)
        if c in self._building:
            # zapętlone definicje: opis bez realizacji
            return desc
        self._building.add(c)
        try:
            self._realize(desc)
        finally:
            self._building.discard(c)
        desc.unsat = self._is_unsatisfiable(desc)
        self._descriptions[c] = desc
        return desc

    def _expand(self, c: Concept, desc: _Description) -> None:
        match c:
            case Named():
                if c in desc.seen or c == THING:
                    return
                desc.seen.add(c)
                desc.names.add(c)
                for sup in self._told.get(c, ()):
                    self._expand(sup, desc)
                for definition in self._definitions.get(c, ()):
                    self._expand(definition, desc)
            case And(operands):
                for operand in operands:
                    self._expand(operand, desc)
            case Some():
                desc.somes.append(c)
            case _:
                desc.others.append(c)

    def _realize(self, desc: _Description) -> None:
        changed = True
        while changed:
            changed = False
            for name, definitions in list(self._definitions.items()):
                if name in desc.names:
                    continue
                if any(self._holds(desc, d) for d in definitions):
                    self._expand(name, desc)
                    changed = True

    def _holds(self, desc: _Description, d: Concept) -> bool:
        match d:
            case Named():
                return d == THING or d in desc.names
            case And(operands):
                return all(self._holds(desc, o) for o in operands)
            case Or(operands):
                return any(self._holds(desc, o) for o in operands)
            case Some(role, filler):
                return any(
                    s.role == role and self.is_entailed_subclass(s.filler, filler)
                    for s in desc.somes
                )
        return False

    def _is_unsatisfiable(self, desc: _Description) -> bool:
        if NOTHING in desc.names:
            return True
        for name in desc.names:
            if self._disjoint.get(name, set()) & desc.names:
                return True
        if any(not self.is_satisfiable(s.filler) for s in desc.somes):
            return True
        return any(self._is_propositional(o) and not self._satisfiable([o]) for o in desc.others)

    # ------------------------------------------------------------------
    # Warstwa zdaniowa
    # ------------------------------------------------------------------

    def _is_propositional(self, c: Concept) -> bool:
        """Bez ∃ i bez klas zdefiniowanych."""
        cached = self._propositional.get(c)
        if cached is None:
            cached = _free_of_some(c) and not any(n in self._definitions for n in signature(c))
            self._propositional[c] = cached
        return cached

    def _satisfiable(self, formulas: list[Concept]) -> bool:
        return self._search(list(formulas), {})

    def _search(self, pending: list[Concept], assignment: dict[Named, bool]) -> bool:
        pending    = list(pending)
        assignment = dict(assignment)
        while pending:
            f = pending.pop()
            match f:
                case Named():
                    if not self._assign(f, True, assignment, pending):
                        return False
                case Not(Named() as n):
                    if not self._assign(n, False, assignment, pending):
                        return False
                case Not(Some()) | Some():
                    continue
                case Not(operand):
                    pending.append(negation(operand))
                case And(operands):
                    pending.extend(operands)
                case Or(operands):
                    return any(self._search([*pending, o], assignment) for o in operands)
        return True

    def _assign(
        self,
        name:       Named,
        value:      bool,
        assignment: dict[Named, bool],
        pending:    list[Concept],
    ) -> bool:
        """Przypisuje literał i propaguje aksjomaty; False przy sprzeczności."""
        queue = [(name, value)]
        while queue:
            n, v = queue.pop()
            current = assignment.get(n)
            if current is not None:
                if current != v:
                    return False
                continue
            if (n == THING and not v) or (n == NOTHING and v):
                return False
            assignment[n] = v
            if v:
                for sup in self._told.get(n, ()):
                    if isinstance(sup, Named):
                        queue.append((sup, True))
                    else:
                        pending.append(sup)
                for other in self._disjoint.get(n, ()):
                    queue.append((other, False))
            else:
                for sub in self._told_subs.get(n, ()):
                    queue.append((sub, False))
        return True


def _free_of_some(c: Concept) -> bool:
    match c:
        case Some():
            return False
        case Not(operand):
            return _free_of_some(operand)
        case And(operands) | Or(operands):
            return all(_free_of_some(o) for o in operands)
    return True


def _axiom_parts(axiom: Axiom) -> tuple[Concept, ...]:
    match axiom:
        case SubClassOf(sub, sup):
            return (sub, sup)
        case EquivalentClasses(first, second):
            return (first, second)
        case DisjointClasses(classes):
            return tuple(classes)
    return ()
