"""
analysis/conflicts.py — wykrywanie konfliktów modalności między regułami.

Każde pojęcie-akcja leży pod Conflict, więc przejście w głąb hierarchii od Conflict
odwiedza każdą regułę i każdą itemizację. Dla odwiedzonej klasy c:
  - reguły nadrzędne = reguły wśród bezpośrednich nadklas (c ⊓ Rule)
  - c jest regułą r1  → SUBSUMED_BY(r1, r2) dla każdej sprzecznej reguły nadrzędnej r2
  - c jest itemizacją → SHARED(r1, r2) dla każdej sprzecznej pary reguł nadrzędnych
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum

from policy_compiler import CONFLICT, RULE
from policy_compiler import properties as props
from policy_model import Action, Rule
from tbox import NOTHING, Named, conjunction

from .extension import Extension

logger = logging.getLogger(__name__)


class ConflictType(StrEnum):
    SHARED      = "SHARED"
    SUBSUMES    = "SUBSUMES"
    SUBSUMED_BY = "SUBSUMED_BY"
    EQUIVALENT  = "EQUIVALENT"

    def inverse(self) -> ConflictType:
        match self:
            case ConflictType.SUBSUMES:
                return ConflictType.SUBSUMED_BY
            case ConflictType.SUBSUMED_BY:
                return ConflictType.SUBSUMES
        return self


def _is_leading(rule: Rule) -> bool:
    return rule.modality.is_exclusion() or rule.modality.is_permissible()


@dataclass(slots=True)
class Conflict:
    """
    Konflikt dwóch reguł.

    - type:     rodzaj (względem rule1: rule1 SUBSUMED_BY rule2 itd.)
    - rule1:    reguła wyłączająca lub zezwalająca, jeśli para taką zawiera
    - rule2:    druga reguła
    - evidence: id itemizacji (lub reguły) → akcja będąca świadectwem konfliktu
    """
    type:     ConflictType
    rule1:    Rule
    rule2:    Rule
    evidence: dict[str, Action] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        type:   ConflictType,
        rule1:  Rule,
        rule2:  Rule,
        ext_id: str | None = None,
        action: Action | None = None,
    ) -> Conflict:
        """Tworzy konflikt w postaci kanonicznej (reguła wyłączająca / zezwalająca jako rule1)."""
        if _is_leading(rule2) and not _is_leading(rule1):
            rule1, rule2 = rule2, rule1
            type = type.inverse()
        evidence = {ext_id: action} if ext_id is not None and action is not None else {}
        return cls(type, rule1, rule2, evidence)

    @property
    def key(self) -> tuple[str, str]:
        return (self.rule1.id, self.rule2.id)

    def merge(self, other: Conflict) -> None:
        """Scala konflikt o tym samym kluczu: kierunki przeciwne dają EQUIVALENT."""
        self.evidence.update(other.evidence)
        if other.type is self.type:
            return
        kinds = {self.type, other.type}
        if ConflictType.EQUIVALENT in kinds or kinds == {ConflictType.SUBSUMES, ConflictType.SUBSUMED_BY}:
            self.type = ConflictType.EQUIVALENT
        elif self.type is ConflictType.SHARED:
            self.type = other.type

    def to_dict(self) -> dict:
        return {
            "type":     self.type.value,
            "rule1":    self.rule1.id,
            "rule2":    self.rule2.id,
            "evidence": {k: str(v) for k, v in sorted(self.evidence.items())},
        }

    def __str__(self) -> str:
        s = f"{self.type} {self.rule1.id},{self.rule2.id}"
        if self.type is ConflictType.SHARED:
            return f"{s} at [{', '.join(sorted(self.evidence))}]"
        return s


def merge_conflicts(conflicts: Iterable[Conflict]) -> list[Conflict]:
    """Łączy konflikty o tym samym kluczu (rule1.id, rule2.id); wynik posortowany."""
    merged: dict[tuple[str, str], Conflict] = {}
    for conflict in conflicts:
        existing = merged.get(conflict.key)
        if existing is None:
            merged[conflict.key] = Conflict(
                conflict.type, conflict.rule1, conflict.rule2, dict(conflict.evidence),
            )
        else:
            existing.merge(conflict)
    return [merged[key] for key in sorted(merged)]


class ConflictAnalyzer:
    """Analizator konfliktów dla ekstensji (skompilowanej, itemizowanej polityki)."""

    def analyze(self, ext: Extension) -> list[Conflict]:
        found: list[Conflict] = []
        visited: set[Named] = set()
        stack = sorted(ext.oracle.direct_subclasses(CONFLICT), reverse=True)

        while stack:
            c = stack.pop()
            if c == NOTHING or c in visited:
                continue
            visited.add(c)
            found.extend(self._process(ext, c))
            stack.extend(sorted(ext.oracle.direct_subclasses(c) - visited, reverse=True))

        conflicts = merge_conflicts(found)
        ext.set_property(props.RULE_CONFLICTS, len(conflicts))
        logger.info(f"Znaleziono {len(conflicts)} konfliktów w {len(visited)} klasach")
        return conflicts

    def _process(self, ext: Extension, c: Named) -> list[Conflict]:
        supers = self._superordinates(ext, c)
        rule1  = _rule_of(ext, c)
        out: list[Conflict] = []

        if rule1 is not None:
            for rule2 in supers:
                if rule2.id == rule1.id or not rule1.modality.conflicts_with(rule2.modality):
                    continue
                out.append(Conflict.create(
                    ConflictType.SUBSUMED_BY, rule1, rule2, rule1.id, rule1.action.clone(),
                ))
        else:
            action = ext.action(c.fragment)
            for a, b in itertools.combinations(supers, 2):
                if a.modality.conflicts_with(b.modality):
                    out.append(Conflict.create(ConflictType.SHARED, a, b, c.fragment, action))
        return out

    def _superordinates(self, ext: Extension, c: Named) -> list[Rule]:
        supers = ext.oracle.direct_superclasses(conjunction([RULE, c]))
        rules  = [r for r in (_rule_of(ext, s) for s in supers) if r is not None]
        return sorted(rules, key=lambda r: r.id)


def _rule_of(ext: Extension, c: Named) -> Rule | None:
    if ext.compiler.named(c.fragment) != c:
        return None
    return ext.policy.rule(c.fragment)
