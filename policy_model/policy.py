"""
Polityka: uporządkowane reguły (z indeksem po id), aksjomaty typów i atrybuty.
"""

from __future__ import annotations

import itertools
import time
from collections.abc import Iterable

from .errors import ParseException
from .rule import Rule
from .types import TypeAxiom

_policy_counter = itertools.count()


def _default_id() -> str:
    return f"policy-{int(time.time() * 1000)}-{next(_policy_counter)}"


class Policy:
    """
    Kanoniczna reprezentacja polityki zbudowana przez parser.

    Po zbudowaniu polityka jest tylko rozszerzana (add). Agent trzyma własną kopię
    (clone), żeby nie współdzielić reguł z oryginałem.
    """

    def __init__(self, id: str | None = None) -> None:
        self.id = id or _default_id()
        self._rules:      list[Rule]       = []
        self._rule_index: dict[str, Rule]  = {}
        self._types:      list[TypeAxiom]  = []
        self._attrs:      dict[str, str]   = {}

    # ------------------------------------------------------------------
    # Budowa
    # ------------------------------------------------------------------

    def add_rule(self, rule: Rule) -> None:
        if rule.id in self._rule_index:
            raise ParseException(f"Zduplikowany identyfikator reguły '{rule.id}'")
        self._rule_index[rule.id] = rule
        self._rules.append(rule)

    def add_type(self, axiom: TypeAxiom) -> None:
        self._types.append(axiom)

    def set_attribute(self, name: str, value: str) -> None:
        self._attrs[name] = value

    # ------------------------------------------------------------------
    # Odczyt
    # ------------------------------------------------------------------

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    @property
    def types(self) -> list[TypeAxiom]:
        return list(self._types)

    def rule(self, rule_id: str) -> Rule | None:
        return self._rule_index.get(rule_id)

    def attribute(self, name: str) -> str | None:
        return self._attrs.get(name)

    def attributes(self) -> list[str]:
        return sorted(self._attrs)

    def rules_for(self, action_names: Iterable[str]) -> list[Rule]:
        names = set(action_names)
        return [r for r in self._rules if r.action.name in names]

    # ------------------------------------------------------------------
    # Kopia i postać tekstowa
    # ------------------------------------------------------------------

    def clone(self) -> Policy:
        """Głęboka kopia (nowe obiekty reguł i akcji)."""
        copy = Policy(self.id)
        copy._attrs = dict(self._attrs)
        for rule in self._rules:
            copy.add_rule(rule.clone())
        copy._types = list(self._types)
        return copy

    def _is_derived(self, rule: Rule) -> bool:
        # reguła-wyłączenie wygenerowana z ONLY: id = id reguły bazowej + "x"
        if not rule.id.endswith("x"):
            return False
        base = self._rule_index.get(rule.id[:-1])
        return base is not None and base.only

    def to_text(self) -> str:
        """
        Serializuje politykę do DSL.

        Reguły wygenerowane z ONLY są pomijane: parser odtworzy je z reguły bazowej.
        """
        lines = ["SPEC HEADER"]
        for name in sorted(self._attrs):
            lines.append(f"\tATTR {name} {self._attrs[name]}")
        for axiom in self._types:
            lines.append(f"\t{axiom}")
        lines.append("SPEC POLICY")
        for rule in self._rules:
            if not self._is_derived(rule):
                lines.append(f"\t{rule}")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.to_text()

    def __len__(self) -> int:
        return len(self._rules)
