"""
analysis/flows.py — śledzenie przepływów danych między regułami jednej polityki.

Relacja wyrażeń ról src (reguła źródłowa) i tgt (reguła docelowa):
  - src ≡ tgt                       → EXACTFLOW
  - tgt ⊑ src                       → OVERFLOW
  - src ⊑ tgt                       → UNDERFLOW
  - któraś podklasa src ma relację  → UNDERFLOW
  - w przeciwnym razie              → brak przepływu (None)

Przepływ istnieje tylko wtedy, gdy każda badana rola ma tryb.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from policy_compiler import Compilation, Compiler
from policy_model import Datum, Rule, RoleType
from tbox import Concept, TBoxOracle, strict_subclasses

logger = logging.getLogger(__name__)


class FlowMode(StrEnum):
    EXACTFLOW = "EXACTFLOW"
    OVERFLOW  = "OVERFLOW"
    UNDERFLOW = "UNDERFLOW"


@dataclass(frozen=True, slots=True)
class Flow:
    """Przepływ od reguły źródłowej do docelowej z trybem dla każdej badanej roli."""
    source: Rule
    target: Rule
    modes:  dict[RoleType, FlowMode]

    def mode(self, role_type: RoleType) -> FlowMode | None:
        return self.modes.get(role_type)

    def to_dict(self) -> dict:
        return {
            "source": self.source.id,
            "target": self.target.id,
            "modes":  {t.value: m.value for t, m in self.modes.items()},
        }

    def __str__(self) -> str:
        modes = ", ".join(f"{t}={m}" for t, m in self.modes.items())
        return f"Flow({self.source.id}:{self.target.id}, {{{modes}}})"


def get_flow_restriction(oracle: TBoxOracle, source: Concept, target: Concept) -> FlowMode | None:
    return _restriction(oracle, source, target, set())


def _restriction(
    oracle:  TBoxOracle,
    source:  Concept,
    target:  Concept,
    visited: set[Concept],
) -> FlowMode | None:
    if oracle.is_entailed_equivalent(source, target):
        return FlowMode.EXACTFLOW
    if oracle.is_entailed_subclass(target, source):
        return FlowMode.OVERFLOW
    if oracle.is_entailed_subclass(source, target):
        return FlowMode.UNDERFLOW

    visited.add(source)
    for sub in sorted(strict_subclasses(oracle, source)):
        if sub in visited:
            continue
        if _restriction(oracle, sub, target, visited) is not None:
            return FlowMode.UNDERFLOW
    return None


def trace_roles(
    oracle:      TBoxOracle,
    source_comp: Compiler,
    source:      Rule,
    target_comp: Compiler,
    target:      Rule,
    role_types:  Iterable[RoleType],
) -> Flow | None:
    """Porównuje kolejne role obu reguł; pierwszy brak trybu kończy próbę."""
    modes: dict[RoleType, FlowMode] = {}
    for role_type in role_types:
        src = source.action.role(role_type)
        tgt = target.action.role(role_type)
        if src is None or tgt is None:
            return None
        mode = get_flow_restriction(
            oracle,
            source_comp.compile_values(src.values),
            target_comp.compile_values(tgt.values),
        )
        if mode is None:
            return None
        modes[role_type] = mode
    return Flow(source, target, modes)


class FlowTracer:
    """
    Przepływy w jednej polityce: od reguł z akcjami `sources` do reguł z akcjami `targets`.

    Badane role: OBJECT, SOURCE oraz PURPOSE, gdy `strict_purposing`.
    """

    def __init__(
        self,
        sources:          Iterable[str] = (),
        targets:          Iterable[str] = (),
        strict_purposing: bool = True,
    ) -> None:
        self.sources          = set(sources)
        self.targets          = set(targets)
        self.strict_purposing = strict_purposing
        self.source_rules: list[Rule] = []
        self.target_rules: list[Rule] = []

    def add_source(self, action: str) -> None:
        self.sources.add(action)

    def add_target(self, action: str) -> None:
        self.targets.add(action)

    @property
    def role_types(self) -> list[RoleType]:
        types = [RoleType.OBJECT, RoleType.SOURCE]
        if self.strict_purposing:
            types.append(RoleType.PURPOSE)
        return types

    def trace(self, comp: Compilation, datum: Datum | None = None) -> list[Flow]:
        self.source_rules = comp.policy.rules_for(self.sources)
        self.target_rules = comp.policy.rules_for(self.targets)

        sources = self.source_rules
        targets = self.target_rules
        if datum is not None:
            sources = [r for r in sources if self._covers(comp, r, datum)]
            targets = [r for r in targets if self._covers(comp, r, datum)]

        flows = []
        for s in sources:
            for t in targets:
                flow = trace_roles(comp.oracle, comp.compiler, s, comp.compiler, t, self.role_types)
                if flow is not None:
                    flows.append(flow)
        logger.info(
            f"Przepływy: {len(flows)} z {len(sources)} reguł źródłowych "
            f"do {len(targets)} docelowych"
        )
        return flows

    def _covers(self, comp: Compilation, rule: Rule, datum: Datum) -> bool:
        role = rule.action.role(RoleType.OBJECT)
        if role is None:
            return False
        mode = get_flow_restriction(
            comp.oracle,
            comp.compiler.compile_values(role.values),
            comp.compiler.compile_value(datum),
        )
        return mode is not None
