"""
analysis/crossflows.py — przepływy danych między politykami dwóch agentów.

Dla każdej mapy usług (agent1 → agent2):
  - reguły agent1 z akcją z `sources`, których rola TARGET jest zgodna z role2 mapy
  - reguły agent2 z akcją z `targets`, których rola SOURCE jest zgodna z role1 mapy
  - wspólna wyrocznia: aksjomaty obu kompilacji + aksjomaty dopasowania terminologii
  - każda para reguł jest badana na OBJECT (i PURPOSE, gdy `strict_purposing`)

Przepływy wewnątrz każdego agenta (od `targets` do `sources`) też są zwracane,
z tym samym URI po obu stronach.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from policy_compiler import Compilation, Compiler
from policy_model import Actor, Agent, Datum, ParseException, Rule, RoleType, ServiceMap, TypeOp
from tbox import TBoxOracle

from .flows import Flow, FlowTracer, get_flow_restriction, trace_roles

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CrossFlow:
    """Przepływ oznaczony URI agenta źródłowego i docelowego."""
    source_uri: str
    target_uri: str
    flow:       Flow

    @property
    def source(self) -> Rule:
        return self.flow.source

    @property
    def target(self) -> Rule:
        return self.flow.target

    @property
    def modes(self):
        return self.flow.modes

    @property
    def is_internal(self) -> bool:
        return self.source_uri == self.target_uri

    def to_dict(self) -> dict:
        return {"source_uri": self.source_uri, "target_uri": self.target_uri, **self.flow.to_dict()}

    def __str__(self) -> str:
        modes = ", ".join(f"{t}={m}" for t, m in self.flow.modes.items())
        return (
            f"Flow({self.source_uri}!{self.source.id}:"
            f"{self.target_uri}!{self.target.id}, {{{modes}}})"
        )


class CrossFlowTracer:

    def __init__(
        self,
        sources:          Iterable[str] = (),
        targets:          Iterable[str] = (),
        strict_purposing: bool = False,
        compiler_factory: Callable[[], Compiler] = Compiler,
    ) -> None:
        self.sources          = set(sources)
        self.targets          = set(targets)
        self.strict_purposing = strict_purposing
        self.compiler_factory = compiler_factory
        self.agents:       dict[str, Agent]       = {}
        self.maps:         list[ServiceMap]       = []
        self.compilations: dict[str, Compilation] = {}
        self.flows:        dict[str, list[Flow]]  = {}

    def add_agent(self, agent: Agent) -> None:
        self.agents[agent.uri] = agent

    def add_map(self, service_map: ServiceMap) -> None:
        self.maps.append(service_map)

    def add_source(self, action: str) -> None:
        self.sources.add(action)

    def add_target(self, action: str) -> None:
        self.targets.add(action)

    @property
    def role_types(self) -> list[RoleType]:
        types = [RoleType.OBJECT]
        if self.strict_purposing:
            types.append(RoleType.PURPOSE)
        return types

    # ------------------------------------------------------------------
    # Śledzenie
    # ------------------------------------------------------------------

    def trace(self, datum: Datum | None = None) -> list[CrossFlow]:
        cross: list[CrossFlow] = []
        outgoing: dict[str, list[Rule]] = {}
        incoming: dict[str, list[Rule]] = {}

        for uri in sorted(self.agents):
            agent = self.agents[uri]
            comp  = self.compiler_factory().compile(agent.policy)
            self.compilations[uri] = comp

            tracer = FlowTracer(self.targets, self.sources, self.strict_purposing)
            flows  = tracer.trace(comp, datum)
            self.flows[uri] = flows
            cross.extend(CrossFlow(uri, uri, f) for f in flows)
            outgoing[uri] = tracer.target_rules
            incoming[uri] = tracer.source_rules

        for service_map in self.maps:
            cross.extend(self._trace_map(service_map, outgoing, incoming))

        logger.info(f"Przepływy międzyagentowe: {len(cross)} (w tym wewnętrzne)")
        return cross

    def _trace_map(
        self,
        service_map: ServiceMap,
        outgoing:    dict[str, list[Rule]],
        incoming:    dict[str, list[Rule]],
    ) -> list[CrossFlow]:
        comp1 = self._compilation(service_map.agent1)
        comp2 = self._compilation(service_map.agent2)
        logger.debug(f"Śledzenie {service_map.agent1} → {service_map.agent2}")

        senders = [
            r for r in outgoing[service_map.agent1]
            if r.action.name in self.sources
            and _role_matches(comp1, r, RoleType.TARGET, service_map.role2)
        ]
        receivers = [
            r for r in incoming[service_map.agent2]
            if r.action.name in self.targets
            and _role_matches(comp2, r, RoleType.SOURCE, service_map.role1)
        ]

        oracle = self.align(service_map, comp1, comp2)
        out = []
        for s in senders:
            for t in receivers:
                flow = trace_roles(oracle, comp1.compiler, s, comp2.compiler, t, self.role_types)
                if flow is not None:
                    out.append(CrossFlow(service_map.agent1, service_map.agent2, flow))
        return out

    def _compilation(self, uri: str) -> Compilation:
        comp = self.compilations.get(uri)
        if comp is None:
            raise ParseException(f"Mapa usług odwołuje się do nieznanego agenta: {uri}")
        return comp

    def align(self, service_map: ServiceMap, comp1: Compilation, comp2: Compilation) -> TBoxOracle:
        """Wspólna wyrocznia obu kompilacji z aksjomatami dopasowania terminologii."""
        oracle = comp1.compiler.oracle_factory()
        oracle.add_axioms(comp1.oracle.axioms())
        oracle.add_axioms(comp2.oracle.axioms())

        for axiom in service_map.types:
            lhs = comp1.compiler.named(axiom.lhs)
            rhs = comp2.compiler.named(axiom.rhs[0])
            match axiom.op:
                case TypeOp.EQUIVALENT:
                    oracle.assert_equivalent(lhs, rhs)
                case TypeOp.SUBCLASS:
                    oracle.assert_subclass(lhs, rhs)
                case TypeOp.SUPERCLASS:
                    oracle.assert_subclass(rhs, lhs)
                case _:
                    logger.debug(f"Pominięto aksjomat dopasowania: {axiom}")
        return oracle


def _role_matches(comp: Compilation, rule: Rule, role_type: RoleType, actor: Actor) -> bool:
    role = rule.action.role(role_type)
    if role is None:
        return False
    mode = get_flow_restriction(
        comp.oracle,
        comp.compiler.compile_values(role.values),
        comp.compiler.compile_value(actor),
    )
    return mode is not None
