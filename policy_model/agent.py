"""
Agenci i mapy usług.

ServiceMap wyrównuje słowniki dwóch agentów: role (aktorzy) po obu stronach wymiany
oraz lista aksjomatów typów między terminami agenta 1 (lhs) i agenta 2 (rhs).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .policy import Policy
from .types import TypeAxiom
from .values import Actor


@dataclass(slots=True)
class ServiceMap:
    """
    - agent1, role1: URI agenta wysyłającego i jego rola w wymianie
    - agent2, role2: URI agenta odbierającego i jego rola w wymianie
    - types:         aksjomaty wyrównania terminów (lhs z agent1, rhs z agent2)
    """
    agent1: str
    role1:  Actor
    agent2: str
    role2:  Actor
    types:  list[TypeAxiom] = field(default_factory=list)

    def add(self, axiom: TypeAxiom) -> None:
        self.types.append(axiom)


class Direction(StrEnum):
    IN  = "recv"
    OUT = "send"


@dataclass(frozen=True, slots=True)
class Party:
    """Kontrahent agenta: kierunek przepływu, rola, URI i mapa usług."""
    direction:   Direction
    actor:       Actor
    uri:         str
    service_map: ServiceMap


class Agent:
    """Agent z prywatną kopią polityki i listą kontrahentów."""

    def __init__(self, uri: str, policy: Policy | None = None) -> None:
        self.uri = uri
        self.parties: list[Party] = []
        self._policy: Policy | None = None
        if policy is not None:
            self.policy = policy

    @property
    def policy(self) -> Policy:
        if self._policy is None:
            raise ValueError(f"Agent {self.uri} nie ma polityki")
        return self._policy

    @policy.setter
    def policy(self, policy: Policy) -> None:
        self._policy = policy.clone()

    def add(self, party: Party) -> None:
        self.parties.append(party)

    def __str__(self) -> str:
        return f"Agent({self.uri})"
