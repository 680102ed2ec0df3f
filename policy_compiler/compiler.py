"""
policy_compiler/compiler.py — tłumaczenie Policy na aksjomaty algebry pojęć.

Kolejność:
  1. aksjomaty typów (z księgowaniem nazw zadeklarowanych / niezadeklarowanych)
  2. niezadeklarowane -= zadeklarowane (per dziedzina)
  3. reguły: id ⊑ klasa modalności, id ⊑ Rule, id ≡ akcja ⊓ ∃rola.wartości
  4. nazwy nadal niezadeklarowane ⊑ korzeń dziedziny (Actor / Datum / Purpose)
  5. rozłączność rodzeństwa w hierarchii celów (tylko Purpose)

Księgowanie aksjomatów typów:

  | op         | lhs              | rhs              |
  |------------|------------------|------------------|
  | SUBCLASS   | zadeklarowana    | niezadeklarowana |
  | SUPERCLASS | niezadeklarowana | zadeklarowana    |
  | DISJOINT   | niezadeklarowana | niezadeklarowana |
  | EQUIVALENT | niezadeklarowana | niezadeklarowana |
"""

from __future__ import annotations

from typing import TypeAlias

import logging
from collections.abc import Callable

from policy_model import (
    Action,
    Complement,
    ConceptClass,
    Intersect,
    ParseException,
    Policy,
    Role,
    RoleType,
    RoleValue,
    RoleValueSet,
    Rule,
    Singleton,
    TypeAxiom,
    TypeOp,
    Union,
    is_sentinel,
)
from tbox import (
    Concept,
    Named,
    Some,
    StructuralTBox,
    TBoxOracle,
    conjunction,
    disjunction,
    negation,
    strict_subclasses,
)

from .compilation import Compilation
from .constants import ACTION, DOMAIN_ROOT, MODALITY_CLASS, NS, PURPOSE, RULE, ROLE_PROPERTY, install_framework

logger = logging.getLogger(__name__)

OracleFactory: TypeAlias = Callable[[], TBoxOracle]


class Compiler:
    """
    Kompilator polityk. Jedna instancja = jedna kompilacja naraz; compile() zeruje stan.

    Przestrzeń nazw polityki: atrybut NAMESPACE, w przeciwnym razie `default_namespace`.
    """

    def __init__(
        self,
        oracle_factory:    OracleFactory = StructuralTBox,
        default_namespace: str = NS,
    ) -> None:
        self.oracle_factory    = oracle_factory
        self.default_namespace = default_namespace
        self.namespace         = default_namespace
        self.oracle: TBoxOracle | None = None
        self._reset()

    @classmethod
    def attach(cls, oracle: TBoxOracle, namespace: str) -> Compiler:
        """Kompilator dopisujący do istniejącej wyroczni (np. kopii z ekstensją)."""
        compiler = cls(default_namespace=namespace)
        compiler.oracle = oracle
        return compiler

    def _reset(self) -> None:
        self._actions:    set[str]                     = set()
        self._declared:   dict[ConceptClass, set[str]] = {c: set() for c in ConceptClass}
        self._undeclared: dict[ConceptClass, set[str]] = {c: set() for c in ConceptClass}

    # ------------------------------------------------------------------
    # Polityka
    # ------------------------------------------------------------------

    def compile(self, policy: Policy) -> Compilation:
        self._reset()
        self.namespace = policy.attribute("NAMESPACE") or self.default_namespace
        self.oracle    = self._create_oracle(self.namespace)

        for axiom in policy.types:
            self.compile_type(axiom)
        for domain in ConceptClass:
            self._undeclared[domain] -= self._declared[domain]

        for rule in policy.rules:
            self.compile_rule(rule)

        for domain in ConceptClass:
            root = DOMAIN_ROOT[domain]
            for name in sorted(self._undeclared[domain]):
                self.oracle.assert_subclass(self.named(name), root)

        comp = Compilation(self, policy, self.oracle)
        self._assume_disjointness(PURPOSE)
        logger.info(
            f"Skompilowano politykę {policy.id}: {len(policy)} reguł, "
            f"{len(policy.types)} typów, przestrzeń nazw {self.namespace}"
        )
        return comp

    def _create_oracle(self, namespace: str) -> TBoxOracle:
        if not namespace or any(ch.isspace() for ch in namespace) or "#" in namespace:
            raise ParseException(f"Nie można utworzyć polityki z przestrzenią nazw: '{namespace}'")
        try:
            oracle = self.oracle_factory()
            install_framework(oracle)
        except Exception as exc:
            raise ParseException(f"Nie można załadować frameworku polityk z: {NS}") from exc
        return oracle

    def _assume_disjointness(self, c: Named) -> None:
        """Rodzeństwo w hierarchii pod c jest parami rozłączne (rekurencyjnie)."""
        siblings = self._representatives(strict_subclasses(self._oracle, c))
        if len(siblings) <= 1:
            return
        self._oracle.assert_disjoint(siblings)
        for sub in siblings:
            self._assume_disjointness(sub)

    def _representatives(self, classes: set[Named]) -> list[Named]:
        # jedna klasa z każdej grupy klas równoważnych
        out: list[Named] = []
        for n in sorted(classes):
            if not any(self._oracle.is_entailed_equivalent(n, m) for m in out):
                out.append(n)
        return out

    # ------------------------------------------------------------------
    # Aksjomaty typów
    # ------------------------------------------------------------------

    def compile_type(self, axiom: TypeAxiom) -> None:
        oracle     = self._oracle
        declared   = self._declared[axiom.type]
        undeclared = self._undeclared[axiom.type]
        lhs        = self.named(axiom.lhs)

        match axiom.op:
            case TypeOp.SUBCLASS:
                declared.add(axiom.lhs)
                for name in axiom.rhs:
                    oracle.assert_subclass(lhs, self.named(name))
                    undeclared.add(name)
            case TypeOp.SUPERCLASS:
                undeclared.add(axiom.lhs)
                for name in axiom.rhs:
                    oracle.assert_subclass(self.named(name), lhs)
                    declared.add(name)
            case TypeOp.DISJOINT:
                undeclared.add(axiom.lhs)
                for name in axiom.rhs:
                    oracle.assert_disjoint((lhs, self.named(name)))
                    undeclared.add(name)
            case TypeOp.EQUIVALENT:
                undeclared.add(axiom.lhs)
                for name in axiom.rhs:
                    oracle.assert_equivalent(self.named(name), lhs)
                    undeclared.add(name)
            case _:
                raise ParseException(f"Nierozpoznany operator typu: {axiom.op!r}")

    # ------------------------------------------------------------------
    # Reguły i akcje
    # ------------------------------------------------------------------

    def compile_rule(self, rule: Rule) -> None:
        oracle   = self._oracle
        identity = self.named(rule.id)
        oracle.assert_subclass(identity, MODALITY_CLASS[rule.modality])
        oracle.assert_subclass(identity, RULE)
        oracle.assert_equivalent(identity, self.compile_action(rule.action))

    def compile_action(self, action: Action) -> Concept:
        act = self.named(action.name)
        if self.oracle is not None and action.name not in self._actions:
            self.oracle.assert_subclass(act, ACTION)
            self._actions.add(action.name)
        return conjunction([act, *(self.compile_role(role) for role in action.roles.values())])

    def compile_role(self, role: Role) -> Some:
        return Some(self.role_property(role.type), self.compile_values(role.values))

    def compile_values(self, values: RoleValueSet) -> Concept:
        """Wyrażenie zbioru wartości; serie tego samego operatora są spłaszczane."""
        match values:
            case Singleton(value):
                return self.compile_value(value)
            case Union(lhs, rhs):
                return disjunction([self.compile_values(lhs), self.compile_values(rhs)])
            case Intersect(lhs, rhs):
                return conjunction([self.compile_values(lhs), self.compile_values(rhs)])
            case Complement(lhs, rhs):
                return conjunction([self.compile_values(lhs), negation(self.compile_values(rhs))])
        raise ParseException(f"Nierozpoznany typ zbioru wartości: {type(values).__name__}")

    def compile_value(self, value: RoleValue) -> Concept:
        domain = value.domain
        if is_sentinel(value):
            return DOMAIN_ROOT[domain]
        if value.name not in self._declared[domain]:
            self._undeclared[domain].add(value.name)
        return self.named(value.name)

    # ------------------------------------------------------------------
    # Pomocnicze
    # ------------------------------------------------------------------

    def named(self, name: str) -> Named:
        return Named(f"{self.namespace}#{name}")

    def role_property(self, role_type: RoleType) -> str:
        return ROLE_PROPERTY[role_type]

    def undeclared(self, domain: ConceptClass) -> list[str]:
        return sorted(self._undeclared[domain])

    @property
    def _oracle(self) -> TBoxOracle:
        if self.oracle is None:
            raise ParseException("Kompilator nie ma ontologii: najpierw wywołaj compile(policy)")
        return self.oracle
