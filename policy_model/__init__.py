"""
policy_model — model polityk prywatności jako reguł modalnych.

Moduły:
  values    — wartości ról (Actor / Datum / Purpose) i wartownicy dziedzin
  valueset  — wyrażenia zbiorów wartości (Singleton / Union / Intersect / Complement)
  action    — RoleType, Role, Action
  rule      — Modality (z macierzą sprzeczności), Rule
  types     — TypeOp, TypeAxiom
  policy    — Policy
  agent     — ServiceMap, Party, Agent
  errors    — ParseException
"""

from .action import Action, Role, RoleType
from .agent import Agent, Direction, Party, ServiceMap
from .errors import ParseException
from .policy import Policy
from .rule import Modality, Rule
from .types import TypeAxiom, TypeOp
from .values import (
    ANY_PURPOSE,
    ANYONE,
    ANYTHING,
    SENTINELS,
    Actor,
    ConceptClass,
    Datum,
    Purpose,
    RoleValue,
    is_sentinel,
    make_value,
)
from .valueset import Complement, Intersect, RoleValueSet, SetOp, Singleton, Union

__all__ = [
    # values
    "ConceptClass",
    "Actor",
    "Datum",
    "Purpose",
    "RoleValue",
    "ANYONE",
    "ANYTHING",
    "ANY_PURPOSE",
    "SENTINELS",
    "make_value",
    "is_sentinel",
    # valueset
    "SetOp",
    "Singleton",
    "Union",
    "Intersect",
    "Complement",
    "RoleValueSet",
    # action / rule
    "RoleType",
    "Role",
    "Action",
    "Modality",
    "Rule",
    # types / policy
    "TypeOp",
    "TypeAxiom",
    "Policy",
    # agent
    "ServiceMap",
    "Direction",
    "Party",
    "Agent",
    # errors
    "ParseException",
]
