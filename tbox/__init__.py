"""
tbox — wyrażenia pojęciowe, aksjomaty i wyrocznia TBox.
"""

from .concepts import (
    NOTHING,
    OWL,
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
    conjunction,
    disjunction,
    negation,
    signature,
)
from .oracle import TBoxOracle, strict_subclasses
from .structural import StructuralTBox

__all__ = [
    # pojęcia
    "OWL",
    "Named",
    "THING",
    "NOTHING",
    "And",
    "Or",
    "Not",
    "Some",
    "Concept",
    "conjunction",
    "disjunction",
    "negation",
    "signature",
    # aksjomaty
    "SubClassOf",
    "EquivalentClasses",
    "DisjointClasses",
    "Axiom",
    # wyrocznia
    "TBoxOracle",
    "strict_subclasses",
    "StructuralTBox",
]
