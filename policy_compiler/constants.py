"""
policy_compiler/constants.py — przestrzeń nazw frameworku górnego i jego klasy.

Framework górny (wspólny dla każdej kompilacji):
  Rule ⊑ Conflict
  Action ⊑ Rule
  Right, Obligation, Prohibition, Exclusion, ExclusionOf* ⊑ Rule
  Actor, Datum, Purpose ⊑ Thing

Dzięki temu każda reguła i każda itemizacja leży pod Conflict i pod Rule.
"""

from __future__ import annotations

from policy_model import ConceptClass, Modality, RoleType
from tbox import THING, Named, TBoxOracle

NS = "http://gaius.isri.cmu.edu/2011/8/policy-base.owl"

# ---------------------------------------------------------------------------
# Klasy
# ---------------------------------------------------------------------------

ACTOR    = Named(f"{NS}#Actor")
DATUM    = Named(f"{NS}#Datum")
PURPOSE  = Named(f"{NS}#Purpose")
CONFLICT = Named(f"{NS}#Conflict")
RULE     = Named(f"{NS}#Rule")
ACTION   = Named(f"{NS}#Action")

MODALITY_CLASS: dict[Modality, Named] = {
    Modality.PERMISSION:               Named(f"{NS}#Right"),
    Modality.OBLIGATION:               Named(f"{NS}#Obligation"),
    Modality.REFRAINMENT:              Named(f"{NS}#Prohibition"),
    Modality.EXCLUSION:                Named(f"{NS}#Exclusion"),
    Modality.EXCLUSION_OF_PERMISSION:  Named(f"{NS}#ExclusionOfRight"),
    Modality.EXCLUSION_OF_OBLIGATION:  Named(f"{NS}#ExclusionOfObligation"),
    Modality.EXCLUSION_OF_REFRAINMENT: Named(f"{NS}#ExclusionOfProhibition"),
}

DOMAIN_ROOT: dict[ConceptClass, Named] = {
    ConceptClass.ACTOR:   ACTOR,
    ConceptClass.DATUM:   DATUM,
    ConceptClass.PURPOSE: PURPOSE,
}

# ---------------------------------------------------------------------------
# Role (właściwości obiektowe)
# ---------------------------------------------------------------------------

HAS_OBJECT     = f"{NS}#hasObject"
HAS_SOURCE     = f"{NS}#hasSource"
HAS_PURPOSE    = f"{NS}#hasPurpose"
HAS_TARGET     = f"{NS}#hasTarget"
HAS_INSTRUMENT = f"{NS}#hasInstrument"

ROLE_PROPERTY: dict[RoleType, str] = {
    RoleType.OBJECT:     HAS_OBJECT,
    RoleType.SOURCE:     HAS_SOURCE,
    RoleType.PURPOSE:    HAS_PURPOSE,
    RoleType.TARGET:     HAS_TARGET,
    RoleType.INSTRUMENT: HAS_INSTRUMENT,
}


def install_framework(tbox: TBoxOracle) -> None:
    """Dodaje aksjomaty frameworku górnego do pustej wyroczni."""
    tbox.assert_subclass(CONFLICT, THING)
    tbox.assert_subclass(RULE, CONFLICT)
    tbox.assert_subclass(ACTION, RULE)
    for cls in MODALITY_CLASS.values():
        tbox.assert_subclass(cls, RULE)
    for root in DOMAIN_ROOT.values():
        tbox.assert_subclass(root, THING)
