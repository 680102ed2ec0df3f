"""
Profil kompilacji: statystyki modalności i tally akcji / modalności / typów.
"""

from __future__ import annotations

from collections import Counter

from policy_model import Modality
from tbox import conjunction, strict_subclasses

from . import properties as props
from .compilation import Compilation
from .constants import MODALITY_CLASS, RULE

_MODALITY_KEYS: dict[Modality, str] = {
    Modality.PERMISSION:               props.RULE_RIGHTS,
    Modality.OBLIGATION:               props.RULE_OBLIGATIONS,
    Modality.REFRAINMENT:              props.RULE_PROHIBITIONS,
    Modality.EXCLUSION_OF_PERMISSION:  props.RULE_EX_RIGHT,
    Modality.EXCLUSION_OF_OBLIGATION:  props.RULE_EX_OBLIGATION,
    Modality.EXCLUSION_OF_REFRAINMENT: props.RULE_EX_PROHIBITION,
}


def compute_profile(comp: Compilation) -> dict[str, str]:
    """
    Zapisuje w comp.properties:
      - liczbę bezpośrednich podklas (modalność ⊓ Rule) dla każdej modalności
      - rule-action-<AKCJA>, rule-mod-<M>: liczności reguł
      - rule-type-<A|D|P>, rule-op-<op>: liczności aksjomatów typów
    """
    oracle = comp.oracle
    for modality, key in _MODALITY_KEYS.items():
        query = conjunction([MODALITY_CLASS[modality], RULE])
        comp.set_property(key, len(strict_subclasses(oracle, query)))

    tally: Counter[str] = Counter()
    for rule in comp.policy.rules:
        tally[props.RULE_ACTION + rule.action.name] += 1
        tally[props.RULE_MOD + rule.modality.value] += 1
    for axiom in comp.policy.types:
        tally[props.RULE_TYPE + axiom.type.value] += 1
        tally[props.RULE_OP + axiom.op.value] += 1

    for key in sorted(tally):
        comp.set_property(key, tally[key])
    return dict(comp.properties)
