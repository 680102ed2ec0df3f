"""
Reguły modalne.

Modalność określa moc deontyczną reguły. Stała, symetryczna macierz 7×7 mówi, które
pary modalności są sprzeczne, gdy dotyczą tej samej interpretacji akcji.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .action import Action


class Modality(StrEnum):
    """Modalność reguły. Wartość to etykieta z DSL."""
    PERMISSION               = "P"
    OBLIGATION               = "O"
    REFRAINMENT              = "R"
    EXCLUSION                = "E"
    EXCLUSION_OF_PERMISSION  = "EP"
    EXCLUSION_OF_OBLIGATION  = "EO"
    EXCLUSION_OF_REFRAINMENT = "ER"

    def conflicts_with(self, other: Modality) -> bool:
        return frozenset((self, other)) in _CONFLICTS

    def is_exclusion(self) -> bool:
        return self.value.startswith("E")

    def is_permissible(self) -> bool:
        return self is Modality.PERMISSION

    def exclusion_of(self) -> Modality:
        """Wyłączenie danej modalności (P → EP, O → EO, R → ER)."""
        if self.is_exclusion():
            raise ValueError(f"Modalność {self.value} jest już wyłączeniem")
        return Modality("E" + self.value)


_P, _O, _R, _E = (Modality.PERMISSION, Modality.OBLIGATION,
                  Modality.REFRAINMENT, Modality.EXCLUSION)

# Pary sprzeczne (macierz symetryczna, zapis jako zbiory nieuporządkowane)
_CONFLICTS: frozenset[frozenset[Modality]] = frozenset({
    # uprawnienia i obowiązki vs zakazy
    frozenset((_P, _R)),
    frozenset((_O, _R)),
    # preskrypcje vs wyłączenie ogólne
    frozenset((_P, _E)),
    frozenset((_O, _E)),
    frozenset((_R, _E)),
    # wyłączenie uprawnienia
    frozenset((_P, Modality.EXCLUSION_OF_PERMISSION)),
    frozenset((_O, Modality.EXCLUSION_OF_PERMISSION)),
    # wyłączenie obowiązku
    frozenset((_O, Modality.EXCLUSION_OF_OBLIGATION)),
    # wyłączenie zakazu
    frozenset((_R, Modality.EXCLUSION_OF_REFRAINMENT)),
})


@dataclass(slots=True)
class Rule:
    """
    Reguła polityki.

    - id:       identyfikator unikalny w polityce (np. "p0", "r1", "p0x")
    - modality: moc deontyczna
    - action:   akcja z rolami
    - only:     czy reguła była zapisana z ONLY (generuje regułę-wyłączenie)
    """
    id:       str
    modality: Modality
    action:   Action
    only:     bool = False

    def clone(self) -> Rule:
        return Rule(self.id, self.modality, self.action.clone(), self.only)

    def __str__(self) -> str:
        prefix = f"{self.modality.value} ONLY" if self.only else self.modality.value
        return f"{prefix} {self.action}"
