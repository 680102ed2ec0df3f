"""
Wynik kompilacji polityki: polityka, kompilator, wyrocznia z aksjomatami i statystyki.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from policy_model import Policy
from tbox import TBoxOracle

if TYPE_CHECKING:
    from .compiler import Compiler


class Compilation:
    """
    Skompilowana polityka.

    Wyrocznia należy do kompilacji; analizy, które dodają aksjomaty, pracują na kopii
    (oracle.copy()), żeby nie zmieniać wyniku kompilacji.
    """

    def __init__(self, compiler: Compiler, policy: Policy, oracle: TBoxOracle) -> None:
        self.compiler   = compiler
        self.policy     = policy
        self.oracle     = oracle
        self.properties: dict[str, str] = {}

    @property
    def namespace(self) -> str:
        return self.compiler.namespace

    def refresh(self) -> None:
        """Przelicza klasyfikację po dodaniu aksjomatów."""
        self.oracle.refresh()

    def set_property(self, key: str, value: object) -> None:
        self.properties[key] = str(value)

    def sorted_properties(self) -> list[tuple[str, str]]:
        return sorted(self.properties.items())

    def __repr__(self) -> str:
        return f"Compilation(policy={self.policy.id!r}, rules={len(self.policy)})"
