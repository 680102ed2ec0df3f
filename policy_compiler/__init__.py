"""
policy_compiler — kompilacja polityk do aksjomatów wyroczni TBox.

Moduły:
  constants   — przestrzeń nazw frameworku, klasy modalności, role, install_framework
  properties  — klucze statystyk kompilacji
  compiler    — Compiler
  compilation — Compilation
  profile     — compute_profile
"""

from . import properties
from .compilation import Compilation
from .compiler import Compiler
from .constants import (
    ACTION,
    ACTOR,
    CONFLICT,
    DATUM,
    DOMAIN_ROOT,
    MODALITY_CLASS,
    NS,
    PURPOSE,
    ROLE_PROPERTY,
    RULE,
    install_framework,
)
from .profile import compute_profile

__all__ = [
    "NS",
    "ACTOR",
    "DATUM",
    "PURPOSE",
    "CONFLICT",
    "RULE",
    "ACTION",
    "MODALITY_CLASS",
    "DOMAIN_ROOT",
    "ROLE_PROPERTY",
    "install_framework",
    "properties",
    "Compiler",
    "Compilation",
    "compute_profile",
]
