"""Ustawienia narzędzia: konfiguracja przez zmienne środowiskowe."""

from __future__ import annotations

import os
from dataclasses import dataclass

from policy_compiler import NS


@dataclass(frozen=True, slots=True)
class Settings:
    log_level:     str
    block_size:    int
    threads:       int
    batch_timeout: float | None
    namespace:     str


def _timeout(raw: str | None) -> float | None:
    if raw is None or raw.strip().lower() in ("", "none", "0"):
        return None
    return float(raw)


def load_settings() -> Settings:
    """Wczytuje ustawienia; ValueError przy niepoprawnej wartości liczbowej."""
    return Settings(
        log_level     = os.getenv("EDDY_LOG_LEVEL",   "WARNING").upper(),
        block_size    = int(os.getenv("EDDY_BLOCK_SIZE", "1000")),
        threads       = int(os.getenv("EDDY_THREADS",    "3")),
        batch_timeout = _timeout(os.getenv("EDDY_BATCH_TIMEOUT")),
        namespace     = os.getenv("EDDY_NAMESPACE",   NS),
    )
