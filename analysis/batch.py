"""
analysis/batch.py — wsadowa analiza konfliktów na puli wątków.

Itemizowane akcje są dzielone na bloki po `block_size`. Każdy blok dostaje własną kopię
wyroczni (extend z licznikiem index * block_size), więc żadna wyrocznia nie jest
współdzielona między wątkami. Wyniki bloku są scalane dopiero po jego zakończeniu.

Błąd w bloku jest logowany, a blok wnosi pustą listę konfliktów. Po przekroczeniu
`timeout` oczekujące bloki są anulowane.
"""

from __future__ import annotations

import concurrent.futures
import logging

from policy_compiler import Compilation
from policy_compiler import properties as props
from policy_model import Action

from .conflicts import Conflict, ConflictAnalyzer, merge_conflicts
from .extension import ExtensionCalculator, extend

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_SIZE = 1000
DEFAULT_THREADS    = 3


class BatchConflictAnalyzer:

    def __init__(
        self,
        block_size: int = DEFAULT_BLOCK_SIZE,
        threads:    int = DEFAULT_THREADS,
        timeout:    float | None = None,
        calculator: ExtensionCalculator | None = None,
    ) -> None:
        if block_size < 1:
            raise ValueError(f"Rozmiar bloku musi być dodatni: {block_size}")
        if threads < 1:
            raise ValueError(f"Liczba wątków musi być dodatnia: {threads}")
        self.block_size = block_size
        self.threads    = threads
        self.timeout    = timeout
        self.calculator = calculator or ExtensionCalculator()
        self.failed_blocks: list[int] = []

    def blocks(self, actions: list[Action]) -> list[list[Action]]:
        return [actions[i:i + self.block_size] for i in range(0, len(actions), self.block_size)]

    def analyze(self, comp: Compilation, actions: list[Action] | None = None) -> list[Conflict]:
        if actions is None:
            actions = self.calculator.compute(comp)
        blocks = self.blocks(actions)
        self.failed_blocks = []
        logger.info(
            f"Analiza wsadowa: {len(actions)} akcji w {len(blocks)} blokach, "
            f"{self.threads} wątków"
        )

        found: list[Conflict] = []
        pool = concurrent.futures.ThreadPoolExecutor(max_workers=self.threads)
        try:
            fut_to_block = {
                pool.submit(self._analyze_block, comp, block, index): index
                for index, block in enumerate(blocks)
            }
            try:
                for fut in concurrent.futures.as_completed(fut_to_block, timeout=self.timeout):
                    found.extend(fut.result())
            except concurrent.futures.TimeoutError:
                pending = [i for f, i in fut_to_block.items() if not f.done()]
                self.failed_blocks.extend(pending)
                logger.warning(
                    f"Przekroczono limit czasu {self.timeout}s; anulowano bloki {sorted(pending)}"
                )
                for fut in fut_to_block:
                    fut.cancel()
        finally:
            pool.shutdown(wait=self.timeout is None, cancel_futures=True)

        conflicts = merge_conflicts(found)
        comp.set_property(props.RULE_CONFLICTS, len(conflicts))
        comp.set_property(props.EXT_SIZE, len(actions))
        logger.info(f"Analiza wsadowa: {len(conflicts)} konfliktów")
        return conflicts

    def _analyze_block(self, comp: Compilation, block: list[Action], index: int) -> list[Conflict]:
        try:
            ext = extend(comp, block, index * self.block_size)
            conflicts = ConflictAnalyzer().analyze(ext)
        except Exception:
            logger.exception(f"Błąd analizy bloku {index}; blok pominięty")
            self.failed_blocks.append(index)
            return []
        logger.debug(f"Blok {index}: {len(block)} akcji, {len(conflicts)} konfliktów")
        return conflicts
