"""
Testy wsadowej analizy konfliktów: zgodność z analizą jednoprzebiegową,
bloki z błędem i limit czasu.
"""
import logging
import threading

import pytest

import analysis.batch
from analysis import BatchConflictAnalyzer, ConflictAnalyzer, ExtensionCalculator
from policy_compiler import properties as props


def single_pass(comp):
    return ConflictAnalyzer().analyze(ExtensionCalculator().extend(comp))


class TestBatchConflictAnalyzer:

    @pytest.mark.parametrize("block_size, threads", [(1, 1), (1, 3), (2, 2), (1000, 3)])
    def test_same_as_single_pass(self, hierarchy_comp, block_size, threads):
        expected = [(c.type, c.key) for c in single_pass(hierarchy_comp)]
        analyzer = BatchConflictAnalyzer(block_size=block_size, threads=threads)
        result   = analyzer.analyze(hierarchy_comp)
        assert [(c.type, c.key) for c in result] == expected
        assert analyzer.failed_blocks == []
        assert hierarchy_comp.properties[props.EXT_SIZE] == "3"

    def test_equivalent_across_blocks(self, identical_comp):
        result = BatchConflictAnalyzer(block_size=1).analyze(identical_comp)
        assert [str(c) for c in result] == ["EQUIVALENT p0,r0"]

    def test_blocks(self, hierarchy_comp):
        actions = ExtensionCalculator().compute(hierarchy_comp)
        blocks  = BatchConflictAnalyzer(block_size=2).blocks(actions)
        assert [len(b) for b in blocks] == [2, 1]

    def test_failing_block_is_skipped(self, hierarchy_comp, monkeypatch, caplog):
        real_extend = analysis.batch.extend

        def flaky_extend(comp, actions, counter=0):
            if counter == 1:
                raise RuntimeError("awaria bloku")
            return real_extend(comp, actions, counter)

        monkeypatch.setattr(analysis.batch, "extend", flaky_extend)
        analyzer = BatchConflictAnalyzer(block_size=1, threads=2)
        with caplog.at_level(logging.ERROR, logger="analysis.batch"):
            result = analyzer.analyze(hierarchy_comp)

        assert analyzer.failed_blocks == [1]
        assert [str(c) for c in result] == ["SUBSUMED_BY p0,r0"]
        assert "bloku 1" in caplog.text

    def test_timeout_cancels_pending_blocks(self, hierarchy_comp, monkeypatch, caplog):
        release = threading.Event()

        def stuck(self, comp, block, index):
            release.wait(5)
            return []

        monkeypatch.setattr(BatchConflictAnalyzer, "_analyze_block", stuck)
        analyzer = BatchConflictAnalyzer(block_size=1, threads=1, timeout=0.05)
        try:
            with caplog.at_level(logging.WARNING, logger="analysis.batch"):
                result = analyzer.analyze(hierarchy_comp)
        finally:
            release.set()

        assert result == []
        assert sorted(analyzer.failed_blocks) == [0, 1, 2]
        assert "limit czasu" in caplog.text

    @pytest.mark.parametrize("kwargs", [{"block_size": 0}, {"threads": 0}])
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(ValueError):
            BatchConflictAnalyzer(**kwargs)
