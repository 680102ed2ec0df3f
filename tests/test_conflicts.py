"""
Testy analizy konfliktów: rodzaje konfliktów, postać kanoniczna i scalanie.
"""
import pytest

from analysis import Conflict, ConflictAnalyzer, ConflictType, ExtensionCalculator, merge_conflicts
from policy_compiler import properties as props
from policy_model import Action, Datum, Modality, Role, RoleType, Rule, Singleton

from conftest import compile_text


def make_rule(rule_id, modality):
    action = Action("COLLECT")
    action.add(Role(RoleType.OBJECT, "", Singleton(Datum("d"))))
    return Rule(rule_id, modality, action)


def analyze(comp, calculator=None):
    calculator = calculator or ExtensionCalculator()
    return ConflictAnalyzer().analyze(calculator.extend(comp))


class TestConflictAnalyzer:
    """Konflikty wykrywane w ekstensji polityki."""

    def test_identical_rules_are_equivalent(self, identical_comp):
        ext = ExtensionCalculator().extend(identical_comp)
        conflicts = ConflictAnalyzer().analyze(ext)
        assert len(conflicts) == 1
        conflict = conflicts[0]
        assert conflict.type is ConflictType.EQUIVALENT
        assert conflict.key == ("p0", "r0")
        assert set(conflict.evidence) == {"p0", "r0", "x0"}
        assert ext.properties[props.RULE_CONFLICTS] == "1"
        assert props.RULE_CONFLICTS not in identical_comp.properties

    def test_permission_subsumed_by_prohibition(self, hierarchy_comp):
        """P COLLECT email leży pod R COLLECT contact."""
        conflicts = analyze(hierarchy_comp)
        assert [str(c) for c in conflicts] == ["SUBSUMED_BY p0,r0"]
        assert {"p0", "x1"} <= set(conflicts[0].evidence)

    def test_shared_itemization(self):
        comp = compile_text(
            "SPEC HEADER\n"
            "\tD contact > email, phone\n"
            "SPEC POLICY\n"
            "\tP COLLECT email FOR marketing\n"
            "\tR COLLECT contact FROM user FOR marketing\n"
        )
        conflicts = analyze(comp)
        assert len(conflicts) == 1
        assert conflicts[0].type is ConflictType.SHARED
        assert set(conflicts[0].evidence) == {"x1"}
        assert str(conflicts[0]) == "SHARED p0,r0 at [x1]"

    def test_compatible_modalities(self):
        comp = compile_text(
            "SPEC HEADER\nSPEC POLICY\n"
            "\tP COLLECT d FROM a\n"
            "\tO COLLECT d FROM a\n"
        )
        calculator = ExtensionCalculator(compute_only_prohibitions=False)
        assert analyze(comp, calculator) == []

    def test_to_dict(self, hierarchy_comp):
        data = analyze(hierarchy_comp)[0].to_dict()
        assert data["type"] == "SUBSUMED_BY"
        assert (data["rule1"], data["rule2"]) == ("p0", "r0")
        assert data["evidence"]["x1"] == "COLLECT email FROM user FOR marketing"


class TestCanonicalForm:
    """Reguła wyłączająca lub zezwalająca trafia na pierwsze miejsce."""

    def test_permission_leads(self):
        p, r = make_rule("p0", Modality.PERMISSION), make_rule("r0", Modality.REFRAINMENT)
        conflict = Conflict.create(ConflictType.SUBSUMED_BY, r, p)
        assert conflict.key == ("p0", "r0")
        assert conflict.type is ConflictType.SUBSUMES
        assert conflict.evidence == {}

    def test_exclusion_leads(self):
        o, e = make_rule("o0", Modality.OBLIGATION), make_rule("e0", Modality.EXCLUSION)
        conflict = Conflict.create(ConflictType.SHARED, o, e, "x3", o.action)
        assert conflict.key == ("e0", "o0")
        assert conflict.type is ConflictType.SHARED
        assert list(conflict.evidence) == ["x3"]

    def test_order_kept_without_leading_rule(self):
        o, r = make_rule("o0", Modality.OBLIGATION), make_rule("r0", Modality.REFRAINMENT)
        assert Conflict.create(ConflictType.SUBSUMES, o, r).key == ("o0", "r0")

    @pytest.mark.parametrize("kind, inverse", [
        (ConflictType.SUBSUMES, ConflictType.SUBSUMED_BY),
        (ConflictType.SUBSUMED_BY, ConflictType.SUBSUMES),
        (ConflictType.SHARED, ConflictType.SHARED),
        (ConflictType.EQUIVALENT, ConflictType.EQUIVALENT),
    ])
    def test_inverse(self, kind, inverse):
        assert kind.inverse() is inverse


class TestMerge:

    def setup_method(self):
        self.p = make_rule("p0", Modality.PERMISSION)
        self.r = make_rule("r0", Modality.REFRAINMENT)

    def conflict(self, kind, ext_id):
        return Conflict.create(kind, self.p, self.r, ext_id, self.p.action)

    def test_opposite_directions_are_equivalent(self):
        merged = merge_conflicts([
            self.conflict(ConflictType.SUBSUMES, "x0"),
            self.conflict(ConflictType.SUBSUMED_BY, "x1"),
        ])
        assert len(merged) == 1
        assert merged[0].type is ConflictType.EQUIVALENT
        assert set(merged[0].evidence) == {"x0", "x1"}

    def test_shared_gives_way(self):
        merged = merge_conflicts([
            self.conflict(ConflictType.SHARED, "x0"),
            self.conflict(ConflictType.SUBSUMED_BY, "p0"),
        ])
        assert merged[0].type is ConflictType.SUBSUMED_BY

    def test_merge_does_not_mutate_input(self):
        first = self.conflict(ConflictType.SUBSUMES, "x0")
        merge_conflicts([first, self.conflict(ConflictType.SUBSUMED_BY, "x1")])
        assert first.type is ConflictType.SUBSUMES
        assert list(first.evidence) == ["x0"]

    def test_result_is_sorted(self):
        o = make_rule("o0", Modality.OBLIGATION)
        merged = merge_conflicts([
            self.conflict(ConflictType.SHARED, "x0"),
            Conflict.create(ConflictType.SHARED, self.p, o),
        ])
        assert [c.key for c in merged] == [("p0", "o0"), ("p0", "r0")]
