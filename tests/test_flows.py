"""
Testy przepływów danych w jednej polityce.
"""
from analysis import FlowMode, FlowTracer, get_flow_restriction
from policy_model import Datum, RoleType
from tbox import Named, StructuralTBox, disjunction

from conftest import compile_text


class TestFlowTracer:

    def test_collect_to_transfer(self, procurement_comp):
        flows = FlowTracer(["COLLECT"], ["TRANSFER"]).trace(procurement_comp)
        assert len(flows) == 1
        flow = flows[0]
        assert (flow.source.id, flow.target.id) == ("o0", "p0")
        assert set(flow.modes.values()) == {FlowMode.EXACTFLOW}
        assert str(flow) == "Flow(o0:p0, {OBJECT=EXACTFLOW, SOURCE=EXACTFLOW, PURPOSE=EXACTFLOW})"

    def test_datum_filter(self, procurement_comp):
        tracer = FlowTracer(["COLLECT"], ["TRANSFER"])
        assert tracer.trace(procurement_comp, Datum("invoice")) == []
        assert len(tracer.trace(procurement_comp, Datum("po"))) == 1

    def test_strict_purposing(self):
        comp = compile_text(
            "SPEC HEADER\nSPEC POLICY\n"
            "\tO COLLECT po FROM supplier FOR procurement\n"
            "\tP TRANSFER po FROM supplier TO buyer FOR audit\n"
        )
        assert FlowTracer(["COLLECT"], ["TRANSFER"]).trace(comp) == []

        loose = FlowTracer(["COLLECT"], ["TRANSFER"], strict_purposing=False)
        flows = loose.trace(comp)
        assert len(flows) == 1
        assert flows[0].mode(RoleType.PURPOSE) is None
        assert loose.role_types == [RoleType.OBJECT, RoleType.SOURCE]

    def test_rule_lists_are_kept(self, procurement_comp):
        tracer = FlowTracer()
        tracer.add_source("COLLECT")
        tracer.add_target("TRANSFER")
        tracer.trace(procurement_comp)
        assert [r.id for r in tracer.source_rules] == ["o0"]
        assert [r.id for r in tracer.target_rules] == ["p0"]

    def test_to_dict(self, procurement_comp):
        flow = FlowTracer(["COLLECT"], ["TRANSFER"]).trace(procurement_comp)[0]
        assert flow.to_dict() == {
            "source": "o0",
            "target": "p0",
            "modes":  {"OBJECT": "EXACTFLOW", "SOURCE": "EXACTFLOW", "PURPOSE": "EXACTFLOW"},
        }


class TestFlowRestriction:
    """Tryb przepływu wynikający z relacji dwóch pojęć."""

    def test_hierarchy(self, hierarchy_comp):
        oracle, named = hierarchy_comp.oracle, hierarchy_comp.compiler.named
        assert get_flow_restriction(oracle, named("contact"), named("email")) is FlowMode.OVERFLOW
        assert get_flow_restriction(oracle, named("email"), named("contact")) is FlowMode.UNDERFLOW
        assert get_flow_restriction(oracle, named("email"), named("email")) is FlowMode.EXACTFLOW
        assert get_flow_restriction(oracle, named("email"), named("phone")) is None

    def test_underflow_through_subclass(self):
        """A nie leży pod B ⊔ D, ale jego podklasa B tak."""
        A, B, C, D = (Named(f"urn:t#{n}") for n in "ABCD")
        tbox = StructuralTBox()
        tbox.assert_subclass(B, A)
        tbox.assert_subclass(C, A)
        assert get_flow_restriction(tbox, A, disjunction([B, D])) is FlowMode.UNDERFLOW
        assert get_flow_restriction(tbox, D, B) is None
