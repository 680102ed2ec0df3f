"""
Testy przepływów między agentami połączonymi mapą usług.
"""
import pytest

from analysis import CrossFlowTracer, FlowMode
from policy_model import (
    Actor,
    ConceptClass,
    Direction,
    ParseException,
    RoleType,
    ServiceMap,
    TypeAxiom,
    TypeOp,
)
from policy_parser import read_agent, read_service_map


def tracer_for(agent_files, **kwargs):
    tracer = CrossFlowTracer(["TRANSFER"], ["COLLECT"], **kwargs)
    for name in ("shop.agent", "courier.agent"):
        agent = read_agent(agent_files / name)
        tracer.add_agent(agent)
        for party in agent.parties:
            if party.direction is Direction.OUT:
                tracer.add_map(party.service_map)
    return tracer


class TestCrossFlowTracer:

    def test_shop_to_courier(self, agent_files):
        flows = tracer_for(agent_files).trace()
        assert [str(f) for f in flows] == ["Flow(http://a!p0:http://b!p0, {OBJECT=EXACTFLOW})"]
        flow = flows[0]
        assert not flow.is_internal
        assert flow.to_dict()["source_uri"] == "http://a"
        assert flow.to_dict()["modes"] == {"OBJECT": "EXACTFLOW"}

    def test_compilations_use_agent_namespaces(self, agent_files):
        tracer = tracer_for(agent_files)
        tracer.trace()
        assert sorted(tracer.compilations) == ["http://a", "http://b"]
        assert tracer.compilations["http://b"].namespace == "http://b"
        assert tracer.flows == {"http://a": [], "http://b": []}

    def test_strict_purposing(self, agent_files):
        """Cele obu agentów leżą w różnych przestrzeniach nazw i wymagają dopasowania."""
        assert tracer_for(agent_files, strict_purposing=True).trace() == []

        with (agent_files / "shop-courier.map").open("a", encoding="utf-8") as fh:
            fh.write("P delivery = delivery\n")
        flows = tracer_for(agent_files, strict_purposing=True).trace()
        assert len(flows) == 1
        assert flows[0].modes == {
            RoleType.OBJECT:  FlowMode.EXACTFLOW,
            RoleType.PURPOSE: FlowMode.EXACTFLOW,
        }

    def test_disjoint_alignment_is_skipped(self, agent_files):
        (agent_files / "shop-courier.map").write_text(
            "NS1 http://a merchant\nNS2 http://b shipper\nD order \\ parcel\n",
            encoding="utf-8",
        )
        assert tracer_for(agent_files).trace() == []

    def test_unknown_agent(self, agent_files):
        tracer = tracer_for(agent_files)
        tracer.add_map(ServiceMap("http://a", Actor("merchant"), "http://c", Actor("shipper")))
        with pytest.raises(ParseException, match="http://c"):
            tracer.trace()

    def test_internal_flows(self, tmp_path):
        """Przepływ wewnątrz agenta ma ten sam URI po obu stronach."""
        (tmp_path / "hub.policy").write_text(
            "SPEC HEADER\n\tATTR NAMESPACE http://hub\nSPEC POLICY\n"
            "\tP COLLECT order FROM customer FOR delivery\n"
            "\tP TRANSFER order FROM customer TO shipper FOR delivery\n",
            encoding="utf-8",
        )
        (tmp_path / "hub.agent").write_text("local hub.policy\n", encoding="utf-8")
        tracer = CrossFlowTracer(["TRANSFER"], ["COLLECT"])
        tracer.add_agent(read_agent(tmp_path / "hub.agent"))
        flows = tracer.trace()
        assert len(flows) == 1
        assert flows[0].is_internal
        assert str(flows[0]) == "Flow(http://hub!p0:http://hub!p1, {OBJECT=EXACTFLOW, SOURCE=EXACTFLOW})"

    def test_align(self, agent_files):
        tracer = tracer_for(agent_files)
        tracer.trace()
        comp1, comp2 = tracer.compilations["http://a"], tracer.compilations["http://b"]
        service_map = read_service_map(
            "NS1 http://a merchant\nNS2 http://b shipper\nD order < parcel\n"
        )
        oracle = tracer.align(service_map, comp1, comp2)
        order, parcel = comp1.compiler.named("order"), comp2.compiler.named("parcel")
        assert oracle.is_entailed_subclass(order, parcel)
        assert not oracle.is_entailed_subclass(parcel, order)
        assert not comp1.oracle.is_entailed_subclass(order, parcel)
        assert service_map.types == [TypeAxiom(ConceptClass.DATUM, "order", TypeOp.SUBCLASS, ("parcel",))]
