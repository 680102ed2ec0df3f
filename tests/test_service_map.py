"""
Testy czytników mapy usług i specyfikacji agenta.
"""
import io
import logging

import pytest

from policy_model import Actor, ConceptClass, Direction, ParseException, TypeAxiom, TypeOp
from policy_parser import read_agent, read_service_map, read_service_map_file

from conftest import SHOP_TO_COURIER


class TestServiceMap:

    def test_read(self):
        service_map = read_service_map(SHOP_TO_COURIER)
        assert (service_map.agent1, service_map.role1) == ("http://a", Actor("merchant"))
        assert (service_map.agent2, service_map.role2) == ("http://b", Actor("shipper"))
        assert service_map.types == [TypeAxiom(ConceptClass.DATUM, "order", TypeOp.EQUIVALENT, ("parcel",))]

    def test_stream_and_operators(self):
        text = (
            "NS1 urn:x sender\n\n"
            "NS2 urn:y receiver\n"
            "A clerk < staff\n"
            "P billing > invoicing\n"
            "D card \\ token\n"
        )
        service_map = read_service_map(io.StringIO(text))
        assert [a.op for a in service_map.types] == [TypeOp.SUBCLASS, TypeOp.SUPERCLASS, TypeOp.DISJOINT]
        assert [a.type for a in service_map.types] == [
            ConceptClass.ACTOR, ConceptClass.PURPOSE, ConceptClass.DATUM,
        ]

    @pytest.mark.parametrize("line", ["X order = parcel", "D order", "D order ? parcel"])
    def test_bad_line_is_skipped(self, line, caplog):
        with caplog.at_level(logging.WARNING, logger="policy_parser.service_map"):
            service_map = read_service_map(SHOP_TO_COURIER + line + "\n")
        assert len(service_map.types) == 1
        assert "linia mapy usług 5" in caplog.text

    def test_missing_header(self):
        with pytest.raises(ParseException, match="NS2"):
            read_service_map("NS1 http://a merchant\n")

    def test_header_out_of_order(self):
        with pytest.raises(ParseException) as exc_info:
            read_service_map("NS2 http://b shipper\nNS1 http://a merchant\n")
        assert exc_info.value.line == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseException, match="Nie znaleziono"):
            read_service_map_file(tmp_path / "brak.map")


class TestAgentReader:

    def test_read_agent(self, agent_files):
        agent = read_agent(agent_files / "shop.agent")
        assert agent.uri == "http://a"
        assert [r.id for r in agent.policy.rules] == ["p0"]
        party = agent.parties[0]
        assert party.direction is Direction.OUT
        assert (party.actor, party.uri) == (Actor("shipper"), "http://b")
        assert party.service_map.agent2 == "http://b"

    def test_explicit_uri(self, agent_files):
        (agent_files / "named.agent").write_text("local shop.policy urn:shop\n", encoding="utf-8")
        assert read_agent(agent_files / "named.agent").uri == "urn:shop"

    def test_uri_falls_back_to_path(self, tmp_path):
        (tmp_path / "p.policy").write_text("SPEC HEADER\nSPEC POLICY\n\tP COLLECT d\n", encoding="utf-8")
        (tmp_path / "p.agent").write_text("local p.policy\n", encoding="utf-8")
        assert read_agent(tmp_path / "p.agent").uri == "p.policy"

    @pytest.mark.parametrize("text, line", [
        ("recv merchant http://a shop-courier.map\nlocal courier.policy\n", 1),
        ("local courier.policy\nremote http://x/policy\n", 2),
        ("local courier.policy\nsend shipper\n", 2),
    ])
    def test_invalid_lines(self, agent_files, text, line):
        (agent_files / "bad.agent").write_text(text, encoding="utf-8")
        with pytest.raises(ParseException) as exc_info:
            read_agent(agent_files / "bad.agent")
        assert exc_info.value.line == line

    def test_without_local(self, agent_files):
        (agent_files / "empty.agent").write_text("# nic\n", encoding="utf-8")
        with pytest.raises(ParseException, match="local"):
            read_agent(agent_files / "empty.agent")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseException, match="Nie znaleziono"):
            read_agent(tmp_path / "brak.agent")
