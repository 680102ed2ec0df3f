"""
Testy CLI: komendy wywoływane przez main() z przechwyconym wyjściem.
"""
import json

import pytest

from eddy import __version__
from eddy.cli import build_parser, main
from policy_compiler import properties as props

from conftest import CONTACT_HIERARCHY, IDENTICAL_RULES, PROCUREMENT


@pytest.fixture
def run_cli(clean_env, restore_logging, capsys):
    def run(*argv):
        main([str(a) for a in argv])
        return capsys.readouterr().out
    return run


@pytest.fixture
def policy_file(tmp_path):
    def write(text, name="test.policy"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return write


class TestParser:

    @pytest.mark.parametrize("command", ["parse", "profile", "extension", "conflicts", "flows", "crossflows", "thesaurus"])
    def test_commands(self, command):
        assert build_parser().parse_args([command, "plik"]).command == command

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:

    def test_parse_json(self, run_cli, policy_file):
        data = json.loads(run_cli("parse", policy_file(CONTACT_HIERARCHY), "--json-output"))
        assert [r["id"] for r in data["rules"]] == ["p0", "r0"]
        assert data["types"] == ["D contact > email,phone"]

    def test_parse_text(self, run_cli, policy_file):
        out = run_cli("parse", policy_file(CONTACT_HIERARCHY), "--text")
        assert "R COLLECT contact FROM user FOR marketing" in out

    def test_profile_json(self, run_cli, policy_file):
        data = json.loads(run_cli("profile", policy_file(CONTACT_HIERARCHY), "--json-output"))
        assert data[props.RULE_RIGHTS] == "1"
        assert data[props.RULE_PROHIBITIONS] == "1"
        assert data[props.RULE_ACTION + "COLLECT"] == "2"

    def test_extension_json(self, run_cli, policy_file):
        data = json.loads(run_cli("extension", policy_file(CONTACT_HIERARCHY), "--json-output"))
        assert [item["id"] for item in data] == ["x0", "x1", "x2"]
        assert data[1]["rules"] == ["p0", "r0"]

    def test_conflicts_json(self, run_cli, policy_file):
        data = json.loads(run_cli("conflicts", policy_file(IDENTICAL_RULES), "--json-output"))
        assert len(data) == 1
        assert (data[0]["type"], data[0]["rule1"], data[0]["rule2"]) == ("EQUIVALENT", "p0", "r0")

    def test_conflicts_batch(self, run_cli, policy_file):
        out = run_cli(
            "conflicts", policy_file(CONTACT_HIERARCHY),
            "--batch", "--block-size", "1", "--threads", "2", "--json-output",
        )
        data = json.loads(out)
        assert [(c["type"], c["rule1"], c["rule2"]) for c in data] == [("SUBSUMED_BY", "p0", "r0")]

    def test_conflicts_table(self, run_cli, policy_file):
        out = run_cli("conflicts", policy_file(CONTACT_HIERARCHY))
        assert "SUBSUMED_BY" in out

    def test_flows_json(self, run_cli, policy_file):
        data = json.loads(run_cli("flows", policy_file(PROCUREMENT), "--json-output"))
        assert [(f["source"], f["target"]) for f in data] == [("o0", "p0")]
        assert data[0]["modes"]["PURPOSE"] == "EXACTFLOW"

    def test_flows_datum(self, run_cli, policy_file):
        data = json.loads(run_cli("flows", policy_file(PROCUREMENT), "--datum", "invoice", "--json-output"))
        assert data == []

    def test_crossflows_json(self, run_cli, agent_files):
        data = json.loads(run_cli(
            "crossflows", agent_files / "shop.agent", agent_files / "courier.agent", "--json-output",
        ))
        assert len(data) == 1
        assert (data[0]["source_uri"], data[0]["target_uri"]) == ("http://a", "http://b")
        assert data[0]["modes"] == {"OBJECT": "EXACTFLOW"}

    def test_thesaurus_output(self, run_cli, policy_file, tmp_path):
        target = tmp_path / "terms.txt"
        out = run_cli("thesaurus", policy_file(CONTACT_HIERARCHY), "--output", target)
        assert "Zapisano" in out
        assert target.read_text(encoding="utf-8").startswith("# Terminology for Actor")

    def test_thesaurus_json(self, run_cli, policy_file):
        data = json.loads(run_cli("thesaurus", policy_file(CONTACT_HIERARCHY), "--json-output"))
        assert data["Datum"] == ["contact", "email", "phone"]


class TestErrors:

    def test_missing_policy(self, run_cli, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("parse", tmp_path / "brak.policy")
        assert exc_info.value.code == 1
        assert "Błąd wczytywania polityki" in capsys.readouterr().out

    def test_parse_error(self, run_cli, policy_file):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("conflicts", policy_file("SPEC POLICY\n\tP COLLECT d\n"))
        assert exc_info.value.code == 1

    def test_invalid_environment(self, run_cli, policy_file, clean_env, capsys):
        clean_env.setenv("EDDY_THREADS", "trzy")
        with pytest.raises(SystemExit) as exc_info:
            run_cli("parse", policy_file(CONTACT_HIERARCHY))
        assert exc_info.value.code == 1
        assert "Błędna konfiguracja" in capsys.readouterr().out

    def test_unknown_agent_map(self, run_cli, agent_files):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("crossflows", agent_files / "shop.agent")
        assert exc_info.value.code == 1
