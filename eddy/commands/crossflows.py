"""Komenda: eddy crossflows — przepływy danych między agentami."""

from __future__ import annotations

import argparse

from rich import box
from rich.table import Table

from analysis import CrossFlowTracer
from policy_compiler import Compiler
from policy_model import Datum, Direction, ParseException
from policy_parser import read_agent, read_service_map_file

from ._common import add_json_flag, console, fail, print_json
from .flows import fmt_mode


def run(args: argparse.Namespace) -> None:
    namespace = args.settings.namespace
    tracer = CrossFlowTracer(
        args.source,
        args.target,
        strict_purposing=args.strict_purposing,
        compiler_factory=lambda: Compiler(default_namespace=namespace),
    )

    try:
        for path in args.agents:
            agent = read_agent(path)
            tracer.add_agent(agent)
            for party in agent.parties:
                if party.direction is Direction.OUT:
                    tracer.add_map(party.service_map)
        for path in args.map or []:
            tracer.add_map(read_service_map_file(path))
        datum = Datum(args.datum) if args.datum else None
        flows = tracer.trace(datum)
    except (ParseException, OSError) as exc:
        fail("Błąd analizy przepływów", exc)

    if args.json_output:
        print_json([f.to_dict() for f in flows])
        return

    if not flows:
        console.print("[yellow]Brak przepływów.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", row_styles=["", "dim"])
    table.add_column("AGENT ŹRÓDŁOWY", no_wrap=True, style="cyan")
    table.add_column("ŹRÓDŁO",         no_wrap=True, style="bold")
    table.add_column("AGENT DOCELOWY", no_wrap=True, style="cyan")
    table.add_column("CEL",            no_wrap=True, style="bold")
    table.add_column("TRYBY",          no_wrap=False)
    for flow in flows:
        modes = ", ".join(f"{t.value}={fmt_mode(m)}" for t, m in flow.modes.items())
        table.add_row(flow.source_uri, flow.source.id, flow.target_uri, flow.target.id, modes)

    console.print()
    console.print(table)
    internal = sum(1 for f in flows if f.is_internal)
    console.print(f"  [dim]{len(flows)} przepływów ({internal} wewnętrznych)[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "crossflows",
        help="Śledzi przepływy danych między politykami agentów.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje specyfikacje agentów (linie local / recv / send), kompiluje ich
polityki i śledzi przepływy przez mapy usług kontrahentów 'send'.

Przykłady:
  eddy crossflows sklep.agent platnosci.agent
  eddy crossflows a.agent b.agent --map a-b.map --strict-purposing
        """,
    )
    p.add_argument("agents", nargs="+", metavar="PLIK_AGENTA", help="Specyfikacje agentów.")
    p.add_argument("--map", nargs="+", metavar="PLIK_MAPY", help="Dodatkowe mapy usług.")
    p.add_argument(
        "--source", nargs="+", default=["TRANSFER"], metavar="AKCJA",
        help="Akcje wysyłające dane do kontrahenta (domyślnie: TRANSFER).",
    )
    p.add_argument(
        "--target", nargs="+", default=["COLLECT"], metavar="AKCJA",
        help="Akcje odbierające dane od kontrahenta (domyślnie: COLLECT).",
    )
    p.add_argument("--datum", default=None, metavar="NAZWA", help="Ogranicz do danych zgodnych z NAZWA.")
    p.add_argument("--strict-purposing", action="store_true", help="Porównuj także rolę PURPOSE.")
    add_json_flag(p)
    p.set_defaults(func=run)
