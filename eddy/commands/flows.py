"""Komenda: eddy flows — przepływy danych w jednej polityce."""

from __future__ import annotations

import argparse

from rich import box
from rich.table import Table

from analysis import FlowMode, FlowTracer
from policy_model import Datum, RoleType

from ._common import add_json_flag, compile_policy, console, load_policy, print_json

MODE_STYLE: dict[FlowMode, str] = {
    FlowMode.EXACTFLOW: "green",
    FlowMode.OVERFLOW:  "yellow",
    FlowMode.UNDERFLOW: "cyan",
}


def fmt_mode(mode: FlowMode | None) -> str:
    if mode is None:
        return ""
    style = MODE_STYLE[mode]
    return f"[{style}]{mode.value}[/{style}]"


def run(args: argparse.Namespace) -> None:
    policy = load_policy(args.policy)
    comp   = compile_policy(args, policy)
    tracer = FlowTracer(args.source, args.target, strict_purposing=not args.loose_purposing)
    datum  = Datum(args.datum) if args.datum else None
    flows  = tracer.trace(comp, datum)

    if args.json_output:
        print_json([f.to_dict() for f in flows])
        return

    if not flows:
        console.print("[yellow]Brak przepływów.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", row_styles=["", "dim"])
    table.add_column("ŹRÓDŁO", no_wrap=True, style="bold")
    table.add_column("CEL",    no_wrap=True, style="bold")
    for role_type in tracer.role_types:
        table.add_column(role_type.value, no_wrap=True)
    for flow in flows:
        table.add_row(
            flow.source.id,
            flow.target.id,
            *(fmt_mode(flow.mode(t)) for t in tracer.role_types),
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(flows)} przepływów[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "flows",
        help="Śledzi przepływy danych między regułami polityki.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Śledzi przepływy od reguł z akcjami źródłowymi do reguł z akcjami docelowymi.
Tryby ról: EXACTFLOW, OVERFLOW, UNDERFLOW.

Przykłady:
  eddy flows polityka.policy
  eddy flows polityka.policy --source COLLECT --target USE --datum email
        """,
    )
    p.add_argument("policy", metavar="PLIK_POLITYKI", help="Ścieżka do pliku polityki.")
    p.add_argument(
        "--source", nargs="+", default=["COLLECT"], metavar="AKCJA",
        help="Akcje reguł źródłowych (domyślnie: COLLECT).",
    )
    p.add_argument(
        "--target", nargs="+", default=["TRANSFER"], metavar="AKCJA",
        help="Akcje reguł docelowych (domyślnie: TRANSFER).",
    )
    p.add_argument("--datum", default=None, metavar="NAZWA", help="Ogranicz do danych zgodnych z NAZWA.")
    p.add_argument(
        "--loose-purposing",
        action="store_true",
        help=f"Nie porównuj roli {RoleType.PURPOSE.value}.",
    )
    add_json_flag(p)
    p.set_defaults(func=run)
