"""Komenda: eddy extension — itemizowana ekstensja polityki."""

from __future__ import annotations

import argparse

from rich import box
from rich.table import Table

from analysis import ExtensionCalculator, find_rules

from ._common import add_json_flag, compile_policy, console, load_policy, print_json


def calculator_from_args(args: argparse.Namespace) -> ExtensionCalculator:
    return ExtensionCalculator(
        compute_exceptions=args.exceptions,
        compute_complete_extension=args.complete,
        compute_only_prohibitions=not args.all_rules,
    )


def add_extension_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--exceptions",
        action="store_true",
        help="Zakresy ról z dokładnymi wyjątkami (wolniej).",
    )
    p.add_argument(
        "--complete",
        action="store_true",
        help="Pełna przestrzeń COLLECT / USE / TRANSFER zamiast reguł polityki.",
    )
    p.add_argument(
        "--all-rules",
        action="store_true",
        help="Itemizuj reguły każdej modalności (domyślnie tylko R).",
    )


def run(args: argparse.Namespace) -> None:
    policy = load_policy(args.policy)
    comp   = compile_policy(args, policy)
    ext    = calculator_from_args(args).extend(comp)
    rules  = find_rules(ext, ext.ids())

    if args.json_output:
        print_json([
            {"id": ext_id, "action": str(action), "rules": [r.id for r in rules.get(ext_id, [])]}
            for ext_id, action in ext.items()
        ])
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", row_styles=["", "dim"])
    table.add_column("ID",     no_wrap=True, style="bold")
    table.add_column("AKCJA",  no_wrap=False, max_width=120)
    table.add_column("REGUŁY", no_wrap=True, style="cyan")
    for ext_id, action in ext.items():
        table.add_row(ext_id, str(action), ", ".join(r.id for r in rules.get(ext_id, [])))

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(ext)} akcji itemizowanych[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "extension",
        help="Oblicza ekstensję (itemizowane interpretacje reguł).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Oblicza ekstensję polityki: iloczyn zakresów wartości ról każdej reguły,
z reguł nadrzędnych dla każdej itemizacji.

Przykłady:
  eddy extension polityka.policy
  eddy extension polityka.policy --all-rules --exceptions
        """,
    )
    p.add_argument("policy", metavar="PLIK_POLITYKI", help="Ścieżka do pliku polityki.")
    add_extension_flags(p)
    add_json_flag(p)
    p.set_defaults(func=run)
