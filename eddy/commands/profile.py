"""Komenda: eddy profile — statystyki kompilacji polityki."""

from __future__ import annotations

import argparse

from rich import box
from rich.table import Table

from policy_compiler import compute_profile

from ._common import add_json_flag, compile_policy, console, load_policy, print_json


def run(args: argparse.Namespace) -> None:
    policy  = load_policy(args.policy)
    comp    = compile_policy(args, policy)
    profile = compute_profile(comp)

    if args.json_output:
        print_json(dict(sorted(profile.items())))
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white")
    table.add_column("WŁAŚCIWOŚĆ", style="cyan", no_wrap=True)
    table.add_column("WARTOŚĆ",    justify="right")
    for key, value in comp.sorted_properties():
        table.add_row(key, value)

    console.print(f"\nPolityka [bold]{policy.id}[/bold], przestrzeń nazw [cyan]{comp.namespace}[/cyan]")
    console.print(table)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "profile",
        help="Kompiluje politykę i wypisuje statystyki.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Kompiluje politykę i liczy profil: bezpośrednie podklasy każdej modalności
oraz liczności akcji, modalności i aksjomatów typów.

Przykłady:
  eddy profile polityka.policy
  eddy profile polityka.policy --json-output
        """,
    )
    p.add_argument("policy", metavar="PLIK_POLITYKI", help="Ścieżka do pliku polityki.")
    add_json_flag(p)
    p.set_defaults(func=run)
