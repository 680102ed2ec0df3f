"""Komenda: eddy conflicts — konflikty modalności między regułami polityki."""

from __future__ import annotations

import argparse

from rich import box
from rich.table import Table
from rich.text import Text

from analysis import BatchConflictAnalyzer, ConflictAnalyzer, ConflictType

from ._common import add_json_flag, compile_policy, console, load_policy, print_json
from .extension import add_extension_flags, calculator_from_args

TYPE_STYLE: dict[ConflictType, str] = {
    ConflictType.SHARED:      "yellow",
    ConflictType.SUBSUMES:    "magenta",
    ConflictType.SUBSUMED_BY: "magenta",
    ConflictType.EQUIVALENT:  "red",
}


def run(args: argparse.Namespace) -> None:
    settings   = args.settings
    policy     = load_policy(args.policy)
    comp       = compile_policy(args, policy)
    calculator = calculator_from_args(args)

    if args.batch:
        analyzer = BatchConflictAnalyzer(
            block_size=args.block_size or settings.block_size,
            threads=args.threads or settings.threads,
            timeout=args.timeout if args.timeout is not None else settings.batch_timeout,
            calculator=calculator,
        )
        conflicts = analyzer.analyze(comp)
        if analyzer.failed_blocks:
            console.print(
                f"[yellow]Pominięte bloki (błąd lub limit czasu):[/yellow] {sorted(analyzer.failed_blocks)}"
            )
    else:
        conflicts = ConflictAnalyzer().analyze(calculator.extend(comp))

    if args.json_output:
        print_json([c.to_dict() for c in conflicts])
        return

    if not conflicts:
        console.print("[green]Brak konfliktów.[/green]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", row_styles=["", "dim"])
    table.add_column("TYP",     no_wrap=True)
    table.add_column("REGUŁA 1", no_wrap=False, max_width=60)
    table.add_column("REGUŁA 2", no_wrap=False, max_width=60)
    table.add_column("DOWODY",  no_wrap=False, max_width=40, style="dim")
    for c in conflicts:
        table.add_row(
            Text(c.type.value, style=TYPE_STYLE[c.type]),
            f"[bold]{c.rule1.id}[/bold] {c.rule1}",
            f"[bold]{c.rule2.id}[/bold] {c.rule2}",
            ", ".join(sorted(c.evidence)),
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(conflicts)} konfliktów[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "conflicts",
        help="Wykrywa konflikty modalności między regułami.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Kompiluje politykę, oblicza ekstensję i wykrywa konflikty
(SHARED / SUBSUMES / SUBSUMED_BY / EQUIVALENT).

Tryb --batch dzieli ekstensję na bloki analizowane na puli wątków
(EDDY_BLOCK_SIZE, EDDY_THREADS, EDDY_BATCH_TIMEOUT).

Przykłady:
  eddy conflicts polityka.policy
  eddy conflicts polityka.policy --batch --threads 4 --block-size 500
        """,
    )
    p.add_argument("policy", metavar="PLIK_POLITYKI", help="Ścieżka do pliku polityki.")
    add_extension_flags(p)
    p.add_argument("--batch", action="store_true", help="Analiza wsadowa na puli wątków.")
    p.add_argument("--block-size", type=int, default=None, metavar="N", help="Rozmiar bloku.")
    p.add_argument("--threads", type=int, default=None, metavar="N", help="Liczba wątków.")
    p.add_argument("--timeout", type=float, default=None, metavar="S", help="Limit czasu w sekundach.")
    add_json_flag(p)
    p.set_defaults(func=run)
