"""Komenda: eddy thesaurus — terminologia polityki do budowy mapy usług."""

from __future__ import annotations

import argparse

from analysis import ThesaurusExtractor

from ._common import add_json_flag, console, fail, load_policy, print_json


def run(args: argparse.Namespace) -> None:
    policy    = load_policy(args.policy)
    extractor = ThesaurusExtractor()

    if args.json_output:
        print_json(extractor.terms(policy))
        return

    if args.output:
        try:
            extractor.write(policy, args.output)
        except OSError as exc:
            fail("Błąd zapisu", exc)
        console.print(f"[green]Zapisano[/green] {args.output}")
        return

    print(extractor.extract(policy), end="")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "thesaurus",
        help="Wyciąga terminy (Actor / Datum / Purpose) z polityki.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wypisuje wszystkie nazwy terminów z reguł i aksjomatów typów polityki,
pogrupowane według dziedziny.

Przykłady:
  eddy thesaurus polityka.policy
  eddy thesaurus polityka.policy --output terminy.txt
        """,
    )
    p.add_argument("policy", metavar="PLIK_POLITYKI", help="Ścieżka do pliku polityki.")
    p.add_argument("--output", "-o", default=None, metavar="PLIK", help="Zapisz do pliku.")
    add_json_flag(p)
    p.set_defaults(func=run)
