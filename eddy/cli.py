"""
eddy — narzędzie CLI do analizy polityk prywatności.

Użycie:
  eddy [--log-level POZIOM] <komenda> [opcje]

Komendy:
  parse        Parsuje plik polityki i wypisuje reguły oraz aksjomaty typów.
  profile      Kompiluje politykę i wypisuje jej profil (liczniki reguł i akcji).
  extension    Oblicza ekstensję polityki (itemizowane akcje i ich reguły).
  conflicts    Wykrywa konflikty modalności (także wsadowo na puli wątków).
  flows        Śledzi przepływy danych między regułami jednej polityki.
  crossflows   Śledzi przepływy danych między politykami agentów.
  thesaurus    Wyciąga terminologię polityki do budowy mapy usług.

Zmienne środowiskowe:
  EDDY_LOG_LEVEL, EDDY_NAMESPACE, EDDY_BLOCK_SIZE, EDDY_THREADS, EDDY_BATCH_TIMEOUT
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252; wymuszamy UTF-8, żeby polskie znaki
# w tekstach pomocy argparse były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from eddy import __version__
from eddy._config import load_settings
from eddy._logging import setup_logging
from eddy.commands import conflicts as cmd_conflicts
from eddy.commands import crossflows as cmd_crossflows
from eddy.commands import extension as cmd_extension
from eddy.commands import flows as cmd_flows
from eddy.commands import parse as cmd_parse
from eddy.commands import profile as cmd_profile
from eddy.commands import thesaurus as cmd_thesaurus
from eddy.commands._common import console


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eddy",
        description="eddy — analiza polityk prywatności jako reguł modalnych.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"eddy {__version__}"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        metavar="POZIOM",
        help="Poziom logowania (DEBUG / INFO / WARNING / ERROR); domyślnie EDDY_LOG_LEVEL.",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_parse.add_parser(subparsers)
    cmd_profile.add_parser(subparsers)
    cmd_extension.add_parser(subparsers)
    cmd_conflicts.add_parser(subparsers)
    cmd_flows.add_parser(subparsers)
    cmd_crossflows.add_parser(subparsers)
    cmd_thesaurus.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Błędna konfiguracja środowiska:[/red] {e}")
        raise SystemExit(1)

    setup_logging(args.log_level or settings.log_level)
    args.settings = settings
    args.func(args)


if __name__ == "__main__":
    main()
