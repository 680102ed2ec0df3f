"""Wspólne kroki komend: wczytanie i kompilacja polityki z obsługą błędów."""

from __future__ import annotations

import argparse
import json
from typing import NoReturn

from rich.console import Console

from policy_compiler import Compilation, Compiler
from policy_model import ParseException, Policy
from policy_parser import Parser

console = Console(width=200)


def fail(message: str, exc: Exception) -> NoReturn:
    console.print(f"[red]{message}:[/red] {exc}")
    raise SystemExit(1)


def load_policy(path: str) -> Policy:
    try:
        return Parser().parse_file(path)
    except (ParseException, OSError) as exc:
        fail("Błąd wczytywania polityki", exc)


def compile_policy(args: argparse.Namespace, policy: Policy) -> Compilation:
    try:
        return Compiler(default_namespace=args.settings.namespace).compile(policy)
    except ParseException as exc:
        fail("Błąd kompilacji polityki", exc)


def print_json(payload: object) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def add_json_flag(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz wynik jako JSON na stdout.",
    )
