"""Komenda: eddy parse — parsuje politykę i listuje reguły oraz aksjomaty typów."""

from __future__ import annotations

import argparse

from rich import box
from rich.table import Table

from policy_model import Policy, RoleType

from ._common import add_json_flag, console, load_policy, print_json

MODALITY_STYLE: dict[str, str] = {
    "P": "green",
    "O": "cyan",
    "R": "red",
}


def _role(rule, role_type: RoleType) -> str:
    role = rule.action.role(role_type)
    return str(role.values) if role is not None else ""


def _policy_dict(policy: Policy) -> dict:
    return {
        "id":         policy.id,
        "attributes": {name: policy.attribute(name) for name in policy.attributes()},
        "types":      [str(t) for t in policy.types],
        "rules":      [
            {"id": r.id, "modality": r.modality.value, "only": r.only, "action": str(r.action)}
            for r in policy.rules
        ],
    }


def run(args: argparse.Namespace) -> None:
    policy = load_policy(args.policy)

    if args.text:
        print(policy.to_text(), end="")
        return
    if args.json_output:
        print_json(_policy_dict(policy))
        return

    for name in policy.attributes():
        console.print(f"[dim]ATTR[/dim] {name} = [cyan]{policy.attribute(name)}[/cyan]")
    for axiom in policy.types:
        console.print(f"[dim]TYPE[/dim] {axiom}")

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", row_styles=["", "dim"])
    table.add_column("ID",      no_wrap=True, style="bold")
    table.add_column("M",       no_wrap=True)
    table.add_column("AKCJA",   no_wrap=True)
    table.add_column("OBJECT",  max_width=40)
    table.add_column("SOURCE",  max_width=30)
    table.add_column("TARGET",  max_width=30)
    table.add_column("PURPOSE", max_width=40)

    for rule in policy.rules:
        mod   = rule.modality.value
        style = MODALITY_STYLE.get(mod, "yellow")
        table.add_row(
            rule.id,
            f"[{style}]{mod}[/{style}]",
            rule.action.name,
            _role(rule, RoleType.OBJECT),
            _role(rule, RoleType.SOURCE),
            _role(rule, RoleType.TARGET),
            _role(rule, RoleType.PURPOSE),
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(policy)} reguł, {len(policy.types)} aksjomatów typów[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "parse",
        help="Parsuje politykę i listuje reguły.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Parsuje plik polityki (SPEC HEADER / SPEC POLICY) i wypisuje reguły.

Przykłady:
  eddy parse polityka.policy
  eddy parse polityka.policy --text
  eddy parse polityka.policy --json-output
        """,
    )
    p.add_argument("policy", metavar="PLIK_POLITYKI", help="Ścieżka do pliku polityki.")
    p.add_argument(
        "--text",
        action="store_true",
        help="Wypisz politykę z powrotem w postaci DSL.",
    )
    add_json_flag(p)
    p.set_defaults(func=run)
