"""
Parsery fragmentów akcji: RoleParser (jedna rola) i ActionParser (lista ról akcji).

Lista wartości roli jest parsowana prawostronnie rekurencyjnie, bez priorytetów:
`a , b \\ c` → Union(a, Complement(b, c)).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

from policy_model import (
    ANY_PURPOSE,
    ANYONE,
    ANYTHING,
    Action,
    Complement,
    Intersect,
    Role,
    RoleType,
    RoleValue,
    RoleValueSet,
    Singleton,
    Union,
)

from .tokenizer import TokenType

if TYPE_CHECKING:
    from .parser import Parser

ValueParser: TypeAlias = "Callable[[Parser], RoleValue]"

_OPERATORS: dict[TokenType, type[Union] | type[Intersect] | type[Complement]] = {
    TokenType.COMMA:     Union,
    TokenType.BACKSLASH: Complement,
    TokenType.PLUS:      Intersect,
}


@dataclass(frozen=True, slots=True)
class RoleParser:
    """
    Parser jednej roli.

    - type:    typ tworzonej roli
    - prefix:  słowo ROLE wprowadzające wartość ("" — wartość bez prefiksu)
    - generic: wartownik użyty, gdy rola z prefiksem została pominięta
    - parse_value: funkcja parsująca pojedynczą wartość
    """
    type:        RoleType
    prefix:      str
    generic:     RoleValue
    parse_value: ValueParser

    def parse_role(self, parser: Parser) -> Role:
        if self.prefix:
            if not parser.peek().matches(TokenType.ROLE, self.prefix):
                return Role(self.type, self.prefix, Singleton(self.generic))
            parser.next()
        return Role(self.type, self.prefix, self.parse_values(parser))

    def parse_values(self, parser: Parser) -> RoleValueSet:
        lhs: RoleValueSet = Singleton(self.parse_value(parser))
        node = _OPERATORS.get(parser.peek().type)
        if node is None:
            return lhs
        parser.next()
        return node(lhs, self.parse_values(parser))


OBJECT  = RoleParser(RoleType.OBJECT,  "",     ANYTHING,    lambda p: p.parse_datum())
SOURCE  = RoleParser(RoleType.SOURCE,  "FROM", ANYONE,      lambda p: p.parse_actor())
TARGET  = RoleParser(RoleType.TARGET,  "TO",   ANYONE,      lambda p: p.parse_actor())
PURPOSE = RoleParser(RoleType.PURPOSE, "FOR",  ANY_PURPOSE, lambda p: p.parse_purpose())


@dataclass(slots=True)
class ActionParser:
    """Parser akcji: nazwa słowa kluczowego + uporządkowana lista parserów ról."""
    name:    str
    parsers: list[RoleParser] = field(default_factory=list)

    def add(self, parser: RoleParser) -> None:
        self.parsers.append(parser)

    def parse_action(self, parser: Parser) -> Action:
        action = Action(self.name)
        for role_parser in self.parsers:
            action.add(role_parser.parse_role(parser))
        return action


def default_action_parsers() -> list[ActionParser]:
    """COLLECT i USE: obiekt, źródło, cel; TRANSFER dodatkowo odbiorca."""
    return [
        ActionParser("COLLECT",  [OBJECT, SOURCE, PURPOSE]),
        ActionParser("USE",      [OBJECT, SOURCE, PURPOSE]),
        ActionParser("TRANSFER", [OBJECT, SOURCE, TARGET, PURPOSE]),
    ]
