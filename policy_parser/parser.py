"""
policy_parser/parser.py — parser DSL polityk.

Gramatyka:
  SPEC HEADER
      ATTR <nazwa> <wartość…>                    (zero lub więcej)
      <A|D|P> <lhs> <op> <rhs>[,<rhs>…]          (zero lub więcej, op ∈ {<, >, \\, =})
  SPEC POLICY
      <modalność> [ONLY] <AKCJA> <role…>         (zero lub więcej)

Identyfikatory reguł są nadawane per modalność (p0, p1, …, r0, …, ep0, …) i liczone od
zera przy każdym wywołaniu parse(). Reguła z ONLY generuje drugą regułę: id + "x",
modalność wyłączenia, cel = anything \\ cel pierwotny.

Błąd składni przerywa parsowanie (ParseException z numerem linii), bez częściowej polityki.
"""

from __future__ import annotations

import logging
import pathlib
from typing import TextIO

from policy_model import (
    ANY_PURPOSE,
    Actor,
    Complement,
    ConceptClass,
    Datum,
    Modality,
    ParseException,
    Policy,
    Purpose,
    Role,
    RoleType,
    Rule,
    Singleton,
    TypeAxiom,
    TypeOp,
)

from .roles import ActionParser, default_action_parsers
from .tokenizer import Token, Tokenizer, TokenType

logger = logging.getLogger(__name__)

# Operator w aksjomacie typu → relacja
_TYPE_OPS: dict[TokenType, TypeOp] = {
    TokenType.LESS:      TypeOp.SUBCLASS,
    TokenType.GREATER:   TypeOp.SUPERCLASS,
    TokenType.BACKSLASH: TypeOp.DISJOINT,
    TokenType.EQUALS:    TypeOp.EQUIVALENT,
}

# Prefiks identyfikatora reguły per modalność
_ID_PREFIX: dict[Modality, str] = {m: m.value.lower() for m in Modality}


class Parser:
    """Parser tekstu polityki do obiektu Policy. Tablica parserów akcji jest rozszerzalna."""

    def __init__(self, tokenizer: Tokenizer | None = None) -> None:
        self.tokenizer = tokenizer or Tokenizer()
        self._actions:  dict[str, ActionParser] = {}
        self._tokens:   list[Token] = []
        self._index     = 0
        self._counters: dict[Modality, int] = {}
        self._policy    = Policy()
        for action_parser in default_action_parsers():
            self.add(action_parser)

    # ------------------------------------------------------------------
    # Konfiguracja
    # ------------------------------------------------------------------

    def add(self, parser: ActionParser) -> None:
        self._actions[parser.name] = parser

    def remove(self, parser: ActionParser | str) -> None:
        name = parser if isinstance(parser, str) else parser.name
        self._actions.pop(name, None)

    @property
    def actions(self) -> list[str]:
        return sorted(self._actions)

    # ------------------------------------------------------------------
    # Wejście
    # ------------------------------------------------------------------

    def parse_file(self, path: str | pathlib.Path) -> Policy:
        path = pathlib.Path(path)
        try:
            with path.open(encoding="utf-8") as fh:
                return self.parse(fh)
        except FileNotFoundError as exc:
            raise ParseException(f"Nie znaleziono pliku: {path}") from exc

    def parse(self, source: str | TextIO) -> Policy:
        self._counters = {m: 0 for m in Modality}
        self._policy   = Policy()
        self._tokens   = self.tokenizer.tokenize(source)
        self._index    = 0

        while self.peek().type == TokenType.NEWLINE:
            self.next()

        self._parse_header()
        self._expect_section("POLICY")
        self._parse_newlines()

        while self.peek().type != TokenType.EOF:
            token = self.next()
            if token.type != TokenType.TAB:
                raise ParseException(f"Oczekiwano tabulacji, znaleziono {token}", token.line)
            rule = self._parse_rule()
            self._policy.add_rule(rule)
            if rule.only:
                self._policy.add_rule(self._only_restriction(rule))
            self._parse_newlines()

        policy = self._policy
        logger.debug(f"Sparsowano politykę {policy.id}: {len(policy.rules)} reguł, {len(policy.types)} typów")
        return policy

    # ------------------------------------------------------------------
    # Strumień tokenów (używany także przez RoleParser)
    # ------------------------------------------------------------------

    def next(self) -> Token:
        token = self._tokens[self._index]
        if token.type != TokenType.EOF:
            self._index += 1
        return token

    def peek(self, lookahead: int = 0) -> Token:
        index = min(self._index + lookahead, len(self._tokens) - 1)
        return self._tokens[index]

    # ------------------------------------------------------------------
    # Wartości ról
    # ------------------------------------------------------------------

    def parse_datum(self) -> Datum:
        """Dana; nazwa kropkowa a.b.c rejestruje typy a > b, b > c i zwraca c."""
        token = self._expect_word("wyrażenia danej")
        parts = token.text.split(".")
        for broader, narrower in zip(parts, parts[1:]):
            self._policy.add_type(
                TypeAxiom(ConceptClass.DATUM, broader, TypeOp.SUPERCLASS, (narrower,))
            )
        return Datum(parts[-1])

    def parse_actor(self) -> Actor:
        return Actor(self._expect_word("nazwy aktora").text)

    def parse_purpose(self) -> Purpose:
        return Purpose(self._expect_word("nazwy celu").text)

    # ------------------------------------------------------------------
    # Sekcje
    # ------------------------------------------------------------------

    def _expect_section(self, name: str) -> None:
        first  = self.next()
        second = self.next()
        if f"{first.text} {second.text}" != f"SPEC {name}":
            raise ParseException(f"Oczekiwano 'SPEC {name}', znaleziono '{first.text}'", first.line)

    def _parse_newlines(self) -> None:
        token = self.next()
        if token.type != TokenType.NEWLINE:
            raise ParseException(f"Oczekiwano nowej linii, znaleziono '{token.text}'", token.line)
        while self.peek().type == TokenType.NEWLINE:
            self.next()

    def _parse_header(self) -> None:
        self._expect_section("HEADER")
        self._parse_newlines()

        # atrybuty
        while self.peek().type == TokenType.TAB and self.peek(1).text == "ATTR":
            self.next()
            self.next()
            name = self._expect_word("nazwy atrybutu").text
            words: list[str] = []
            while self.peek().type not in (TokenType.NEWLINE, TokenType.EOF):
                words.append(self._expect_word("wartości atrybutu").text)
            value = " ".join(words)
            if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
                value = value[1:-1]
            self._policy.set_attribute(name, value)
            self._parse_newlines()

        # aksjomaty typów
        while self.peek().type == TokenType.TAB:
            self.next()
            self._policy.add_type(self._parse_type())
            self._parse_newlines()

    # ------------------------------------------------------------------
    # Reguły i typy
    # ------------------------------------------------------------------

    def _parse_rule(self) -> Rule:
        token = self.next()
        try:
            modality = Modality(token.text)
        except ValueError:
            modality = None
        if token.type != TokenType.WORD or modality is None:
            raise ParseException(
                f"Oczekiwano modalności {{P,O,R,E,EP,EO,ER}}, znaleziono {token}", token.line
            )

        only = False
        if self.peek().text == "ONLY":
            if modality == Modality.EXCLUSION:
                raise ParseException("Słowa ONLY nie można użyć z wyłączeniem", token.line)
            self.next()
            only = True

        token = self.next()
        if token.type != TokenType.ACTION:
            raise ParseException(f"Oczekiwano słowa kluczowego akcji, znaleziono {token}", token.line)
        action_parser = self._actions.get(token.text)
        if action_parser is None:
            raise ParseException(f"Nieoczekiwana akcja '{token.text}'", token.line)
        action = action_parser.parse_action(self)

        return Rule(self._next_id(modality), modality, action, only)

    def _next_id(self, modality: Modality) -> str:
        counter = self._counters[modality]
        self._counters[modality] = counter + 1
        return f"{_ID_PREFIX[modality]}{counter}"

    def _only_restriction(self, rule: Rule) -> Rule:
        """Reguła-wyłączenie dla ONLY: cel zastąpiony przez anything \\ cel."""
        action  = rule.action.clone()
        purpose = action.role(RoleType.PURPOSE)
        if purpose is None:
            raise ParseException(f"Reguła {rule.id} z ONLY nie ma roli celu")
        action.add(Role(RoleType.PURPOSE, purpose.prefix,
                        Complement(Singleton(ANY_PURPOSE), purpose.values)))
        return Rule(rule.id + "x", rule.modality.exclusion_of(), action, False)

    def _parse_type(self) -> TypeAxiom:
        token = self.next()
        concept = ConceptClass.parse(token.text)
        if token.type != TokenType.WORD or concept is None:
            raise ParseException(f"Oczekiwano typu pojęcia {{A, D, P}}, znaleziono {token}", token.line)

        lhs = self._expect_word("nazwy pojęcia").text

        token = self.next()
        op = _TYPE_OPS.get(token.type)
        if op is None:
            raise ParseException(
                f"Oczekiwano operatora relacji {{<, >, \\, =}}, znaleziono {token}", token.line
            )

        rhs = [self._expect_word("nazwy pojęcia").text]
        while self.peek().type == TokenType.COMMA:
            self.next()
            rhs.append(self._expect_word("nazwy pojęcia").text)
        return TypeAxiom(concept, lhs, op, tuple(rhs))

    def _expect_word(self, what: str) -> Token:
        token = self.next()
        if token.type != TokenType.WORD:
            raise ParseException(f"Oczekiwano {what}, znaleziono {token}", token.line)
        return token
