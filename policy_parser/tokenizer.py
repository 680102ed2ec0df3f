"""
policy_parser/tokenizer.py — lekser DSL polityk.

Reguły:
  - spacja kończy słowo; słowa z tablicy słów kluczowych stają się ACTION / ROLE
  - TAB, NEWLINE, ',', '=', '<', '>', '~', '+', '\\' to osobne tokeny
  - '<=' i '>=' powstają przez scalenie '<' / '>' z następującym '='
  - '#' otwiera komentarz do końca linii (NEWLINE zostaje), '/* … */' komentarz blokowy
  - '*' poza komentarzem jest pomijana; '/' należy do słowa (URI)
  - tokeny TAB tuż przed NEWLINE są usuwane (puste wcięte linie)
  - na końcu zawsze syntetyczna para NEWLINE + EOF
"""

from __future__ import annotations

import io
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import TextIO

from policy_model.errors import ParseException


class TokenType(StrEnum):
    EOF        = "EOF"
    NEWLINE    = "NEWLINE"
    TAB        = "TAB"
    COMMA      = "COMMA"
    ACTION     = "ACTION"
    ROLE       = "ROLE"
    WORD       = "WORD"
    EQUALS     = "EQUALS"
    LESS       = "LESS"
    LESS_EQ    = "LESS_EQ"
    GREATER    = "GREATER"
    GREATER_EQ = "GREATER_EQ"
    TILDE      = "TILDE"
    BACKSLASH  = "BACKSLASH"
    PLUS       = "PLUS"


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    text: str
    line: int

    def matches(self, type: TokenType, text: str) -> bool:
        return self.type == type and self.text == text

    def __str__(self) -> str:
        return f"{self.type.value}({self.text})"


KEYWORDS: dict[str, TokenType] = {
    "COLLECT":  TokenType.ACTION,
    "TRANSFER": TokenType.ACTION,
    "RETAIN":   TokenType.ACTION,
    "USE":      TokenType.ACTION,
    "COMPUTE":  TokenType.ACTION,
    "MERGE":    TokenType.ACTION,
    "CREATE":   TokenType.ACTION,
    "FOR":      TokenType.ROLE,
    "TO":       TokenType.ROLE,
    "FROM":     TokenType.ROLE,
    "WHERE":    TokenType.ROLE,
    "USING":    TokenType.ROLE,
}

_PUNCTUATION: dict[str, TokenType] = {
    "\t": TokenType.TAB,
    "\n": TokenType.NEWLINE,
    ",":  TokenType.COMMA,
    "<":  TokenType.LESS,
    ">":  TokenType.GREATER,
    "~":  TokenType.TILDE,
    "+":  TokenType.PLUS,
    "\\": TokenType.BACKSLASH,
}

_MERGED: dict[TokenType, tuple[TokenType, str]] = {
    TokenType.LESS:    (TokenType.LESS_EQ, "<="),
    TokenType.GREATER: (TokenType.GREATER_EQ, ">="),
}


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

class Tokenizer:
    """Zamienia strumień znaków na listę tokenów."""

    def __init__(self, keywords: dict[str, TokenType] | None = None) -> None:
        self.keywords = dict(KEYWORDS if keywords is None else keywords)

    def tokenize(self, source: str | TextIO) -> list[Token]:
        stream = io.StringIO(source) if isinstance(source, str) else source
        try:
            return self._tokenize(_chars(stream))
        except OSError as exc:
            raise ParseException("Nie można odczytać strumienia wejściowego") from exc

    def _word(self, text: str, line: int) -> Token:
        return Token(self.keywords.get(text, TokenType.WORD), text, line)

    def _tokenize(self, chars: Iterator[str]) -> list[Token]:
        tokens: list[Token] = []
        buffer: list[str]   = []
        line    = 1
        comment = None          # "#" albo "/*", gdy jesteśmy w komentarzu
        prev    = ""            # poprzedni znak w komentarzu blokowym

        def flush() -> None:
            if buffer:
                tokens.append(self._word("".join(buffer), line))
                buffer.clear()

        for ch in chars:
            if ch == "\r":
                ch = "\n"

            # ── wewnątrz komentarza ─────────────────────────────────────────
            if comment == "#":
                if ch != "\n":
                    continue
                comment = None
            elif comment == "/*":
                if ch == "/" and prev == "*":
                    comment = None
                elif ch == "\n":
                    line += 1
                prev = ch
                continue

            # ── poza komentarzem ────────────────────────────────────────────
            token: Token | None = None
            match ch:
                case " ":
                    flush()
                case "#":
                    comment = "#"
                case "*":
                    if buffer and buffer[-1] == "/":
                        buffer.pop()
                        comment, prev = "/*", ""
                case "=":
                    if tokens and not buffer and tokens[-1].type in _MERGED:
                        merged_type, text = _MERGED[tokens.pop().type]
                        token = Token(merged_type, text, line)
                    else:
                        token = Token(TokenType.EQUALS, "=", line)
                case _ if ch in _PUNCTUATION:
                    token = Token(_PUNCTUATION[ch], ch, line)
                case _:
                    buffer.append(ch)

            if token is None:
                continue
            flush()
            if token.type == TokenType.NEWLINE:
                line += 1
                while tokens and tokens[-1].type == TokenType.TAB:
                    tokens.pop()
            tokens.append(token)

        flush()
        while tokens and tokens[-1].type in (TokenType.NEWLINE, TokenType.TAB):
            tokens.pop()
        tokens.append(Token(TokenType.NEWLINE, "\n", line))
        tokens.append(Token(TokenType.EOF, "", line))
        return tokens


def _chars(stream: TextIO) -> Iterator[str]:
    while chunk := stream.read(4096):
        yield from chunk
