"""
Testy leksera DSL polityk: słowa kluczowe, operatory, komentarze, numery linii.
"""
import io

import pytest

from policy_parser import ParseException, Tokenizer, TokenType


def types(text):
    return [t.type for t in Tokenizer().tokenize(text)]


class TestTokenizer:
    """Podział tekstu na tokeny."""

    def test_rule_line(self):
        """Linia reguły: TAB, modalność, akcja, wartości z przecinkiem."""
        tokens = Tokenizer().tokenize("\tP COLLECT a, b\n")
        assert [t.type for t in tokens] == [
            TokenType.TAB, TokenType.WORD, TokenType.ACTION, TokenType.WORD,
            TokenType.COMMA, TokenType.WORD, TokenType.NEWLINE, TokenType.EOF,
        ]
        assert [t.text for t in tokens[:6]] == ["\t", "P", "COLLECT", "a", ",", "b"]

    def test_role_keywords(self):
        """FROM / TO / FOR to tokeny ROLE, RETAIN to ACTION."""
        tokens = Tokenizer().tokenize("FROM TO FOR RETAIN")
        assert [t.type for t in tokens[:4]] == [TokenType.ROLE] * 3 + [TokenType.ACTION]

    def test_merged_comparison_operators(self):
        """'<=' i '>=' są scalane w jeden token."""
        assert types("a <= b >= c")[:5] == [
            TokenType.WORD, TokenType.LESS_EQ, TokenType.WORD, TokenType.GREATER_EQ, TokenType.WORD,
        ]
        assert types("a = b")[1] == TokenType.EQUALS

    def test_set_operators(self):
        assert types("a + b \\ c ~ d")[:7] == [
            TokenType.WORD, TokenType.PLUS, TokenType.WORD, TokenType.BACKSLASH,
            TokenType.WORD, TokenType.TILDE, TokenType.WORD,
        ]

    def test_comments_are_skipped(self):
        """Komentarz '#' zostawia NEWLINE; komentarz blokowy liczy linie."""
        tokens = Tokenizer().tokenize("a # c d\nb /* x \n y */ c")
        assert [(t.type, t.text) for t in tokens] == [
            (TokenType.WORD, "a"),
            (TokenType.NEWLINE, "\n"),
            (TokenType.WORD, "b"),
            (TokenType.WORD, "c"),
            (TokenType.NEWLINE, "\n"),
            (TokenType.EOF, ""),
        ]
        assert tokens[3].line == 3

    def test_asterisk_and_slash(self):
        """'*' poza komentarzem jest pomijana, '/' należy do słowa."""
        tokens = Tokenizer().tokenize("a*b http://x/y")
        assert [t.text for t in tokens[:2]] == ["ab", "http://x/y"]

    def test_trailing_tabs_and_newlines_are_trimmed(self):
        assert types("a\n\t\n\t") == [TokenType.WORD, TokenType.NEWLINE, TokenType.EOF]

    def test_empty_input_has_synthetic_terminators(self):
        assert types("") == [TokenType.NEWLINE, TokenType.EOF]

    def test_carriage_return_is_newline(self):
        tokens = Tokenizer().tokenize("a\rb")
        assert tokens[1].type == TokenType.NEWLINE
        assert tokens[2].line == 2

    def test_reads_streams(self):
        assert types(io.StringIO("a b"))[:2] == [TokenType.WORD, TokenType.WORD]

    def test_stream_errors_are_wrapped(self):
        """Błąd odczytu strumienia to ParseException z przyczyną."""
        class Broken(io.StringIO):
            def read(self, *args):
                raise OSError("dysk")

        with pytest.raises(ParseException) as exc_info:
            Tokenizer().tokenize(Broken())
        assert isinstance(exc_info.value.__cause__, OSError)
