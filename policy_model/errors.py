"""Błąd parsowania i kompilacji polityk."""

from __future__ import annotations


class ParseException(Exception):
    """
    Błąd w tekście polityki, mapie usług lub podczas kompilacji.

    Gdy znany jest numer linii, komunikat kończy się „ on line N”.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line    = line

    def __str__(self) -> str:
        if self.line is not None and self.line > 0:
            return f"{self.message} on line {self.line}"
        return self.message
