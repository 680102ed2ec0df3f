"""
Czytnik mapy usług.

Format:
  NS1 <uri1> <rola1>
  NS2 <uri2> <rola2>
  <A|D|P> <termin1> <op> <termin2>      op ∈ {=, >, <, \\}

Linie zaczynające się od '#' i puste są pomijane. Błędna linia terminologii jest
logowana jako ostrzeżenie i pomijana; brak nagłówków NS1/NS2 to ParseException.
"""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Iterator
from typing import TextIO

from policy_model import Actor, ConceptClass, ParseException, ServiceMap, TypeAxiom, TypeOp

logger = logging.getLogger(__name__)


def _lines(source: str | TextIO) -> Iterator[tuple[int, list[str]]]:
    text = source if isinstance(source, str) else source.read()
    for number, raw in enumerate(text.splitlines(), start=1):
        fields = raw.split()
        if not fields or fields[0].startswith("#"):
            continue
        yield number, fields


def _header(entry: tuple[int, list[str]] | None, keyword: str) -> tuple[str, Actor]:
    if entry is None:
        raise ParseException(f"Brak nagłówka {keyword} w mapie usług")
    number, fields = entry
    if len(fields) < 3 or fields[0] != keyword:
        raise ParseException(f"Oczekiwano '{keyword} <uri> <rola>', znaleziono '{' '.join(fields)}'", number)
    return fields[1], Actor(fields[2])


def read_service_map(source: str | TextIO) -> ServiceMap:
    """Parsuje mapę usług z tekstu lub strumienia."""
    lines = _lines(source)
    uri1, role1 = _header(next(lines, None), "NS1")
    uri2, role2 = _header(next(lines, None), "NS2")
    service_map = ServiceMap(uri1, role1, uri2, role2)

    for number, fields in lines:
        concept = ConceptClass.parse(fields[0][0])
        op      = TypeOp.parse(fields[2][0]) if len(fields) >= 4 else None
        if len(fields) < 4 or concept is None or op is None:
            logger.warning(f"Błędna linia mapy usług {number}: '{' '.join(fields)}'; pominięto")
            continue
        service_map.add(TypeAxiom(concept, fields[1], op, (fields[3],)))

    logger.debug(f"Mapa usług {uri1} → {uri2}: {len(service_map.types)} aksjomatów")
    return service_map


def read_service_map_file(path: str | pathlib.Path) -> ServiceMap:
    path = pathlib.Path(path)
    try:
        with path.open(encoding="utf-8") as fh:
            return read_service_map(fh)
    except FileNotFoundError as exc:
        raise ParseException(f"Nie znaleziono mapy usług: {path}") from exc
