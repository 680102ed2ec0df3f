"""
Czytnik specyfikacji agenta.

Linie:
  local <plik-polityki> [uri]          polityka lokalna; URI agenta: podany, albo
                                       atrybut NAMESPACE polityki, albo ścieżka pliku
  recv  <rola> <uri> <plik-mapy>       kontrahent, od którego agent odbiera dane
  send  <rola> <uri> <plik-mapy>       kontrahent, do którego agent wysyła dane

Ścieżki względne są rozwiązywane względem katalogu pliku agenta. Linie '#' i puste
są pomijane. Linia `remote` wymaga transportu sieciowego, którego tu nie ma.
"""

from __future__ import annotations

import logging
import pathlib

from policy_model import Actor, Agent, Direction, ParseException, Party

from .parser import Parser
from .service_map import read_service_map_file

logger = logging.getLogger(__name__)


def read_agent(path: str | pathlib.Path, parser: Parser | None = None) -> Agent:
    path   = pathlib.Path(path)
    parser = parser or Parser()
    base   = path.parent
    agent: Agent | None = None

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ParseException(f"Nie znaleziono specyfikacji agenta: {path}") from exc

    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        keyword = parts[0]

        if keyword == "local" and len(parts) >= 2:
            policy = parser.parse_file(base / parts[1])
            uri = parts[2] if len(parts) >= 3 else policy.attribute("NAMESPACE") or parts[1]
            agent = Agent(uri, policy)
        elif keyword == "remote":
            raise ParseException("Pobieranie zdalnej polityki nie jest obsługiwane", number)
        elif keyword in (Direction.IN.value, Direction.OUT.value) and len(parts) >= 4:
            if agent is None:
                raise ParseException(f"Linia '{keyword}' przed linią 'local'", number)
            service_map = read_service_map_file(base / parts[3])
            agent.add(Party(Direction(keyword), Actor(parts[1]), parts[2], service_map))
        else:
            raise ParseException(f"Nieznana linia specyfikacji agenta: '{line}'", number)

    if agent is None:
        raise ParseException(f"Specyfikacja agenta {path} nie zawiera linii 'local'")
    logger.debug(f"Wczytano {agent} z {len(agent.parties)} kontrahentami")
    return agent
