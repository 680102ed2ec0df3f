"""
policy_parser — lekser i parser DSL polityk, czytniki map usług i agentów.
"""

from policy_model.errors import ParseException

from .agent_reader import read_agent
from .parser import Parser
from .roles import OBJECT, PURPOSE, SOURCE, TARGET, ActionParser, RoleParser, default_action_parsers
from .service_map import read_service_map, read_service_map_file
from .tokenizer import KEYWORDS, Token, Tokenizer, TokenType

__all__ = [
    "ParseException",
    "Tokenizer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "RoleParser",
    "ActionParser",
    "OBJECT",
    "SOURCE",
    "TARGET",
    "PURPOSE",
    "default_action_parsers",
    "Parser",
    "read_service_map",
    "read_service_map_file",
    "read_agent",
]
