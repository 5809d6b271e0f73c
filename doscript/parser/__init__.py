"""
doscript Parser Package

Implements a recursive descent parser with precedence climbing for doscript.
Produces a list of top-level Expression trees, each node an operator token
plus ordered children.
"""

from .ast_nodes import Expression, ExpressionKind, walk, to_sexpr, format_program
from .parser import Parser, DEFAULT_MAX_DEPTH, parse_tokens, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "DEFAULT_MAX_DEPTH",
    "parse_tokens",
    "parse_string",
    "parse_file",

    # AST
    "Expression",
    "ExpressionKind",
    "walk",
    "to_sexpr",
    "format_program",

    # Error handling
    "ParseError",
]
