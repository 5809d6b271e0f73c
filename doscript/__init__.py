"""
doscript Front End Package

Lexer and parser for doscript, a small expression-oriented scripting
language with let-bindings, function literals, do...end blocks and
if...then...else conditionals.

Architecture:
    doscript/
    ├── lexer/           # Tokenization
    └── parser/          # Syntax analysis and AST generation

Evaluation is left to consumers of the AST.
"""

from .version import __version__

from .lexer import Lexer, Token, TokenType, LexerError, tokenize_string, tokenize_file
from .parser import (
    Parser, Expression, ExpressionKind, ParseError,
    parse_tokens, parse_string, parse_file, to_sexpr, format_program, walk
)

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "Expression",
    "ExpressionKind",

    # Errors
    "LexerError",
    "ParseError",

    # Convenience functions
    "tokenize_string",
    "tokenize_file",
    "parse_tokens",
    "parse_string",
    "parse_file",
    "to_sexpr",
    "format_program",
    "walk",

    # Version info
    "__version__",
]
