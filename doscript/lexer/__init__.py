"""
doscript Lexer Package

Implements the lexical analyzer (tokenizer) for doscript. Tokens carry a
kind plus a byte span into the source; lexemes are sliced out on demand.
"""

from .tokens import Token, TokenType, KEYWORDS
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import LexerError, Diagnostic

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "KEYWORDS",
    "LexerError",
    "Diagnostic",
    "tokenize_string",
    "tokenize_file",
]
