"""
Token definitions for the doscript lexer.

This module defines every token type the scanner can produce:
- Punctuation and one/two-character operators
- Literals (numbers, strings, identifiers)
- Keywords, including reserved words with no grammar yet
- The EOF marker

Tokens never copy their text. They record a byte offset and a length into
the source they came from, and the lexeme is sliced out on demand.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Union


class TokenType(Enum):
    """
    Enumeration of all token types in doscript.

    Organized by category for clarity and maintainability.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of source, always the last token

    # ========================================================================
    # Punctuation
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    COMMA = auto()                  # ,
    DOT = auto()                    # .
    MINUS = auto()                  # -
    PLUS = auto()                   # +
    SEMICOLON = auto()              # ;
    STAR = auto()                   # *
    SLASH = auto()                  # /
    PIPE = auto()                   # | (parameter list delimiter)

    # ========================================================================
    # One or two character operators
    # ========================================================================
    BANG = auto()                   # !
    BANG_EQUAL = auto()             # !=
    EQUAL = auto()                  # =
    EQUAL_EQUAL = auto()            # ==
    LESS = auto()                   # <
    LESS_EQUAL = auto()             # <=
    GREATER = auto()                # >
    GREATER_EQUAL = auto()          # >=

    # ========================================================================
    # Literals
    # ========================================================================
    NUMBER = auto()                 # 42, 3.14
    STRING = auto()                 # "hello" (quotes included in the span)
    IDENTIFIER = auto()             # name

    # ========================================================================
    # Keywords
    # ========================================================================
    LET = auto()                    # let
    FN = auto()                     # fn
    DO = auto()                     # do (also the canonical block tag)
    END = auto()                    # end
    IF = auto()                     # if
    THEN = auto()                   # then
    ELSE = auto()                   # else
    AND = auto()                    # and
    OR = auto()                     # or
    TRUE = auto()                   # true
    FALSE = auto()                  # false
    NIL = auto()                    # nil

    # Reserved words: scanned as keywords, no parser productions
    CLASS = auto()                  # class
    FOR = auto()                    # for
    PRINT = auto()                  # print
    RETURN = auto()                 # return
    SUPER = auto()                  # super
    THIS = auto()                   # this
    WHILE = auto()                  # while


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the doscript language.

    Holds the token kind plus the byte span it covers in the source.
    Use lexeme() with the scanned source to recover its text.
    """
    kind: TokenType
    start: int                      # Byte offset of the first character
    length: int                     # Number of bytes covered

    @property
    def end(self) -> int:
        """Offset one past the last byte of the token."""
        return self.start + self.length

    def lexeme(self, source: Union[str, bytes]) -> str:
        """
        Return the exact source text this token was scanned from.

        Offsets count UTF-8 bytes, so text sources are encoded before slicing.
        """
        if isinstance(source, str):
            source = source.encode("utf-8")
        return source[self.start:self.end].decode("utf-8")

    def __str__(self) -> str:
        return f"{self.kind.name}@{self.start}+{self.length}"

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.kind in LITERAL_TYPES

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword (reserved words included)."""
        return self.kind in KEYWORD_TYPES

    @property
    def is_identifier(self) -> bool:
        return self.kind == TokenType.IDENTIFIER


# Lookup tables used by the lexer for dispatch. The lexer scans bytes, so the
# punctuation tables are keyed by single bytes.

KEYWORDS = {
    "and": TokenType.AND,
    "do": TokenType.DO,
    "else": TokenType.ELSE,
    "end": TokenType.END,
    "false": TokenType.FALSE,
    "fn": TokenType.FN,
    "if": TokenType.IF,
    "let": TokenType.LET,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "then": TokenType.THEN,
    "true": TokenType.TRUE,

    # Reserved
    "class": TokenType.CLASS,
    "for": TokenType.FOR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "while": TokenType.WHILE,
}

KEYWORD_TYPES = frozenset(KEYWORDS.values())

SINGLE_CHAR_TOKENS = {
    b"(": TokenType.LEFT_PAREN,
    b")": TokenType.RIGHT_PAREN,
    b",": TokenType.COMMA,
    b".": TokenType.DOT,
    b"-": TokenType.MINUS,
    b"+": TokenType.PLUS,
    b";": TokenType.SEMICOLON,
    b"*": TokenType.STAR,
    b"|": TokenType.PIPE,
}

# Operators that become a two-character token when followed by '='
ONE_OR_TWO_CHAR_TOKENS = {
    b"!": (TokenType.BANG, TokenType.BANG_EQUAL),
    b"=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    b"<": (TokenType.LESS, TokenType.LESS_EQUAL),
    b">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

LITERAL_TYPES = frozenset({
    TokenType.NUMBER, TokenType.STRING,
    TokenType.TRUE, TokenType.FALSE, TokenType.NIL,
})

WHITESPACE = frozenset((b" ", b"\t", b"\r", b"\n"))
