"""
doscript Lexer - turns source text into a flat list of tokens

Single left-to-right pass over the UTF-8 bytes of the source, one byte of
lookahead, no backtracking. Stops at the first lexical error.
"""

import logging
from typing import List, Union

from .tokens import (
    Token, TokenType, KEYWORDS, SINGLE_CHAR_TOKENS, ONE_OR_TWO_CHAR_TOKENS, WHITESPACE
)
from .errors import (
    create_invalid_character_error, create_unterminated_string_error,
    create_invalid_number_error, create_unexpected_eof_error
)

logger = logging.getLogger(__name__)


def is_digit(char: bytes) -> bool:
    return b"0" <= char <= b"9"


def is_alpha(char: bytes) -> bool:
    """ASCII letters only; identifiers never contain digits, '_' or Unicode."""
    return b"a" <= char <= b"z" or b"A" <= char <= b"Z"


def encode_source(source: Union[str, bytes]) -> bytes:
    """Return the byte buffer that token offsets index into."""
    if isinstance(source, str):
        return source.encode("utf-8")
    return bytes(source)


class Lexer:
    """
    doscript lexical analyzer.

    Converts source code into a list of tokens terminated by EOF. Token
    offsets and lengths count bytes of the UTF-8 encoded source.
    """

    def __init__(self, source: Union[str, bytes], filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code as text or as UTF-8 bytes
            filename: Name of source file for error reporting
        """
        self.source = encode_source(source)
        self.filename = filename
        self.start = 0
        self.current = 0
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens ending with an EOF token

        Raises:
            LexerError: On the first lexical error
        """
        self.start = 0
        self.current = 0
        self.tokens = []

        while not self._is_at_end():
            self.start = self.current
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, len(self.source), 0))
        logger.debug("Scanned %d tokens from %s", len(self.tokens), self.filename)

        return self.tokens

    def _scan_token(self):
        """Scan one lexeme starting at the cursor, emitting at most one token."""
        char = self._current_char()

        if char in SINGLE_CHAR_TOKENS:
            self._advance()
            self._add_token(SINGLE_CHAR_TOKENS[char])
        elif char in ONE_OR_TWO_CHAR_TOKENS:
            single, double = ONE_OR_TWO_CHAR_TOKENS[char]
            if self._next_is(b"="):
                self._advance()
                self._advance()
                self._add_token(double)
            else:
                self._advance()
                self._add_token(single)
        elif char == b"/":
            if self._next_is(b"/"):
                self._skip_line()
            else:
                self._advance()
                self._add_token(TokenType.SLASH)
        elif char == b'"':
            self._scan_string()
        elif is_digit(char):
            self._scan_number()
        elif is_alpha(char):
            self._scan_identifier()
        elif char in WHITESPACE:
            self._advance()
        else:
            raise create_invalid_character_error(self._character_at_cursor(), self.current, self.filename)

    def _scan_string(self):
        """Scan a string literal; the token spans both quotes, no escapes."""
        self._advance()  # Opening quote

        while not self._is_at_end() and self._current_char() != b'"':
            self._advance()

        if self._is_at_end():
            raise create_unterminated_string_error(self.start, self.filename)

        self._advance()  # Closing quote
        self._add_token(TokenType.STRING)

    def _scan_number(self):
        """Scan digits with an optional fractional part."""
        self._skip_digits()

        if not self._is_at_end() and self._current_char() == b".":
            self._advance()
            if self._is_at_end() or not is_digit(self._current_char()):
                raise create_invalid_number_error(
                    self._text(self.start, self.current), self.start, self.filename
                )
            self._skip_digits()

        self._add_token(TokenType.NUMBER)

    def _scan_identifier(self):
        while not self._is_at_end() and is_alpha(self._current_char()):
            self._advance()

        lexeme = self._text(self.start, self.current)
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        if token_type != TokenType.IDENTIFIER:
            logger.debug("Keyword %r at offset %d", lexeme, self.start)

        self._add_token(token_type)

    def _skip_digits(self):
        while not self._is_at_end() and is_digit(self._current_char()):
            self._advance()

    def _skip_line(self):
        """Skip a // comment up to (not including) the newline."""
        while not self._is_at_end() and self._current_char() != b"\n":
            self._advance()

    def _add_token(self, token_type: TokenType):
        self.tokens.append(Token(token_type, self.start, self.current - self.start))

    def _text(self, start: int, end: int) -> str:
        return self.source[start:end].decode("utf-8")

    def _character_at_cursor(self) -> str:
        """Decode the whole character starting at the cursor, for diagnostics."""
        chunk = self.source[self.current:self.current + 4]
        return chunk.decode("utf-8", errors="replace")[:1]

    # Low-level cursor operations. Reading or advancing past the end of the
    # source is an error, never a silent no-op.

    def _current_char(self) -> bytes:
        if self._is_at_end():
            raise create_unexpected_eof_error(self.current, self.filename)
        return self.source[self.current:self.current + 1]

    def _next_is(self, expected: bytes) -> bool:
        """Check the byte after the cursor; end of input never matches."""
        next_pos = self.current + 1
        return self.source[next_pos:next_pos + 1] == expected

    def _advance(self):
        if self._is_at_end():
            raise create_unexpected_eof_error(self.current, self.filename)
        self.current += 1

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)


def tokenize_string(source: Union[str, bytes], filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code as text or UTF-8 bytes
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        OSError: If file cannot be read
    """
    with open(filepath, "rb") as f:
        source = f.read()

    return tokenize_string(source, filepath)
