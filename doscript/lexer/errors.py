"""
Error handling for the doscript lexer.

Every lexical error is fatal: the scanner stops at the first one and the
caller gets a single diagnostic pointing at a byte offset in the source.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class Diagnostic:
    """A single reportable problem located by byte offset."""
    message: str
    offset: int
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    filename: str = "<unknown>"

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.filename}@{self.offset}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer encounters a fatal error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        offset: int,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        filename: str = "<unknown>",
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            offset=offset,
            severity="error",
            code=code,
            help_text=help_text,
            filename=filename,
        )

    @property
    def offset(self) -> int:
        return self.diagnostic.offset

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


# Error codes and the base message each factory reports
ERROR_CODES = {
    "L001": "Unrecognized character",
    "L002": "Unterminated string literal",
    "L003": "Expected digit after decimal point",
    "L004": "Unexpected end of input",
}


# Helper functions for creating common errors

def create_invalid_character_error(char: str, offset: int, filename: str = "<unknown>") -> LexerError:
    """Create an error for a character that starts no token."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in doscript source code."
    else:
        help_text = f"Non-printable character (U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"{ERROR_CODES['L001']}: {char!r}",
        offset=offset,
        code="L001",
        help_text=help_text,
        filename=filename,
    )


def create_unterminated_string_error(offset: int, filename: str = "<unknown>") -> LexerError:
    """Create an error for a string literal missing its closing quote."""
    return LexerError(
        message=ERROR_CODES["L002"],
        offset=offset,
        code="L002",
        help_text='String literals must be closed with a matching " quote.',
        filename=filename,
    )


def create_invalid_number_error(lexeme: str, offset: int, filename: str = "<unknown>") -> LexerError:
    """Create an error for a number with a dangling decimal point."""
    return LexerError(
        message=f"{ERROR_CODES['L003']} in {lexeme!r}",
        offset=offset,
        code="L003",
        help_text="Write the fractional part explicitly, e.g. '1.0' instead of '1.'.",
        filename=filename,
    )


def create_unexpected_eof_error(offset: int, filename: str = "<unknown>") -> LexerError:
    """Create an error for reading or advancing past the end of the source."""
    return LexerError(
        message=ERROR_CODES["L004"],
        offset=offset,
        code="L004",
        filename=filename,
    )
