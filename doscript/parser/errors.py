"""
Error handling for the doscript parser.

The parser aborts on the first syntax error. Each ParseError carries the
token the parser was looking at, so callers can point at its byte span.
"""

from typing import Optional

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a fatal syntax error.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        token: Token,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        filename: str = "<unknown>",
    ):
        super().__init__(message)
        self.message = message
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            offset=token.start,
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


# Parser error codes and the base message each factory reports
PARSER_ERROR_CODES = {
    "P001": "Expected expression",
    "P002": "Expected then after condition",
    "P003": "Expected identifier after let",
    "P004": "Expected closing pipe",
    "P005": "Expected right paren",
    "P006": "Unexpected end of input",
    "P007": "Expression too deeply nested",
}


# Helper functions for creating common parser errors

def create_expected_expression_error(found: Token, filename: str = "<unknown>") -> ParseError:
    return ParseError(
        message=f"{PARSER_ERROR_CODES['P001']}, found {found.kind.name}",
        token=found,
        code="P001",
        help_text="An expression starts with a literal, an identifier, '(', '!', '-', "
                  "or one of the keywords let, fn, do, if.",
        filename=filename,
    )


def create_missing_then_error(found: Token, filename: str = "<unknown>") -> ParseError:
    return ParseError(
        message=PARSER_ERROR_CODES["P002"],
        token=found,
        code="P002",
        help_text="Write conditionals as 'if <condition> then ... else ... end'.",
        filename=filename,
    )


def create_missing_identifier_error(found: Token, filename: str = "<unknown>") -> ParseError:
    return ParseError(
        message=PARSER_ERROR_CODES["P003"],
        token=found,
        code="P003",
        help_text=f"Found {found.kind.name}; reserved words cannot be bound with let."
        if found.kind != TokenType.EOF else None,
        filename=filename,
    )


def create_missing_pipe_error(found: Token, filename: str = "<unknown>") -> ParseError:
    return ParseError(
        message=PARSER_ERROR_CODES["P004"],
        token=found,
        code="P004",
        help_text="Parameter lists are written as |a, b, c|.",
        filename=filename,
    )


def create_missing_paren_error(found: Token, filename: str = "<unknown>") -> ParseError:
    return ParseError(
        message=PARSER_ERROR_CODES["P005"],
        token=found,
        code="P005",
        filename=filename,
    )


def create_unexpected_eof_error(eof: Token, filename: str = "<unknown>",
                                expected: Optional[str] = None) -> ParseError:
    """
    Create an error for running out of tokens mid-construct.

    expected names what the parser was looking for, e.g. "')'".
    """
    message = PARSER_ERROR_CODES["P006"]
    if expected:
        message += f", expected {expected}"

    return ParseError(
        message=message,
        token=eof,
        code="P006",
        help_text="Check for a block missing its 'end' or a call missing its ')'.",
        filename=filename,
    )


def create_nesting_too_deep_error(found: Token, limit: int, filename: str = "<unknown>") -> ParseError:
    return ParseError(
        message=f"{PARSER_ERROR_CODES['P007']} (limit {limit})",
        token=found,
        code="P007",
        filename=filename,
    )
