"""
doscript Recursive Descent Parser

Turns the token list produced by the lexer into a list of top-level
expression trees. Binary operators are handled by precedence climbing:
each level parses its operands with the next tighter level and folds
repeated operators to the left.

    program     := expression* EOF
    expression  := let | fn | do | if | logical
    logical     := equality (("and" | "or") equality)*
    equality    := comparison (("!=" | "==") comparison)*
    comparison  := term (("<" | "<=" | ">" | ">=") term)*
    term        := factor (("-" | "+") factor)*
    factor      := unary (("/" | "*") unary)*
    unary       := ("!" | "-") unary | call
    call        := atom ("(" arguments ")")*
    atom        := literal | IDENTIFIER | "(" expression ")"

Blocks run until 'end' or 'else'. The first syntax error aborts the parse.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from ..lexer.tokens import Token, TokenType
from .ast_nodes import Expression, leaf, node
from .errors import (
    create_expected_expression_error, create_missing_then_error,
    create_missing_identifier_error, create_missing_pipe_error,
    create_missing_paren_error, create_unexpected_eof_error,
    create_nesting_too_deep_error
)

logger = logging.getLogger(__name__)

# Each nesting level costs about fifteen Python frames; stay well under the
# interpreter recursion limit
DEFAULT_MAX_DEPTH = 48

LOGICAL_OPERATORS = (TokenType.AND, TokenType.OR)
EQUALITY_OPERATORS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON_OPERATORS = (
    TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL
)
TERM_OPERATORS = (TokenType.MINUS, TokenType.PLUS)
FACTOR_OPERATORS = (TokenType.SLASH, TokenType.STAR)
UNARY_OPERATORS = (TokenType.BANG, TokenType.MINUS)

ATOM_TYPES = (
    TokenType.TRUE, TokenType.FALSE, TokenType.NIL,
    TokenType.NUMBER, TokenType.STRING, TokenType.IDENTIFIER,
)

BLOCK_TERMINATORS = (TokenType.END, TokenType.ELSE)


class Parser:
    """
    doscript recursive descent parser.

    A Parser is single-use: it owns a token list and one cursor into it.
    """

    def __init__(self, tokens: Sequence[Token], filename: str = "<unknown>",
                 max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: Tokens from the lexer, terminated by EOF
            filename: Name of source file for error reporting
            max_depth: Deepest expression nesting accepted before failing
        """
        if not tokens or tokens[-1].kind != TokenType.EOF:
            raise ValueError("Token sequence must end with an EOF token")

        self.tokens = list(tokens)
        self.filename = filename
        self.max_depth = max_depth
        self.current = 0
        self.depth = 0

    def parse(self) -> List[Expression]:
        """
        Parse the token stream into a program.

        Returns:
            Top-level expressions in source order

        Raises:
            ParseError: On the first syntax error
        """
        self.current = 0
        self.depth = 0
        program = []

        while not self._is_at_end():
            program.append(self._expression())

        logger.debug("Parsed %d top-level expressions from %s", len(program), self.filename)
        return program

    # Expressions

    def _expression(self) -> Expression:
        self._enter()
        try:
            if self._match(TokenType.LET):
                return self._declaration()
            if self._match(TokenType.FN):
                return self._function()
            if self._match(TokenType.DO):
                return self._block()
            if self._match(TokenType.IF):
                return self._conditional()
            return self._logical()
        finally:
            self._leave()

    def _declaration(self) -> Expression:
        """let NAME = value; the '=' is optional."""
        operator = self._previous()

        if not self._match(TokenType.IDENTIFIER):
            raise create_missing_identifier_error(self._peek(), self.filename)
        name = leaf(self._previous())

        self._match(TokenType.EQUAL)

        if self._match(TokenType.DO):
            value = self._block()
        elif self._match(TokenType.IF):
            value = self._conditional()
        elif self._match(TokenType.FN):
            value = self._function()
        else:
            value = self._logical()

        return node(operator, [name, value])

    def _function(self) -> Expression:
        operator = self._previous()

        if self._match(TokenType.PIPE):
            pipe = self._previous()
            parameters = []

            while self._match(TokenType.IDENTIFIER):
                parameters.append(leaf(self._previous()))
                if not self._match(TokenType.COMMA):
                    break

            if not self._match(TokenType.PIPE):
                raise create_missing_pipe_error(self._peek(), self.filename)

            parameter_list = node(pipe, parameters)
        else:
            # Zero-width list so every function node has two children
            parameter_list = leaf(Token(TokenType.PIPE, operator.end, 0))

        body, _ = self._branch()
        return node(operator, [parameter_list, body])

    def _conditional(self) -> Expression:
        operator = self._previous()

        condition = self._logical()

        if not self._match(TokenType.THEN):
            raise create_missing_then_error(self._peek(), self.filename)

        then_branch, terminator = self._then_branch()
        if terminator.kind == TokenType.END:
            self._match(TokenType.ELSE)
        else_branch, _ = self._branch()

        return node(operator, [condition, then_branch, else_branch])

    def _then_branch(self) -> Tuple[Expression, Token]:
        """
        Parse the branch opened by 'then'.

        A leading 'do ... end' is the whole branch only when 'else' follows
        it. Otherwise that block is the first expression of the branch and
        parsing continues up to 'end' or 'else'.
        """
        opener = self._previous()
        if not self._match(TokenType.DO):
            return self._block_with_terminator()

        block, terminator = self._block_with_terminator()
        if terminator.kind == TokenType.ELSE or self._check(TokenType.ELSE):
            return block, terminator

        return self._block_with_terminator(opener, [block])

    def _branch(self) -> Tuple[Expression, Token]:
        """
        Parse an else-branch or function body.

        A leading 'do' opens an explicit block that is the whole branch.
        Otherwise the keyword just consumed opens the block.
        """
        self._match(TokenType.DO)
        return self._block_with_terminator()

    def _block(self) -> Expression:
        block, _ = self._block_with_terminator()
        return block

    def _block_with_terminator(self, opener: Optional[Token] = None,
                               expressions: Sequence[Expression] = ()) -> Tuple[Expression, Token]:
        """
        Parse expressions up to 'end' or 'else', returning the block and its terminator.

        The block is opened by the token just consumed unless an opener is
        given, and starts with any already parsed expressions.
        """
        opener = opener or self._previous()
        # Blocks are tagged 'do' whatever keyword opened them
        operator = Token(TokenType.DO, opener.start, opener.length)

        expressions = list(expressions)
        while not self._match(*BLOCK_TERMINATORS):
            if self._is_at_end():
                raise create_unexpected_eof_error(self._peek(), self.filename, "'end'")
            expressions.append(self._expression())

        return node(operator, expressions), self._previous()

    # Precedence climbing, loosest to tightest

    def _logical(self) -> Expression:
        return self._binary(LOGICAL_OPERATORS, self._equality)

    def _equality(self) -> Expression:
        return self._binary(EQUALITY_OPERATORS, self._comparison)

    def _comparison(self) -> Expression:
        return self._binary(COMPARISON_OPERATORS, self._term)

    def _term(self) -> Expression:
        return self._binary(TERM_OPERATORS, self._factor)

    def _factor(self) -> Expression:
        return self._binary(FACTOR_OPERATORS, self._unary)

    def _binary(self, operators, operand) -> Expression:
        """Parse a left-associative chain of operands joined by operators."""
        left = operand()

        while self._match(*operators):
            operator = self._previous()
            right = operand()
            left = node(operator, [left, right])

        return left

    def _unary(self) -> Expression:
        if self._match(*UNARY_OPERATORS):
            operator = self._previous()
            self._enter()
            try:
                operand = self._unary()
            finally:
                self._leave()
            return node(operator, [operand])

        return self._call()

    def _call(self) -> Expression:
        callee = self._atom()

        while self._match(TokenType.LEFT_PAREN):
            operator = self._previous()
            arguments = []

            while not self._match(TokenType.RIGHT_PAREN):
                arguments.append(self._expression())
                if not self._match(TokenType.COMMA) and not self._check(TokenType.RIGHT_PAREN):
                    raise self._error_at_current(create_missing_paren_error, "',' or ')'")

            callee = node(operator, [callee] + arguments)

        return callee

    def _atom(self) -> Expression:
        if self._match(*ATOM_TYPES):
            return leaf(self._previous())

        if self._match(TokenType.LEFT_PAREN):
            expression = self._expression()
            if not self._match(TokenType.RIGHT_PAREN):
                raise self._error_at_current(create_missing_paren_error, "')'")
            return expression

        raise self._error_at_current(create_expected_expression_error, "expression")

    # Utility methods

    def _error_at_current(self, factory, expected: str):
        """
        Build an error for the current token.

        At EOF this is an end-of-input error that still names what was expected.
        """
        token = self._peek()
        if token.kind == TokenType.EOF:
            return create_unexpected_eof_error(token, self.filename, expected)
        return factory(token, self.filename)

    def _enter(self):
        self.depth += 1
        if self.depth > self.max_depth:
            raise create_nesting_too_deep_error(self._peek(), self.max_depth, self.filename)

    def _leave(self):
        self.depth -= 1

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has one of the given types."""
        if self._peek().kind in token_types:
            self._advance()
            return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        return self._peek().kind == token_type

    def _advance(self) -> Token:
        """Consume and return the current token; EOF can never be consumed."""
        if self._is_at_end():
            raise create_unexpected_eof_error(self._peek(), self.filename)
        self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self.current >= len(self.tokens) - 1

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]


def parse_tokens(tokens: Sequence[Token], filename: str = "<unknown>",
                 max_depth: int = DEFAULT_MAX_DEPTH) -> List[Expression]:
    """Parse an EOF-terminated token list into a program."""
    return Parser(tokens, filename, max_depth).parse()


def parse_string(source: Union[str, bytes], filename: str = "<string>") -> List[Expression]:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code as text or UTF-8 bytes
        filename: Filename for error reporting

    Returns:
        Top-level expressions

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
    """
    from ..lexer import tokenize_string

    tokens = tokenize_string(source, filename)
    return Parser(tokens, filename).parse()


def parse_file(filepath: str) -> List[Expression]:
    """
    Convenience function to parse a source file.

    Raises:
        LexerError: If lexing fails
        ParseError: If parsing fails
        OSError: If file cannot be read
    """
    from ..lexer import tokenize_file

    tokens = tokenize_file(filepath)
    return Parser(tokens, filepath).parse()
