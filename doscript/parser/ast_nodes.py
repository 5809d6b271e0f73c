"""
Abstract Syntax Tree node definitions for doscript.

Every construct uses one node shape: an operator token plus an ordered
tuple of children. What a node means is decided by the operator kind and
the number and order of its children:

    literal / identifier   literal or IDENTIFIER token   ()
    unary                  BANG / MINUS                  (operand,)
    binary                 operator token                (left, right)
    call                   LEFT_PAREN                    (callee, arg0, ..., argN)
    block                  DO                            (expr0, ..., exprN)
    let-binding            LET                           (identifier, value)
    function literal       FN                            (parameters, body)
    parameter list         PIPE                          (param0, ...)
    if                     IF                            (condition, then, else)

ExpressionKind names these shapes so consumers can dispatch on a closed
set instead of re-deriving them from token kinds.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Sequence, Tuple, Union

from ..lexer.tokens import Token, TokenType, LITERAL_TYPES


class ExpressionKind(Enum):
    """The constructs an Expression node can represent."""

    LITERAL = "Literal"
    IDENTIFIER = "Identifier"
    UNARY = "Unary"
    BINARY = "Binary"
    CALL = "Call"
    BLOCK = "Block"
    LET = "Let"
    FUNCTION = "Function"
    PARAMETERS = "Parameters"
    IF = "If"


UNARY_OPERATORS = frozenset({TokenType.BANG, TokenType.MINUS})

BINARY_OPERATORS = frozenset({
    TokenType.AND, TokenType.OR,
    TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL,
    TokenType.LESS, TokenType.LESS_EQUAL, TokenType.GREATER, TokenType.GREATER_EQUAL,
    TokenType.MINUS, TokenType.PLUS,
    TokenType.SLASH, TokenType.STAR,
})

_FIXED_KINDS = {
    TokenType.LEFT_PAREN: ExpressionKind.CALL,
    TokenType.DO: ExpressionKind.BLOCK,
    TokenType.LET: ExpressionKind.LET,
    TokenType.FN: ExpressionKind.FUNCTION,
    TokenType.PIPE: ExpressionKind.PARAMETERS,
    TokenType.IF: ExpressionKind.IF,
}


@dataclass(frozen=True)
class Expression:
    """
    A node of the program tree.

    Nodes are immutable and compared structurally, so parsing the same
    tokens twice produces equal trees. Children belong to exactly one parent.
    """
    operator: Token
    children: Tuple["Expression", ...] = ()

    @property
    def kind(self) -> ExpressionKind:
        """Classify this node by operator kind and arity."""
        op = self.operator.kind

        if op in _FIXED_KINDS:
            return _FIXED_KINDS[op]
        if op == TokenType.IDENTIFIER:
            return ExpressionKind.IDENTIFIER
        if op in LITERAL_TYPES:
            return ExpressionKind.LITERAL
        # MINUS is both unary and binary, arity decides
        if op in UNARY_OPERATORS and len(self.children) == 1:
            return ExpressionKind.UNARY
        if op in BINARY_OPERATORS and len(self.children) == 2:
            return ExpressionKind.BINARY

        raise ValueError(f"Malformed expression node: {op.name} with {len(self.children)} children")

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def lexeme(self, source: Union[str, bytes]) -> str:
        """Source text of the operator token."""
        return self.operator.lexeme(source)

    def __str__(self) -> str:
        return f"{self.kind.value}@{self.operator.start}"


def leaf(token: Token) -> Expression:
    """Build a childless node for a literal, identifier or parameter."""
    return Expression(token, ())


def node(token: Token, children: Sequence[Expression]) -> Expression:
    return Expression(token, tuple(children))


def walk(expression: Expression) -> Iterator[Expression]:
    """Yield every node of the tree in pre-order."""
    stack = [expression]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def to_sexpr(expression: Expression, source: Union[str, bytes]) -> str:
    """
    Render a node as an S-expression built from source lexemes.

    Leaves print as their lexeme. Blocks print as 'do', parameter lists
    as 'params' and calls as 'call', since their operator tokens carry no
    useful text. For example '1 + 2 * 3' renders as '(+ 1 (* 2 3))' and
    'f(1)(2, 3)' as '(call (call f 1) 2 3)'.
    """
    if expression.is_leaf and expression.operator.kind not in _FIXED_KINDS:
        return expression.lexeme(source)

    kind = expression.kind
    if kind == ExpressionKind.BLOCK:
        head = "do"
    elif kind == ExpressionKind.PARAMETERS:
        head = "params"
    elif kind == ExpressionKind.CALL:
        head = "call"
    else:
        head = expression.lexeme(source)

    parts = [head] + [to_sexpr(child, source) for child in expression.children]
    return "(" + " ".join(parts) + ")"


def format_program(program: List[Expression], source: Union[str, bytes]) -> str:
    """Render a parsed program, one top-level expression per line."""
    return "\n".join(to_sexpr(expression, source) for expression in program)
