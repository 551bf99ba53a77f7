"""Recursive-descent parser producing an immutable formula AST.

Grammar::

    expr   := term (('+'|'-') term)*
    term   := unary (('*'|'/') unary)*
    unary  := '-' unary | atom
    atom   := NUMBER | IDENT | '(' expr ')'

Operator chains are kept flat in a single ``Operation`` node and runs of
unary minus collapse into at most one ``Negate``, so tree depth grows only
with parenthesis nesting, which is capped at ``MAX_NESTING_DEPTH``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from score_engine.errors import MalformedFormula
from score_engine.formula.tokenizer import Token, TokenKind, tokenize

MAX_NESTING_DEPTH = 64


@dataclass(frozen=True)
class NumberLiteral:
    value: int | float


@dataclass(frozen=True)
class SymbolRef:
    name: str


@dataclass(frozen=True)
class Negate:
    operand: "Node"


@dataclass(frozen=True)
class Operation:
    """Left-associative chain: ``first op1 x1 op2 x2 ...`` at one precedence level."""
    first: "Node"
    steps: tuple[tuple[str, "Node"], ...]


Node = Union[NumberLiteral, SymbolRef, Negate, Operation]


class _Parser:
    def __init__(self, tokens: list[Token]):
        self._tokens = tokens
        self._index = 0
        self._depth = 0

    def parse(self) -> Node:
        node = self._expr()
        token = self._peek()
        if token.kind is not TokenKind.END:
            raise MalformedFormula(f"unexpected {token.describe()}")
        return node

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.kind is not TokenKind.END:
            self._index += 1
        return token

    def _at_operator(self, operators: str) -> bool:
        token = self._peek()
        return token.kind is TokenKind.OPERATOR and token.text in operators

    def _expr(self) -> Node:
        return self._chain("+-", self._term)

    def _term(self) -> Node:
        return self._chain("*/", self._unary)

    def _chain(self, operators: str, operand) -> Node:
        first = operand()
        steps: list[tuple[str, Node]] = []
        while self._at_operator(operators):
            op = self._advance().text
            steps.append((op, operand()))
        if not steps:
            return first
        return Operation(first, tuple(steps))

    def _unary(self) -> Node:
        negations = 0
        while self._at_operator("-"):
            self._advance()
            negations += 1
        node = self._atom()
        return Negate(node) if negations % 2 else node

    def _atom(self) -> Node:
        token = self._advance()
        if token.kind is TokenKind.NUMBER:
            return NumberLiteral(_number(token.text))
        if token.kind is TokenKind.IDENT:
            return SymbolRef(token.text)
        if token.kind is TokenKind.LPAREN:
            self._depth += 1
            if self._depth > MAX_NESTING_DEPTH:
                raise MalformedFormula(
                    f"parentheses nested deeper than {MAX_NESTING_DEPTH} levels at position {token.position}"
                )
            node = self._expr()
            closing = self._advance()
            if closing.kind is not TokenKind.RPAREN:
                raise MalformedFormula(
                    f"expected ')' to close '(' at position {token.position}, found {closing.describe()}"
                )
            self._depth -= 1
            return node
        if token.kind is TokenKind.END:
            raise MalformedFormula("unexpected end of formula, expected a number, symbol or '('")
        raise MalformedFormula(f"unexpected {token.describe()}, expected a number, symbol or '('")


def _number(text: str) -> int | float:
    if text.isdigit():
        return int(text)
    return float(text)


def parse(expression: str) -> Node:
    """Parse a formula string into its AST. Raises MalformedFormula."""
    return _Parser(tokenize(expression)).parse()
