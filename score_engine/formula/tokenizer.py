"""Lexer for total formulas: identifiers, decimal literals, + - * / ( )."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from score_engine.errors import MalformedFormula


class TokenKind(StrEnum):
    NUMBER = "NUMBER"
    IDENT = "IDENT"
    OPERATOR = "OPERATOR"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    END = "END"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int  # 1-based column

    def describe(self) -> str:
        if self.kind is TokenKind.END:
            return "end of formula"
        return f"{self.text!r} at position {self.position}"


_TOKEN_RE = re.compile(
    r"""
      (?P<ws>\s+)
    | (?P<number>[0-9]+(?:\.[0-9]*)?|\.[0-9]+)
    | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<operator>[-+*/])
    | (?P<lparen>\()
    | (?P<rparen>\))
    """,
    re.VERBOSE | re.ASCII,
)

_KINDS = {
    "number": TokenKind.NUMBER,
    "ident": TokenKind.IDENT,
    "operator": TokenKind.OPERATOR,
    "lparen": TokenKind.LPAREN,
    "rparen": TokenKind.RPAREN,
}


def tokenize(expression: str) -> list[Token]:
    """Split a formula into tokens, always terminated by an END token."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(expression):
        match = _TOKEN_RE.match(expression, pos)
        if match is None:
            raise MalformedFormula(
                f"unexpected character {expression[pos]!r} at position {pos + 1}"
            )
        group = match.lastgroup
        if group != "ws":
            tokens.append(Token(_KINDS[group], match.group(), pos + 1))
        pos = match.end()

    tokens.append(Token(TokenKind.END, "", len(expression) + 1))
    return tokens
