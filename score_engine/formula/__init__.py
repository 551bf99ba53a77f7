"""Safe arithmetic formulas over named score quantities."""
from score_engine.formula.evaluator import evaluate, evaluate_node, referenced_symbols, unparse
from score_engine.formula.parser import (
    MAX_NESTING_DEPTH,
    Negate,
    Node,
    NumberLiteral,
    Operation,
    SymbolRef,
    parse,
)
from score_engine.formula.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "MAX_NESTING_DEPTH",
    "Negate",
    "Node",
    "NumberLiteral",
    "Operation",
    "SymbolRef",
    "Token",
    "TokenKind",
    "evaluate",
    "evaluate_node",
    "parse",
    "referenced_symbols",
    "tokenize",
    "unparse",
]
