"""Tree-walking evaluator for parsed formulas.

Only the four arithmetic operators exist; names resolve exclusively through
the supplied symbol table.
"""
from __future__ import annotations

from typing import Mapping

from score_engine.errors import DivisionByZero, MalformedFormula, UnknownSymbol
from score_engine.formula.parser import Negate, Node, NumberLiteral, Operation, SymbolRef, parse


def evaluate(expression: str, symbols: Mapping[str, int | float]) -> int | float:
    """Parse and evaluate ``expression`` against ``symbols``.

    Raises MalformedFormula, UnknownSymbol or DivisionByZero.
    """
    return evaluate_node(parse(expression), symbols)


def evaluate_node(node: Node, symbols: Mapping[str, int | float]) -> int | float:
    if isinstance(node, NumberLiteral):
        return node.value
    if isinstance(node, SymbolRef):
        try:
            return symbols[node.name]
        except KeyError:
            raise UnknownSymbol(node.name) from None
    if isinstance(node, Negate):
        return -evaluate_node(node.operand, symbols)
    if isinstance(node, Operation):
        result = evaluate_node(node.first, symbols)
        for op, operand in node.steps:
            value = evaluate_node(operand, symbols)
            try:
                result = _apply(op, result, value, operand)
            except OverflowError:
                raise MalformedFormula("formula value out of range") from None
        return result
    raise TypeError(f"unsupported formula node {type(node).__name__}")


def _apply(op: str, left: int | float, right: int | float, operand: Node) -> int | float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        if right == 0:
            raise DivisionByZero(f"divisor {unparse(operand)} evaluates to zero")
        return left / right
    raise ValueError(f"unsupported operator {op!r}")


def referenced_symbols(node: Node) -> list[str]:
    """Identifiers used by a formula, in order of first appearance."""
    names: list[str] = []
    pending: list[Node] = [node]
    while pending:
        current = pending.pop()
        if isinstance(current, SymbolRef):
            if current.name not in names:
                names.append(current.name)
        elif isinstance(current, Negate):
            pending.append(current.operand)
        elif isinstance(current, Operation):
            # reversed so the leftmost operand is visited first
            pending.extend(operand for _, operand in reversed(current.steps))
            pending.append(current.first)
    return names


def unparse(node: Node) -> str:
    """Render a node back to formula text; nested chains are parenthesized."""
    if isinstance(node, NumberLiteral):
        return str(node.value)
    if isinstance(node, SymbolRef):
        return node.name
    if isinstance(node, Negate):
        return f"-{_wrapped(node.operand)}"
    if isinstance(node, Operation):
        parts = [_wrapped(node.first)]
        for op, operand in node.steps:
            parts.append(op)
            parts.append(_wrapped(operand))
        return " ".join(parts)
    raise TypeError(f"unsupported formula node {type(node).__name__}")


def _wrapped(node: Node) -> str:
    text = unparse(node)
    return f"({text})" if isinstance(node, Operation) else text
