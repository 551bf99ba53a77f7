"""Tests for the total-formula tokenizer, parser and evaluator."""
from __future__ import annotations

import pytest

from score_engine.errors import DivisionByZero, MalformedFormula, UnknownSymbol
from score_engine.formula import (
    MAX_NESTING_DEPTH,
    Negate,
    NumberLiteral,
    Operation,
    SymbolRef,
    TokenKind,
    evaluate,
    parse,
    referenced_symbols,
    tokenize,
    unparse,
)


# ── Tokenizer ──


class TestTokenize:
    def test_kinds(self):
        kinds = [t.kind for t in tokenize("auto+1.5*(x)")]
        assert kinds == [
            TokenKind.IDENT, TokenKind.OPERATOR, TokenKind.NUMBER, TokenKind.OPERATOR,
            TokenKind.LPAREN, TokenKind.IDENT, TokenKind.RPAREN, TokenKind.END,
        ]

    def test_whitespace_ignored_and_positions_one_based(self):
        tokens = tokenize("  a -  b")
        assert [(t.text, t.position) for t in tokens[:-1]] == [("a", 3), ("-", 5), ("b", 8)]

    def test_decimal_literal_forms(self):
        texts = [t.text for t in tokenize("12 1.5 .5 3.")[:-1]]
        assert texts == ["12", "1.5", ".5", "3."]

    def test_unexpected_character_reports_position(self):
        with pytest.raises(MalformedFormula, match="'%' at position 3"):
            tokenize("a % b")

    def test_non_ascii_identifier_rejected(self):
        with pytest.raises(MalformedFormula):
            tokenize("puntuación")


# ── Parser ──


class TestParse:
    def test_operator_chain_is_flat(self):
        tree = parse("a + b - c")
        assert tree == Operation(SymbolRef("a"), (("+", SymbolRef("b")), ("-", SymbolRef("c"))))

    def test_multiplication_binds_tighter(self):
        tree = parse("a + b * 2")
        assert tree == Operation(
            SymbolRef("a"), (("+", Operation(SymbolRef("b"), (("*", NumberLiteral(2)),))),),
        )

    def test_double_negation_folds(self):
        assert parse("--a") == SymbolRef("a")
        assert parse("---a") == Negate(SymbolRef("a"))

    def test_integer_and_float_literals(self):
        assert parse("7") == NumberLiteral(7)
        assert isinstance(parse("7").value, int)
        assert isinstance(parse("7.0").value, float)

    @pytest.mark.parametrize("formula", [
        "",
        "   ",
        "a +",
        "(a + b",
        "a + b)",
        "a b",
        "()",
        "+a",
        "a ** b",
        "1.2.3",
        "2auto",
    ])
    def test_malformed(self, formula):
        with pytest.raises(MalformedFormula):
            parse(formula)

    def test_unbalanced_paren_message(self):
        with pytest.raises(MalformedFormula, match=r"expected '\)' to close '\(' at position 1"):
            parse("(a + b")

    def test_nesting_limit(self):
        deepest = "(" * MAX_NESTING_DEPTH + "1" + ")" * MAX_NESTING_DEPTH
        assert evaluate(deepest, {}) == 1

        too_deep = "(" * (MAX_NESTING_DEPTH + 1) + "1" + ")" * (MAX_NESTING_DEPTH + 1)
        with pytest.raises(MalformedFormula, match="nested deeper"):
            parse(too_deep)

    def test_code_is_not_a_formula(self):
        with pytest.raises(MalformedFormula):
            parse("__import__('os').system('true')")


# ── Evaluator ──


class TestEvaluate:
    def test_addition(self):
        assert evaluate("a + b", {"a": 3, "b": 4}) == 7

    def test_parentheses(self):
        assert evaluate("(a - b) * 2", {"a": 5, "b": 2}) == 6

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZero):
            evaluate("a / b", {"a": 10, "b": 0})

    def test_division_by_zero_names_divisor(self):
        with pytest.raises(DivisionByZero, match="b - b"):
            evaluate("a / (b - b)", {"a": 1, "b": 2})

    def test_precedence(self):
        assert evaluate("2 + 3 * 4", {}) == 14
        assert evaluate("(2 + 3) * 4", {}) == 20

    def test_left_associative(self):
        assert evaluate("10 - 4 - 3", {}) == 3
        assert evaluate("100 / 10 / 5", {}) == 2

    def test_unary_minus(self):
        assert evaluate("-a * 2", {"a": 3}) == -6
        assert evaluate("-(a + 1)", {"a": 3}) == -4
        assert evaluate("2 * -3", {}) == -6
        assert evaluate("2 - -3", {}) == 5

    def test_decimals(self):
        assert evaluate("1.5 * 2", {}) == 3.0
        assert evaluate(".5 + 3.", {}) == 3.5

    def test_true_division(self):
        assert evaluate("7 / 2", {}) == 3.5

    def test_integer_overflow_is_malformed(self):
        with pytest.raises(MalformedFormula, match="out of range"):
            evaluate("9" * 400 + " / 1", {})
        with pytest.raises(MalformedFormula, match="out of range"):
            evaluate("a * 0.5", {"a": 10**400})

    def test_unknown_symbol(self):
        with pytest.raises(UnknownSymbol) as exc_info:
            evaluate("auto + unknownToken", {"auto": 1})
        assert exc_info.value.symbol == "unknownToken"
        assert str(exc_info.value).startswith("UnknownSymbol:")

    def test_symbols_are_case_sensitive(self):
        with pytest.raises(UnknownSymbol):
            evaluate("Auto", {"auto": 1})

    def test_long_chain_does_not_recurse(self):
        formula = " + ".join(["a"] * 600)
        assert evaluate(formula, {"a": 1}) == 600

    def test_long_negation_run(self):
        assert evaluate("-" * 1500 + "a", {"a": 4}) == 4
        assert evaluate("-" * 1501 + "a", {"a": 4}) == -4

    def test_deterministic(self):
        symbols = {"auto": 12.5, "teleop": 3, "TOTAL_PENALTIES_SELF": -4}
        formula = "(auto + teleop) * 2 + TOTAL_PENALTIES_SELF / 3"
        assert evaluate(formula, symbols) == evaluate(formula, symbols)


# ── Helpers ──


class TestHelpers:
    def test_referenced_symbols_in_order(self):
        tree = parse("auto + teleop * auto - TOTAL_PENALTIES_SELF")
        assert referenced_symbols(tree) == ["auto", "teleop", "TOTAL_PENALTIES_SELF"]

    def test_referenced_symbols_literal_only(self):
        assert referenced_symbols(parse("1 + 2")) == []

    def test_unparse(self):
        assert unparse(parse("-(a + b) * 2")) == "-(a + b) * 2"
        assert unparse(parse("a+b*c")) == "a + (b * c)"
