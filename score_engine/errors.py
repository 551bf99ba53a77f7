"""Error kinds raised inside the engine and reported to callers as data."""
from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    MISSING_PART_INPUT = "MissingPartInput"
    UNKNOWN_PART_ID = "UnknownPartId"
    INVALID_PART_VALUE = "InvalidPartValue"
    COOPERATIVE_GROUP_SIZE_MISMATCH = "CooperativeGroupSizeMismatch"
    UNKNOWN_PENALTY_ID = "UnknownPenaltyId"
    INVALID_PENALTY_COUNT = "InvalidPenaltyCount"
    MALFORMED_FORMULA = "MalformedFormula"
    UNKNOWN_SYMBOL = "UnknownSymbol"
    DIVISION_BY_ZERO = "DivisionByZero"
    INVALID_DEFINITION = "InvalidDefinition"
    INVALID_INPUT = "InvalidInput"


class ScoringError(Exception):
    """Base class for every engine failure.

    ``str(error)`` is prefixed with the kind so messages stay self-describing
    once they are flattened into a failure payload.
    """

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class MissingPartInput(ScoringError):
    kind = ErrorKind.MISSING_PART_INPUT


class UnknownPartId(ScoringError):
    kind = ErrorKind.UNKNOWN_PART_ID


class InvalidPartValue(ScoringError):
    kind = ErrorKind.INVALID_PART_VALUE


class CooperativeGroupSizeMismatch(ScoringError):
    kind = ErrorKind.COOPERATIVE_GROUP_SIZE_MISMATCH


class UnknownPenaltyId(ScoringError):
    kind = ErrorKind.UNKNOWN_PENALTY_ID


class InvalidPenaltyCount(ScoringError):
    kind = ErrorKind.INVALID_PENALTY_COUNT


class FormulaError(ScoringError):
    """Raised while parsing or evaluating a total formula."""


class MalformedFormula(FormulaError):
    kind = ErrorKind.MALFORMED_FORMULA


class UnknownSymbol(FormulaError):
    kind = ErrorKind.UNKNOWN_SYMBOL

    def __init__(self, symbol: str):
        super().__init__(f"formula references unknown symbol {symbol!r}")
        self.symbol = symbol


class DivisionByZero(FormulaError):
    kind = ErrorKind.DIVISION_BY_ZERO


class InvalidDefinition(ScoringError):
    kind = ErrorKind.INVALID_DEFINITION


class InvalidInput(ScoringError):
    kind = ErrorKind.INVALID_INPUT
