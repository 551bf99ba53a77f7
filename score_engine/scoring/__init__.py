"""Per-rule scoring: parts, cooperative bonuses and penalties."""
from score_engine.scoring.bonus import is_achieved, resolve_bonus
from score_engine.scoring.parts import effective_units, score_part, validate_part_value
from score_engine.scoring.penalties import (
    NET_PENALTIES,
    PENALTY_SYMBOLS,
    TOTAL_PENALTIES_OPPONENT,
    TOTAL_PENALTIES_SELF,
    PenaltyTotals,
    aggregate_penalties,
    check_occurrences,
)

__all__ = [
    "NET_PENALTIES",
    "PENALTY_SYMBOLS",
    "TOTAL_PENALTIES_OPPONENT",
    "TOTAL_PENALTIES_SELF",
    "PenaltyTotals",
    "aggregate_penalties",
    "check_occurrences",
    "effective_units",
    "is_achieved",
    "resolve_bonus",
    "score_part",
    "validate_part_value",
]
