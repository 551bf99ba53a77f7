"""Penalty aggregation into the formula's penalty symbols."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from score_engine.entities.profile import (
    NET_PENALTIES,
    PENALTY_SYMBOLS,
    TOTAL_PENALTIES_OPPONENT,
    TOTAL_PENALTIES_SELF,
    PenaltyDirection,
    PenaltyRule,
    PenaltyTarget,
)
from score_engine.entities.score import PenaltyScore
from score_engine.errors import InvalidPenaltyCount, ScoringError, UnknownPenaltyId


@dataclass
class PenaltyTotals:
    self_total: int = 0
    opponent_total: int = 0
    applied: dict[str, PenaltyScore] = field(default_factory=dict)

    @property
    def net(self) -> int:
        return self.opponent_total - self.self_total

    def symbols(self) -> dict[str, int]:
        return {
            TOTAL_PENALTIES_SELF: self.self_total,
            TOTAL_PENALTIES_OPPONENT: self.opponent_total,
            NET_PENALTIES: self.net,
        }


def check_occurrences(
    penalties: Sequence[PenaltyRule], occurrences: Mapping[str, Any]
) -> list[ScoringError]:
    """Every problem with an occurrence map, in input order."""
    known = {rule.id for rule in penalties}
    errors: list[ScoringError] = []
    for penalty_id, count in occurrences.items():
        if penalty_id not in known:
            errors.append(UnknownPenaltyId(f"penalty {penalty_id!r} is not defined by the profile"))
            continue
        if isinstance(count, bool) or not isinstance(count, int):
            errors.append(InvalidPenaltyCount(
                f"penalty {penalty_id!r} count must be an integer, got {type(count).__name__}"
            ))
        elif count < 0:
            errors.append(InvalidPenaltyCount(f"penalty {penalty_id!r} count cannot be negative, got {count}"))
    return errors


def signed_points(rule: PenaltyRule, count: int) -> int:
    total = rule.points * count
    if rule.direction is PenaltyDirection.SUBTRACT:
        return -total
    return total


def aggregate_penalties(
    penalties: Sequence[PenaltyRule], occurrences: Mapping[str, Any]
) -> PenaltyTotals:
    """Sum occurrences into signed SELF and OPPONENT totals.

    Raises the first error reported by ``check_occurrences``.
    """
    errors = check_occurrences(penalties, occurrences)
    if errors:
        raise errors[0]

    totals = PenaltyTotals()
    for rule in penalties:
        count = occurrences.get(rule.id, 0)
        if not count:
            continue
        points = signed_points(rule, count)
        if rule.target is PenaltyTarget.SELF:
            totals.self_total += points
        elif rule.target is PenaltyTarget.OPPONENT:
            totals.opponent_total += points
        else:
            raise ValueError(f"unsupported penalty target {rule.target!r}")
        totals.applied[rule.id] = PenaltyScore(
            count=count, target=rule.target, direction=rule.direction, total_points=points,
        )
    return totals
